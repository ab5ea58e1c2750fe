"""
portavia_engines.tracer -- Engine invocation tracer emitting PORTAVIA_ENGINE_TRACE.

Responsibility:
    Provide a lightweight decorator (``@traced_engine``) that wraps pure
    engine invocations with structured trace logging.  The trace captures
    engine_name, engine_version, input_fingerprint (deterministic SHA-256
    hash of selected inputs), and duration_ms.

Architecture position:
    Engines -- infrastructure support for the pure calculation layer.
    Does NOT introduce I/O into engines; emits a log record only.

Invariants enforced:
    - Determinism: fingerprint computation is stable -- _canonicalize
      produces stable string representations; dict keys are sorted; the
      hash is SHA-256 truncated to 16 hex chars.
    - Engine purity: the decorator only reads arguments and emits a log
      record; it does not mutate inputs or change results.

Failure modes:
    - Fingerprint fields are matched against the bound call, so positional
      and keyword arguments fingerprint alike.  Fields that are not
      parameters of the wrapped function are recorded as "null".
    - A call that does not match the signature raises TypeError before
      the engine runs, as the engine itself would.

Usage:
    from portavia_engines.tracer import traced_engine

    @traced_engine("budget", "1.0", fingerprint_fields=("budget", "actual_cost"))
    def summarize(budget, actual_cost):
        ...
"""

from __future__ import annotations

import dataclasses
import functools
import hashlib
import inspect
import time
from collections.abc import Callable
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from portavia_kernel.logging_config import get_logger

_logger = get_logger("engines.tracer")

# Well under the interpreter's default int-to-str digit limit.
_MAX_DECIMAL_INT_BITS = 4096


def _canonicalize(value: Any) -> str:
    """Produce a stable string representation of a value for fingerprinting.

    Postconditions:
        Deterministic for None, numbers, Decimal, str, date, Enum, dict
        (sorted keys), list/tuple (order-preserved) and dataclass instances
        (field order).  Unknown types fall back to ``str(value)``.
    """
    if value is None:
        return "null"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, int) and value.bit_length() > _MAX_DECIMAL_INT_BITS:
        # str() refuses integers this long; hex is exact and unlimited
        return hex(value)
    if isinstance(value, (bool, int, float, Decimal)):
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        items = sorted(value.items(), key=lambda kv: str(kv[0]))
        return "{" + ",".join(f"{k}:{_canonicalize(v)}" for k, v in items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_canonicalize(v) for v in value) + "]"
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        parts = (
            f"{f.name}:{_canonicalize(getattr(value, f.name))}"
            for f in dataclasses.fields(value)
        )
        return type(value).__name__ + "{" + ",".join(parts) + "}"
    return str(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    kwargs: dict[str, Any],
) -> str:
    """Compute a deterministic SHA-256 fingerprint of selected input fields.

    Only the fields listed in fingerprint_fields are included.  Missing
    fields are recorded as "null".  The result is a 16-char hex prefix.
    """
    parts: list[str] = []
    for field in fingerprint_fields:
        val = kwargs.get(field)
        parts.append(f"{field}={_canonicalize(val)}")
    canonical = "|".join(parts)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """Decorator that emits PORTAVIA_ENGINE_TRACE for pure engine invocations.

    Args:
        engine_name: Engine identifier (e.g., "budget").
        engine_version: Engine version (e.g., "1.0").
        fingerprint_fields: Parameter names to include in the input
            fingerprint hash, whether passed positionally or by keyword.

    Returns:
        Decorator function.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            fp = ""
            if fingerprint_fields:
                bound = signature.bind(*args, **kwargs)
                bound.apply_defaults()
                fp = compute_input_fingerprint(fingerprint_fields, bound.arguments)

            t0 = time.monotonic()
            result = func(*args, **kwargs)
            duration_ms = round((time.monotonic() - t0) * 1000, 2)

            _logger.info(
                "PORTAVIA_ENGINE_TRACE",
                extra={
                    "trace_type": "PORTAVIA_ENGINE_TRACE",
                    "engine_name": engine_name,
                    "engine_version": engine_version,
                    "input_fingerprint": fp,
                    "duration_ms": duration_ms,
                    "function": func.__qualname__,
                },
            )
            return result

        return wrapper

    return decorator
