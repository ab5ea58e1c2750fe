"""
portavia_config -- single public entrypoint for dashboard configuration.

Responsibility:
    Provides the way to obtain configuration at runtime through
    ``get_active_config()``.  Returns a validated, frozen
    ``DashboardConfiguration``; ``portavia_config.bridges`` turns it into
    engine thresholds.

Architecture position:
    Configuration -- YAML-driven thresholds, load-time validation.
    Sits above ``portavia_kernel`` and ``portavia_engines`` and below
    ``portavia_services``.  The engines MUST NEVER import from
    ``portavia_config``.

Failure modes:
    - ``FileNotFoundError`` -- the requested YAML file does not exist.
    - ``ConfigurationError`` -- the document is structurally invalid.
    - ``InvalidThresholdError`` -- a threshold is out of range.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``PORTAVIA_CONFIG_TRACE`` log entry with the config id, version and
    checksum, tying each rendered dashboard to the thresholds that
    produced it.
"""

from __future__ import annotations

from pathlib import Path

from portavia_config.loader import load_configuration
from portavia_config.schema import DashboardConfiguration
from portavia_config.validator import validate_configuration
from portavia_kernel.logging_config import get_logger

_logger = get_logger("config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"


def get_active_config(path: Path | str | None = None) -> DashboardConfiguration:
    """
    Load, validate and return the dashboard configuration.

    Args:
        path: YAML file to load.  Defaults to ``sets/default.yaml``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If parsing or validation fails.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    config = load_configuration(config_path)
    validation = validate_configuration(config)

    for warning in validation.warnings:
        _logger.warning("config_threshold_warning", extra={
            "field": warning.field,
            "value": warning.value,
            "reason": warning.reason,
        })

    _logger.info(
        "PORTAVIA_CONFIG_TRACE",
        extra={
            "trace_type": "PORTAVIA_CONFIG_TRACE",
            "config_id": config.config_id,
            "config_version": config.version,
            "checksum": config.checksum,
            "config_path": str(config_path),
        },
    )
    return config


__all__ = ["DEFAULT_CONFIG_PATH", "DashboardConfiguration", "get_active_config"]
