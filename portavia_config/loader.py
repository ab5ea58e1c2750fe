"""
Configuration Loader (``portavia_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into the typed
``portavia_config.schema`` dataclasses.  Runtime callers go through
``portavia_config.get_active_config()`` instead of calling this directly.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* Omitted sections and keys take the schema defaults; keys that are present
  must have the right type, otherwise ``ConfigurationError`` is raised.
* Fractions and hours are parsed as ``Decimal`` through ``str`` so that a
  YAML float such as ``0.15`` never carries a binary expansion.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Wrong value types or a non-mapping section  -> ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from portavia_config.schema import (
    BudgetThresholdsDef,
    DashboardConfiguration,
    EffortDef,
    FactSourceDef,
    HealthThresholdsDef,
)
from portavia_kernel.exceptions import ConfigurationError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ConfigurationError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: top level must be a mapping")
    return data


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"Section '{key}' must be a mapping, got {value!r}")
    return value


def _int(data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"'{key}' must be an integer, got {value!r}")
    return value


def _decimal(data: dict[str, Any], key: str, default: Decimal) -> Decimal:
    value = data.get(key, default)
    if isinstance(value, bool):
        raise ConfigurationError(f"'{key}' must be a number, got {value!r}")
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        raise ConfigurationError(f"'{key}' must be a number, got {value!r}") from None
    if not result.is_finite():
        raise ConfigurationError(f"'{key}' must be finite, got {value!r}")
    return result


def _str(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ConfigurationError(f"'{key}' must be a string, got {value!r}")
    return value


def parse_health_thresholds(data: dict[str, Any]) -> HealthThresholdsDef:
    """Parse the ``health`` section (critical / at_risk / lagging / tiles)."""
    defaults = HealthThresholdsDef()
    critical = _section(data, "critical")
    at_risk = _section(data, "at_risk")
    lagging = _section(data, "lagging")
    tiles = _section(data, "tiles")
    return HealthThresholdsDef(
        critical_open_risks=_int(critical, "open_risks", defaults.critical_open_risks),
        critical_open_issues=_int(critical, "open_issues", defaults.critical_open_issues),
        critical_issue_count=_int(critical, "critical_issues", defaults.critical_issue_count),
        at_risk_open_risks=_int(at_risk, "open_risks", defaults.at_risk_open_risks),
        at_risk_open_issues=_int(at_risk, "open_issues", defaults.at_risk_open_issues),
        at_risk_high_priority_risks=_int(
            at_risk, "high_priority_risks", defaults.at_risk_high_priority_risks,
        ),
        lagging_completion_percent=_int(
            lagging, "completion_percent", defaults.lagging_completion_percent,
        ),
        late_elapsed_fraction=_decimal(
            lagging, "elapsed_fraction", defaults.late_elapsed_fraction,
        ),
        risk_tile_critical=_int(tiles, "risk_critical", defaults.risk_tile_critical),
        issue_tile_critical=_int(tiles, "issue_critical", defaults.issue_tile_critical),
    )


def parse_budget_thresholds(data: dict[str, Any]) -> BudgetThresholdsDef:
    defaults = BudgetThresholdsDef()
    return BudgetThresholdsDef(
        low_buffer_percent=_int(data, "low_buffer_percent", defaults.low_buffer_percent),
        remaining_low_fraction=_decimal(
            data, "remaining_low_fraction", defaults.remaining_low_fraction,
        ),
    )


def parse_effort(data: dict[str, Any]) -> EffortDef:
    defaults = EffortDef()
    return EffortDef(
        hours_per_man_day=_decimal(data, "hours_per_man_day", defaults.hours_per_man_day),
    )


def parse_fact_source(data: dict[str, Any]) -> FactSourceDef:
    defaults = FactSourceDef()
    priorities = data.get("escalated_priorities", list(defaults.escalated_priorities))
    if not isinstance(priorities, list) or not all(isinstance(p, str) for p in priorities):
        raise ConfigurationError(
            f"'escalated_priorities' must be a list of strings, got {priorities!r}"
        )
    return FactSourceDef(
        escalated_priorities=tuple(priorities),
        closed_status=_str(data, "closed_status", defaults.closed_status),
        max_workers=_int(data, "max_workers", defaults.max_workers),
    )


def parse_configuration(data: dict[str, Any]) -> DashboardConfiguration:
    """
    Parse a whole configuration document.

    Postconditions:
        - Returns a ``DashboardConfiguration`` whose ``checksum`` is the
          checksum of ``data``.
    Raises:
        ConfigurationError: on missing ``config_id`` or mistyped values.
    """
    config_id = data.get("config_id")
    if not isinstance(config_id, str) or not config_id.strip():
        raise ConfigurationError("'config_id' is required and must be a non-empty string")

    return DashboardConfiguration(
        config_id=config_id,
        version=_int(data, "version", 1),
        health=parse_health_thresholds(_section(data, "health")),
        budget=parse_budget_thresholds(_section(data, "budget")),
        effort=parse_effort(_section(data, "effort")),
        fact_source=parse_fact_source(_section(data, "fact_source")),
        checksum=compute_checksum(data),
    )


def load_configuration(path: Path) -> DashboardConfiguration:
    """Load and parse one YAML configuration file (no validation)."""
    return parse_configuration(load_yaml_file(path))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Postconditions:
        - Identical ``data`` always produces identical checksums
          (deterministic).
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
