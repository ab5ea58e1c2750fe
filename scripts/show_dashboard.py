#!/usr/bin/env python3
"""
Print the dashboard of one project as JSON.

Usage:
    python3 scripts/show_dashboard.py --database-url postgresql://... --project-id P-1
    python3 scripts/show_dashboard.py --database-url sqlite:///demo.db \\
        --project-id P-1 --today 2025-01-20 --config my_thresholds.yaml

Exit codes:
    0  dashboard printed
    1  project not found, overview query failed, or invalid configuration
       (a one-line JSON error is printed to stdout)
"""

import argparse
import dataclasses
import json
import sys
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def _json_default(obj):
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value
    raise TypeError(f"Not JSON serializable: {type(obj).__name__}")


def _parse_today(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date: {value!r}") from None


def main() -> int:
    parser = argparse.ArgumentParser(description="Show one project's dashboard as JSON")
    parser.add_argument("--database-url", required=True, help="SQLAlchemy database URL")
    parser.add_argument("--project-id", required=True, help="Project id")
    parser.add_argument("--config", type=Path, default=None, help="Threshold YAML file")
    parser.add_argument(
        "--today", type=_parse_today, default=None,
        help="Reference date (YYYY-MM-DD); defaults to the system date",
    )
    parser.add_argument("--verbose", action="store_true", help="Log to stderr")
    args = parser.parse_args()

    import logging

    from portavia_config import get_active_config
    from portavia_kernel.db.engine import get_session_factory, init_engine_from_url
    from portavia_kernel.domain.clock import DeterministicClock, SystemClock
    from portavia_kernel.exceptions import (
        ConfigurationError,
        FactQueryError,
        ProjectNotFoundError,
    )
    from portavia_kernel.logging_config import configure_logging
    from portavia_services import ProjectDashboardService, SelectorFactSource

    configure_logging(level=logging.INFO if args.verbose else logging.WARNING)

    try:
        config = get_active_config(args.config)
    except ConfigurationError as exc:
        print(json.dumps({"error": exc.code, "message": str(exc)}))
        return 1

    engine = init_engine_from_url(args.database_url)
    clock = (
        DeterministicClock(datetime(
            args.today.year, args.today.month, args.today.day, 12, tzinfo=timezone.utc,
        ))
        if args.today else SystemClock()
    )
    # SQLite shares a single connection between sessions
    max_workers = 1 if engine.dialect.name == "sqlite" else None

    service = ProjectDashboardService(
        SelectorFactSource.from_config(get_session_factory(), config.fact_source),
        clock,
        config=config,
        max_workers=max_workers,
    )

    try:
        dashboard = service.load(args.project_id)
    except ProjectNotFoundError as exc:
        print(json.dumps({"error": exc.code, "project_id": exc.project_id}))
        return 1
    except FactQueryError as exc:
        print(json.dumps({
            "error": exc.code,
            "query_name": exc.query_name,
            "project_id": exc.project_id,
            "message": exc.reason,
        }))
        return 1

    payload = dataclasses.asdict(dashboard)
    payload["as_of"] = clock.today()
    print(json.dumps(payload, default=_json_default, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
