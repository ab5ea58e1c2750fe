"""
Pytest fixtures for the Portavia test suite.

Provides:
- Structured log capture
- A deterministic clock and a ProjectFacts factory
- An in-memory SQLite database seeded with two projects, and an on-disk
  copy for command-line tests
"""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO

import pytest

from portavia_kernel.db.engine import (
    create_tables,
    get_session_factory,
    init_engine_from_url,
    reset_engine,
    session_scope,
)
from portavia_kernel.domain.clock import DeterministicClock
from portavia_kernel.domain.facts import CostBreakdownFacts, ProjectFacts
from portavia_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from portavia_kernel.models import (
    Issue,
    Project,
    ProjectOverview,
    ProjectResource,
    Risk,
    Task,
)

TODAY = date(2025, 1, 20)

SEEDED_PROJECT_ID = "P-1"
OVERVIEW_ONLY_PROJECT_ID = "P-2"


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture portavia logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            ...
            logs = captured_logs()
            assert any(r["message"] == "project_dashboard_loaded" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("portavia")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock.on(TODAY)


def _healthy_facts(**overrides) -> ProjectFacts:
    """The healthy mid-project baseline; keyword overrides replace fields."""
    values = dict(
        project_id=SEEDED_PROJECT_ID,
        name="Apollo Migration",
        sponsor_name="Dana Reyes",
        manager_name="Sam Ortiz",
        program="Cloud",
        business_unit="IT",
        state="Active",
        priority="High",
        size="Large",
        start_date=date(2025, 1, 6),
        end_date=date(2025, 2, 6),
        budget=Decimal("100000"),
        actual_cost=Decimal("40000"),
        total_milestones=10,
        completed_milestones=7,
        in_progress_milestones=2,
        not_started_milestones=1,
        open_risks=1,
        open_issues=2,
        team_count=4,
        high_priority_risks=0,
        critical_issues=0,
        task_hours=(Decimal("40"), Decimal("24"), None, Decimal("16")),
    )
    values.update(overrides)
    return ProjectFacts(**values)


@pytest.fixture
def make_facts():
    """Factory for ProjectFacts starting from the healthy baseline."""
    return _healthy_facts


@pytest.fixture
def cost_breakdown() -> CostBreakdownFacts:
    return CostBreakdownFacts(
        budget=Decimal("100000"),
        actual_cost=Decimal("40000"),
        labor=Decimal("25000"),
        materials=Decimal("10000"),
        infrastructure=Decimal("5000"),
        other=Decimal("0"),
    )


# =============================================================================
# Database fixtures
# =============================================================================


def _seed(session) -> None:
    session.add(Project(
        id=SEEDED_PROJECT_ID,
        name="Apollo Migration",
        status="Active",
        budget=Decimal("100000"),
        actual_cost=Decimal("40000"),
        actual_cost_labor=Decimal("25000"),
        actual_cost_materials=Decimal("10000"),
        actual_cost_infrastructure=Decimal("5000"),
        actual_cost_other=Decimal("0"),
    ))
    session.add(Project(id=OVERVIEW_ONLY_PROJECT_ID, name="Placeholder", status="Planning"))
    session.flush()

    session.add(ProjectOverview(
        id=SEEDED_PROJECT_ID,
        name="Apollo Migration",
        sponsor_name="Dana Reyes",
        manager_name="Sam Ortiz",
        program="Cloud",
        business_unit="IT",
        state="Active",
        priority="High",
        size="Large",
        start_date=date(2025, 1, 6),
        end_date=date(2025, 2, 6),
        budget=Decimal("100000"),
        actual_cost=Decimal("40000"),
        total_milestones=10,
        completed_milestones=7,
        in_progress_milestones=2,
        not_started_milestones=1,
        open_risks=1,
        open_issues=2,
    ))
    session.add(ProjectOverview(id=OVERVIEW_ONLY_PROJECT_ID, name="Placeholder"))

    for n in range(4):
        session.add(ProjectResource(
            project_id=SEEDED_PROJECT_ID, resource_id=f"R-{n}", role="Engineer",
        ))

    for n, (priority, status) in enumerate([
        ("High", "Open"),
        ("Critical", "Closed"),
        ("Low", "Open"),
        ("Critical", "In Progress"),
        ("High", None),
    ]):
        session.add(Risk(
            id=f"RK-{n}", project_id=SEEDED_PROJECT_ID,
            title=f"Risk {n}", priority=priority, status=status,
        ))

    for n, (priority, status) in enumerate([
        ("Critical", "Open"),
        ("High", "Mitigated"),
        ("Medium", "Open"),
        ("High", "Closed"),
    ]):
        session.add(Issue(
            id=f"IS-{n}", project_id=SEEDED_PROJECT_ID,
            title=f"Issue {n}", priority=priority, status=status,
        ))

    for n, hours in enumerate([Decimal("40"), Decimal("24"), None, Decimal("16")]):
        session.add(Task(
            id=f"T-{n}", project_id=SEEDED_PROJECT_ID,
            name=f"Task {n}", estimated_hours=hours,
        ))


@pytest.fixture
def session_factory():
    """Session factory over a freshly seeded in-memory SQLite database."""
    init_engine_from_url("sqlite://")
    create_tables()
    with session_scope() as session:
        _seed(session)
    yield get_session_factory()
    reset_engine()


@pytest.fixture
def session(session_factory):
    s = session_factory()
    yield s
    s.close()


@pytest.fixture
def seeded_database_url(tmp_path):
    """URL of a seeded on-disk SQLite database, released before the test runs."""
    url = f"sqlite:///{tmp_path / 'portavia.db'}"
    init_engine_from_url(url)
    create_tables()
    with session_scope() as session:
        _seed(session)
    reset_engine()
    yield url
    reset_engine()
