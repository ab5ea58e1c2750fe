"""
Module: portavia_kernel.models.project_overview
Responsibility: Read-only mapping of the database-side view
    ``vw_project_overview``: one row per project with identity,
    classification, schedule, finance and milestone/risk/issue counters.
Architecture position: Kernel > Models.  May import from db/base.py only.

The view is defined and maintained by the hosted backend.  It is mapped
here with ``info={"is_view": True}``; ``create_tables()`` materialises it
as a plain table so tests can seed rows directly.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from portavia_kernel.db.base import Base


class ProjectOverview(Base):
    """A row of ``vw_project_overview`` (id is the project id)."""

    __tablename__ = "vw_project_overview"

    __table_args__ = {"info": {"is_view": True}}

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sponsor_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    manager_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    program: Mapped[str | None] = mapped_column(String(255), nullable=True)
    business_unit: Mapped[str | None] = mapped_column(String(255), nullable=True)

    state: Mapped[str | None] = mapped_column(String(50), nullable=True)
    priority: Mapped[str | None] = mapped_column(String(20), nullable=True)
    size: Mapped[str | None] = mapped_column(String(20), nullable=True)

    start_date: Mapped[date | None] = mapped_column(nullable=True)
    end_date: Mapped[date | None] = mapped_column(nullable=True)

    budget: Mapped[Decimal | None] = mapped_column(nullable=True)
    actual_cost: Mapped[Decimal | None] = mapped_column(nullable=True)

    total_milestones: Mapped[int | None] = mapped_column(nullable=True)
    completed_milestones: Mapped[int | None] = mapped_column(nullable=True)
    in_progress_milestones: Mapped[int | None] = mapped_column(nullable=True)
    not_started_milestones: Mapped[int | None] = mapped_column(nullable=True)
    open_risks: Mapped[int | None] = mapped_column(nullable=True)
    open_issues: Mapped[int | None] = mapped_column(nullable=True)
