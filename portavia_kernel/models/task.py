"""
Module: portavia_kernel.models.task
Responsibility: ORM mapping of the hosted ``tasks`` table (effort estimates).
Architecture position: Kernel > Models.  May import from db/base.py only.
"""

from decimal import Decimal

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from portavia_kernel.db.base import Base


class Task(Base):
    """A work item with an optional effort estimate in hours."""

    __tablename__ = "tasks"

    __table_args__ = (
        Index("idx_tasks_project", "project_id"),
    )

    project_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("projects.id"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # NULL when the task has not been estimated yet
    estimated_hours: Mapped[Decimal | None] = mapped_column(nullable=True)
