"""
Module: portavia_kernel.models.risk_issue
Responsibility: ORM mapping of the hosted ``risks`` and ``issues`` tables.
Architecture position: Kernel > Models.  May import from db/base.py only.

Priority and status are free text in the hosted schema; the values the
dashboard filters on are listed in the enums below so that selectors and
fixtures spell them the same way.
"""

from enum import Enum

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from portavia_kernel.db.base import Base


class ItemPriority(str, Enum):
    """Priority values stored on risks and issues."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ItemStatus(str, Enum):
    """Lifecycle statuses stored on risks and issues."""

    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    MITIGATED = "Mitigated"
    CLOSED = "Closed"


class Risk(Base):
    """A project risk."""

    __tablename__ = "risks"

    __table_args__ = (
        Index("idx_risks_project", "project_id"),
    )

    project_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("projects.id"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    priority: Mapped[str | None] = mapped_column(String(20), nullable=True)

    status: Mapped[str | None] = mapped_column(String(30), nullable=True)


class Issue(Base):
    """A project issue."""

    __tablename__ = "issues"

    __table_args__ = (
        Index("idx_issues_project", "project_id"),
    )

    project_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("projects.id"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    priority: Mapped[str | None] = mapped_column(String(20), nullable=True)

    status: Mapped[str | None] = mapped_column(String(30), nullable=True)
