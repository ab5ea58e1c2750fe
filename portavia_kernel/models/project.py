"""
Module: portavia_kernel.models.project
Responsibility: ORM mapping of the hosted ``projects`` and
    ``project_resources`` tables -- the columns the dashboard reads.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants (owned by the hosted backend, not enforced here):
    - actual_cost equals the sum of the four category columns; a database
      trigger keeps them aligned whenever a category changes.
    - Category columns default to 0, never NULL, on rows created after the
      cost-category migration; older rows may still hold NULL.
"""

from decimal import Decimal

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from portavia_kernel.db.base import Base


class Project(Base):
    """
    A project row with its budget and categorised actual cost.

    Non-goals:
        - Scheduling and milestone columns are read through the overview
          view, not from this table.
    """

    __tablename__ = "projects"

    __table_args__ = (
        Index("idx_projects_status", "status"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    status: Mapped[str | None] = mapped_column(String(50), nullable=True)

    budget: Mapped[Decimal | None] = mapped_column(nullable=True)

    actual_cost: Mapped[Decimal | None] = mapped_column(nullable=True)

    # Labor: internal and external resource effort
    actual_cost_labor: Mapped[Decimal | None] = mapped_column(nullable=True)

    # Materials: licenses, hardware, tools, supplies
    actual_cost_materials: Mapped[Decimal | None] = mapped_column(nullable=True)

    # Infrastructure: cloud, servers, network, hosting
    actual_cost_infrastructure: Mapped[Decimal | None] = mapped_column(nullable=True)

    actual_cost_other: Mapped[Decimal | None] = mapped_column(nullable=True)

    def __repr__(self) -> str:
        return f"<Project {self.id} {self.name!r}>"


class ProjectResource(Base):
    """Assignment of a resource (team member) to a project."""

    __tablename__ = "project_resources"

    __table_args__ = (
        Index("idx_project_resources_project", "project_id"),
    )

    project_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("projects.id"),
        nullable=False,
    )

    resource_id: Mapped[str] = mapped_column(String(36), nullable=False)

    role: Mapped[str | None] = mapped_column(String(100), nullable=True)
