"""ORM mappings of the hosted tables and views the dashboard reads."""

from portavia_kernel.models.project import Project, ProjectResource
from portavia_kernel.models.project_overview import ProjectOverview
from portavia_kernel.models.risk_issue import Issue, ItemPriority, ItemStatus, Risk
from portavia_kernel.models.task import Task

__all__ = [
    "Issue",
    "ItemPriority",
    "ItemStatus",
    "Project",
    "ProjectOverview",
    "ProjectResource",
    "Risk",
    "Task",
]
