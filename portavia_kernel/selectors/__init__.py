"""Selectors for the dashboard back end (read side)."""

from portavia_kernel.selectors.base import BaseSelector
from portavia_kernel.selectors.project_selector import (
    DEFAULT_CLOSED_STATUS,
    DEFAULT_ESCALATED_PRIORITIES,
    ProjectFactSelector,
)

__all__ = [
    "BaseSelector",
    "DEFAULT_CLOSED_STATUS",
    "DEFAULT_ESCALATED_PRIORITIES",
    "ProjectFactSelector",
]
