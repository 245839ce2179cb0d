"""Enumerations for issue fields."""

from enum import Enum


class IssueStatus(str, Enum):
    """Issue status.

    A plain field: any status may be set from any other.
    """

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"


class IssuePriority(str, Enum):
    """Issue priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
