"""SQLAlchemy models."""

from projecthub.models.api_key import ApiKey
from projecthub.models.base import Base, BaseModel, TimestampMixin
from projecthub.models.enums import IssuePriority, IssueStatus
from projecthub.models.issue import Issue
from projecthub.models.project import Project

__all__ = [
    "Base",
    "BaseModel",
    "TimestampMixin",
    "IssuePriority",
    "IssueStatus",
    "Project",
    "ApiKey",
    "Issue",
]
