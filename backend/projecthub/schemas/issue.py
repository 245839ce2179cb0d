"""Pydantic schemas for issue endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from projecthub.models.enums import IssuePriority, IssueStatus
from projecthub.schemas.common import CamelModel, blank_to_none, strip_required


class CreateIssueRequest(CamelModel):
    """Request schema for filing an issue.

    Priority defaults to low and status to open when omitted.
    """

    title: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=1000)
    priority: IssuePriority | None = None
    status: IssueStatus | None = None
    project_id: UUID

    @field_validator("title", mode="before")
    @classmethod
    def _title_required(cls, v):
        return strip_required(v, "Title")

    @field_validator("description", "priority", "status", mode="before")
    @classmethod
    def _empty_is_none(cls, v):
        return blank_to_none(v)


class UpdateIssuePriorityRequest(CamelModel):
    """Request schema for changing an issue's priority."""

    issue_id: int
    priority: IssuePriority


class DeleteIssueRequest(CamelModel):
    """Request schema for deleting an issue."""

    issue_id: int


class IssueResponse(CamelModel):
    """Response schema for an issue."""

    id: int
    project_id: UUID
    title: str
    description: str | None = None
    user_id: str
    status: IssueStatus
    priority: IssuePriority
    created_at: datetime
    updated_at: datetime
