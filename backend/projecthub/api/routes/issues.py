"""API routes for issues.

Issues are addressed through the request body (``issueId``) rather than the
path, matching the web client.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from projecthub.api.deps import get_current_user_id
from projecthub.api.routes.projects import ERROR_RESPONSES
from projecthub.core.database import get_db
from projecthub.models.issue import Issue
from projecthub.schemas.common import MessageResponse
from projecthub.schemas.issue import (
    CreateIssueRequest,
    DeleteIssueRequest,
    IssueResponse,
    UpdateIssuePriorityRequest,
)
from projecthub.services.issue_service import IssueService

router = APIRouter()


def _issue_to_response(issue: Issue) -> IssueResponse:
    """Convert Issue model to IssueResponse."""
    return IssueResponse(
        id=issue.id,
        project_id=issue.project_id,
        title=issue.title,
        description=issue.description,
        user_id=issue.user_id,
        status=issue.status,
        priority=issue.priority,
        created_at=issue.created_at,
        updated_at=issue.updated_at,
    )


@router.get(
    "",
    response_model=list[IssueResponse],
    responses=ERROR_RESPONSES,
    summary="List a project's issues",
)
async def list_issues(
    project_id: UUID = Query(..., alias="projectId"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> list[IssueResponse]:
    service = IssueService(db)
    issues = await service.list(project_id, user_id)
    return [_issue_to_response(i) for i in issues]


@router.post(
    "",
    response_model=IssueResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create issue",
)
async def create_issue(
    request: CreateIssueRequest,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> IssueResponse:
    """File an issue against an existing project.

    The caller is recorded as the issue's creator.
    """
    service = IssueService(db)
    issue = await service.create(request, user_id)
    await db.commit()
    return _issue_to_response(issue)


@router.put(
    "",
    response_model=IssueResponse,
    responses=ERROR_RESPONSES,
    summary="Update issue priority",
)
async def update_issue_priority(
    request: UpdateIssuePriorityRequest,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> IssueResponse:
    service = IssueService(db)
    issue = await service.update_priority(request.issue_id, request.priority, user_id)
    await db.commit()
    return _issue_to_response(issue)


@router.delete(
    "",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    summary="Delete issue",
)
async def delete_issue(
    request: DeleteIssueRequest,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> MessageResponse:
    service = IssueService(db)
    await service.delete(request.issue_id, user_id)
    await db.commit()
    return MessageResponse(message="Issue deleted")
