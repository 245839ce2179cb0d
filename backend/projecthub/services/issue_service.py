"""Issue service.

By default issues are open to every authenticated caller: listing, filing,
reprioritizing and deleting only require the project to exist. Setting
``ENFORCE_ISSUE_OWNERSHIP`` restricts all of them to the project owner.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from projecthub.core.config import get_settings
from projecthub.core.errors import NotFoundError
from projecthub.core.structured_logging import log_json
from projecthub.models.enums import IssuePriority, IssueStatus
from projecthub.models.issue import Issue
from projecthub.models.project import Project
from projecthub.schemas.issue import CreateIssueRequest
from projecthub.services.ownership import project_exists, resolve_owned_project

logger = logging.getLogger(__name__)


class IssueService:
    """Service for managing issues within projects."""

    def __init__(self, db: AsyncSession, enforce_ownership: bool | None = None):
        """Initialize issue service.

        Args:
            db: Database session
            enforce_ownership: Require project ownership for every
                operation. Defaults to the ``enforce_issue_ownership`` setting.
        """
        self.db = db
        if enforce_ownership is None:
            enforce_ownership = get_settings().enforce_issue_ownership
        self.enforce_ownership = enforce_ownership

    async def list(self, project_id: UUID, caller_id: str) -> list[Issue]:
        """List a project's issues in filing order."""
        if self.enforce_ownership:
            await resolve_owned_project(self.db, caller_id, project_id)

        result = await self.db.execute(
            select(Issue)
            .where(Issue.project_id == project_id)
            .order_by(Issue.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def create(self, request: CreateIssueRequest, creator_id: str) -> Issue:
        """File an issue against an existing project.

        Raises:
            NotFoundError: the project does not exist (or, with ownership
                enforced, is not owned by ``creator_id``)
        """
        if self.enforce_ownership:
            await resolve_owned_project(self.db, creator_id, request.project_id)
        elif not await project_exists(self.db, request.project_id):
            raise NotFoundError("Project not found")

        issue = Issue(
            project_id=request.project_id,
            title=request.title,
            description=request.description,
            user_id=creator_id,
            priority=request.priority or IssuePriority.LOW,
            status=request.status or IssueStatus.OPEN,
        )
        self.db.add(issue)

        try:
            await self.db.flush()
        except IntegrityError:
            # The project was deleted between the check and the insert.
            await self.db.rollback()
            raise NotFoundError("Project not found") from None

        log_json(
            logger,
            logging.INFO,
            "issue_created",
            issue_id=issue.id,
            project_id=request.project_id,
            creator_id=creator_id,
        )
        await self.db.refresh(issue)
        return issue

    async def update_priority(
        self,
        issue_id: int,
        priority: IssuePriority,
        caller_id: str,
    ) -> Issue:
        """Change only the priority (and ``updated_at``) of an issue.

        Raises:
            NotFoundError: no issue with this id (or not owned, when enforced)
        """
        query = select(Issue).where(Issue.id == issue_id)
        if self.enforce_ownership:
            query = query.join(Project, Issue.project_id == Project.id).where(
                Project.user_id == caller_id
            )
        result = await self.db.execute(query.execution_options(populate_existing=True))
        issue = result.scalar_one_or_none()
        if issue is None:
            raise NotFoundError("Issue not found")

        issue.priority = priority
        issue.updated_at = func.now()
        await self.db.flush()

        log_json(
            logger,
            logging.INFO,
            "issue_priority_updated",
            issue_id=issue_id,
            priority=priority.value,
            caller_id=caller_id,
        )
        await self.db.refresh(issue)
        return issue

    async def delete(self, issue_id: int, caller_id: str) -> int:
        """Delete an issue by id.

        Deleting an id that matches nothing is not an error.

        Returns:
            Number of rows removed (0 or 1)
        """
        stmt = delete(Issue).where(Issue.id == issue_id)
        if self.enforce_ownership:
            stmt = stmt.where(
                Issue.project_id.in_(select(Project.id).where(Project.user_id == caller_id))
            )
        result = await self.db.execute(stmt.execution_options(synchronize_session=False))

        log_json(
            logger,
            logging.INFO,
            "issue_deleted",
            issue_id=issue_id,
            caller_id=caller_id,
            deleted=result.rowcount,
        )
        return result.rowcount
