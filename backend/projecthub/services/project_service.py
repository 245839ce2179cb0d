"""Project service for CRUD operations."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from projecthub.core.errors import ConflictError
from projecthub.core.structured_logging import log_json
from projecthub.models.api_key import ApiKey
from projecthub.models.project import Project
from projecthub.schemas.project import ProjectRequest
from projecthub.services.ownership import resolve_owned_project

logger = logging.getLogger(__name__)

DUPLICATE_KEY_MESSAGE = "An API key with this name already exists in this project"


class ProjectService:
    """Service for managing projects and their API key sets."""

    def __init__(self, db: AsyncSession):
        """Initialize project service.

        Args:
            db: Database session
        """
        self.db = db

    async def create(
        self,
        request: ProjectRequest,
        owner_id: str,
    ) -> Project:
        """Create a project together with its submitted API keys.

        The project row and the keys are written in the caller's transaction;
        if any insert fails the whole transaction is rolled back.

        Args:
            request: Project creation request
            owner_id: Caller who will own the project

        Returns:
            Created Project with ``api_keys`` loaded

        Raises:
            ConflictError: two submitted keys share a name
        """
        project = Project(user_id=owner_id)
        self._apply_fields(project, request)
        self.db.add(project)

        keys = request.complete_api_keys()
        try:
            await self.db.flush()
            self._add_api_keys(project.id, keys)
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(DUPLICATE_KEY_MESSAGE) from None

        log_json(
            logger,
            logging.INFO,
            "project_created",
            project_id=project.id,
            owner_id=owner_id,
            api_key_count=len(keys),
        )
        return await self._load(project.id)

    async def list(self, owner_id: str) -> list[Project]:
        """List every project owned by ``owner_id`` with its API keys.

        Args:
            owner_id: Caller whose projects to list

        Returns:
            Projects, newest first
        """
        result = await self.db.execute(
            select(Project)
            .where(Project.user_id == owner_id)
            .options(selectinload(Project.api_keys))
            .order_by(Project.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get(self, project_id: UUID, owner_id: str) -> Project:
        """Get an owned project with its API keys.

        Raises:
            NotFoundError: project missing or not owned by ``owner_id``
        """
        return await resolve_owned_project(
            self.db, owner_id, project_id, selectinload(Project.api_keys)
        )

    async def update(
        self,
        project_id: UUID,
        request: ProjectRequest,
        owner_id: str,
    ) -> Project:
        """Replace a project's fields and its whole API key set.

        Existing keys are deleted and the submitted ones inserted, not
        merged. Runs in the caller's transaction.

        Args:
            project_id: Project to update
            request: Replacement values
            owner_id: Caller performing the update

        Returns:
            Updated Project with its new ``api_keys``

        Raises:
            NotFoundError: project missing or not owned by ``owner_id``
            ConflictError: two submitted keys share a name
        """
        project = await resolve_owned_project(self.db, owner_id, project_id)
        self._apply_fields(project, request)
        # Bumped even when only the key set changes.
        project.updated_at = func.now()

        keys = request.complete_api_keys()
        try:
            removed = await self.db.execute(
                delete(ApiKey).where(ApiKey.project_id == project.id)
            )
            self._add_api_keys(project.id, keys)
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(DUPLICATE_KEY_MESSAGE) from None

        log_json(
            logger,
            logging.INFO,
            "project_updated",
            project_id=project.id,
            owner_id=owner_id,
            api_keys_removed=removed.rowcount,
            api_key_count=len(keys),
        )
        return await self._load(project.id)

    async def delete(self, project_id: UUID, owner_id: str) -> None:
        """Delete an owned project.

        API keys and issues are removed by the foreign key cascade.

        Raises:
            NotFoundError: project missing or not owned by ``owner_id``
        """
        project = await resolve_owned_project(self.db, owner_id, project_id)

        await self.db.delete(project)
        await self.db.flush()

        log_json(
            logger,
            logging.INFO,
            "project_deleted",
            project_id=project_id,
            owner_id=owner_id,
        )

    @staticmethod
    def _apply_fields(project: Project, request: ProjectRequest) -> None:
        project.name = request.name
        project.description = request.description
        project.github_link = request.github_link
        project.leader = request.leader
        project.start_date = request.start_date
        project.end_date = request.end_date

    def _add_api_keys(self, project_id: UUID, keys: list[tuple[str, str]]) -> None:
        for name, value in keys:
            self.db.add(ApiKey(project_id=project_id, name=name, key=value))

    async def _load(self, project_id: UUID) -> Project:
        result = await self.db.execute(
            select(Project)
            .where(Project.id == project_id)
            .options(selectinload(Project.api_keys))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()
