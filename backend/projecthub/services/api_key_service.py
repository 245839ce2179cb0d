"""API key service for CRUD operations scoped to a project."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from projecthub.core.errors import ConflictError, NotFoundError
from projecthub.core.structured_logging import log_json
from projecthub.models.api_key import ApiKey
from projecthub.schemas.api_key import ApiKeyWriteRequest, CreateApiKeyRequest
from projecthub.services.ownership import (
    project_exists,
    resolve_owned_api_key,
    resolve_owned_project,
)
from projecthub.services.project_service import DUPLICATE_KEY_MESSAGE

logger = logging.getLogger(__name__)


class ApiKeyService:
    """Service for managing individual API keys.

    Every operation goes through the parent project's owner. Name uniqueness
    within a project is enforced by the ``idx_api_keys_project_name`` index.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, project_id: UUID, caller_id: str) -> list[ApiKey]:
        """List the API keys of an owned project, oldest first.

        Raises:
            NotFoundError: project missing or not owned by ``caller_id``
        """
        await resolve_owned_project(self.db, caller_id, project_id)
        result = await self.db.execute(
            select(ApiKey)
            .where(ApiKey.project_id == project_id)
            .order_by(ApiKey.created_at)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def create(self, request: CreateApiKeyRequest, caller_id: str) -> ApiKey:
        """Add a key to an owned project.

        Raises:
            NotFoundError: project missing or not owned by ``caller_id``
            ConflictError: the project already has a key with this name
        """
        await resolve_owned_project(self.db, caller_id, request.project_id)

        api_key = ApiKey(
            project_id=request.project_id,
            name=request.name,
            key=request.key.get_secret_value(),
        )
        self.db.add(api_key)

        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            # The project was deleted between the check and the insert.
            if not await project_exists(self.db, request.project_id):
                raise NotFoundError("Project not found") from None
            raise ConflictError(DUPLICATE_KEY_MESSAGE) from None

        log_json(
            logger,
            logging.INFO,
            "api_key_created",
            api_key_id=api_key.id,
            project_id=request.project_id,
            owner_id=caller_id,
        )
        await self.db.refresh(api_key)
        return api_key

    async def get(self, api_key_id: UUID, caller_id: str) -> ApiKey:
        """Get a key whose project is owned by ``caller_id``.

        Raises:
            NotFoundError: key missing or not owned
        """
        return await resolve_owned_api_key(self.db, caller_id, api_key_id)

    async def update(
        self,
        api_key_id: UUID,
        request: ApiKeyWriteRequest,
        caller_id: str,
    ) -> ApiKey:
        """Overwrite a key's name and value.

        Keeping the current name is not a conflict.

        Raises:
            NotFoundError: key missing or not owned
            ConflictError: another key of the project already has the name
        """
        api_key = await resolve_owned_api_key(self.db, caller_id, api_key_id)
        api_key.name = request.name
        api_key.key = request.key.get_secret_value()
        api_key.updated_at = func.now()

        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(DUPLICATE_KEY_MESSAGE) from None

        log_json(
            logger,
            logging.INFO,
            "api_key_updated",
            api_key_id=api_key_id,
            owner_id=caller_id,
        )
        await self.db.refresh(api_key)
        return api_key

    async def delete(self, api_key_id: UUID, caller_id: str) -> None:
        """Delete a key whose project is owned by ``caller_id``.

        Raises:
            NotFoundError: key missing or not owned
        """
        api_key = await resolve_owned_api_key(self.db, caller_id, api_key_id)
        await self.db.delete(api_key)
        await self.db.flush()

        log_json(
            logger,
            logging.INFO,
            "api_key_deleted",
            api_key_id=api_key_id,
            owner_id=caller_id,
        )
