"""Ownership checks shared by every service.

A project is visible only to its owner, and an API key only to the owner of
its parent project. Absent and not-owned are reported the same way so the
API does not reveal which ids exist.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from projecthub.core.errors import NotFoundError
from projecthub.models.api_key import ApiKey
from projecthub.models.project import Project


async def resolve_owned_project(
    db: AsyncSession,
    caller_id: str,
    project_id: UUID,
    *options,
) -> Project:
    """Return the project if ``caller_id`` owns it.

    Args:
        db: Database session
        caller_id: Authenticated caller identifier
        project_id: Project to resolve
        *options: Extra loader options, e.g. ``selectinload(Project.api_keys)``

    Raises:
        NotFoundError: project missing or owned by someone else
    """
    query = (
        select(Project)
        .where(Project.id == project_id)
        .where(Project.user_id == caller_id)
        .execution_options(populate_existing=True)
    )
    if options:
        query = query.options(*options)

    result = await db.execute(query)
    project = result.scalar_one_or_none()
    if project is None:
        raise NotFoundError("Project not found")
    return project


async def resolve_owned_api_key(
    db: AsyncSession,
    caller_id: str,
    api_key_id: UUID,
) -> ApiKey:
    """Return the API key if its parent project is owned by ``caller_id``.

    Raises:
        NotFoundError: key missing or its project owned by someone else
    """
    result = await db.execute(
        select(ApiKey)
        .join(Project, ApiKey.project_id == Project.id)
        .where(ApiKey.id == api_key_id)
        .where(Project.user_id == caller_id)
        .execution_options(populate_existing=True)
    )
    api_key = result.scalar_one_or_none()
    if api_key is None:
        raise NotFoundError("API key not found")
    return api_key


async def project_exists(db: AsyncSession, project_id: UUID) -> bool:
    """Whether a project with this id exists, regardless of owner."""
    result = await db.execute(select(Project.id).where(Project.id == project_id))
    return result.scalar_one_or_none() is not None
