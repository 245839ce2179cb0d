"""API routes for projects."""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from projecthub.api.deps import get_current_user_id
from projecthub.core.database import get_db
from projecthub.models.api_key import ApiKey
from projecthub.models.project import Project
from projecthub.schemas.api_key import ApiKeyResponse
from projecthub.schemas.common import MessageResponse
from projecthub.schemas.errors import ErrorResponse
from projecthub.schemas.project import ProjectRequest, ProjectResponse
from projecthub.services.project_service import ProjectService

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


def api_key_to_response(api_key: ApiKey) -> ApiKeyResponse:
    """Convert ApiKey model to ApiKeyResponse."""
    return ApiKeyResponse(
        id=api_key.id,
        project_id=api_key.project_id,
        name=api_key.name,
        key=api_key.key,
        created_at=api_key.created_at,
        updated_at=api_key.updated_at,
    )


def _project_to_response(project: Project) -> ProjectResponse:
    """Convert Project model (with api_keys loaded) to ProjectResponse."""
    return ProjectResponse(
        id=project.id,
        name=project.name,
        description=project.description,
        start_date=project.start_date,
        end_date=project.end_date,
        github_link=project.github_link,
        leader=project.leader,
        user_id=project.user_id,
        created_at=project.created_at,
        updated_at=project.updated_at,
        api_keys=[api_key_to_response(k) for k in project.api_keys],
    )


@router.get(
    "",
    response_model=list[ProjectResponse],
    responses=ERROR_RESPONSES,
    summary="List my projects",
)
async def list_projects(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> list[ProjectResponse]:
    """List every project owned by the caller, each with its API keys."""
    service = ProjectService(db)
    projects = await service.list(user_id)
    return [_project_to_response(p) for p in projects]


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create project",
)
async def create_project(
    request: ProjectRequest,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ProjectResponse:
    """Create a project owned by the caller.

    Submitted API keys with a blank name or key are ignored.
    """
    service = ProjectService(db)
    project = await service.create(request, user_id)
    await db.commit()
    return _project_to_response(project)


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    responses=ERROR_RESPONSES,
    summary="Get project",
)
async def get_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ProjectResponse:
    service = ProjectService(db)
    project = await service.get(project_id, user_id)
    return _project_to_response(project)


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    responses=ERROR_RESPONSES,
    summary="Update project",
)
@router.patch(
    "/{project_id}",
    response_model=ProjectResponse,
    responses=ERROR_RESPONSES,
    summary="Update project (same as PUT)",
)
async def update_project(
    project_id: UUID,
    request: ProjectRequest,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ProjectResponse:
    """Replace a project's fields and its API key set.

    PATCH behaves like PUT: omitted optional fields are cleared and the key
    set is replaced by ``apiKeys``.
    """
    service = ProjectService(db)
    project = await service.update(project_id, request, user_id)
    await db.commit()
    return _project_to_response(project)


@router.delete(
    "/{project_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    summary="Delete project",
)
async def delete_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> MessageResponse:
    """Delete a project together with its API keys and issues."""
    service = ProjectService(db)
    await service.delete(project_id, user_id)
    await db.commit()
    return MessageResponse(message="Project deleted successfully")
