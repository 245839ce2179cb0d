"""API routes for project API keys."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from projecthub.api.deps import get_current_user_id
from projecthub.api.routes.projects import ERROR_RESPONSES, api_key_to_response
from projecthub.core.database import get_db
from projecthub.schemas.api_key import ApiKeyResponse, ApiKeyWriteRequest, CreateApiKeyRequest
from projecthub.schemas.common import MessageResponse
from projecthub.services.api_key_service import ApiKeyService

router = APIRouter()


@router.get(
    "",
    response_model=list[ApiKeyResponse],
    responses=ERROR_RESPONSES,
    summary="List a project's API keys",
)
async def list_api_keys(
    project_id: UUID = Query(..., alias="projectId"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> list[ApiKeyResponse]:
    service = ApiKeyService(db)
    api_keys = await service.list(project_id, user_id)
    return [api_key_to_response(k) for k in api_keys]


@router.post(
    "",
    response_model=ApiKeyResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create API key",
)
async def create_api_key(
    request: CreateApiKeyRequest,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiKeyResponse:
    """Add an API key to one of the caller's projects.

    Names are unique within a project.
    """
    service = ApiKeyService(db)
    api_key = await service.create(request, user_id)
    await db.commit()
    return api_key_to_response(api_key)


@router.get(
    "/{api_key_id}",
    response_model=ApiKeyResponse,
    responses=ERROR_RESPONSES,
    summary="Get API key",
)
async def get_api_key(
    api_key_id: UUID,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiKeyResponse:
    service = ApiKeyService(db)
    api_key = await service.get(api_key_id, user_id)
    return api_key_to_response(api_key)


@router.put(
    "/{api_key_id}",
    response_model=ApiKeyResponse,
    responses=ERROR_RESPONSES,
    summary="Update API key",
)
async def update_api_key(
    api_key_id: UUID,
    request: ApiKeyWriteRequest,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiKeyResponse:
    service = ApiKeyService(db)
    api_key = await service.update(api_key_id, request, user_id)
    await db.commit()
    return api_key_to_response(api_key)


@router.delete(
    "/{api_key_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    summary="Delete API key",
)
async def delete_api_key(
    api_key_id: UUID,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> MessageResponse:
    service = ApiKeyService(db)
    await service.delete(api_key_id, user_id)
    await db.commit()
    return MessageResponse(message="API key deleted successfully")
