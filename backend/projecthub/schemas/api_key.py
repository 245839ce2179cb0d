"""Pydantic schemas for API key endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, SecretStr, field_validator

from projecthub.schemas.common import CamelModel, strip_required


class ApiKeyInput(CamelModel):
    """An API key submitted together with a project.

    Entries with a blank name or key are dropped rather than rejected.
    """

    name: str | None = None
    key: SecretStr | None = None

    @property
    def is_complete(self) -> bool:
        return bool(
            self.name
            and self.name.strip()
            and self.key is not None
            and self.key.get_secret_value().strip()
        )


class ApiKeyWriteRequest(CamelModel):
    """Request schema for updating an API key."""

    name: str = Field(..., min_length=1)
    key: SecretStr

    @field_validator("name", mode="before")
    @classmethod
    def _name_required(cls, v):
        return strip_required(v, "Name")

    @field_validator("key")
    @classmethod
    def _key_required(cls, v: SecretStr) -> SecretStr:
        value = v.get_secret_value().strip()
        if not value:
            raise ValueError("Key is required")
        return SecretStr(value)


class CreateApiKeyRequest(ApiKeyWriteRequest):
    """Request schema for creating an API key in a project."""

    project_id: UUID


class ApiKeyResponse(CamelModel):
    """Response schema for an API key, including its stored value."""

    id: UUID
    project_id: UUID
    name: str
    key: str
    created_at: datetime
    updated_at: datetime
