"""Pydantic schemas for project endpoints."""

from datetime import datetime
from urllib.parse import urlparse
from uuid import UUID

from pydantic import Field, field_validator

from projecthub.schemas.api_key import ApiKeyInput, ApiKeyResponse
from projecthub.schemas.common import CamelModel, blank_to_none, strip_required


class ProjectRequest(CamelModel):
    """Request schema for creating or replacing a project.

    Updates are full replacements, so create and update share one schema.
    ``apiKeys`` replaces the project's whole key set.
    """

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    github_link: str = Field(..., alias="githublink", min_length=1)
    leader: str = Field(..., min_length=1)
    start_date: datetime | None = None
    end_date: datetime | None = None
    api_keys: list[ApiKeyInput] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def _name_required(cls, v):
        return strip_required(v, "Project name")

    @field_validator("leader", mode="before")
    @classmethod
    def _leader_required(cls, v):
        return strip_required(v, "Leader")

    @field_validator("github_link", mode="before")
    @classmethod
    def _github_link_is_url(cls, v):
        v = strip_required(v, "GitHub link")
        if isinstance(v, str):
            parsed = urlparse(v)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValueError("GitHub link must be an http(s) URL")
        return v

    @field_validator("description", "start_date", "end_date", mode="before")
    @classmethod
    def _empty_is_none(cls, v):
        return blank_to_none(v)

    @field_validator("api_keys", mode="before")
    @classmethod
    def _null_keys_is_empty(cls, v):
        return [] if v is None else v

    def complete_api_keys(self) -> list[tuple[str, str]]:
        """Submitted keys with both fields present, trimmed, as (name, value)."""
        return [
            (item.name.strip(), item.key.get_secret_value().strip())
            for item in self.api_keys
            if item.is_complete
        ]


class ProjectResponse(CamelModel):
    """Response schema for a project with its API keys."""

    id: UUID
    name: str
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    github_link: str = Field(..., alias="githublink")
    leader: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    api_keys: list[ApiKeyResponse] = Field(default_factory=list)
