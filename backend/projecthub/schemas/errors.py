"""Error response schema shared by every endpoint."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Standard error response schema.

    Used for all error responses (4xx, 5xx) across the API.
    """

    error: str = Field(
        ...,
        description="Error type identifier",
        examples=["validation_error", "not_found", "conflict"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Project not found", "An API key with this name already exists in this project"],
    )
    details: Optional[dict] = Field(
        None,
        description="Additional error context (field validation errors, etc.)",
        examples=[{"githublink": "Field required"}],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "error": "not_found",
                    "message": "Project not found",
                },
                {
                    "error": "conflict",
                    "message": "An API key with this name already exists in this project",
                },
                {
                    "error": "validation_error",
                    "message": "Request validation failed",
                    "details": {
                        "name": "Project name is required",
                        "leader": "Field required",
                    },
                },
            ]
        }
    )
