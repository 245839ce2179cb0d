"""Shared schema pieces."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exchanged with the web client using camelCase keys.

    Python code uses the snake_case field names; JSON uses the aliases.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class CallerResponse(CamelModel):
    """Identity of the authenticated caller."""

    user_id: str


def strip_required(value: object, field: str) -> object:
    """Trim a required string field and reject it when blank."""
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError(f"{field} is required")
    return value


def blank_to_none(value: object) -> object:
    """Treat an empty optional string as absent."""
    if isinstance(value, str) and not value.strip():
        return None
    return value
