"""FastAPI dependencies for authentication."""
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from projecthub.core.errors import UnauthorizedError
from projecthub.core.security import caller_id_from_token

# Missing credentials are reported by get_current_user_id so the response
# body follows ErrorResponse.
security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """Get the authenticated caller's identifier from the bearer token.

    The identifier is opaque and comes from the token's ``sub`` claim; there
    is no local user table.

    Args:
        request: Incoming request, tagged with the caller for rate limiting
        credentials: HTTP Bearer credentials from request

    Returns:
        Caller identifier

    Raises:
        UnauthorizedError: token missing, invalid, expired or without subject
    """
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")

    caller_id = caller_id_from_token(credentials.credentials)
    if caller_id is None:
        raise UnauthorizedError("Invalid or expired token")

    request.state.caller_id = caller_id
    return caller_id
