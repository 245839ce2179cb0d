"""Bearer token verification.

Tokens are issued by the external identity provider; this module only needs
to verify them and read the caller identifier from the ``sub`` claim.
``create_access_token`` exists for development tooling and tests.
"""

from datetime import UTC, datetime, timedelta

import jwt
from jwt import exceptions as jwt_exceptions

from projecthub.core.config import get_settings

settings = get_settings()


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a signed access token.

    Args:
        data: Dictionary of claims to encode in the token
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.update({"exp": expire})
    if settings.jwt_audience and "aud" not in to_encode:
        to_encode["aud"] = settings.jwt_audience
    if settings.jwt_issuer and "iss" not in to_encode:
        to_encode["iss"] = settings.jwt_issuer
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict | None:
    """Decode and validate a bearer token.

    Args:
        token: JWT token string to decode

    Returns:
        Decoded token payload if valid, None otherwise
    """
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options={"require": ["exp", "sub"]},
        )
    except jwt_exceptions.PyJWTError:
        return None


def caller_id_from_token(token: str) -> str | None:
    """Return the opaque caller identifier carried by ``token``, if valid."""
    payload = decode_token(token)
    if not payload:
        return None
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        return None
    return subject
