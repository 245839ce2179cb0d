"""Middleware for rate limiting, security headers and request logging."""

import logging
import time
from collections import defaultdict
from datetime import UTC, datetime, timedelta

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from projecthub.core.config import get_settings
from projecthub.core.metrics import observe_http_request
from projecthub.core.request_context import (
    new_request_id,
    normalize_request_id,
    request_id_context,
)
from projecthub.core.security import caller_id_from_token
from projecthub.core.structured_logging import log_json

logger = logging.getLogger(__name__)
settings = get_settings()

WRITE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add basic security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        # Responses can carry API key values.
        response.headers.setdefault("Cache-Control", "no-store")

        if settings.environment == "production":
            forwarded_proto = request.headers.get("x-forwarded-proto")
            scheme = forwarded_proto or request.url.scheme
            if scheme == "https":
                response.headers.setdefault(
                    "Strict-Transport-Security",
                    "max-age=63072000; includeSubDomains",
                )

        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-caller limit on write requests (production only).

    Counts POST/PUT/PATCH/DELETE requests per token subject, or per client IP
    when no valid token is present, over a sliding one-minute window.
    """

    def __init__(self, app: ASGIApp, limit_per_minute: int | None = None):
        super().__init__(app)
        self.limit_per_minute = limit_per_minute or settings.rate_limit_write_per_minute
        self.window = timedelta(minutes=1)
        self._requests: dict[str, list[datetime]] = defaultdict(list)

    def _count_recent(self, identifier: str, now: datetime) -> int:
        cutoff = now - self.window
        recent = [ts for ts in self._requests[identifier] if ts > cutoff]
        self._requests[identifier] = recent
        return len(recent)

    @staticmethod
    def _caller_or_ip(request: Request) -> str:
        """Prefer the token subject for identification, fall back to client IP."""
        client_ip = request.client.host if request.client else "unknown"
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            caller_id = caller_id_from_token(auth_header.removeprefix("Bearer ").strip())
            if caller_id:
                return caller_id
        return client_ip

    async def dispatch(self, request: Request, call_next):
        if settings.environment != "production" or request.method not in WRITE_METHODS:
            return await call_next(request)

        identifier = self._caller_or_ip(request)
        now = datetime.now(UTC)
        if self._count_recent(identifier, now) >= self.limit_per_minute:
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "error": "rate_limited",
                    "message": "Too many requests. Please try again later.",
                },
            )
        self._requests[identifier].append(now)

        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Request logging middleware with structured logging.

    Logs method, path, status code, duration and client IP as one JSON
    line, and echoes the correlation id in ``X-Request-ID``. Bodies are never
    logged.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = normalize_request_id(
            request.headers.get("X-Request-ID") or request.headers.get("X-Correlation-ID")
        ) or new_request_id()
        request.state.request_id = request_id

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path

        with request_id_context(request_id):
            try:
                response = await call_next(request)
            except Exception as exc:
                duration_ms = (time.perf_counter() - start_time) * 1000
                log_json(
                    logger,
                    logging.ERROR,
                    "request_error",
                    method=method,
                    path=path,
                    status_code=500,
                    duration_ms=round(duration_ms, 2),
                    client_ip=client_ip,
                    exception=exc.__class__.__name__,
                )
                raise

            response.headers.setdefault("X-Request-ID", request_id)
            duration_ms = (time.perf_counter() - start_time) * 1000

            route_obj = request.scope.get("route")
            route_template = getattr(route_obj, "path", None) if route_obj else None
            if not route_template:
                route_template = "unmatched"

            observe_http_request(
                method=method,
                route=route_template,
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

            if response.status_code >= 500:
                level = logging.ERROR
            elif response.status_code >= 400:
                level = logging.WARNING
            else:
                level = logging.INFO

            log_json(
                logger,
                level,
                "request",
                method=method,
                path=path,
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
                client_ip=client_ip,
                caller_id=getattr(request.state, "caller_id", None),
            )

            return response
