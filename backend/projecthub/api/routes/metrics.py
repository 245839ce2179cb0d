"""Prometheus metrics endpoint."""

from __future__ import annotations

import hmac

from fastapi import APIRouter, Header, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from projecthub.core.config import get_settings
from projecthub.core.errors import NotFoundError

router = APIRouter()


def _presented_token(authorization: str | None, x_metrics_token: str | None) -> str | None:
    if authorization:
        scheme, _, value = authorization.partition(" ")
        if scheme.lower() == "bearer" and value.strip():
            return value.strip()
    return x_metrics_token


@router.get(
    "/metrics",
    include_in_schema=False,
    summary="Prometheus metrics",
)
async def metrics_endpoint(
    authorization: str | None = Header(default=None),
    x_metrics_token: str | None = Header(default=None, alias="X-Metrics-Token"),
) -> Response:
    """Expose Prometheus metrics.

    In production the endpoint only exists for callers presenting
    ``METRICS_TOKEN``; everyone else gets 404.
    """
    settings = get_settings()
    if settings.environment == "production":
        expected = settings.metrics_token
        token = _presented_token(authorization, x_metrics_token)
        if not expected or not token or not hmac.compare_digest(token, expected):
            raise NotFoundError("Not found")

    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
