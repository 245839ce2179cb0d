"""Unit tests for mapping errors to HTTP responses."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from projecthub.api.errors import register_exception_handlers
from projecthub.core.errors import ConflictError, NotFoundError, ServiceError


def _app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/conflict")
    async def conflict():
        raise ConflictError("Name taken", details={"name": "Prod"})

    @app.get("/missing")
    async def missing():
        raise NotFoundError()

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database password=hunter2 leaked")

    @app.get("/items/{item_id}")
    async def item(item_id: int):
        return {"id": item_id}

    return app


@pytest.mark.asyncio
async def test_service_error_uses_its_status_and_body():
    transport = ASGITransport(app=_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/conflict")

    assert response.status_code == 409
    assert response.json() == {
        "error": "conflict",
        "message": "Name taken",
        "details": {"name": "Prod"},
    }


@pytest.mark.asyncio
async def test_service_error_falls_back_to_default_message():
    transport = ASGITransport(app=_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/missing")

    assert response.status_code == 404
    assert response.json() == {"error": "not_found", "message": "Not found"}


@pytest.mark.asyncio
async def test_unexpected_error_is_generic_500():
    transport = ASGITransport(app=_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {"error": "internal_error", "message": "Internal server error"}
    assert "hunter2" not in response.text


@pytest.mark.asyncio
async def test_request_validation_is_400_with_field_details():
    transport = ASGITransport(app=_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/items/abc")

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "validation_error"
    assert "item_id" in data["details"]


def test_service_error_defaults():
    error = ServiceError()

    assert error.status_code == 500
    assert error.message == "Internal server error"
    assert error.details is None
