"""Integration tests for per-caller isolation of projects and API keys."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import OTHER_USER_ID, OWNER_ID, create_api_key, create_project


@pytest.mark.asyncio
async def test_callers_never_see_each_others_projects(
    client: AsyncClient,
    db: AsyncSession,
    owner_headers: dict[str, str],
    other_headers: dict[str, str],
):
    mine = await create_project(db, user_id=OWNER_ID, name="Mine")
    theirs = await create_project(db, user_id=OTHER_USER_ID, name="Theirs")
    mine_id, theirs_id = str(mine.id), str(theirs.id)

    my_listing = await client.get("/api/projects", headers=owner_headers)
    their_listing = await client.get("/api/projects", headers=other_headers)

    assert [p["id"] for p in my_listing.json()] == [mine_id]
    assert [p["id"] for p in their_listing.json()] == [theirs_id]


@pytest.mark.asyncio
async def test_absent_and_foreign_projects_are_indistinguishable(
    client: AsyncClient,
    db: AsyncSession,
    owner_headers: dict[str, str],
):
    theirs = await create_project(db, user_id=OTHER_USER_ID, name="Theirs")
    theirs_id = str(theirs.id)

    foreign = await client.get(f"/api/projects/{theirs_id}", headers=owner_headers)
    absent = await client.get(
        "/api/projects/00000000-0000-0000-0000-000000000000", headers=owner_headers
    )

    assert foreign.status_code == absent.status_code == 404
    assert foreign.json() == absent.json()


@pytest.mark.asyncio
async def test_foreign_api_keys_cannot_be_touched(
    client: AsyncClient,
    db: AsyncSession,
    owner_headers: dict[str, str],
    other_headers: dict[str, str],
):
    project = await create_project(db, user_id=OWNER_ID, name="Guarded")
    api_key = await create_api_key(db, project.id, name="Prod", key="s3cret")
    api_key_id = str(api_key.id)

    for method in ("GET", "DELETE"):
        response = await client.request(method, f"/api/apikey/{api_key_id}", headers=other_headers)
        assert response.status_code == 404

    response = await client.put(
        f"/api/apikey/{api_key_id}",
        json={"name": "Prod", "key": "hijacked"},
        headers=other_headers,
    )
    assert response.status_code == 404

    intact = await client.get(f"/api/apikey/{api_key_id}", headers=owner_headers)
    assert intact.json()["key"] == "s3cret"


@pytest.mark.asyncio
async def test_me_returns_caller_identifier(
    client: AsyncClient,
    db: AsyncSession,
    owner_headers: dict[str, str],
):
    response = await client.get("/api/me", headers=owner_headers)

    assert response.status_code == 200
    assert response.json() == {"userId": OWNER_ID}
