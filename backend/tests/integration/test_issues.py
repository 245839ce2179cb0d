"""Integration tests for issue behavior and the ownership policy switch."""

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from projecthub.core.errors import NotFoundError
from projecthub.models.enums import IssuePriority, IssueStatus
from projecthub.models.issue import Issue
from projecthub.schemas.issue import CreateIssueRequest
from projecthub.services.issue_service import IssueService
from tests.conftest import (
    OTHER_USER_ID,
    OWNER_ID,
    backdate_updated_at,
    create_issue,
    create_project,
)


@pytest.mark.asyncio
async def test_priority_update_changes_only_priority(
    client: AsyncClient,
    db: AsyncSession,
    owner_headers: dict[str, str],
):
    project = await create_project(db, user_id=OWNER_ID, name="Tracker")
    issue = await create_issue(
        db,
        project.id,
        title="Keep me",
        description="unchanged",
        status=IssueStatus.IN_PROGRESS,
        priority=IssuePriority.LOW,
    )
    issue_id = issue.id

    response = await client.put(
        "/api/issues",
        json={"issueId": issue_id, "priority": "medium"},
        headers=owner_headers,
    )
    assert response.status_code == 200

    result = await db.execute(
        select(Issue).where(Issue.id == issue_id).execution_options(populate_existing=True)
    )
    stored = result.scalar_one()
    assert stored.priority == IssuePriority.MEDIUM
    assert stored.status == IssueStatus.IN_PROGRESS
    assert stored.title == "Keep me"
    assert stored.description == "unchanged"
    assert stored.user_id == OWNER_ID


@pytest.mark.asyncio
async def test_priority_update_bumps_updated_at_even_when_unchanged(
    client: AsyncClient,
    db: AsyncSession,
    owner_headers: dict[str, str],
):
    project = await create_project(db, user_id=OWNER_ID, name="Touched")
    issue = await create_issue(db, project.id, title="Same priority")
    issue_id = issue.id
    await backdate_updated_at(db, Issue, issue_id)

    response = await client.put(
        "/api/issues",
        json={"issueId": issue_id, "priority": "low"},
        headers=owner_headers,
    )

    assert response.status_code == 200
    assert response.json()["priority"] == "low"
    assert not response.json()["updatedAt"].startswith("2020")


@pytest.mark.asyncio
async def test_issues_listed_in_filing_order(
    client: AsyncClient,
    db: AsyncSession,
    owner_headers: dict[str, str],
):
    project = await create_project(db, user_id=OWNER_ID, name="Ordered")
    project_id = str(project.id)

    for title in ("one", "two", "three"):
        response = await client.post(
            "/api/issues",
            json={"projectId": project_id, "title": title},
            headers=owner_headers,
        )
        assert response.status_code == 201

    listing = await client.get(
        "/api/issues", params={"projectId": project_id}, headers=owner_headers
    )
    assert [i["title"] for i in listing.json()] == ["one", "two", "three"]


@pytest.mark.asyncio
async def test_issues_of_other_projects_are_not_listed(
    client: AsyncClient,
    db: AsyncSession,
    owner_headers: dict[str, str],
):
    first = await create_project(db, user_id=OWNER_ID, name="First")
    second = await create_project(db, user_id=OWNER_ID, name="Second")
    first_id = first.id
    await create_issue(db, first_id, title="mine")
    await create_issue(db, second.id, title="elsewhere")

    listing = await client.get(
        "/api/issues", params={"projectId": str(first_id)}, headers=owner_headers
    )
    assert [i["title"] for i in listing.json()] == ["mine"]


@pytest.mark.asyncio
async def test_open_policy_lets_any_caller_manage_issues(db: AsyncSession):
    project = await create_project(db, user_id=OWNER_ID, name="Open")
    project_id = project.id
    service = IssueService(db, enforce_ownership=False)

    issue = await service.create(
        CreateIssueRequest(project_id=project_id, title="From a stranger"),
        OTHER_USER_ID,
    )
    issue_id = issue.id
    assert issue.user_id == OTHER_USER_ID

    updated = await service.update_priority(issue_id, IssuePriority.HIGH, OTHER_USER_ID)
    assert updated.priority == IssuePriority.HIGH

    assert [i.id for i in await service.list(project_id, OTHER_USER_ID)] == [issue_id]
    assert await service.delete(issue_id, OTHER_USER_ID) == 1


@pytest.mark.asyncio
async def test_enforced_policy_restricts_issues_to_project_owner(db: AsyncSession):
    project = await create_project(db, user_id=OWNER_ID, name="Closed")
    project_id = project.id
    existing = await create_issue(db, project_id, title="Owner's issue")
    existing_id = existing.id
    service = IssueService(db, enforce_ownership=True)

    with pytest.raises(NotFoundError):
        await service.list(project_id, OTHER_USER_ID)

    with pytest.raises(NotFoundError):
        await service.create(
            CreateIssueRequest(project_id=project_id, title="Intruder"),
            OTHER_USER_ID,
        )

    with pytest.raises(NotFoundError):
        await service.update_priority(existing_id, IssuePriority.HIGH, OTHER_USER_ID)

    assert await service.delete(existing_id, OTHER_USER_ID) == 0

    owned = await service.list(project_id, OWNER_ID)
    assert [i.id for i in owned] == [existing_id]
    assert owned[0].priority == IssuePriority.LOW
