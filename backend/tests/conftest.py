"""Pytest fixtures for testing."""

import os
from collections.abc import AsyncGenerator
from datetime import datetime
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

# Tests run against SQLite by default; point TEST_DATABASE_URL at PostgreSQL
# (postgresql+asyncpg://...) to exercise the production dialect.
TEST_DATABASE_URL = os.environ.get(
    "TEST_DATABASE_URL", "sqlite+aiosqlite:///./projecthub_test.db"
)

os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-at-least-32-chars")

from projecthub.core.database import enable_sqlite_foreign_keys, get_db
from projecthub.core.security import create_access_token
from projecthub.main import app
from projecthub.models.api_key import ApiKey
from projecthub.models.base import Base
from projecthub.models.enums import IssuePriority, IssueStatus
from projecthub.models.issue import Issue
from projecthub.models.project import Project

OWNER_ID = "user_owner"
OTHER_USER_ID = "user_other"

# Older than any timestamp the database can produce during a test run.
PAST = datetime(2020, 1, 1)

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    hide_parameters=True,
    poolclass=NullPool,
)
enable_sqlite_foreign_keys(test_engine.sync_engine)

TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


def auth_headers(user_id: str) -> dict[str, str]:
    """Authorization header carrying a token for ``user_id``."""
    token = create_access_token({"sub": user_id})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture(scope="function")
async def db() -> AsyncGenerator[AsyncSession, None]:
    """Create test database session.

    Creates all tables before each test and drops them after.
    Drops everything first to ensure clean slate even if previous test crashed.
    """
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database dependency override.

    Args:
        db: Test database session

    Yields:
        AsyncClient configured for testing
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def owner_headers() -> dict[str, str]:
    return auth_headers(OWNER_ID)


@pytest.fixture
def other_headers() -> dict[str, str]:
    return auth_headers(OTHER_USER_ID)


@pytest_asyncio.fixture
async def test_project(db: AsyncSession) -> Project:
    """Create a project owned by OWNER_ID.

    Args:
        db: Database session

    Returns:
        Test Project instance
    """
    return await create_project(db, user_id=OWNER_ID, name="Test Project")


async def create_project(
    db: AsyncSession,
    user_id: str,
    name: str,
    github_link: str = "https://github.com/example/repo",
    leader: str = "Alice",
    description: str | None = None,
    start_date: datetime | None = None,
) -> Project:
    """Project factory for creating test projects.

    Args:
        db: Database session
        user_id: Owner identifier
        name: Project name
        github_link: Repository URL
        leader: Leader name
        description: Optional description
        start_date: Optional start date

    Returns:
        Created Project instance
    """
    project = Project(
        user_id=user_id,
        name=name,
        github_link=github_link,
        leader=leader,
        description=description,
        start_date=start_date,
    )
    db.add(project)
    await db.commit()
    await db.refresh(project)
    return project


async def create_api_key(
    db: AsyncSession,
    project_id: UUID,
    name: str,
    key: str = "secret-value",
) -> ApiKey:
    """API key factory."""
    api_key = ApiKey(project_id=project_id, name=name, key=key)
    db.add(api_key)
    await db.commit()
    await db.refresh(api_key)
    return api_key


async def create_issue(
    db: AsyncSession,
    project_id: UUID,
    title: str,
    user_id: str = OWNER_ID,
    status: IssueStatus = IssueStatus.OPEN,
    priority: IssuePriority = IssuePriority.LOW,
    description: str | None = None,
) -> Issue:
    """Issue factory."""
    issue = Issue(
        project_id=project_id,
        title=title,
        description=description,
        user_id=user_id,
        status=status,
        priority=priority,
    )
    db.add(issue)
    await db.commit()
    await db.refresh(issue)
    return issue


@pytest_asyncio.fixture
async def test_api_key(db: AsyncSession, test_project: Project) -> ApiKey:
    """Create an API key named "Prod" in the test project."""
    return await create_api_key(db, test_project.id, name="Prod", key="secret123")


@pytest_asyncio.fixture
async def test_issue(db: AsyncSession, test_project: Project) -> Issue:
    """Create an open, low-priority issue in the test project."""
    return await create_issue(
        db,
        test_project.id,
        title="Fix login bug",
        description="Users are logged out after refresh",
    )


async def backdate_updated_at(db: AsyncSession, model, row_id) -> None:
    """Set ``updated_at`` of one row to PAST so a later bump is observable."""
    await db.execute(update(model).where(model.id == row_id).values(updated_at=PAST))
    await db.commit()
