"""Seed script for development data.

Creates:
- A demo project owned by SEED_OWNER_ID (default "dev-user"), with one API key
- One open issue in that project

Prints a development bearer token for the owner. Can be run multiple times
safely (skips the project if it exists).
"""
import asyncio
import os
import sys
from pathlib import Path

# Add backend/ to path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from sqlalchemy import select

from projecthub.core.database import get_db
from projecthub.core.security import create_access_token
from projecthub.models.api_key import ApiKey
from projecthub.models.enums import IssuePriority, IssueStatus
from projecthub.models.issue import Issue
from projecthub.models.project import Project


async def seed_data():
    """Seed development data."""
    print("Starting database seeding...")

    owner_id = os.environ.get("SEED_OWNER_ID", "dev-user")
    project_name = os.environ.get("SEED_PROJECT_NAME", "Demo")

    async for db in get_db():
        result = await db.execute(
            select(Project)
            .where(Project.user_id == owner_id)
            .where(Project.name == project_name)
        )
        project = result.scalar_one_or_none()

        if project:
            print(f"✓ Project '{project_name}' already exists (ID: {project.id})")
        else:
            project = Project(
                name=project_name,
                description="Seeded demo project",
                github_link="https://github.com/example/demo",
                leader="Alice",
                user_id=owner_id,
            )
            db.add(project)
            await db.flush()

            db.add(ApiKey(project_id=project.id, name="Staging", key="demo-staging-key"))
            db.add(
                Issue(
                    project_id=project.id,
                    title="Set up CI",
                    description="Run the test suite on every push",
                    user_id=owner_id,
                    status=IssueStatus.OPEN,
                    priority=IssuePriority.MEDIUM,
                )
            )
            await db.commit()
            print(f"✓ Created project '{project_name}' (ID: {project.id})")

        break

    token = create_access_token({"sub": owner_id})
    print("\nDevelopment bearer token for", owner_id)
    print(token)


if __name__ == "__main__":
    asyncio.run(seed_data())
