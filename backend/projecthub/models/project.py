"""Project model."""
from sqlalchemy import Column, DateTime, Index, String, Text
from sqlalchemy.orm import relationship

from projecthub.models.base import BaseModel


class Project(BaseModel):
    """Top-level container for issues and API keys.

    A project belongs to exactly one owner, identified by the opaque user id
    the identity provider put in the bearer token. Only the owner can see or
    change it.
    """

    __tablename__ = "projects"

    name = Column(
        String(100),
        nullable=False,
    )
    description = Column(
        Text,
        nullable=True,
    )
    start_date = Column(
        DateTime(timezone=True),
        nullable=True,
    )
    end_date = Column(
        DateTime(timezone=True),
        nullable=True,
    )
    github_link = Column(
        "githublink",
        Text,
        nullable=False,
    )
    leader = Column(
        Text,
        nullable=False,
    )
    user_id = Column(
        String(255),
        nullable=False,
    )

    # Children are removed by the database (ON DELETE CASCADE).
    api_keys = relationship(
        "ApiKey",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ApiKey.created_at",
    )
    issues = relationship(
        "Issue",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (Index("idx_projects_user_id", "user_id"),)

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name={self.name})>"
