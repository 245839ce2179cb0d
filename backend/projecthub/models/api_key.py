"""API key model."""

from sqlalchemy import Column, ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import relationship

from projecthub.models.base import BaseModel


class ApiKey(BaseModel):
    """A named secret attached to a project.

    The value is stored verbatim; it is a credential for some other system,
    not for this API.
    """

    __tablename__ = "api_keys"

    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    name = Column(
        Text,
        nullable=False,
    )
    key = Column(
        Text,
        nullable=False,
    )

    project = relationship(
        "Project",
        back_populates="api_keys",
    )

    __table_args__ = (
        Index("idx_api_keys_project_name", "project_id", "name", unique=True),
    )

    def __repr__(self) -> str:
        # Never include the key value.
        return f"<ApiKey(id={self.id}, project_id={self.project_id}, name={self.name})>"
