"""Issue model."""
from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import relationship

from projecthub.models.base import Base, TimestampMixin
from projecthub.models.enums import IssuePriority, IssueStatus


class Issue(TimestampMixin, Base):
    """A unit of work filed against a project.

    Issues use an integer sequence id rather than a UUID.
    """

    __tablename__ = "issues"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    title = Column(
        String(100),
        nullable=False,
    )
    description = Column(
        Text,
        nullable=True,
    )
    user_id = Column(
        String(255),
        nullable=False,
    )
    status = Column(
        SQLEnum(IssueStatus, name="issue_status", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=IssueStatus.OPEN,
    )
    priority = Column(
        SQLEnum(IssuePriority, name="issue_priority", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=IssuePriority.LOW,
    )

    project = relationship(
        "Project",
        back_populates="issues",
    )

    __table_args__ = (Index("idx_issues_project_id", "project_id"),)

    def __repr__(self) -> str:
        return f"<Issue(id={self.id}, title={self.title}, status={self.status})>"
