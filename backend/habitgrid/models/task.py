import datetime as dt
from typing import TYPE_CHECKING, Optional
from sqlmodel import SQLModel, Field, Relationship

if TYPE_CHECKING:
    from habitgrid.models.project import Project


class Task(SQLModel, table=True):
    """
    Task model - a project marked as done on a calendar day.

    Several tasks may exist for the same project and day; nothing
    enforces uniqueness on (project_id, date).
    """

    __tablename__ = "tasks"

    id: int | None = Field(default=None, primary_key=True)
    project_id: int | None = Field(
        default=None,
        foreign_key="projects.id",
        ondelete="CASCADE",
        index=True,
    )
    date: dt.date = Field(index=True)
    created_at: dt.datetime = Field(default_factory=dt.datetime.utcnow)

    # Relationships
    project: Optional["Project"] = Relationship(back_populates="tasks")
