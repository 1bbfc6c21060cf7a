from datetime import datetime
from typing import TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship

if TYPE_CHECKING:
    from habitgrid.models.task import Task


class Project(SQLModel, table=True):
    """Project model - a named, colored category that tasks belong to."""

    __tablename__ = "projects"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    color: str  # CSS hex color, not validated
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    # Tasks are removed by an explicit bulk delete (and ON DELETE CASCADE),
    # so the collection is never loaded just to delete a project.
    tasks: list["Task"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"passive_deletes": True},
    )
