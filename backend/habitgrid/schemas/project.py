from datetime import datetime
from pydantic import field_validator

from habitgrid.schemas.base import ApiModel


def _require_name(value: str) -> str:
    # Stored as given; only the blank check trims
    if not value.strip():
        raise ValueError("name must not be empty")
    return value


class ProjectCreate(ApiModel):
    """Schema for creating a new project."""
    name: str
    color: str | None = None  # Defaults to DEFAULT_PROJECT_COLOR

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _require_name(value)


class ProjectUpdate(ApiModel):
    """Schema for updating a project."""
    name: str | None = None
    color: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str | None) -> str | None:
        return None if value is None else _require_name(value)


class ProjectRead(ApiModel):
    """Schema for reading a project."""
    id: int
    name: str
    color: str
    created_at: datetime
