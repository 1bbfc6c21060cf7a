import datetime as dt
from typing import Any, Literal
from pydantic import field_validator

from habitgrid.config import get_settings
from habitgrid.schemas.base import ApiModel
from habitgrid.schemas.project import ProjectRead
from habitgrid.services.dates import parse_day, to_day


class TaskCreate(ApiModel):
    """Schema for creating a new task."""
    project_id: int
    date: dt.date

    @field_validator("date", mode="before")
    @classmethod
    def coerce_calendar_day(cls, value: Any) -> Any:
        """Accept plain dates as well as browser ISO timestamps."""
        tz = get_settings().timezone
        if isinstance(value, str):
            return parse_day(value, tz)
        if isinstance(value, (dt.date, dt.datetime)):
            return to_day(value, tz)
        return value


class TaskRead(ApiModel):
    """Schema for reading a task together with its project."""
    id: int
    project_id: int | None
    date: dt.date
    created_at: dt.datetime
    project: ProjectRead | None = None


class Celebration(ApiModel):
    """Feedback for a milestone reached by a new task."""
    type: Literal["daily", "streak", "monthly", "yearly"]
    message: str


class TaskCreated(TaskRead):
    """Schema returned when a task is created."""
    celebration: Celebration | None = None


class BulkDeleteResult(ApiModel):
    deleted: int
