from habitgrid.schemas.project import ProjectCreate, ProjectUpdate, ProjectRead
from habitgrid.schemas.task import (
    TaskCreate,
    TaskRead,
    TaskCreated,
    Celebration,
    BulkDeleteResult,
)
from habitgrid.schemas.calendar import CalendarCell, ProjectYear

__all__ = [
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectRead",
    "TaskCreate",
    "TaskRead",
    "TaskCreated",
    "Celebration",
    "BulkDeleteResult",
    "CalendarCell",
    "ProjectYear",
]
