from habitgrid.models.project import Project
from habitgrid.models.task import Task

__all__ = ["Project", "Task"]
