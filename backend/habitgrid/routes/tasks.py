"""
Task routes for the habitgrid API.
"""

from datetime import date, timedelta
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from habitgrid.config import get_settings
from habitgrid.database import get_session
from habitgrid.models import Task, Project
from habitgrid.schemas import TaskCreate, TaskRead, TaskCreated, BulkDeleteResult
from habitgrid.services.aggregation import (
    affects_multiple,
    count_by_project_and_day,
    detect_celebration,
    tasks_on_day,
)
from habitgrid.services.dates import parse_day
from habitgrid.exceptions import NotFoundError, ValidationError
from habitgrid.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _required_day(value: str | None, param: str) -> date:
    """Parse a required date query parameter."""
    try:
        return parse_day(value or "", get_settings().timezone)
    except ValueError as exc:
        raise ValidationError(
            f"Query parameter '{param}' is missing or not a valid date",
            details=[{"loc": ["query", param], "msg": str(exc), "type": "date_error"}],
        ) from None


async def _tasks_between(session: AsyncSession, start: date, end: date) -> list[Task]:
    query = (
        select(Task)
        .options(selectinload(Task.project))
        .where(Task.date >= start, Task.date <= end)
        .order_by(Task.date.desc(), Task.id.desc())
    )
    result = await session.execute(query)
    return list(result.scalars().all())


@router.get("", response_model=list[TaskRead])
async def list_tasks(
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    session: AsyncSession = Depends(get_session),
) -> list[Task]:
    """
    List tasks whose day lies in [startDate, endDate], both inclusive.

    Each task carries its project. Newest days come first.
    """
    start = _required_day(start_date, "startDate")
    end = _required_day(end_date, "endDate")

    tasks = await _tasks_between(session, start, end)

    logger.debug(f"Listed {len(tasks)} tasks for {start}..{end}")

    return tasks


@router.get("/summary", response_model=dict[str, dict[str, int]])
async def summarize_tasks(
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    session: AsyncSession = Depends(get_session),
) -> dict[str, dict[str, int]]:
    """Task counts per project and day for the range."""
    start = _required_day(start_date, "startDate")
    end = _required_day(end_date, "endDate")

    tasks = await _tasks_between(session, start, end)
    counts = count_by_project_and_day(tasks, start, end)
    return {str(project_id): days for project_id, days in counts.items()}


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(
    task_id: int,
    session: AsyncSession = Depends(get_session),
) -> Task:
    """Get a task by ID."""
    task = await session.get(Task, task_id, options=[selectinload(Task.project)])
    if not task:
        raise NotFoundError("Task", task_id)
    return task


@router.post("", response_model=TaskCreated)
async def create_task(
    task_in: TaskCreate,
    session: AsyncSession = Depends(get_session),
) -> TaskCreated:
    """
    Mark a project as done on a day.

    The response says whether the new task is worth celebrating
    (first of its day, month or year, or part of a streak).
    """
    settings = get_settings()

    project = await session.get(Project, task_in.project_id)
    if not project:
        raise ValidationError(
            f"Project with ID {task_in.project_id} does not exist",
            details=[{"loc": ["body", "projectId"], "msg": "unknown project", "type": "value_error"}],
        )

    # Enough history for the year check and for a streak crossing New Year
    lookback = min(timedelta(days=settings.streak_days), task_in.date - date.min)
    history_start = min(date(task_in.date.year, 1, 1), task_in.date - lookback)
    result = await session.execute(
        select(Task).where(
            Task.date >= history_start,
            Task.date <= date(task_in.date.year, 12, 31),
        )
    )
    celebration = detect_celebration(
        result.scalars().all(), task_in.date, streak_days=settings.streak_days
    )

    task = Task(project_id=project.id, date=task_in.date)
    session.add(task)
    await session.flush()
    await session.refresh(task, attribute_names=["project"])

    logger.info(
        f"Created task: id={task.id} project={task.project_id} date={task.date}"
        + (f" celebration={celebration.type}" if celebration else "")
    )

    created = TaskCreated.model_validate(task)
    created.celebration = celebration
    return created


@router.delete("", response_model=BulkDeleteResult)
async def delete_tasks_on_day(
    project_id: int | None = Query(None, alias="projectId"),
    day: str | None = Query(None, alias="date"),
    session: AsyncSession = Depends(get_session),
) -> BulkDeleteResult:
    """Delete every task of a project on one day."""
    if project_id is None:
        raise ValidationError(
            "Query parameter 'projectId' is required",
            details=[{"loc": ["query", "projectId"], "msg": "field required", "type": "missing"}],
        )
    target = _required_day(day, "date")

    result = await session.execute(
        select(Task).where(Task.project_id == project_id, Task.date == target)
    )
    matching = tasks_on_day(result.scalars().all(), project_id, target)
    if not matching:
        raise NotFoundError("Tasks for project", f"{project_id} on {target}")

    if affects_multiple(matching, project_id, target):
        logger.info(f"Deleting {len(matching)} tasks of project {project_id} on {target}")
    else:
        logger.info(f"Deleting task {matching[0].id} of project {project_id} on {target}")

    await session.execute(delete(Task).where(Task.id.in_([task.id for task in matching])))
    return BulkDeleteResult(deleted=len(matching))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int,
    session: AsyncSession = Depends(get_session),
) -> None:
    """Delete a single task."""
    task = await session.get(Task, task_id)
    if not task:
        raise NotFoundError("Task", task_id)

    logger.info(f"Deleting task {task_id}: project={task.project_id} date={task.date}")

    await session.delete(task)
    await session.flush()
