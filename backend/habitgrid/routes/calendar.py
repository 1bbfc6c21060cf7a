"""
Year calendar routes for the habitgrid API.
"""

from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from habitgrid.database import get_session
from habitgrid.models import Project, Task
from habitgrid.schemas import ProjectYear
from habitgrid.services.calendar import project_year
from habitgrid.exceptions import NotFoundError, ValidationError
from habitgrid.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/{year}", response_model=list[ProjectYear])
async def get_year(
    year: int,
    project_id: int | None = Query(None, alias="projectId"),
    session: AsyncSession = Depends(get_session),
) -> list[dict]:
    """Year grid of every project (or of one), with task counts per day."""
    if not 1 <= year <= 9999:
        raise ValidationError(f"Year {year} is out of range")

    if project_id is not None:
        project = await session.get(Project, project_id)
        if not project:
            raise NotFoundError("Project", project_id)
        projects = [project]
    else:
        result = await session.execute(
            select(Project).order_by(Project.created_at.desc(), Project.id.desc())
        )
        projects = list(result.scalars().all())

    query = select(Task).where(Task.date >= date(year, 1, 1), Task.date <= date(year, 12, 31))
    if project_id is not None:
        query = query.where(Task.project_id == project_id)
    result = await session.execute(query)
    tasks = list(result.scalars().all())

    logger.debug(f"Calendar {year}: {len(projects)} projects, {len(tasks)} tasks")

    return [project_year(project, tasks, year) for project in projects]
