"""
Project routes for the habitgrid API.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from habitgrid.config import get_settings
from habitgrid.database import get_session
from habitgrid.models import Project, Task
from habitgrid.schemas import ProjectCreate, ProjectUpdate, ProjectRead
from habitgrid.exceptions import NotFoundError, StorageError
from habitgrid.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=list[ProjectRead])
async def list_projects(
    session: AsyncSession = Depends(get_session),
) -> list[Project]:
    """List all projects, newest first."""
    result = await session.execute(
        select(Project).order_by(Project.created_at.desc(), Project.id.desc())
    )
    projects = list(result.scalars().all())

    logger.debug(f"Listed {len(projects)} projects")

    return projects


@router.post("", response_model=ProjectRead)
async def create_project(
    project_in: ProjectCreate,
    session: AsyncSession = Depends(get_session),
) -> Project:
    """Create a new project."""
    project = Project(
        name=project_in.name,
        color=project_in.color or get_settings().default_project_color,
    )
    try:
        session.add(project)
        await session.flush()
        await session.refresh(project)
    except SQLAlchemyError as exc:
        raise StorageError("Failed to create project", exc) from exc

    logger.info(f"Created project: id={project.id} name='{project.name}' color={project.color}")

    return project


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project_id: int,
    session: AsyncSession = Depends(get_session),
) -> Project:
    """Get a project by ID."""
    project = await session.get(Project, project_id)
    if not project:
        raise NotFoundError("Project", project_id)
    return project


@router.patch("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: int,
    project_in: ProjectUpdate,
    session: AsyncSession = Depends(get_session),
) -> Project:
    """Update a project's name and/or color."""
    project = await session.get(Project, project_id)
    if not project:
        raise NotFoundError("Project", project_id)

    update_data = project_in.model_dump(exclude_unset=True, exclude_none=True)

    logger.info(f"Updating project {project_id}: {update_data}")

    for field, value in update_data.items():
        setattr(project, field, value)

    await session.flush()
    await session.refresh(project)
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: int,
    session: AsyncSession = Depends(get_session),
) -> None:
    """Delete a project and all its tasks."""
    project = await session.get(Project, project_id)
    if not project:
        raise NotFoundError("Project", project_id)

    result = await session.execute(delete(Task).where(Task.project_id == project_id))

    logger.info(
        f"Deleting project {project_id}: '{project.name}' "
        f"(removed {result.rowcount} tasks)"
    )

    await session.delete(project)
    await session.flush()
