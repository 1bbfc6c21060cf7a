"""
CSV export/import routes for the habitgrid API.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from habitgrid.config import get_settings
from habitgrid.database import get_session
from habitgrid.models import Project, Task
from habitgrid.services.csv_codec import TaskRecord, encode_tasks, read_records
from habitgrid.exceptions import ValidationError
from habitgrid.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()

EXPORT_FILENAME = "tasks.csv"


@router.get("/export/csv")
async def export_csv(
    session: AsyncSession = Depends(get_session),
) -> Response:
    """Download every task as CSV, newest day first."""
    result = await session.execute(
        select(Task)
        .options(selectinload(Task.project))
        .order_by(Task.date.desc(), Task.id.desc())
    )
    tasks = list(result.scalars().all())

    logger.info(f"Exporting {len(tasks)} tasks as CSV")

    return Response(
        content=encode_tasks(tasks),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


async def find_or_create_project(
    session: AsyncSession,
    record: TaskRecord,
    default_color: str,
) -> Project:
    """Project with exactly the record's name, created if it does not exist yet."""
    result = await session.execute(
        select(Project).where(Project.name == record.project_name).order_by(Project.id).limit(1)
    )
    project = result.scalars().first()
    if project is None:
        project = Project(name=record.project_name, color=record.project_color or default_color)
        session.add(project)
        await session.flush()
        logger.info(f"Import created project: id={project.id} name='{project.name}'")
    return project


@router.post("/import/csv")
async def import_csv(
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> dict:
    """
    Import tasks from a raw CSV body.

    Rows are written one by one and each is committed before the next
    is parsed; a bad row stops the import but keeps the rows before it.
    """
    settings = get_settings()
    try:
        text = (await request.body()).decode("utf-8")
    except UnicodeDecodeError:
        raise ValidationError("CSV body must be UTF-8 text") from None
    if not text.strip():
        raise ValidationError("CSV body is empty")

    projects_by_name: dict[str, Project] = {}
    imported = 0
    for record in read_records(text, settings.timezone):
        project = projects_by_name.get(record.project_name)
        if project is None:
            project = await find_or_create_project(session, record, settings.default_project_color)
            projects_by_name[record.project_name] = project

        session.add(Task(project_id=project.id, date=record.day))
        await session.commit()
        imported += 1

    logger.info(f"Imported {imported} records from CSV")

    return {"message": f"Imported {imported} records successfully"}
