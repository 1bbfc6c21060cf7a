"""
habitgrid - personal habit tracker: projects, daily task marks and CSV transfer.
"""

from fastapi import FastAPI
from contextlib import asynccontextmanager

from habitgrid import __version__
from habitgrid.database import init_db
from habitgrid.routes import calendar, projects, tasks, transfer
from habitgrid.exceptions import ERROR_RESPONSES, register_exception_handlers
from habitgrid.logging_config import setup_logging, get_logger, log_requests

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logger.info("Starting habitgrid API...")
    await init_db()
    logger.info("Database initialized")
    yield
    logger.info("Shutting down habitgrid API...")


app = FastAPI(
    title="habitgrid",
    description="Personal habit tracker: projects, daily task marks and CSV transfer",
    version=__version__,
    lifespan=lifespan,
)

# Register custom exception handlers
register_exception_handlers(app)

# Log /api requests
app.middleware("http")(log_requests)

# Include routers
app.include_router(projects.router, prefix="/api/projects", tags=["Projects"], responses=ERROR_RESPONSES)
app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"], responses=ERROR_RESPONSES)
app.include_router(calendar.router, prefix="/api/calendar", tags=["Calendar"], responses=ERROR_RESPONSES)
app.include_router(transfer.router, prefix="/api", tags=["CSV"], responses=ERROR_RESPONSES)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
