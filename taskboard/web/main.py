"""
Task persistence server with dashboard and calendar endpoints
"""

from typing import List, Optional
from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from taskboard.config.settings import settings
from taskboard.models.analytics import CalendarMonth, DashboardSnapshot, RangeRequest, TimeRange
from taskboard.models.response import MessageResponse
from taskboard.models.task import BulkArchiveUpdate, BulkStatusUpdate, Task, TaskCreate, TaskReplace
from taskboard.services import task_modifier
from taskboard.services.analytics_service import AnalyticsService
from taskboard.services.snapshot import RepositorySnapshotProvider
from taskboard.storage.task_repository import TaskRepository
from taskboard.utils.error_handler import (
    TaskboardError,
    TaskNotFoundError,
    ValidationError,
    handle_error,
)
from taskboard.utils.logger import logger


def create_app(repository: Optional[TaskRepository] = None) -> FastAPI:
    """
    Build the API application

    Args:
        repository: Task repository; when omitted one is opened on startup
            at DATABASE_PATH

    Returns:
        FastAPI application
    """
    app = FastAPI(title="Taskboard Task Server")

    def attach(repo: TaskRepository):
        app.state.repository = repo
        app.state.analytics = AnalyticsService(RepositorySnapshotProvider(repo))

    if repository is not None:
        attach(repository)

    @app.on_event("startup")
    async def startup():
        """Open the database on startup"""
        if getattr(app.state, "repository", None) is None:
            logger.info(f"[Startup] Opening task database at {settings.DATABASE_PATH}")
            attach(TaskRepository(settings.DATABASE_PATH))
        logger.info("Task server initialized")

    @app.on_event("shutdown")
    async def shutdown():
        """Close the database on shutdown"""
        app.state.repository.close()

    @app.exception_handler(TaskboardError)
    async def taskboard_error_handler(request: Request, error: TaskboardError):
        response = handle_error(error)
        return JSONResponse(status_code=error.http_status, content=response.model_dump())

    def _apply_bulk(task_ids: List[str], change) -> List[Task]:
        repo: TaskRepository = app.state.repository
        updated = []
        for task_id in task_ids:
            task = repo.get_task(task_id)
            if task is None:
                logger.warning(f"Bulk edit skipped unknown task {task_id}")
                continue
            updated.append(repo.update_task(change(task)))
        return updated

    @app.get("/api/tasks", response_model=List[Task])
    async def list_tasks():
        """Read-all snapshot"""
        return app.state.repository.list_tasks()

    @app.post("/api/tasks", response_model=Task, status_code=201)
    async def create_task(fields: TaskCreate):
        """Create task, assigning id, timestamps and default times"""
        repo: TaskRepository = app.state.repository
        task = task_modifier.new_task(fields)
        if repo.get_task(task.id) is not None:
            raise ValidationError(f"Task id already exists: {task.id}")
        return repo.insert_task(task)

    @app.put("/api/tasks/{task_id}", response_model=Task)
    async def update_task(task_id: str, task: TaskReplace):
        """Full-record replace; createdAt is kept and updatedAt refreshed"""
        repo: TaskRepository = app.state.repository
        stored = repo.get_task(task_id)
        if stored is None:
            raise TaskNotFoundError(task_id)

        replacement = task.model_copy(update={
            "id": task_id,
            "created_at": stored.created_at,
            "updated_at": max(task.updated_at, stored.updated_at),
        })
        return repo.update_task(task_modifier.touch(replacement))

    @app.delete("/api/tasks/{task_id}", response_model=MessageResponse)
    async def delete_task(task_id: str):
        """Delete task by id"""
        app.state.repository.delete_task(task_id)
        return MessageResponse(message="Deleted")

    @app.get("/api/dashboard", response_model=DashboardSnapshot)
    async def dashboard(
        range_: TimeRange = Query(TimeRange.ALL, alias="range"),
        start: Optional[str] = None,
        end: Optional[str] = None,
    ):
        """KPIs, status distribution, time series and chart geometry"""
        request = RangeRequest(range=range_, custom_start=start or None, custom_end=end or None)
        return app.state.analytics.get_dashboard(request)

    @app.get("/api/calendar/{year}/{month}", response_model=CalendarMonth)
    async def calendar_month(year: int, month: int, include_archived: bool = False):
        """Month grid with per-day occupancy"""
        if not 1 <= month <= 12:
            raise ValidationError(f"Month must be between 1 and 12, got {month}")
        return app.state.analytics.get_calendar_month(year, month, include_archived=include_archived)

    @app.get("/api/days/{day}/tasks", response_model=List[Task])
    async def day_agenda(day: str, include_archived: bool = False):
        """Tasks of one day ordered by start time"""
        return app.state.analytics.get_day_agenda(day, include_archived)

    @app.get("/api/admin/tasks", response_model=List[Task])
    async def admin_tasks():
        """All tasks, archived included, ordered by date and start time"""
        return app.state.analytics.get_admin_listing()

    @app.post("/api/admin/bulk-status", response_model=List[Task])
    async def bulk_status(update: BulkStatusUpdate):
        """Set one status on several tasks"""
        return _apply_bulk(update.task_ids, lambda t: task_modifier.set_status(t, update.status))

    @app.post("/api/admin/bulk-archive", response_model=List[Task])
    async def bulk_archive(update: BulkArchiveUpdate):
        """Archive or unarchive several tasks"""
        return _apply_bulk(update.task_ids, lambda t: task_modifier.set_archived(t, update.archived))

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.WEB_PORT)
