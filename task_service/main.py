import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_service.config import Settings, load_settings
from task_service.errors import TaskNotFound, TaskValidationError
from task_service.models import (
    ErrorResponse,
    HealthResponse,
    StatusListEnvelope,
    TaskCreate,
    TaskEnvelope,
    TaskListEnvelope,
    TaskResponse,
    TaskStatusUpdate,
    TaskUpdate,
)
from task_service.repository import TaskRepository, sample_tasks

logger = logging.getLogger(__name__)

router = APIRouter()


def get_repository(request: Request) -> TaskRepository:
    return request.app.state.repository


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(message="Task Manager API is running", timestamp=datetime.now(timezone.utc))


@router.get("/tasks", response_model=TaskListEnvelope)
async def list_tasks(
    status: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    repo: TaskRepository = Depends(get_repository),
):
    tasks = repo.list(filter_status=status, search_term=search)
    return TaskListEnvelope(data=[TaskResponse.from_task(t) for t in tasks], total=len(tasks))


@router.get("/tasks/{task_id}", response_model=TaskEnvelope, response_model_exclude_none=True)
async def get_task(task_id: str, repo: TaskRepository = Depends(get_repository)):
    return TaskEnvelope(data=TaskResponse.from_task(repo.get(task_id)))


@router.post("/tasks", status_code=201, response_model=TaskEnvelope)
async def create_task(task: Optional[TaskCreate] = None, repo: TaskRepository = Depends(get_repository)):
    task = task or TaskCreate()
    created = repo.create(task.title, task.description, task.status)
    return TaskEnvelope(data=TaskResponse.from_task(created), message="Task created successfully")


@router.put("/tasks/{task_id}", response_model=TaskEnvelope)
async def update_task(
    task_id: str,
    updates: Optional[TaskUpdate] = None,
    repo: TaskRepository = Depends(get_repository),
):
    updates = updates or TaskUpdate()
    updated = repo.update(task_id, updates.title, updates.description, updates.status)
    return TaskEnvelope(data=TaskResponse.from_task(updated), message="Task updated successfully")


@router.patch("/tasks/{task_id}/status", response_model=TaskEnvelope)
async def update_task_status(
    task_id: str,
    body: Optional[TaskStatusUpdate] = None,
    repo: TaskRepository = Depends(get_repository),
):
    body = body or TaskStatusUpdate()
    updated = repo.patch_status(task_id, body.status)
    return TaskEnvelope(data=TaskResponse.from_task(updated), message="Task status updated successfully")


@router.delete("/tasks/{task_id}", response_model=TaskEnvelope)
async def delete_task(task_id: str, repo: TaskRepository = Depends(get_repository)):
    deleted = repo.delete(task_id)
    return TaskEnvelope(data=TaskResponse.from_task(deleted), message="Task deleted successfully")


@router.get("/status", response_model=StatusListEnvelope)
async def list_statuses(repo: TaskRepository = Depends(get_repository)):
    return StatusListEnvelope(data=repo.list_statuses())


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskNotFound)
    async def task_not_found(request: Request, exc: TaskNotFound):
        logger.info("%s %s: task %s not found", request.method, request.url.path, exc.task_id)
        return _error(404, "Task not found")

    @app.exception_handler(TaskValidationError)
    async def task_invalid(request: Request, exc: TaskValidationError):
        logger.info("%s %s: %s", request.method, request.url.path, exc.reason)
        return _error(400, exc.reason)

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        logger.info("%s %s: malformed request %s", request.method, request.url.path, exc.errors())
        return _error(400, "Invalid request body")

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        # unmatched paths and unmatched methods both read as "no such route"
        if exc.status_code in (404, 405):
            return _error(404, "Route not found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def internal_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Internal server error")


def create_app(settings: Optional[Settings] = None, repository: Optional[TaskRepository] = None) -> FastAPI:
    settings = settings or load_settings()
    if repository is None:
        repository = TaskRepository()
        if settings.seed_sample_tasks:
            repository.seed(sample_tasks())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Task Manager API ready, %d tasks loaded", len(app.state.repository))
        for route in router.routes:
            methods = ",".join(sorted(route.methods))
            logger.info("  %-7s %s%s", methods, settings.api_prefix, route.path)
        yield

    app = FastAPI(title="Task Manager API", lifespan=lifespan)
    app.state.repository = repository
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router, prefix=settings.api_prefix)
    _register_error_handlers(app)
    return app


# The one app per process: served by run() and by `uvicorn task_service.main:app`.
app = create_app()


def run() -> None:
    import uvicorn

    from task_service.logging_setup import setup_logging

    settings = app.state.settings
    setup_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
