"""FastAPI web application for taskboard."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable, List, Optional

from fastapi import Depends, FastAPI, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskboard.config import settings
from taskboard.database.database import get_db, init_db
from taskboard.database.repository import TaskRepository
from taskboard.engine.ranking import normalize_sort
from taskboard.engine.scoring import utc_now
from taskboard.errors import TaskboardError
from taskboard.logging_setup import setup_logging
from taskboard.models.insights import Insights
from taskboard.models.task import AnnotatedTask, TaskCreate, TaskFilters, TaskUpdate
from taskboard.models.task_factory import normalize_priority, normalize_status
from taskboard.service.task_store import TaskStore

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "internal server error"
TRUTHY_FLAGS = {"true", "1", "yes"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)
    init_db()
    yield


# Initialize FastAPI app
app = FastAPI(
    title="taskboard API",
    description="Task board with derived risk, ranking score and insights",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


# Error translation: every error body is {"error": "<message>"}
@app.exception_handler(TaskboardError)
async def taskboard_error_handler(request: Request, exc: TaskboardError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg", message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": GENERIC_ERROR_MESSAGE},
    )


# Dependencies
def get_clock() -> Callable[[], datetime]:
    """Clock used for timestamps and derived fields."""
    return utc_now


def get_task_store(
    db: Session = Depends(get_db),
    now_fn: Callable[[], datetime] = Depends(get_clock),
) -> TaskStore:
    return TaskStore(TaskRepository(db), now_fn=now_fn, lock_timeout=settings.lock_timeout_sec)


def _parse_csv(raw: Optional[str], normalize) -> list:
    """Split a comma-joined enum list, normalizing and deduplicating entries."""
    if not raw or not raw.strip():
        return []
    values = []
    for entry in raw.split(","):
        if not entry.strip():
            continue
        value = normalize(entry)
        if value not in values:
            values.append(value)
    return values


def get_task_filters(
    status_param: Optional[str] = Query(None, alias="status"),
    priority: Optional[str] = Query(None),
    owner: Optional[str] = Query(None),
    tag: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    order: Optional[str] = Query(None),
) -> TaskFilters:
    """Build task filters from the query string.

    Raises:
        ValidationError: If a status or priority value is unknown
    """
    sort_by, direction = normalize_sort(sort, order)
    return TaskFilters(
        statuses=_parse_csv(status_param, normalize_status),
        priorities=_parse_csv(priority, normalize_priority),
        owner=(owner or "").strip(),
        tag=(tag or "").strip(),
        query=(q or "").strip(),
        sort_by=sort_by,
        order=direction,
    )


def _parse_force(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() in TRUTHY_FLAGS


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/api/tasks", response_model=List[AnnotatedTask], response_model_exclude_none=True)
def list_tasks(
    filters: TaskFilters = Depends(get_task_filters),
    store: TaskStore = Depends(get_task_store),
):
    """List tasks matching the filters, sorted by the requested key."""
    return store.list(filters)


@app.get("/api/tasks/{task_id}", response_model=AnnotatedTask, response_model_exclude_none=True)
def get_task(task_id: int, store: TaskStore = Depends(get_task_store)):
    """Get a single task by ID."""
    return store.get(task_id)


@app.post(
    "/api/tasks",
    response_model=AnnotatedTask,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_task(payload: TaskCreate, store: TaskStore = Depends(get_task_store)):
    """Create a task."""
    return store.create(payload)


@app.put("/api/tasks/{task_id}", response_model=AnnotatedTask, response_model_exclude_none=True)
def update_task(
    task_id: int,
    payload: TaskUpdate,
    force: Optional[str] = Query(None),
    store: TaskStore = Depends(get_task_store),
):
    """Update a task. Reopening a done task requires `?force=true`."""
    return store.update(task_id, payload, force=_parse_force(force))


@app.delete("/api/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, store: TaskStore = Depends(get_task_store)):
    """Permanently delete a task."""
    store.delete(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get("/api/insights", response_model=Insights)
def get_insights(
    filters: TaskFilters = Depends(get_task_filters),
    store: TaskStore = Depends(get_task_store),
):
    """Aggregate insights over the tasks matching the filters."""
    return store.insights(filters)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
