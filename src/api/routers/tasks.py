import logging
import time
from contextlib import contextmanager
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends

from api.backend import IntakeOrchestrator
from api.dependencies import get_intake, get_task_store
from api.metrics import (
    REQUESTS_TOTAL,
    REQUEST_LATENCY_SECONDS,
    INTAKE_TOTAL,
    EXTRACTION_FAILURES_TOTAL,
    TASKS_CREATED_TOTAL,
)
from storage.task_store import TaskStore
from taskflow.board import BoardStats, filter_tasks, summarize
from taskflow.errors import ExtractionError, IntakeError, NotFoundError
from taskflow.models import Task, validate_create, validate_update

router = APIRouter(prefix="/api/tasks")
logger = logging.getLogger(__name__)


@contextmanager
def _track(endpoint: str):
    start = time.time()
    status = "error"
    try:
        yield
        status = "ok"
    finally:
        REQUESTS_TOTAL.labels(endpoint=endpoint, status=status).inc()
        REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(time.time() - start)


@router.get("", response_model=List[Task])
async def list_tasks(
    priority: Optional[str] = None,
    status: Optional[str] = None,
    store: TaskStore = Depends(get_task_store),
) -> List[Task]:
    """All tasks in creation order, optionally filtered by priority and/or status."""
    with _track("/api/tasks"):
        return filter_tasks(await store.get_all(), priority=priority, status=status)


@router.get("/stats", response_model=BoardStats)
async def task_stats(store: TaskStore = Depends(get_task_store)) -> BoardStats:
    with _track("/api/tasks/stats"):
        return summarize(await store.get_all())


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: int, store: TaskStore = Depends(get_task_store)) -> Task:
    with _track("/api/tasks/{id}"):
        task = await store.get_by_id(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task


@router.post("/parse", response_model=Task)
async def parse_task(
    payload: Any = Body(None),
    intake: IntakeOrchestrator = Depends(get_intake),
) -> Task:
    """Create a task from a free-text description such as
    ``{"input": "Call client Rajeev tomorrow 5pm"}``."""
    with _track("/api/tasks/parse"):
        try:
            task = await intake.intake(payload)
        except IntakeError as e:
            INTAKE_TOTAL.labels(outcome=e.kind.value).inc()
            if isinstance(e.cause, ExtractionError):
                EXTRACTION_FAILURES_TOTAL.labels(kind=e.cause.kind.value).inc()
            raise
        INTAKE_TOTAL.labels(outcome="created").inc()
        TASKS_CREATED_TOTAL.labels(source="intake").inc()
        return task


@router.post("", response_model=Task)
async def create_task(
    payload: Any = Body(None),
    store: TaskStore = Depends(get_task_store),
) -> Task:
    with _track("/api/tasks"):
        task = await store.create(validate_create(payload))
        TASKS_CREATED_TOTAL.labels(source="manual").inc()
        logger.info(f"Created task {task.id}")
        return task


@router.patch("/{task_id}", response_model=Task)
async def update_task(
    task_id: int,
    payload: Any = Body(None),
    store: TaskStore = Depends(get_task_store),
) -> Task:
    with _track("/api/tasks/{id}"):
        changes = validate_update(payload if payload is not None else {})
        task = await store.update(task_id, changes)
        if task is None:
            raise NotFoundError(task_id)
        logger.info(f"Updated task {task_id}: {sorted(changes.changes())}")
        return task


@router.delete("/{task_id}")
async def delete_task(task_id: int, store: TaskStore = Depends(get_task_store)) -> dict:
    with _track("/api/tasks/{id}"):
        if not await store.delete(task_id):
            raise NotFoundError(task_id)
        logger.info(f"Deleted task {task_id}")
        return {"message": "Task deleted successfully"}
