import logging
from collections import Counter

from fastapi import APIRouter, Depends, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api.backend import IntakeOrchestrator
from api.dependencies import get_intake, get_task_store
from api.metrics import TASKS_BY_STATUS
from storage import db
from storage.task_store import TaskStore
from taskflow.errors import StoreFault
from taskflow.models import STATUSES

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(
    store: TaskStore = Depends(get_task_store),
    intake: IntakeOrchestrator = Depends(get_intake),
) -> dict:
    """Health check endpoint for container orchestration."""
    health = {
        "status": "healthy",
        "store": store.name,
        "llm_provider": intake.extractor.llm.provider.name,
    }

    if store.name == "postgres":
        db_health = await db.health_check()
        health["database"] = db_health
        if db_health["status"] != "healthy":
            health["status"] = "degraded"

    return health


@router.get("/metrics")
async def metrics(store: TaskStore = Depends(get_task_store)) -> Response:
    """
    Prometheus scrape endpoint.
    """
    try:
        counts = Counter(t.status for t in await store.get_all())
        for status in STATUSES:
            TASKS_BY_STATUS.labels(status=status).set(counts.get(status, 0))
    except StoreFault as e:
        # keep serving the other metrics
        logger.warning(f"Could not refresh task gauges: {e}")

    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
