import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api import state
from api.backend import IntakeOrchestrator
from api.error_handlers import install_error_handlers
from api.routers import ops, tasks
from storage import db
from storage.task_store import InMemoryTaskStore, PostgresTaskStore

# Logging configuration
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if state.TASK_STORE == "postgres":
        await db.init_db_pool()
        await db.init_schema()
        state.task_store = PostgresTaskStore()
    else:
        state.task_store = InMemoryTaskStore()
    state.intake = IntakeOrchestrator(store=state.task_store)
    logger.info(
        f"TaskFlow started (store={state.task_store.name}, "
        f"llm_provider={state.intake.extractor.llm.provider.name})"
    )
    try:
        yield
    finally:
        if state.TASK_STORE == "postgres":
            await db.close_db_pool()
        state.task_store = None
        state.intake = None


app = FastAPI(title="TaskFlow AI", lifespan=lifespan)
install_error_handlers(app)
app.include_router(tasks.router)
app.include_router(ops.router)
