from api import state
from api.backend import IntakeOrchestrator
from storage.task_store import InMemoryTaskStore, TaskStore


def get_task_store() -> TaskStore:
    # Startup installs the configured store; without it (e.g. a TestClient
    # used outside a ``with`` block) fall back to memory.
    if state.task_store is None:
        state.task_store = InMemoryTaskStore()
    return state.task_store


def get_intake() -> IntakeOrchestrator:
    if state.intake is None:
        state.intake = IntakeOrchestrator(store=get_task_store())
    return state.intake
