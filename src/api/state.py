import os
from typing import Optional

from api.backend import IntakeOrchestrator
from storage.task_store import TaskStore

TASK_STORE = os.getenv("TASK_STORE", "memory").strip().lower()

# Global instances initialized at startup (or lazily on first request)
task_store: Optional[TaskStore] = None
intake: Optional[IntakeOrchestrator] = None
