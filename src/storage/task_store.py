"""
Task storage for TaskFlow.

TaskStore is the CRUD contract the rest of the application depends on.
Two implementations ship: an in-memory store (default, used by tests and
single-process deployments) and a PostgreSQL store built on asyncpg.
"""

import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional, List

import asyncpg

from storage import db
from taskflow.errors import StoreFault
from taskflow.models import Task, TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


class TaskStore(ABC):
    """
    CRUD contract for task records.

    Implementations assign ``id`` and ``created_at`` on create, merge
    updates field by field, and keep each operation atomic for a single id.
    """

    name = "base"

    @abstractmethod
    async def create(self, payload: TaskCreate) -> Task:
        raise NotImplementedError

    @abstractmethod
    async def get_by_id(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

    @abstractmethod
    async def get_all(self) -> List[Task]:
        """All tasks in creation order."""
        raise NotImplementedError

    @abstractmethod
    async def update(self, task_id: int, changes: TaskUpdate) -> Optional[Task]:
        """Apply the supplied fields; ``None`` if the id does not exist."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, task_id: int) -> bool:
        """True if a record was removed."""
        raise NotImplementedError


class InMemoryTaskStore(TaskStore):
    """Dict-backed store. Ids start at 1 and are never reused."""

    name = "memory"

    def __init__(self):
        self._tasks: dict[int, Task] = {}
        self._next_id = 1
        # Held only around synchronous dict work, never across an await.
        self._lock = threading.Lock()

    async def create(self, payload: TaskCreate) -> Task:
        with self._lock:
            task = Task(
                id=self._next_id,
                created_at=datetime.now(timezone.utc),
                **payload.model_dump(),
            )
            self._tasks[task.id] = task
            self._next_id += 1
        return task

    async def get_by_id(self, task_id: int) -> Optional[Task]:
        with self._lock:
            return self._tasks.get(task_id)

    async def get_all(self) -> List[Task]:
        with self._lock:
            return list(self._tasks.values())

    async def update(self, task_id: int, changes: TaskUpdate) -> Optional[Task]:
        with self._lock:
            current = self._tasks.get(task_id)
            if current is None:
                return None
            updated = current.model_copy(update=changes.changes())
            self._tasks[task_id] = updated
            return updated

    async def delete(self, task_id: int) -> bool:
        with self._lock:
            return self._tasks.pop(task_id, None) is not None


# Attribute name -> column name. Also the whitelist for dynamic UPDATEs.
_COLUMNS = {
    "name": "name",
    "assignee": "assignee",
    "due_date": "due_date",
    "priority": "priority",
    "status": "status",
}

_SELECT = "SELECT id, name, assignee, due_date, priority, status, created_at FROM tasks"


def _task_from_record(record) -> Task:
    return Task(
        id=record["id"],
        name=record["name"],
        assignee=record["assignee"],
        due_date=record["due_date"],
        priority=record["priority"],
        status=record["status"],
        created_at=record["created_at"],
    )


class PostgresTaskStore(TaskStore):
    """
    PostgreSQL-backed store using the shared asyncpg pool in ``storage.db``.

    Every asyncpg or connection error is logged and re-raised as StoreFault.
    """

    name = "postgres"

    async def _run(self, operation: str, fn, *args):
        try:
            return await fn(*args)
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, RuntimeError) as e:
            logger.exception(f"Task store {operation} failed: {e}")
            raise StoreFault(operation, cause=e) from e

    async def create(self, payload: TaskCreate) -> Task:
        query = """
            INSERT INTO tasks (name, assignee, due_date, priority, status)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING id, name, assignee, due_date, priority, status, created_at
        """
        record = await self._run(
            "create",
            db.fetchrow,
            query,
            payload.name,
            payload.assignee,
            payload.due_date,
            payload.priority,
            payload.status,
        )
        return _task_from_record(record)

    async def get_by_id(self, task_id: int) -> Optional[Task]:
        record = await self._run("get", db.fetchrow, f"{_SELECT} WHERE id = $1", task_id)
        return _task_from_record(record) if record else None

    async def get_all(self) -> List[Task]:
        records = await self._run("list", db.fetch, f"{_SELECT} ORDER BY id")
        return [_task_from_record(r) for r in records]

    async def update(self, task_id: int, changes: TaskUpdate) -> Optional[Task]:
        fields = changes.changes()
        if not fields:
            return await self.get_by_id(task_id)

        assignments = []
        values = []
        for i, (attr, value) in enumerate(fields.items(), start=1):
            assignments.append(f"{_COLUMNS[attr]} = ${i}")
            values.append(value)
        values.append(task_id)

        query = f"""
            UPDATE tasks SET {", ".join(assignments)}
            WHERE id = ${len(values)}
            RETURNING id, name, assignee, due_date, priority, status, created_at
        """
        record = await self._run("update", db.fetchrow, query, *values)
        return _task_from_record(record) if record else None

    async def delete(self, task_id: int) -> bool:
        status = await self._run("delete", db.execute, "DELETE FROM tasks WHERE id = $1", task_id)
        # asyncpg returns the command tag, e.g. "DELETE 1"
        return status.split()[-1] != "0"
