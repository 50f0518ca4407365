from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from taskflow.errors import ValidationError
from taskflow.models import PRIORITIES, STATUSES, Task


class BoardStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int = 0
    completed: int = 0
    in_progress: int = Field(0, alias="inProgress")
    pending: int = 0
    due_today: int = Field(0, alias="dueToday")
    by_priority: dict[str, int] = Field(
        default_factory=lambda: {p: 0 for p in PRIORITIES}, alias="byPriority"
    )


def check_filters(priority: Optional[str], status: Optional[str]) -> None:
    errors = []
    if priority is not None and priority not in PRIORITIES:
        errors.append({"field": "priority", "message": f"must be one of {', '.join(PRIORITIES)}"})
    if status is not None and status not in STATUSES:
        errors.append({"field": "status", "message": f"must be one of {', '.join(STATUSES)}"})
    if errors:
        raise ValidationError(errors)


def filter_tasks(
    tasks: Iterable[Task],
    priority: Optional[str] = None,
    status: Optional[str] = None,
) -> list[Task]:
    """Keep tasks matching every given filter; ``None`` matches all."""
    check_filters(priority, status)
    return [
        t for t in tasks
        if (priority is None or t.priority == priority)
        and (status is None or t.status == status)
    ]


def is_due_today(task: Task) -> bool:
    # dueDate is display text, not a date
    return "today" in task.due_date.lower()


def summarize(tasks: Iterable[Task]) -> BoardStats:
    stats = BoardStats()
    for t in tasks:
        stats.total += 1
        stats.by_priority[t.priority] += 1
        if t.status == "completed":
            stats.completed += 1
        elif t.status == "in-progress":
            stats.in_progress += 1
        else:
            stats.pending += 1
        if is_due_today(t):
            stats.due_today += 1
    return stats
