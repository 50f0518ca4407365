from __future__ import annotations
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskflow.models import DEFAULT_PRIORITY, Priority, validate_model

UNASSIGNED = "Unassigned"
NO_DUE_DATE = "No due date"


class ExtractionResult(BaseModel):
    """Structured fields extracted from one free-text task description."""

    model_config = ConfigDict(populate_by_name=True)

    task_name: str = Field(..., alias="taskName")
    assignee: str = UNASSIGNED
    due_date: str = Field(default=NO_DUE_DATE, alias="dueDate")
    priority: Priority = DEFAULT_PRIORITY

    @field_validator("task_name")
    @classmethod
    def task_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("taskName must not be blank")
        return v

    @field_validator("assignee")
    @classmethod
    def blank_assignee_is_unassigned(cls, v: str) -> str:
        return v if v.strip() else UNASSIGNED

    @field_validator("due_date")
    @classmethod
    def blank_due_date_is_none(cls, v: str) -> str:
        return v if v.strip() else NO_DUE_DATE

    def to_create_payload(self) -> dict[str, Any]:
        # intake never creates tasks in any other status
        return {
            "name": self.task_name,
            "assignee": self.assignee,
            "dueDate": self.due_date,
            "priority": self.priority,
            "status": "pending",
        }


def validate_extraction_result(payload: Optional[dict]) -> ExtractionResult:
    return validate_model(ExtractionResult, payload)
