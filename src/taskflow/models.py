from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from taskflow.errors import ValidationError

Priority = Literal["P1", "P2", "P3", "P4"]
Status = Literal["pending", "in-progress", "completed"]

PRIORITIES: tuple[str, ...] = ("P1", "P2", "P3", "P4")
STATUSES: tuple[str, ...] = ("pending", "in-progress", "completed")

DEFAULT_PRIORITY: Priority = "P3"
DEFAULT_STATUS: Status = "pending"

M = TypeVar("M", bound=BaseModel)


def _require_text(v: Optional[str]) -> Optional[str]:
    if v is None:
        raise ValueError("must not be null")
    if not v.strip():
        raise ValueError("must not be blank")
    return v


class Task(BaseModel):
    """A persisted task as returned by the store and the API."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    assignee: str
    due_date: str = Field(..., alias="dueDate")
    priority: Priority = DEFAULT_PRIORITY
    status: Status = DEFAULT_STATUS
    created_at: datetime = Field(..., alias="createdAt")


class TaskCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str
    assignee: str
    due_date: str = Field(..., alias="dueDate")
    priority: Priority = DEFAULT_PRIORITY
    status: Status = DEFAULT_STATUS

    @field_validator("name", "assignee", "due_date")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        return _require_text(v)


class TaskUpdate(BaseModel):
    """Partial update. Only the fields that were supplied are applied."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: Optional[str] = None
    assignee: Optional[str] = None
    due_date: Optional[str] = Field(None, alias="dueDate")
    priority: Optional[Priority] = None
    status: Optional[Status] = None

    # Explicit nulls would blank out required columns.
    @field_validator("name", "assignee", "due_date")
    @classmethod
    def text_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _require_text(v)

    @field_validator("priority", "status", mode="before")
    @classmethod
    def enum_not_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("must not be null")
        return v

    def changes(self) -> dict[str, Any]:
        """Supplied fields keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class ParseRequest(BaseModel):
    input: str = Field(..., min_length=1)

    @field_validator("input")
    @classmethod
    def input_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Task input cannot be empty")
        return v


def field_errors(
    exc: PydanticValidationError, model: Optional[Type[BaseModel]] = None
) -> list[dict[str, str]]:
    """Flatten pydantic errors into ``{"field", "message"}`` pairs.

    Fields are reported under their JSON alias even when the payload used
    the attribute name.
    """
    aliases = {}
    if model is not None:
        aliases = {name: f.alias for name, f in model.model_fields.items() if f.alias}
    out = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if loc:
            loc[0] = aliases.get(loc[0], loc[0])
        out.append({
            "field": ".".join(loc) if loc else "payload",
            "message": err.get("msg", "invalid value"),
        })
    return out


def validate_model(model: Type[M], payload: Any) -> M:
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(field_errors(exc, model)) from exc


def validate_create(payload: Any) -> TaskCreate:
    return validate_model(TaskCreate, payload)


def validate_update(payload: Any) -> TaskUpdate:
    return validate_model(TaskUpdate, payload)


def validate_parse_request(payload: Any) -> ParseRequest:
    return validate_model(ParseRequest, payload)
