"""Error taxonomy for the task intake pipeline."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class TaskflowError(Exception):
    """Base exception for TaskFlow."""


class ValidationError(TaskflowError):
    """Client-supplied data does not match a schema.

    ``errors`` is a list of ``{"field": ..., "message": ...}`` dicts, where
    ``field`` is the JSON name of the offending field.
    """

    def __init__(self, errors: list[dict[str, str]]):
        self.errors = errors
        fields = ", ".join(e["field"] for e in errors) or "payload"
        super().__init__(f"Invalid fields: {fields}")

    @property
    def fields(self) -> list[str]:
        return [e["field"] for e in self.errors]


class ExtractionErrorKind(str, Enum):
    MALFORMED_RESPONSE = "MalformedResponse"
    INVALID_SCHEMA = "InvalidSchema"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"


class ExtractionError(TaskflowError):
    """The extraction service could not produce a usable result."""

    def __init__(
        self,
        kind: ExtractionErrorKind,
        detail: str = "",
        cause: Optional[BaseException] = None,
        errors: Optional[list[dict[str, str]]] = None,
    ):
        self.kind = kind
        self.cause = cause
        self.errors = errors or []
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)


class IntakeErrorKind(str, Enum):
    BAD_REQUEST = "BadRequest"
    EXTRACTION_FAILED = "ExtractionFailed"
    INTERNAL_INCONSISTENCY = "InternalInconsistency"


REPHRASE_MESSAGE = "Failed to parse task description. Please try rephrasing your input."


class IntakeError(TaskflowError):
    """Pipeline-level failure of natural-language intake.

    ``message`` is safe to show to users; ``cause`` holds the underlying
    error and is only meant for logs.
    """

    def __init__(
        self,
        kind: IntakeErrorKind,
        message: str,
        cause: Optional[BaseException] = None,
        errors: Optional[list[dict[str, str]]] = None,
    ):
        self.kind = kind
        self.message = message
        self.cause = cause
        self.errors = errors or []
        super().__init__(message)


class NotFoundError(TaskflowError):
    """No task exists with the requested id."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class StoreFault(TaskflowError):
    """Persistence layer failure. The cause is opaque to callers."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Task store {operation} failed")
