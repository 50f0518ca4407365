import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskflow.errors import (
    ExtractionError,
    ExtractionErrorKind,
    IntakeError,
    IntakeErrorKind,
    NotFoundError,
    StoreFault,
    TaskflowError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STORE_FAULT_MESSAGES = {
    "list": "Failed to fetch tasks",
    "get": "Failed to fetch task",
    "create": "Failed to create task",
    "update": "Failed to update task",
    "delete": "Failed to delete task",
}


def _intake_status(exc: IntakeError) -> int:
    if exc.kind is IntakeErrorKind.BAD_REQUEST:
        return 400
    if exc.kind is IntakeErrorKind.EXTRACTION_FAILED:
        cause = exc.cause
        if isinstance(cause, ExtractionError) and cause.kind is ExtractionErrorKind.INVALID_SCHEMA:
            return 400
        return 500
    # InternalInconsistency, and any kind added later
    return 500


def error_response(exc: TaskflowError) -> JSONResponse:
    """Map a domain error to its HTTP response. Internal causes are never returned."""
    if isinstance(exc, ValidationError):
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid task data", "errors": exc.errors},
        )

    if isinstance(exc, IntakeError):
        status = _intake_status(exc)
        if exc.kind is IntakeErrorKind.EXTRACTION_FAILED:
            logger.warning(f"Task parsing failed: {exc.cause}")
        elif status >= 500:
            logger.error(f"Task parsing failed ({exc.kind.value}): {exc.cause}")
        content = {"message": exc.message}
        if exc.errors:
            content["errors"] = exc.errors
        return JSONResponse(status_code=status, content=content)

    if isinstance(exc, NotFoundError):
        return JSONResponse(status_code=404, content={"message": "Task not found"})

    if isinstance(exc, StoreFault):
        logger.error(f"Store fault during {exc.operation}: {exc.cause!r}", exc_info=exc)
        message = STORE_FAULT_MESSAGES.get(exc.operation, "Internal server error")
        return JSONResponse(status_code=500, content={"message": message})

    logger.error(f"Unclassified error: {exc!r}")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


async def _taskflow_error_handler(request: Request, exc: TaskflowError) -> JSONResponse:
    return error_response(exc)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # An id that is not an integer can never match a task
    if any(tuple(err.get("loc", ()))[:2] == ("path", "task_id") for err in exc.errors()):
        return JSONResponse(status_code=404, content={"message": "Task not found"})

    errors = [
        {
            "field": ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query")) or "payload",
            "message": str(err.get("msg", "invalid value")),
        }
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"message": "Invalid request", "errors": errors})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskflowError, _taskflow_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
