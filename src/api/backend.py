import asyncio
import logging
from typing import Any, Optional

from extraction.task_extractor import TaskExtractor
from storage.task_store import TaskStore
from taskflow.errors import (
    REPHRASE_MESSAGE,
    ExtractionError,
    IntakeError,
    IntakeErrorKind,
    ValidationError,
)
from taskflow.models import Task, validate_create, validate_parse_request

logger = logging.getLogger(__name__)


class IntakeOrchestrator:
    """Central orchestration component: free text in, stored Task out."""

    def __init__(self, store: TaskStore, extractor: Optional[TaskExtractor] = None):
        self.store = store
        self.extractor = extractor if extractor is not None else TaskExtractor()

    async def intake(self, raw_input: Any) -> Task:
        """Parse ``{"input": text}`` with the LLM and persist the result.

        Either a fully populated task is created or nothing is stored.
        StoreFault from the store propagates unchanged.
        """

        # 1. Validate the request shape
        try:
            request = validate_parse_request(raw_input)
        except ValidationError as e:
            raise IntakeError(
                IntakeErrorKind.BAD_REQUEST, "Invalid input data", cause=e, errors=e.errors
            ) from e

        # 2. Extract fields; the blocking call runs off the event loop
        logger.info(f"Parsing task input: {request.input[:50]}")
        try:
            extracted = await asyncio.to_thread(self.extractor.extract, request.input)
        except ExtractionError as e:
            raise IntakeError(
                IntakeErrorKind.EXTRACTION_FAILED, REPHRASE_MESSAGE, cause=e
            ) from e

        # 3. Build and re-check the creation payload
        try:
            payload = validate_create(extracted.to_create_payload())
        except ValidationError as e:
            logger.error(f"Extraction result produced an invalid task: {e.errors}")
            raise IntakeError(
                IntakeErrorKind.INTERNAL_INCONSISTENCY, "Failed to parse and create task", cause=e
            ) from e

        # 4. Persist
        task = await self.store.create(payload)
        logger.info(f"Created task {task.id} from natural language input")
        return task
