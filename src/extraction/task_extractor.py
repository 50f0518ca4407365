from __future__ import annotations
import logging
from typing import Optional

from llm.llm_client import LLMClient, LLMResponseError
from llm.providers.base import LLMProviderError
from llm.schemas import ExtractionResult, validate_extraction_result
from taskflow.errors import ExtractionError, ExtractionErrorKind, ValidationError

logger = logging.getLogger(__name__)

EXTRACTION_SYSTEM_PROMPT = """You turn short natural-language task descriptions into structured data.

Return these fields:
- taskName: what needs to be done, without the person, date or priority
- assignee: the person responsible; use "Unassigned" if nobody is mentioned
- dueDate: when it is due, in a short human-readable form such as "5:00 PM, Tomorrow" or "11:00 PM, 20 June"; use "No due date" if no time is mentioned
- priority: one of P1 (critical), P2 (high), P3 (normal), P4 (low); use P3 unless a priority is stated

Examples:
"Call client Rajeev tomorrow 5pm" -> {"taskName": "Call client", "assignee": "Rajeev", "dueDate": "5:00 PM, Tomorrow", "priority": "P3"}
"Review P1 documents Sarah by Friday" -> {"taskName": "Review documents", "assignee": "Sarah", "dueDate": "Friday", "priority": "P1"}

Answer with a single JSON object and nothing else:
{"taskName": string, "assignee": string, "dueDate": string, "priority": "P1"|"P2"|"P3"|"P4"}"""


class TaskExtractor:
    """Extracts an ExtractionResult from free text via the LLM.

    Every failure of the external service surfaces as an ExtractionError:
    provider failures as ServiceUnavailable, non-JSON output as
    MalformedResponse and schema violations as InvalidSchema. Nothing is
    retried here.
    """

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self.llm = llm_client if llm_client is not None else LLMClient()

    def extract(self, text: str) -> ExtractionResult:
        try:
            data = self.llm.complete_json(EXTRACTION_SYSTEM_PROMPT, text)
        except LLMProviderError as e:
            logger.warning(f"Extraction service unavailable: {e}")
            raise ExtractionError(ExtractionErrorKind.SERVICE_UNAVAILABLE, str(e), cause=e) from e
        except LLMResponseError as e:
            logger.warning(f"Extraction service returned a malformed response: {e}")
            raise ExtractionError(ExtractionErrorKind.MALFORMED_RESPONSE, str(e), cause=e) from e

        try:
            return validate_extraction_result(data)
        except ValidationError as e:
            logger.warning(f"Extraction result failed validation: {e.fields}")
            raise ExtractionError(
                ExtractionErrorKind.INVALID_SCHEMA, str(e), cause=e, errors=e.errors
            ) from e
