from __future__ import annotations
import json
import logging
from typing import Any, Optional

from llm.providers.base import LLMProvider
from llm.providers.factory import get_provider

logger = logging.getLogger(__name__)


class LLMResponseError(Exception):
    """The model answered, but not with a JSON object."""


def parse_json_object(text: Optional[str]) -> dict[str, Any]:
    """Parse a JSON object out of raw model output.

    Tries the whole text first, then the outermost ``{...}`` span, since
    models sometimes wrap the JSON in prose.
    """
    if text is None or not text.strip():
        raise LLMResponseError("empty response")

    candidates = [text.strip()]
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start:end + 1])

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
        raise LLMResponseError(f"expected a JSON object, got {type(data).__name__}")

    raise LLMResponseError("response is not valid JSON")


class LLMClient:
    """Thin wrapper around an LLMProvider.

    The provider is injected for tests; by default it is chosen from the
    LLM_PROVIDER environment variable.
    """

    def __init__(self, provider: Optional[LLMProvider] = None, model: Optional[str] = None):
        self.provider = provider if provider is not None else get_provider()
        self.model = model

    def complete(self, system: str, user: str, json_mode: bool = False) -> str:
        """Raw completion text. LLMProviderError propagates unchanged."""
        return self.provider.generate(
            system=system, user=user, model=self.model, json_mode=json_mode
        )

    def complete_json(self, system: str, user: str) -> dict[str, Any]:
        text = self.complete(system, user, json_mode=True)
        try:
            return parse_json_object(text)
        except LLMResponseError:
            logger.debug(f"Unparseable LLM output: {(text or '')[:200]!r}")
            raise
