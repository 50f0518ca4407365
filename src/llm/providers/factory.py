from __future__ import annotations
import logging
import os

from .base import LLMProvider
from .mock_provider import MockProvider
from .ollama_provider import OllamaProvider
from .openai_provider import OpenAIProvider

logger = logging.getLogger(__name__)

PROVIDERS = {
    "openai": OpenAIProvider,
    "ollama": OllamaProvider,
    "mock": MockProvider,
}


def get_provider(name: str | None = None) -> LLMProvider:
    """Build the provider named by ``name`` or the LLM_PROVIDER env var."""
    key = (name or os.getenv("LLM_PROVIDER", "openai")).strip().lower()
    cls = PROVIDERS.get(key)
    if cls is None:
        logger.warning(f"Unknown LLM_PROVIDER '{key}', falling back to openai")
        cls = OpenAIProvider
    return cls()
