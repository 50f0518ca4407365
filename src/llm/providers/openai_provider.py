from __future__ import annotations
import logging
import os
from typing import Optional

import httpx

from .base import LLM_TIMEOUT_S, LLMProvider, LLMProviderError

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    name = "openai"

    def __init__(self, timeout: float = LLM_TIMEOUT_S):
        self.api_key = os.getenv("OPENAI_API_KEY", "").strip()
        self.model = os.getenv("OPENAI_MODEL", "gpt-4o").strip()
        self.base_url = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").strip()
        self.timeout = timeout

        if not self.api_key:
            logger.warning("OPENAI_API_KEY is missing; task parsing is unavailable until it is set")

    def generate(
        self,
        *,
        system: str,
        user: str,
        model: Optional[str] = None,
        json_mode: bool = False,
    ) -> str:
        if not self.api_key:
            raise LLMProviderError("OPENAI_API_KEY is missing")

        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": model or self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": 0.2,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        try:
            with httpx.Client(timeout=self.timeout) as client:
                r = client.post(url, headers=headers, json=payload)
                r.raise_for_status()
                data = r.json()
        except httpx.TimeoutException as e:
            raise LLMProviderError(f"OpenAI request timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise LLMProviderError(f"OpenAI returned HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise LLMProviderError(f"OpenAI request failed: {e.__class__.__name__}") from e

        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise LLMProviderError("OpenAI response has no completion") from e
