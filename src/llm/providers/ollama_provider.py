from __future__ import annotations
import os
from typing import Optional

import httpx

from .base import LLM_TIMEOUT_S, LLMProvider, LLMProviderError


class OllamaProvider(LLMProvider):
    name = "ollama"

    def __init__(self, timeout: float = LLM_TIMEOUT_S):
        self.model = os.getenv("OLLAMA_MODEL", "llama3.1").strip()
        self.base_url = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434").strip()
        self.timeout = timeout

    def generate(
        self,
        *,
        system: str,
        user: str,
        model: Optional[str] = None,
        json_mode: bool = False,
    ) -> str:
        url = f"{self.base_url}/api/chat"
        payload = {
            "model": model or self.model,
            "stream": False,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "options": {"temperature": 0.2},
        }
        if json_mode:
            payload["format"] = "json"

        try:
            with httpx.Client(timeout=self.timeout) as client:
                r = client.post(url, json=payload)
                r.raise_for_status()
                data = r.json()
        except httpx.TimeoutException as e:
            raise LLMProviderError(f"Ollama request timed out after {self.timeout}s") from e
        except (httpx.HTTPError, ValueError) as e:
            raise LLMProviderError(f"Ollama request failed: {e.__class__.__name__}") from e

        try:
            return data["message"]["content"] or ""
        except (KeyError, TypeError) as e:
            raise LLMProviderError("Ollama response has no message") from e
