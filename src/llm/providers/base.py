from __future__ import annotations
import os
from abc import ABC, abstractmethod
from typing import Optional

LLM_TIMEOUT_S = float(os.getenv("LLM_TIMEOUT_S", "30"))


class LLMProviderError(Exception):
    """The backend could not be reached or returned no usable completion."""


class LLMProvider(ABC):
    name = "base"

    @abstractmethod
    def generate(
        self,
        *,
        system: str,
        user: str,
        model: Optional[str] = None,
        json_mode: bool = False,
    ) -> str:
        """
        Must return the model output as TEXT (JSON is parsed/validated in LLMClient).
        Transport, auth, rate-limit and server failures raise LLMProviderError.
        """
        raise NotImplementedError
