from __future__ import annotations
import json
import re
from typing import Optional

from .base import LLMProvider

_PRIORITY_RE = re.compile(r"\b(P[1-4])\b", re.IGNORECASE)
_ASSIGNEE_RE = re.compile(r"\b(?:for|assign(?:ed)? to)\s+([A-Z][a-z]+)\b")
_DAY_RE = re.compile(r"\b(today|tomorrow|monday|tuesday|wednesday|thursday|friday|saturday|sunday)\b", re.IGNORECASE)


class MockProvider(LLMProvider):
    """Offline provider for demos and local development.

    Mimics the extraction contract with a few regexes instead of a model.
    """

    name = "mock"

    def generate(
        self,
        *,
        system: str,
        user: str,
        model: Optional[str] = None,
        json_mode: bool = False,
    ) -> str:
        text = user.strip()

        priority = "P3"
        m = _PRIORITY_RE.search(text)
        if m:
            priority = m.group(1).upper()
            text = _PRIORITY_RE.sub("", text, count=1)

        assignee = "Unassigned"
        m = _ASSIGNEE_RE.search(text)
        if m:
            assignee = m.group(1)
            text = text[:m.start()] + text[m.end():]

        due_date = "No due date"
        m = _DAY_RE.search(text)
        if m:
            due_date = m.group(1).capitalize()
            text = text[:m.start()] + text[m.end():]

        task_name = " ".join(text.split()) or user.strip()

        return json.dumps({
            "taskName": task_name,
            "assignee": assignee,
            "dueDate": due_date,
            "priority": priority,
        })
