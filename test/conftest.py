import os

import pytest

os.environ.setdefault("LLM_PROVIDER", "mock")
os.environ.setdefault("TASK_STORE", "memory")

from fastapi.testclient import TestClient

from api import state
from api.backend import IntakeOrchestrator
from api.main import app
from extraction.task_extractor import TaskExtractor
from llm.llm_client import LLMClient
from storage.task_store import InMemoryTaskStore


class FakeProvider:
    """Returns canned text, or raises ``error`` when given one."""

    name = "fake"

    def __init__(self, response_text: str = "", error: Exception | None = None):
        self._response_text = response_text
        self._error = error
        self.calls = []

    def generate(self, *, system: str, user: str, model=None, json_mode: bool = False) -> str:
        self.calls.append({"system": system, "user": user, "json_mode": json_mode})
        if self._error is not None:
            raise self._error
        return self._response_text


class RecordingStore(InMemoryTaskStore):
    """In-memory store that counts create() calls."""

    def __init__(self):
        super().__init__()
        self.create_calls = 0

    async def create(self, payload):
        self.create_calls += 1
        return await super().create(payload)


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str = "", error: Exception | None = None):
        return FakeProvider(response_text, error=error)
    return _make


@pytest.fixture
def extractor_factory(fake_provider_factory):
    def _make(response_text: str = "", error: Exception | None = None):
        provider = fake_provider_factory(response_text, error=error)
        return TaskExtractor(llm_client=LLMClient(provider=provider))
    return _make


@pytest.fixture
def store():
    return RecordingStore()


RAJEEV_JSON = (
    '{"taskName": "Call client", "assignee": "Rajeev", '
    '"dueDate": "5:00 PM, Tomorrow", "priority": "P3"}'
)


@pytest.fixture
def client(store, monkeypatch, extractor_factory):
    """TestClient wired to a fresh in-memory store and a canned extractor.

    Used without ``with`` so the lifespan hook does not replace the store.
    """
    monkeypatch.setattr(state, "task_store", store)
    monkeypatch.setattr(
        state,
        "intake",
        IntakeOrchestrator(store=store, extractor=extractor_factory(RAJEEV_JSON)),
    )
    return TestClient(app)


@pytest.fixture
def use_extractor(monkeypatch, store):
    """Swap the extractor behind /api/tasks/parse."""
    def _use(extractor: TaskExtractor):
        monkeypatch.setattr(state, "intake", IntakeOrchestrator(store=store, extractor=extractor))
    return _use
