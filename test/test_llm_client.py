import pytest

from llm.llm_client import LLMClient
from llm.providers.base import LLMProviderError


def test_complete_json_parses_object(fake_provider_factory):
    provider = fake_provider_factory(
        '{"taskName":"Send invoice","assignee":"Unassigned","dueDate":"No due date","priority":"P2"}'
    )
    client = LLMClient(provider=provider)
    data = client.complete_json("system prompt", "Send invoice P2")
    assert data["taskName"] == "Send invoice"
    assert data["priority"] == "P2"


def test_complete_json_requests_json_mode(fake_provider_factory):
    provider = fake_provider_factory('{"taskName":"X"}')
    LLMClient(provider=provider).complete_json("sys", "X")
    assert provider.calls[0]["json_mode"] is True
    assert provider.calls[0]["system"] == "sys"
    assert provider.calls[0]["user"] == "X"


def test_provider_error_propagates(fake_provider_factory):
    provider = fake_provider_factory(error=LLMProviderError("boom"))
    client = LLMClient(provider=provider)
    with pytest.raises(LLMProviderError):
        client.complete("sys", "anything")
