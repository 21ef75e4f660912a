"""
Tests for model backends and the factory. Network calls are mocked.
"""

import asyncio
from types import SimpleNamespace
from typing import Any, Dict, List, Tuple

import pytest
import requests

from m31code.core.ai import ollama_provider
from m31code.core.ai.base import ModelDescriptor, ProviderType
from m31code.core.ai.echo_provider import EchoModel
from m31code.core.ai.factory import ModelFactory
from m31code.core.ai.ollama_provider import OllamaModel
from m31code.core.ai.openai_provider import OpenAIModel
from m31code.core.errors import ProviderNotConfiguredError


def run_async(coro):
    """Helper to run async coroutines inside plain pytest tests."""
    return asyncio.run(coro)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "descriptor, expected",
    [
        (ModelDescriptor("gpt4"), ProviderType.ECHO),
        (ModelDescriptor("gpt4", api_key="sk-test"), ProviderType.OPENAI),
        (ModelDescriptor("codellama", endpoint="http://localhost:11434"), ProviderType.OLLAMA),
        (ModelDescriptor("mistral", api_key="k", provider="Ollama"), ProviderType.OLLAMA),
    ],
)
def test_resolve_provider(descriptor, expected):
    assert ModelFactory.resolve_provider(descriptor) is expected


def test_unknown_provider_raises():
    with pytest.raises(ProviderNotConfiguredError):
        ModelFactory.build(ModelDescriptor("x", provider="watson"))


def test_non_string_provider_raises():
    with pytest.raises(ProviderNotConfiguredError):
        ModelFactory.build(ModelDescriptor("x", provider=1))


def test_openai_without_key_raises():
    with pytest.raises(ProviderNotConfiguredError):
        ModelFactory.build(ModelDescriptor("gpt4", provider="openai"))


def test_build_returns_bound_handle():
    handle = ModelFactory.build(ModelDescriptor("gpt4"))
    assert isinstance(handle, EchoModel)
    assert handle.name == "gpt4"
    assert "echo" in ModelFactory.get_available_providers()


def test_register_provider_overrides_class(monkeypatch):
    class CustomEcho(EchoModel):
        async def generate_response(self, text: str) -> str:
            return "custom"

    monkeypatch.setitem(ModelFactory._providers, ProviderType.ECHO, CustomEcho)
    handle = ModelFactory.build(ModelDescriptor("gpt4"))
    assert run_async(handle.generate_response("x")) == "custom"


def test_descriptor_is_immutable():
    descriptor = ModelDescriptor("gpt4")
    with pytest.raises(AttributeError):
        descriptor.name = "other"
    assert descriptor.model_id == "gpt4"
    assert ModelDescriptor("gpt4", model="gpt-4o").model_id == "gpt-4o"


# ---------------------------------------------------------------------------
# Echo
# ---------------------------------------------------------------------------

def test_echo_model_templates():
    model = EchoModel(ModelDescriptor("codellama"))
    assert run_async(model.generate_suggestion("x = 1")) == "Suggestion for: x = 1"
    assert run_async(model.generate_response("hi")) == "Response to: hi"


# ---------------------------------------------------------------------------
# OpenAI
# ---------------------------------------------------------------------------

class FakeCompletions:
    def __init__(self, content: str):
        self.content = content
        self.calls: List[Dict[str, Any]] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_openai(content: str = "ok") -> Tuple[OpenAIModel, FakeCompletions]:
    model = OpenAIModel(ModelDescriptor("gpt4", api_key="test-key", model="gpt-4o"))
    completions = FakeCompletions(content)
    model.client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return model, completions


def test_openai_suggestion_uses_model_id_and_prompts():
    model, completions = make_openai("better code")
    assert run_async(model.generate_suggestion("x=1")) == "better code"

    call = completions.calls[0]
    assert call["model"] == "gpt-4o"
    assert call["messages"][0]["role"] == "system"
    assert call["messages"][1] == {"role": "user", "content": "x=1"}


def test_openai_response_handles_empty_content():
    model, completions = make_openai(None)
    assert run_async(model.generate_response("hi")) == ""
    assert completions.calls[0]["messages"][1]["content"] == "hi"


def test_openai_uses_endpoint_as_base_url():
    model = OpenAIModel(
        ModelDescriptor("gpt4", api_key="test-key", endpoint="http://localhost:8000/v1")
    )
    assert str(model.client.base_url).startswith("http://localhost:8000/v1")


# ---------------------------------------------------------------------------
# Ollama
# ---------------------------------------------------------------------------

class FakeResponse:
    def __init__(self, payload: Dict[str, Any], status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> Dict[str, Any]:
        return self._payload


def test_ollama_posts_to_generate(monkeypatch):
    calls = []

    def fake_post(url, json, timeout):
        calls.append((url, json, timeout))
        return FakeResponse({"response": "hello"})

    monkeypatch.setattr(ollama_provider.requests, "post", fake_post)
    model = OllamaModel(
        ModelDescriptor("codellama", endpoint="http://box:11434/", model="codellama:7b")
    )

    assert run_async(model.generate_response("hi")) == "hello"
    url, payload, _ = calls[0]
    assert url == "http://box:11434/api/generate"
    assert payload == {"model": "codellama:7b", "prompt": "hi", "stream": False}


def test_ollama_suggestion_wraps_code_in_prompt(monkeypatch):
    prompts = []

    def fake_post(url, json, timeout):
        prompts.append(json["prompt"])
        return FakeResponse({"response": "y = 2"})

    monkeypatch.setattr(ollama_provider.requests, "post", fake_post)
    model = OllamaModel(ModelDescriptor("codellama"))

    assert model.base_url == ollama_provider.DEFAULT_OLLAMA_URL
    assert run_async(model.generate_suggestion("y=2")) == "y = 2"
    assert prompts[0].endswith("y=2")


def test_ollama_http_error_propagates(monkeypatch):
    monkeypatch.setattr(
        ollama_provider.requests,
        "post",
        lambda url, json, timeout: FakeResponse({}, status_code=404),
    )
    model = OllamaModel(ModelDescriptor("mistral"))
    with pytest.raises(requests.HTTPError):
        run_async(model.generate_response("hi"))
