"""Shared fixtures: scripted transport, manual clock, in-memory stores."""

import json

import pytest

from sheet_completions import InMemoryCacheStore, InMemoryCredentialStore, Settings, SheetFunctions
from sheet_completions.errors import TransportError
from sheet_completions.handlers import API_KEY_PROPERTY
from sheet_completions.services import CompletionService


def completion_body(content: str | None) -> str:
    """Raw chat completion response with a single choice."""
    return json.dumps(
        {
            "id": "chatcmpl-1",
            "model": "gpt-3.5-turbo",
            "choices": [{"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
        }
    )


def models_body(*model_ids: str) -> str:
    return json.dumps({"object": "list", "data": [{"id": m, "object": "model", "owned_by": "openai"} for m in model_ids]})


class ScriptedTransport:
    """Transport double returning queued responses and recording calls.

    Queue items are raw body strings, or exceptions to raise.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def queue(self, *responses) -> None:
        self.responses.extend(responses)

    def execute(self, method, url, headers, json_body):
        self.calls.append({"method": method, "url": url, "headers": headers, "json": json_body})
        if not self.responses:
            raise AssertionError(f"Unexpected {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def prompts(self) -> list[str]:
        """User message of every completion call, in order."""
        return [call["json"]["messages"][-1]["content"] for call in self.calls if call["method"] == "POST"]


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_settings(**overrides) -> Settings:
    values = {
        "openai_api_key": None,
        "api_base_url": "https://api.test/v1",
        "default_model": "gpt-3.5-turbo",
        "premium_model": "gpt-4",
        "default_max_tokens": 150,
        "default_temperature": 0.0,
        "seed": 0,
        "system_prompt": "You are a helpful assistant.",
        "user_id": None,
        "cache_duration": 21600,
        "cache_key_includes_system_prompt": False,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def transport():
    return ScriptedTransport()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def store(clock):
    return InMemoryCacheStore(clock=clock)


@pytest.fixture
def config():
    return make_settings()


@pytest.fixture
def service(config, transport, store):
    return CompletionService.create(transport=transport, cache_store=store, settings=config)


@pytest.fixture
def credentials():
    return InMemoryCredentialStore({API_KEY_PROPERTY: "sk-test"})


@pytest.fixture
def functions(service, credentials):
    return SheetFunctions(service=service, credentials=credentials)


@pytest.fixture
def network_error():
    return TransportError("Request to https://api.test/v1/chat/completions failed: connection refused")
