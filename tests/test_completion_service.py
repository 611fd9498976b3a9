"""
Tests for the single-cell completion pipeline.
"""

import pytest
from conftest import ScriptedTransport, completion_body, make_settings, models_body

from sheet_completions import INDEFINITE, InMemoryCacheStore
from sheet_completions.entities import EMPTY, ResultKind
from sheet_completions.errors import TransportError
from sheet_completions.services import CompletionService


def test_hello_then_cache_hit(service, transport):
    """Second identical call is served from the cache."""
    transport.queue(completion_body("  Hi there \n"))

    first = service.complete("Hello", "sk-test")
    second = service.complete("Hello", "sk-test")

    assert first.unwrap() == "Hi there"
    assert second.unwrap() == "Hi there"
    assert len(transport.calls) == 1


@pytest.mark.parametrize("prompt", ["", "   ", None])
def test_empty_prompt_no_call(service, transport, prompt):
    result = service.complete(prompt, "sk-test")

    assert result.kind is ResultKind.EMPTY
    assert result.unwrap() == EMPTY
    assert transport.calls == []


def test_request_payload(service, transport):
    transport.queue(completion_body("Paris"))

    service.complete("Capital of France?", "sk-test", "gpt-4", 20, 0.5)

    call = transport.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "https://api.test/v1/chat/completions"
    assert call["headers"]["Authorization"] == "Bearer sk-test"
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["json"] == {
        "model": "gpt-4",
        "max_tokens": 20,
        "messages": [
            {"role": "system", "content": "You are a helpful assistant."},
            {"role": "user", "content": "Capital of France?"},
        ],
        "temperature": 0.5,
        "stream": False,
        "n": 1,
        "seed": 0,
        "service_tier": "auto",
    }


def test_user_id_sent_when_configured(transport, store):
    service = CompletionService.create(transport, store, make_settings(user_id="user-42"))
    transport.queue(completion_body("ok"))

    service.complete("Hello", "sk-test")

    assert transport.calls[0]["json"]["user"] == "user-42"


def test_defaults_from_settings(service, transport):
    transport.queue(completion_body("ok"))

    service.complete("Hello", "sk-test")

    body = transport.calls[0]["json"]
    assert body["model"] == "gpt-3.5-turbo"
    assert body["max_tokens"] == 150
    assert body["temperature"] == 0.0


@pytest.mark.parametrize("content", ["", "   ", None])
def test_upstream_empty_not_cached(service, transport, content):
    """Empty content degrades to EMPTY and a later call retries."""
    transport.queue(completion_body(content), completion_body("Second try"))

    assert service.complete("Hello", "sk-test").unwrap() == EMPTY
    assert service.complete("Hello", "sk-test").unwrap() == "Second try"
    assert len(transport.calls) == 2


def test_no_choices_is_empty(service, transport):
    transport.queue('{"id": "x", "choices": []}')
    assert service.complete("Hello", "sk-test").kind is ResultKind.EMPTY


def test_transport_failure_is_failed_result(service, transport, network_error):
    transport.queue(network_error)

    result = service.complete("Hello", "sk-test")

    assert result.is_fatal
    assert result.error is network_error


def test_malformed_body_is_transport_error(service, transport):
    transport.queue("<html>Bad gateway</html>")

    result = service.complete("Hello", "sk-test")

    assert result.is_fatal
    assert isinstance(result.error, TransportError)


def test_caching_disabled_always_calls(transport, store):
    service = CompletionService.create(transport, store, make_settings(cache_duration=0))
    transport.queue(completion_body("a"), completion_body("b"), completion_body("c"))

    results = [service.complete("Hello", "sk-test").unwrap() for _ in range(3)]

    assert results == ["a", "b", "c"]
    assert len(transport.calls) == 3
    assert len(store) == 0


def test_timed_cache_expires(transport, store, clock):
    service = CompletionService.create(transport, store, make_settings(cache_duration=60))
    transport.queue(completion_body("old"), completion_body("new"))

    assert service.complete("Hello", "sk-test").unwrap() == "old"
    clock.advance(30)
    assert service.complete("Hello", "sk-test").unwrap() == "old"
    clock.advance(30)
    assert service.complete("Hello", "sk-test").unwrap() == "new"
    assert len(transport.calls) == 2


def test_indefinite_cache(transport, store, clock):
    service = CompletionService.create(transport, store, make_settings(cache_duration=INDEFINITE))
    transport.queue(completion_body("kept"))

    service.complete("Hello", "sk-test")
    clock.advance(365 * 24 * 3600)

    assert service.complete("Hello", "sk-test").unwrap() == "kept"
    assert len(transport.calls) == 1


def test_cache_shared_across_system_prompts(clock):
    """Requests differing only in system prompt share one cached answer."""
    store = InMemoryCacheStore(clock=clock)
    transport = ScriptedTransport(completion_body("Shared"))
    terse = CompletionService.create(transport, store, make_settings(system_prompt="Be terse."))
    verbose = CompletionService.create(transport, store, make_settings(system_prompt="Be verbose."))

    assert terse.complete("Hello", "sk-a").unwrap() == "Shared"
    assert verbose.complete("Hello", "sk-b").unwrap() == "Shared"
    assert len(transport.calls) == 1


def test_system_prompt_in_key_when_enabled(clock):
    store = InMemoryCacheStore(clock=clock)
    transport = ScriptedTransport(completion_body("Terse"), completion_body("Verbose"))
    terse = CompletionService.create(
        transport, store, make_settings(system_prompt="Be terse.", cache_key_includes_system_prompt=True)
    )
    verbose = CompletionService.create(
        transport, store, make_settings(system_prompt="Be verbose.", cache_key_includes_system_prompt=True)
    )

    assert terse.complete("Hello", "sk-test").unwrap() == "Terse"
    assert verbose.complete("Hello", "sk-test").unwrap() == "Verbose"
    assert len(transport.calls) == 2


def test_whitespace_variants_share_cache(service, transport):
    transport.queue(completion_body("Hi"))

    service.complete("Hello", "sk-test")
    service.complete("   Hello\n", "sk-test")

    assert len(transport.calls) == 1


def test_list_models(service, transport):
    transport.queue(models_body("gpt-4", "gpt-3.5-turbo"), models_body("gpt-4"))

    assert service.list_models("sk-test") == ["gpt-4", "gpt-3.5-turbo"]
    assert service.list_models("sk-test") == ["gpt-4"]
    assert transport.calls[0]["method"] == "GET"
    assert transport.calls[0]["url"] == "https://api.test/v1/models"
    assert transport.calls[0]["json"] is None


def test_list_models_propagates_failure(service, transport):
    transport.queue(TransportError("API error 401", status_code=401))

    with pytest.raises(TransportError):
        service.list_models("sk-bad")
