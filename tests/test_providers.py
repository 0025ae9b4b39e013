import json

import httpx
import pytest
from openai import AsyncOpenAI

from tourism_ai.config import Settings
from tourism_ai.providers import (
    Candidate,
    DeepSeekProvider,
    GeminiProvider,
    GrokProvider,
    MalformedProviderResponse,
    OpenAIProvider,
    build_providers,
    confidence_from_finish_reason,
)

from helpers import FakeProvider


def _completion(content, finish_reason="stop"):
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "test-model",
        "choices": [{
            "index": 0,
            "message": {"role": "assistant", "content": content},
            "finish_reason": finish_reason,
        }],
    }


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _deepseek(handler, **kwargs):
    return DeepSeekProvider(
        api_key="ds-key",
        base_url="https://api.deepseek.test/v1/",
        model="deepseek-chat",
        retry_delay=0,
        http_client=_client(handler),
        **kwargs
    )


# ============================================
# Candidate
# ============================================

@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_candidate_rejects_blank_text(text):
    with pytest.raises(ValueError):
        Candidate(text=text, confidence=0.9, provider_id="openai")


@pytest.mark.parametrize("confidence", [-0.1, 1.5])
def test_candidate_rejects_confidence_out_of_range(confidence):
    with pytest.raises(ValueError):
        Candidate(text="ok", confidence=confidence, provider_id="openai")


@pytest.mark.parametrize(
    "finish_reason, expected",
    [("stop", 0.9), ("STOP", 0.9), ("length", 0.7), ("MAX_TOKENS", 0.7), (None, 0.7), ("", 0.7)],
)
def test_confidence_from_finish_reason(finish_reason, expected):
    assert confidence_from_finish_reason(finish_reason) == expected


def test_invalid_candidate_from_adapter_is_malformed():
    provider = FakeProvider("deepseek")

    with pytest.raises(MalformedProviderResponse) as excinfo:
        provider._make_candidate("text", 1.5)
    assert excinfo.value.provider_id == "deepseek"

    with pytest.raises(MalformedProviderResponse):
        provider._make_candidate("  ", 0.9)


@pytest.mark.asyncio
async def test_stray_value_error_is_reported_as_unexpected():
    result = await FakeProvider("grok", error=ValueError("bug in adapter")).invoke("q", "en")

    assert result.candidate is None
    assert result.failure == "error"


# ============================================
# OpenAI-compatible (DeepSeek, Grok)
# ============================================

@pytest.mark.asyncio
async def test_deepseek_success_builds_request_and_candidate():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion("Hundru Falls is 45 km from Ranchi."))

    candidate = await _deepseek(handler).call("Where is Hundru Falls?", "hi")

    assert candidate == Candidate(
        text="Hundru Falls is 45 km from Ranchi.", confidence=0.9, provider_id="deepseek"
    )
    assert seen["url"] == "https://api.deepseek.test/v1/chat/completions"
    assert seen["auth"] == "Bearer ds-key"
    assert seen["body"]["model"] == "deepseek-chat"
    assert seen["body"]["temperature"] == 0.7
    assert seen["body"]["max_tokens"] == 1000
    system, user = seen["body"]["messages"]
    assert system["role"] == "system" and "Jharkhand" in system["content"]
    assert user == {"role": "user", "content": 'Question in hi: "Where is Hundru Falls?"'}


@pytest.mark.asyncio
async def test_truncated_completion_gets_lower_confidence():
    def handler(request):
        return httpx.Response(200, json=_completion("Partial answer", finish_reason="length"))

    candidate = await _deepseek(handler).call("q", "en")
    assert candidate.confidence == 0.7


@pytest.mark.asyncio
async def test_alternate_text_fields_are_accepted():
    def handler(request):
        return httpx.Response(200, json={"choices": [{"text": "legacy shape", "finish_reason": "stop"}]})

    candidate = await _deepseek(handler).call("q", "en")
    assert candidate.text == "legacy shape"


@pytest.mark.asyncio
async def test_server_error_is_retried_then_succeeds():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(503, text="overloaded")
        return httpx.Response(200, json=_completion("second time lucky"))

    candidate = await _deepseek(handler).call("q", "en")

    assert len(calls) == 2
    assert candidate.text == "second time lucky"


@pytest.mark.asyncio
async def test_persistent_server_error_gives_up_after_max_attempts():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500, text="boom")

    provider = _deepseek(handler, max_attempts=3)
    result = await provider.invoke("q", "en")

    assert len(calls) == 3
    assert result.candidate is None
    assert result.failure == "unavailable"


@pytest.mark.asyncio
async def test_client_error_is_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(401, json={"error": "invalid key"})

    assert await _deepseek(handler).call("q", "en") is None
    assert len(calls) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc",
    [httpx.ConnectError("refused"), httpx.ReadTimeout("slow")],
)
async def test_network_errors_become_none_without_retry(exc):
    calls = []

    def handler(request):
        calls.append(request)
        raise exc

    result = await _deepseek(handler, max_attempts=3).invoke("q", "en")

    assert len(calls) == 1
    assert result.candidate is None
    assert result.failure == "unavailable"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={}),
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json=_completion("   ")),
        httpx.Response(200, json=_completion(None)),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, text="<html>gateway</html>"),
    ],
)
async def test_malformed_bodies_become_none(response):
    result = await _deepseek(lambda request: response).invoke("q", "en")
    assert result.candidate is None
    assert result.failure == "malformed"


@pytest.mark.asyncio
async def test_grok_uses_its_own_id_and_endpoint():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        return httpx.Response(200, json=_completion("Betla National Park"))

    provider = GrokProvider(
        api_key="xai-key",
        base_url="https://api.x.test/v1",
        model="grok-2-latest",
        http_client=_client(handler),
    )
    candidate = await provider.call("parks?", "en")

    assert candidate.provider_id == "grok"
    assert seen["url"] == "https://api.x.test/v1/chat/completions"


# ============================================
# Gemini
# ============================================

def _gemini(handler):
    return GeminiProvider(
        api_key="g-key",
        base_url="https://gemini.test/v1beta",
        model="gemini-pro",
        retry_delay=0,
        http_client=_client(handler),
    )


@pytest.mark.asyncio
async def test_gemini_success():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={
            "candidates": [{
                "content": {"parts": [{"text": "Deoghar is home to "}, {"text": "Baidyanath temple."}]},
                "finishReason": "STOP",
            }]
        })

    candidate = await _gemini(handler).call("Temples?", "bn")

    assert candidate == Candidate(
        text="Deoghar is home to Baidyanath temple.", confidence=0.9, provider_id="gemini"
    )
    assert seen["url"] == "https://gemini.test/v1beta/models/gemini-pro:generateContent"
    assert seen["key"] == "g-key"
    prompt = seen["body"]["contents"][0]["parts"][0]["text"]
    assert 'Question in bn: "Temples?"' in prompt
    assert seen["body"]["generationConfig"] == {"temperature": 0.7, "maxOutputTokens": 1000}


@pytest.mark.asyncio
async def test_gemini_max_tokens_finish_gets_lower_confidence():
    def handler(request):
        return httpx.Response(200, json={
            "candidates": [{"content": {"parts": [{"text": "cut off"}]}, "finishReason": "MAX_TOKENS"}]
        })

    assert (await _gemini(handler).call("q", "en")).confidence == 0.7


@pytest.mark.asyncio
async def test_gemini_blocked_prompt_becomes_none():
    def handler(request):
        return httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}})

    result = await _gemini(handler).invoke("q", "en")
    assert result.failure == "malformed"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "candidate",
    [
        {"content": ["x"], "finishReason": "STOP"},
        {"content": "x", "finishReason": "STOP"},
        {"content": {"parts": "x"}, "finishReason": "STOP"},
        {"content": {}, "finishReason": "STOP"},
        {"finishReason": "SAFETY"},
    ],
)
async def test_gemini_unexpected_content_shape_is_malformed(candidate):
    def handler(request):
        return httpx.Response(200, json={"candidates": [candidate]})

    result = await _gemini(handler).invoke("q", "en")
    assert result.candidate is None
    assert result.failure == "malformed"


# ============================================
# OpenAI (SDK)
# ============================================

def _openai(handler, **kwargs):
    client = AsyncOpenAI(
        api_key="sk-test",
        base_url="https://openai.test/v1",
        http_client=_client(handler),
        max_retries=0,
    )
    return OpenAIProvider(api_key="sk-test", model="gpt-3.5-turbo", retry_delay=0, client=client, **kwargs)


@pytest.mark.asyncio
async def test_openai_success():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion("Try litti chokha in Ranchi."))

    candidate = await _openai(handler).call("Food?", "en")

    assert candidate == Candidate(text="Try litti chokha in Ranchi.", confidence=0.9, provider_id="openai")
    assert seen["path"] == "/v1/chat/completions"
    assert seen["body"]["model"] == "gpt-3.5-turbo"
    assert seen["body"]["messages"][1]["content"] == 'Question in en: "Food?"'


@pytest.mark.asyncio
async def test_openai_retries_server_errors():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(502, json={"error": {"message": "bad gateway"}})
        return httpx.Response(200, json=_completion("recovered", finish_reason="length"))

    candidate = await _openai(handler).call("q", "en")

    assert len(calls) == 2
    assert candidate.confidence == 0.7


@pytest.mark.asyncio
async def test_openai_auth_error_becomes_none_without_retry():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(401, json={"error": {"message": "bad key"}})

    result = await _openai(handler).invoke("q", "en")

    assert len(calls) == 1
    assert result.failure == "unavailable"


@pytest.mark.asyncio
async def test_openai_connection_error_becomes_none():
    def handler(request):
        raise httpx.ConnectError("refused")

    assert await _openai(handler).call("q", "en") is None


@pytest.mark.asyncio
async def test_openai_timeout_becomes_unavailable_without_retry():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ReadTimeout("slow")

    result = await _openai(handler, max_attempts=3).invoke("q", "en")

    assert len(calls) == 1
    assert result.candidate is None
    assert result.failure == "unavailable"


@pytest.mark.asyncio
async def test_openai_empty_content_becomes_none():
    def handler(request):
        return httpx.Response(200, json=_completion(""))

    result = await _openai(handler).invoke("q", "en")
    assert result.failure == "malformed"


# ============================================
# Registry
# ============================================

def _settings(**overrides):
    settings = Settings()
    for name in ("OPENAI_API_KEY", "DEEPSEEK_API_KEY", "GROK_API_KEY", "GEMINI_API_KEY"):
        setattr(settings, name, "")
    settings.AI_PROVIDERS = "openai,deepseek,grok,gemini"
    for name, value in overrides.items():
        setattr(settings, name, value)
    return settings


def test_registry_keeps_fixed_order_and_skips_missing_keys():
    settings = _settings(OPENAI_API_KEY="sk", GROK_API_KEY="xai", GEMINI_API_KEY="g")

    providers = build_providers(settings)

    assert isinstance(providers, tuple)
    assert [p.provider_id for p in providers] == ["openai", "grok", "gemini"]


def test_registry_honours_configured_order_and_ignores_unknown_names():
    settings = _settings(
        DEEPSEEK_API_KEY="ds",
        GEMINI_API_KEY="g",
        AI_PROVIDERS=" Gemini, llama , deepseek, gemini",
    )

    providers = build_providers(settings)

    assert [p.provider_id for p in providers] == ["gemini", "deepseek"]


def test_registry_passes_call_policy_to_adapters():
    settings = _settings(
        DEEPSEEK_API_KEY="ds",
        PROVIDER_TIMEOUT=4.0,
        PROVIDER_MAX_ATTEMPTS=3,
        TOURISM_REGION="Odisha",
        AI_PROVIDERS="deepseek",
    )

    (provider,) = build_providers(settings)

    assert provider.timeout == 4.0
    assert provider.max_attempts == 3
    assert provider.region == "Odisha"


def test_registry_with_no_keys_is_empty():
    assert build_providers(_settings()) == ()
