import json

import httpx
import pytest

from app.config import Settings
from app.services.llm_service import (
    GeminiProvider,
    LLMProviderError,
    LLMResult,
    LLMService,
    OpenAIProvider,
)


class StubProvider:
    def __init__(self, name: str, response: LLMResult | None = None, should_fail: bool = False):
        self.name = name
        self._response = response
        self.should_fail = should_fail
        self.recorded_prompt = None
        self.recorded_kwargs = None

    def generate(self, prompt, **kwargs):
        self.recorded_prompt = prompt
        self.recorded_kwargs = kwargs
        if self.should_fail:
            raise LLMProviderError(f"{self.name} failure")
        return self._response


def make_result(provider: str, content: str = "[]") -> LLMResult:
    return LLMResult(
        provider=provider,
        model="test-model",
        content=content,
        prompt_tokens=10,
        completion_tokens=8,
        total_tokens=18,
        raw_response={},
    )


def test_llm_service_prefers_requested_provider():
    openai = StubProvider("openai", response=make_result("openai"))
    gemini = StubProvider("gemini", response=make_result("gemini"))

    service = LLMService(providers=[openai, gemini])
    result = service.generate("Make flashcards", preferred="gemini")

    assert result.provider == "gemini"
    assert gemini.recorded_prompt == "Make flashcards"
    assert openai.recorded_prompt is None


def test_llm_service_falls_back_on_error():
    failing = StubProvider("gemini", should_fail=True)
    fallback = StubProvider("openai", response=make_result("openai", "Salut !"))

    service = LLMService(providers=[failing, fallback])
    result = service.generate("Grade this", preferred="gemini", response_format={"type": "json_object"})

    assert result.content == "Salut !"
    assert fallback.recorded_kwargs == {"response_format": {"type": "json_object"}}


def test_llm_service_raises_when_all_providers_fail():
    service = LLMService(
        providers=[StubProvider("openai", should_fail=True), StubProvider("gemini", should_fail=True)]
    )

    with pytest.raises(LLMProviderError) as excinfo:
        service.generate("Anything")

    assert "openai failure" in str(excinfo.value)
    assert "gemini failure" in str(excinfo.value)


def test_llm_service_requires_a_provider():
    with pytest.raises(ValueError):
        LLMService(config=Settings(OPENAI_API_KEY=None, GEMINI_API_KEY=None))


def test_llm_service_builds_providers_from_settings():
    service = LLMService(config=Settings(OPENAI_API_KEY="sk-test", GEMINI_API_KEY="g-test"))

    assert [provider.name for provider in service._providers] == ["openai", "gemini"]


def test_openai_provider_posts_chat_completion():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "choices": [{"message": {"content": ' {"isCorrect": true} '}}],
                "usage": {"prompt_tokens": 3, "completion_tokens": 4, "total_tokens": 7},
            },
        )

    provider = OpenAIProvider(
        api_key="sk-test", model="gpt-5-nano", transport=httpx.MockTransport(handler)
    )
    result = provider.generate("Judge", response_format={"type": "json_object"})

    assert captured["url"] == "https://api.openai.com/v1/chat/completions"
    assert captured["auth"] == "Bearer sk-test"
    assert captured["body"]["model"] == "gpt-5-nano"
    assert captured["body"]["response_format"] == {"type": "json_object"}
    assert result.content == '{"isCorrect": true}'
    assert result.total_tokens == 7


def test_openai_provider_raises_on_error_status():
    transport = httpx.MockTransport(lambda request: httpx.Response(429, text="slow down"))
    provider = OpenAIProvider(
        api_key="sk-test", model="gpt-5-nano", transport=transport, max_retries=1
    )

    with pytest.raises(LLMProviderError):
        provider.generate("Judge")


def test_gemini_provider_posts_generate_content():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["key"] = request.headers["x-goog-api-key"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "candidates": [{"content": {"parts": [{"text": "[]"}]}}],
                "usageMetadata": {"promptTokenCount": 2, "candidatesTokenCount": 1},
            },
        )

    provider = GeminiProvider(
        api_key="g-test", model="gemini-2.5-flash", transport=httpx.MockTransport(handler)
    )
    result = provider.generate("Make cards")

    assert captured["path"] == "/v1beta/models/gemini-2.5-flash:generateContent"
    assert captured["key"] == "g-test"
    assert captured["body"]["contents"][0]["parts"][0]["text"] == "Make cards"
    assert result.content == "[]"
    assert result.total_tokens == 3


def test_gemini_provider_rejects_empty_candidates():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"candidates": []}))
    provider = GeminiProvider(
        api_key="g-test", model="gemini-2.5-flash", transport=transport, max_retries=1
    )

    with pytest.raises(LLMProviderError):
        provider.generate("Make cards")


def test_retry_count_comes_from_service_config():
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        return httpx.Response(500, text="upstream error")

    service = LLMService(config=Settings(LLM_MAX_RETRIES=2, OPENAI_API_KEY="sk-test"))
    provider = service._providers[0]
    provider.transport = httpx.MockTransport(handler)

    assert provider.max_retries == 2
    with pytest.raises(LLMProviderError):
        service.generate("Grade this")
    assert len(attempts) == 2


def test_provider_recovers_after_transient_failure():
    responses = iter(
        [
            httpx.Response(503, text="busy"),
            httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]}),
        ]
    )
    provider = OpenAIProvider(
        api_key="sk-test",
        model="gpt-5-nano",
        transport=httpx.MockTransport(lambda request: next(responses)),
        max_retries=2,
    )

    assert provider.generate("Judge").content == "ok"
