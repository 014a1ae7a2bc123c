"""LLM providers for flashcard generation and answer grading."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

import httpx
from loguru import logger
from tenacity import RetryCallState, Retrying, stop_after_attempt, wait_exponential

from app.config import Settings, settings


@dataclass
class LLMResult:
    """Structured response returned by the :class:`LLMService`."""

    provider: str
    model: str
    content: str
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    raw_response: Dict[str, Any]


class LLMProviderError(RuntimeError):
    """Raised when a provider returns an error response."""


class BaseLLMProvider(Protocol):
    """Protocol shared by provider implementations."""

    name: str

    def generate(self, prompt: str, **kwargs: Any) -> LLMResult:  # pragma: no cover - interface definition
        """Return the model's reply to a single prompt."""


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying LLM call", attempt=retry_state.attempt_number, error=repr(error)
    )


def _retrying(max_retries: int) -> Retrying:
    return Retrying(
        stop=stop_after_attempt(max_retries),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        before_sleep=_log_retry,
        reraise=True,
    )


@dataclass
class OpenAIProvider:
    """Generate chat completions using the OpenAI API."""

    api_key: str
    model: str
    base_url: str = "https://api.openai.com/v1"
    request_timeout: float = 30.0
    transport: Optional[httpx.BaseTransport] = None
    max_retries: int = 3

    name: str = "openai"

    def _build_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def generate(self, prompt: str, **kwargs: Any) -> LLMResult:
        return _retrying(self.max_retries)(self._generate_once, prompt, **kwargs)

    def _generate_once(self, prompt: str, **kwargs: Any) -> LLMResult:
        payload: Dict[str, Any] = {
            "model": kwargs.get("model", self.model),
            "messages": [{"role": "user", "content": prompt}],
        }
        if "response_format" in kwargs:
            payload["response_format"] = kwargs["response_format"]

        with httpx.Client(
            base_url=self.base_url, timeout=self.request_timeout, transport=self.transport
        ) as client:
            response = client.post("/chat/completions", json=payload, headers=self._build_headers())

        if response.status_code >= 400:
            logger.error("OpenAI returned error", status=response.status_code, body=response.text)
            raise LLMProviderError(f"OpenAI error {response.status_code}: {response.text}")

        data = response.json()
        choice = (data.get("choices") or [{}])[0]
        content = choice.get("message", {}).get("content")
        if not content:
            raise LLMProviderError("OpenAI response did not include content")

        usage = data.get("usage", {})
        result = LLMResult(
            provider=self.name,
            model=payload["model"],
            content=content.strip(),
            prompt_tokens=usage.get("prompt_tokens", 0),
            completion_tokens=usage.get("completion_tokens", 0),
            total_tokens=usage.get("total_tokens", usage.get("prompt_tokens", 0) + usage.get("completion_tokens", 0)),
            raw_response=data,
        )
        logger.info("OpenAI completion success", model=result.model, tokens=result.total_tokens)
        return result


@dataclass
class GeminiProvider:
    """Generate content using the Gemini ``generateContent`` REST endpoint."""

    api_key: str
    model: str
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    request_timeout: float = 30.0
    transport: Optional[httpx.BaseTransport] = None
    max_retries: int = 3

    name: str = "gemini"

    def generate(self, prompt: str, **kwargs: Any) -> LLMResult:
        return _retrying(self.max_retries)(self._generate_once, prompt, **kwargs)

    def _generate_once(self, prompt: str, **kwargs: Any) -> LLMResult:
        model = kwargs.get("model", self.model)
        payload: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        if kwargs.get("response_format", {}).get("type") == "json_object":
            payload["generationConfig"] = {"responseMimeType": "application/json"}

        headers = {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}
        with httpx.Client(
            base_url=self.base_url, timeout=self.request_timeout, transport=self.transport
        ) as client:
            response = client.post(f"/models/{model}:generateContent", json=payload, headers=headers)

        if response.status_code >= 400:
            logger.error("Gemini returned error", status=response.status_code, body=response.text)
            raise LLMProviderError(f"Gemini error {response.status_code}: {response.text}")

        data = response.json()
        candidates = data.get("candidates") or [{}]
        parts = candidates[0].get("content", {}).get("parts", [])
        content = "".join(part.get("text", "") for part in parts).strip()
        if not content:
            raise LLMProviderError("Gemini response did not include content")

        usage = data.get("usageMetadata", {})
        prompt_tokens = usage.get("promptTokenCount", 0)
        completion_tokens = usage.get("candidatesTokenCount", 0)
        result = LLMResult(
            provider=self.name,
            model=model,
            content=content,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=usage.get("totalTokenCount", prompt_tokens + completion_tokens),
            raw_response=data,
        )
        logger.info("Gemini completion success", model=result.model, tokens=result.total_tokens)
        return result


class LLMService:
    """Route prompts to the preferred provider, falling back to the others."""

    def __init__(
        self,
        providers: Optional[Sequence[BaseLLMProvider]] = None,
        config: Optional[Settings] = None,
    ) -> None:
        if providers is not None:
            self._providers = list(providers)
        else:
            self._providers = self._build_default_providers(config or settings)
        if not self._providers:
            raise ValueError("LLMService requires at least one provider")

        self._providers_by_name = {provider.name: provider for provider in self._providers}

    @staticmethod
    def _build_default_providers(config: Settings) -> List[BaseLLMProvider]:
        provider_list: List[BaseLLMProvider] = []
        if config.OPENAI_API_KEY:
            provider_list.append(
                OpenAIProvider(
                    api_key=config.OPENAI_API_KEY,
                    model=config.OPENAI_MODEL,
                    base_url=str(config.OPENAI_API_BASE or "https://api.openai.com/v1"),
                    request_timeout=config.LLM_REQUEST_TIMEOUT_SECONDS,
                    max_retries=config.LLM_MAX_RETRIES,
                )
            )
        if config.GEMINI_API_KEY:
            provider_list.append(
                GeminiProvider(
                    api_key=config.GEMINI_API_KEY,
                    model=config.GEMINI_MODEL,
                    base_url=str(
                        config.GEMINI_API_BASE or "https://generativelanguage.googleapis.com/v1beta"
                    ),
                    request_timeout=config.LLM_REQUEST_TIMEOUT_SECONDS,
                    max_retries=config.LLM_MAX_RETRIES,
                )
            )
        return provider_list

    def _ordered(self, preferred: Optional[str]) -> List[BaseLLMProvider]:
        first = self._providers_by_name.get(preferred) if preferred else None
        if first is None:
            return list(self._providers)
        return [first, *(provider for provider in self._providers if provider is not first)]

    def generate(
        self,
        prompt: str,
        *,
        preferred: Optional[str] = None,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> LLMResult:
        """Generate a reply, trying ``preferred`` first when it is configured."""

        errors: List[str] = []
        for provider in self._ordered(preferred):
            kwargs: Dict[str, Any] = {}
            if response_format:
                kwargs["response_format"] = response_format
            try:
                result = provider.generate(prompt, **kwargs)
                logger.debug("LLM provider success", provider=provider.name, tokens=result.total_tokens)
                return result
            except Exception as exc:
                logger.exception("LLM provider failure", provider=provider.name)
                errors.append(f"{provider.name}: {exc}")
                continue
        raise LLMProviderError("; ".join(errors))


__all__ = [
    "GeminiProvider",
    "LLMProviderError",
    "LLMResult",
    "LLMService",
    "OpenAIProvider",
]
