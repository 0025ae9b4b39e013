# providers/openai_compatible.py
"""
DeepSeek and Grok adapters.
Both expose an OpenAI-compatible /chat/completions endpoint with
Bearer authentication, so they share one implementation.
"""

from typing import Any, Dict

from ..llm.prompts import build_chat_messages
from .base import (
    Candidate,
    HTTPProviderAdapter,
    MalformedProviderResponse,
    confidence_from_finish_reason,
)


class OpenAICompatibleProvider(HTTPProviderAdapter):
    """Chat-completions adapter for OpenAI-compatible HTTP APIs"""

    provider_id = "openai-compatible"

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def _build_payload(self, message: str, language: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": build_chat_messages(message, language, self.region),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    async def _generate(self, message: str, language: str) -> Candidate:
        data = await self._post_json(
            f"{self.base_url}/chat/completions",
            self._build_payload(message, language)
        )
        return self._parse_response(data)

    def _parse_response(self, data: Dict[str, Any]) -> Candidate:
        choices = data.get("choices")
        choice = choices[0] if isinstance(choices, list) and choices else {}
        if not isinstance(choice, dict):
            choice = {}

        # Shapes differ slightly between providers
        msg = choice.get("message")
        text = (msg.get("content") if isinstance(msg, dict) else None) or data.get("text") or choice.get("text") or ""

        if not isinstance(text, str) or not text.strip():
            raise MalformedProviderResponse(
                self.provider_id,
                f"unexpected response shape: {str(data)[:300]}"
            )

        return self._make_candidate(text, confidence_from_finish_reason(choice.get("finish_reason")))


class DeepSeekProvider(OpenAICompatibleProvider):
    provider_id = "deepseek"


class GrokProvider(OpenAICompatibleProvider):
    provider_id = "grok"
