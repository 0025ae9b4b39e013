# providers/gemini.py
"""
Gemini adapter (Google Generative Language REST API)
"""

from typing import Any, Dict

from ..llm.prompts import build_single_turn_prompt
from .base import (
    Candidate,
    HTTPProviderAdapter,
    MalformedProviderResponse,
    confidence_from_finish_reason,
)


class GeminiProvider(HTTPProviderAdapter):
    """generateContent adapter; authenticates with the x-goog-api-key header"""

    provider_id = "gemini"

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }

    async def _generate(self, message: str, language: str) -> Candidate:
        payload = {
            "contents": [{
                "parts": [{"text": build_single_turn_prompt(message, language, self.region)}]
            }],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_tokens,
            }
        }
        data = await self._post_json(f"{self.base_url}/models/{self.model}:generateContent", payload)
        return self._parse_response(data)

    def _parse_response(self, data: Dict[str, Any]) -> Candidate:
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            # Blocked prompts come back with promptFeedback and no candidates
            raise MalformedProviderResponse(
                self.provider_id,
                f"no candidates in response: {str(data)[:300]}"
            )

        first = candidates[0]
        content = first.get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            raise MalformedProviderResponse(
                self.provider_id,
                f"no content parts in first candidate: {str(first)[:300]}"
            )

        text = "".join(
            part.get("text", "") for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        )
        if not text.strip():
            raise MalformedProviderResponse(self.provider_id, "empty text in first candidate")

        # Gemini reports "STOP" for a natural completion
        return self._make_candidate(text, confidence_from_finish_reason(first.get("finishReason")))
