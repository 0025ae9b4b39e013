# providers/openai_provider.py
"""
OpenAI adapter using the official SDK.
SDK-level retries are disabled; this adapter applies the same bounded
5xx retry policy as the HTTP adapters.
"""

import asyncio
from typing import Optional

import openai
from openai import AsyncOpenAI
from loguru import logger

from ..llm.prompts import build_chat_messages
from .base import (
    Candidate,
    MalformedProviderResponse,
    ProviderAdapter,
    ProviderUnavailable,
    confidence_from_finish_reason,
)


class OpenAIProvider(ProviderAdapter):
    """Chat completions through AsyncOpenAI"""

    provider_id = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        max_attempts: int = 2,
        retry_delay: float = 0.3,
        temperature: float = 0.7,
        max_tokens: int = 1000,
        region: str = "Jharkhand",
        client: Optional[AsyncOpenAI] = None
    ):
        super().__init__(timeout=timeout)
        self.model = model
        self.max_attempts = max(1, max_attempts)
        self.retry_delay = retry_delay
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.region = region
        self.client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url or None,
            timeout=timeout,
            max_retries=0
        )

    async def _generate(self, message: str, language: str) -> Candidate:
        messages = build_chat_messages(message, language, self.region)

        attempt = 0
        while True:
            attempt += 1
            try:
                completion = await self.client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    temperature=self.temperature,
                    max_tokens=self.max_tokens
                )
                break
            except openai.APIStatusError as e:
                if e.status_code >= 500 and attempt < self.max_attempts:
                    delay = self.retry_delay * attempt
                    logger.warning(
                        f"{self.provider_id} server error (status={e.status_code}), "
                        f"retrying in {delay:.2f}s ({attempt}/{self.max_attempts})"
                    )
                    await asyncio.sleep(delay)
                    continue
                raise ProviderUnavailable(self.provider_id, f"HTTP {e.status_code}: {e.message}", e.status_code) from e
            except openai.APITimeoutError as e:
                raise ProviderUnavailable(self.provider_id, f"timed out after {self.timeout}s") from e
            except openai.APIConnectionError as e:
                raise ProviderUnavailable(self.provider_id, f"connection failed: {e}") from e

        if not completion.choices:
            raise MalformedProviderResponse(self.provider_id, "no choices in completion")

        choice = completion.choices[0]
        text = choice.message.content if choice.message else None
        if not text or not text.strip():
            raise MalformedProviderResponse(self.provider_id, "empty completion text")

        return self._make_candidate(text, confidence_from_finish_reason(choice.finish_reason))
