import asyncio
from typing import Optional, Sequence

from tourism_ai.providers.base import Candidate, ProviderAdapter, ProviderUnavailable


class FakeProvider(ProviderAdapter):
    """Adapter double: returns fixed text after an optional delay"""

    def __init__(
        self,
        provider_id: str,
        text: Optional[str] = None,
        confidence: float = 0.9,
        delay: float = 0.0,
        error: Optional[Exception] = None
    ):
        super().__init__(timeout=5.0)
        self.provider_id = provider_id
        self.text = text
        self.confidence = confidence
        self.delay = delay
        self.error = error
        self.calls = []

    async def _generate(self, message: str, language: str) -> Candidate:
        self.calls.append((message, language))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.text is None:
            raise ProviderUnavailable(self.provider_id, "simulated outage")
        return Candidate(text=self.text, confidence=self.confidence, provider_id=self.provider_id)


class ContractBreakingProvider(ProviderAdapter):
    """Raises straight out of invoke(), bypassing the base-class guard"""

    provider_id = "broken"

    async def _generate(self, message: str, language: str) -> Candidate:
        raise AssertionError("not reached")

    async def invoke(self, message: str, language: str):
        raise RuntimeError("adapter bug")


def make_text(
    n_words: int,
    newline: bool = False,
    bullet: bool = False,
    keywords: Sequence[str] = ()
) -> str:
    """Filler text with exact word count and chosen scoring features"""
    words = ["word"] * n_words
    for i, keyword in enumerate(keywords):
        words[i] = keyword
    if bullet and words:
        words[-1] = "-" + words[-1]
    if newline and n_words > 1:
        half = n_words // 2
        return " ".join(words[:half]) + "\n" + " ".join(words[half:])
    return " ".join(words)
