# agents/tourism_assistant.py
"""
Tourism Assistant (chat-facing)
Answers a visitor's message with the best response from all providers.
When no provider answers, replies with a localized apology instead.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional

from loguru import logger

from ..algorithms.response_scorer import build_keywords
from ..config import Settings, settings as default_settings
from ..orchestration import FanOutInvoker, NoResponseAvailable, ResponseSelector
from ..providers import build_providers


FALLBACK_PROVIDER = "fallback"

FALLBACK_MESSAGES = {
    "en": "Sorry, there was an error. Please try again.",
    "hi": "क्षमा करें, एक त्रुटि हुई है। कृपया पुनः प्रयास करें।",
}


def fallback_message(language: str) -> str:
    """Localized apology, English when the language has none"""
    return FALLBACK_MESSAGES.get(language, FALLBACK_MESSAGES["en"])


@dataclass
class AssistantReply:
    """One assistant turn, ready to relay and persist"""
    message: str
    provider: str
    confidence: float
    score: Optional[float] = None
    context: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_fallback(self) -> bool:
        return self.provider == FALLBACK_PROVIDER

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class TourismAssistant:
    """
    Wraps the response selector for chat turns.
    """

    def __init__(self, selector: ResponseSelector):
        self.selector = selector

    @classmethod
    def from_settings(cls, settings: Settings = default_settings) -> "TourismAssistant":
        """Register providers from configuration and wire the pipeline"""
        providers = build_providers(settings)
        invoker = FanOutInvoker(providers, timeout=settings.FANOUT_TIMEOUT)
        selector = ResponseSelector(invoker, keywords=build_keywords(settings.TOURISM_REGION))
        return cls(selector)

    @property
    def provider_ids(self) -> list:
        return [p.provider_id for p in self.selector.invoker.providers]

    async def respond(self, message: str, language: str = "en") -> AssistantReply:
        """
        Generate the reply for one chat turn.

        Args:
            message: Visitor's message
            language: Language code of the conversation

        Returns:
            AssistantReply with the winning text, or the localized fallback
        """
        outcome = await self.selector.select_best_response(message, language)

        if isinstance(outcome, NoResponseAvailable):
            logger.warning(
                f"All {outcome.attempted} AI provider(s) failed, sending fallback "
                f"({language}): {outcome.failures}"
            )
            return AssistantReply(
                message=fallback_message(language),
                provider=FALLBACK_PROVIDER,
                confidence=0.0,
                context={"error": True}
            )

        return AssistantReply(
            message=outcome.text,
            provider=outcome.provider_id,
            confidence=outcome.confidence,
            score=outcome.score,
            context={
                "ai_provider": outcome.provider_id,
                "response_quality": outcome.score
            }
        )
