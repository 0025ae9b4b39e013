# providers/__init__.py
"""
AI Provider Adapters

One adapter per text-generation backend:
- openai: OpenAI chat completions (official SDK)
- deepseek: DeepSeek chat completions
- grok: xAI Grok chat completions
- gemini: Google Gemini generateContent
"""

from .base import (
    Candidate,
    InvocationResult,
    ProviderAdapter,
    HTTPProviderAdapter,
    ProviderError,
    ProviderUnavailable,
    MalformedProviderResponse,
    confidence_from_finish_reason,
)
from .openai_provider import OpenAIProvider
from .openai_compatible import OpenAICompatibleProvider, DeepSeekProvider, GrokProvider
from .gemini import GeminiProvider
from .registry import build_providers, PROVIDER_BUILDERS

__all__ = [
    "Candidate",
    "InvocationResult",
    "ProviderAdapter",
    "HTTPProviderAdapter",
    "ProviderError",
    "ProviderUnavailable",
    "MalformedProviderResponse",
    "confidence_from_finish_reason",
    "OpenAIProvider",
    "OpenAICompatibleProvider",
    "DeepSeekProvider",
    "GrokProvider",
    "GeminiProvider",
    "build_providers",
    "PROVIDER_BUILDERS",
]
