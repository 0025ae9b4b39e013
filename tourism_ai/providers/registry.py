# providers/registry.py
"""
Provider Registry
Builds the fixed, ordered set of adapters once at startup.
"""

from typing import Callable, Dict, Tuple

from loguru import logger

from ..config import Settings
from .base import ProviderAdapter
from .gemini import GeminiProvider
from .openai_compatible import DeepSeekProvider, GrokProvider
from .openai_provider import OpenAIProvider


def _build_openai(settings: Settings) -> ProviderAdapter:
    return OpenAIProvider(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_MODEL,
        base_url=settings.OPENAI_BASE_URL or None,
        timeout=settings.PROVIDER_TIMEOUT,
        max_attempts=settings.PROVIDER_MAX_ATTEMPTS,
        retry_delay=settings.PROVIDER_RETRY_DELAY,
        temperature=settings.LLM_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
        region=settings.TOURISM_REGION
    )


def _build_deepseek(settings: Settings) -> ProviderAdapter:
    return DeepSeekProvider(
        api_key=settings.DEEPSEEK_API_KEY,
        base_url=settings.DEEPSEEK_BASE_URL,
        model=settings.DEEPSEEK_MODEL,
        timeout=settings.PROVIDER_TIMEOUT,
        max_attempts=settings.PROVIDER_MAX_ATTEMPTS,
        retry_delay=settings.PROVIDER_RETRY_DELAY,
        temperature=settings.LLM_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
        region=settings.TOURISM_REGION
    )


def _build_grok(settings: Settings) -> ProviderAdapter:
    return GrokProvider(
        api_key=settings.GROK_API_KEY,
        base_url=settings.GROK_BASE_URL,
        model=settings.GROK_MODEL,
        timeout=settings.PROVIDER_TIMEOUT,
        max_attempts=settings.PROVIDER_MAX_ATTEMPTS,
        retry_delay=settings.PROVIDER_RETRY_DELAY,
        temperature=settings.LLM_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
        region=settings.TOURISM_REGION
    )


def _build_gemini(settings: Settings) -> ProviderAdapter:
    return GeminiProvider(
        api_key=settings.GEMINI_API_KEY,
        base_url=settings.GEMINI_BASE_URL,
        model=settings.GEMINI_MODEL,
        timeout=settings.PROVIDER_TIMEOUT,
        max_attempts=settings.PROVIDER_MAX_ATTEMPTS,
        retry_delay=settings.PROVIDER_RETRY_DELAY,
        temperature=settings.LLM_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
        region=settings.TOURISM_REGION
    )


PROVIDER_BUILDERS: Dict[str, Callable[[Settings], ProviderAdapter]] = {
    "openai": _build_openai,
    "deepseek": _build_deepseek,
    "grok": _build_grok,
    "gemini": _build_gemini,
}


def build_providers(settings: Settings) -> Tuple[ProviderAdapter, ...]:
    """
    Build the registered adapters in configured order.

    Providers without an API key are skipped, as are unknown names.

    Args:
        settings: Application settings

    Returns:
        Immutable tuple of adapters, in registration order
    """
    providers = []

    for name in settings.provider_order:
        builder = PROVIDER_BUILDERS.get(name)
        if builder is None:
            logger.warning(f"Unknown AI provider '{name}' ignored")
            continue
        if not settings.get_provider_key(name):
            logger.warning(f"AI provider '{name}' has no API key configured, skipping")
            continue
        providers.append(builder(settings))

    logger.info(f"Registered AI providers: {[p.provider_id for p in providers] or 'none'}")
    return tuple(providers)
