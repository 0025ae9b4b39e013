"""
AI Chat Service Configuration
Loads settings from environment variables
"""

import os
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


# Registration order of the built-in providers
DEFAULT_PROVIDER_ORDER = ("openai", "deepseek", "grok", "gemini")


class Settings:
    """Application settings loaded from environment"""

    # API Configuration
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))
    API_ENV: str = os.getenv("API_ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Configuration
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:3001")

    # Region the assistant talks about
    TOURISM_REGION: str = os.getenv("TOURISM_REGION", "Jharkhand")

    # Comma separated subset/order of providers to register
    AI_PROVIDERS: str = os.getenv("AI_PROVIDERS", ",".join(DEFAULT_PROVIDER_ORDER))

    # OpenAI Configuration
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
    OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "")

    # DeepSeek Configuration
    DEEPSEEK_API_KEY: str = os.getenv("DEEPSEEK_API_KEY", "")
    DEEPSEEK_BASE_URL: str = os.getenv("DEEPSEEK_BASE_URL", "https://api.deepseek.com/v1")
    DEEPSEEK_MODEL: str = os.getenv("DEEPSEEK_MODEL", "deepseek-chat")

    # Grok (xAI) Configuration
    GROK_API_KEY: str = os.getenv("GROK_API_KEY", "")
    GROK_BASE_URL: str = os.getenv("GROK_BASE_URL", "https://api.x.ai/v1")
    GROK_MODEL: str = os.getenv("GROK_MODEL", "grok-2-latest")

    # Gemini Configuration
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_BASE_URL: str = os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-pro")

    # Generation Settings
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.7"))
    LLM_MAX_TOKENS: int = int(os.getenv("LLM_MAX_TOKENS", "1000"))

    # Provider call policy
    PROVIDER_TIMEOUT: float = float(os.getenv("PROVIDER_TIMEOUT", "10"))
    PROVIDER_MAX_ATTEMPTS: int = int(os.getenv("PROVIDER_MAX_ATTEMPTS", "2"))
    PROVIDER_RETRY_DELAY: float = float(os.getenv("PROVIDER_RETRY_DELAY", "0.3"))

    # Safety net around the whole fan-out (0 disables)
    FANOUT_TIMEOUT: float = float(os.getenv("FANOUT_TIMEOUT", "30"))

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def provider_order(self) -> List[str]:
        """Get requested provider names, lowercased, in registration order"""
        names = []
        for name in self.AI_PROVIDERS.split(","):
            name = name.strip().lower()
            if name and name not in names:
                names.append(name)
        return names

    def get_provider_key(self, provider_id: str) -> str:
        """
        Get the API key configured for a provider

        Args:
            provider_id: Provider name (openai, deepseek, grok or gemini)

        Returns:
            API key, or empty string if not configured
        """
        return getattr(self, f"{provider_id.upper()}_API_KEY", "") or ""


# Global settings instance
settings = Settings()
