# schemas/__init__.py
"""
Pydantic Schemas Package

Contains all Pydantic v2 models for API requests/responses
"""

from .chat_schemas import (
    LanguageInfo,
    SUPPORTED_LANGUAGES,
    SUPPORTED_LANGUAGE_CODES,
    ChatRequest,
    ChatResponse,
    ChatMessage,
    ConversationHistory,
    SessionInfo,
    StartSessionRequest,
    StartSessionResponse,
    Capabilities,
    HealthResponse,
)

__all__ = [
    "LanguageInfo",
    "SUPPORTED_LANGUAGES",
    "SUPPORTED_LANGUAGE_CODES",
    "ChatRequest",
    "ChatResponse",
    "ChatMessage",
    "ConversationHistory",
    "SessionInfo",
    "StartSessionRequest",
    "StartSessionResponse",
    "Capabilities",
    "HealthResponse",
]
