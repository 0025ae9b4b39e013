# agents/__init__.py
"""
AI Agents Package

Contains the chat-facing agent:
- TourismAssistant: multi-provider answer for each chat turn
"""

from .tourism_assistant import (
    TourismAssistant,
    AssistantReply,
    FALLBACK_MESSAGES,
    FALLBACK_PROVIDER,
    fallback_message,
)

__all__ = [
    "TourismAssistant",
    "AssistantReply",
    "FALLBACK_MESSAGES",
    "FALLBACK_PROVIDER",
    "fallback_message",
]
