# llm/__init__.py
"""
LLM Components Package

Contains the prompts shared by every provider adapter:
- prompts: tourism assistant system prompt and per-turn user prompt
"""

from .prompts import (
    SYSTEM_PROMPT,
    USER_PROMPT,
    SINGLE_TURN_PROMPT,
    build_chat_messages,
    build_single_turn_prompt,
)

__all__ = [
    "SYSTEM_PROMPT",
    "USER_PROMPT",
    "SINGLE_TURN_PROMPT",
    "build_chat_messages",
    "build_single_turn_prompt",
]
