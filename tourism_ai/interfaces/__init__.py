"""
Data Stores Package

- conversation_store: chat sessions and their history
"""

from .conversation_store import ConversationStore, Message, Session, conversation_store

__all__ = ["ConversationStore", "Message", "Session", "conversation_store"]
