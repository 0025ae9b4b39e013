"""
Conversation Store - Keeps chat sessions and their history (in-memory)
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from loguru import logger


@dataclass
class Message:
    """Represents a conversation message"""
    session_id: str
    role: str  # "user" or "assistant"
    content: str
    language: str
    timestamp: str
    metadata: Optional[Dict] = None

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class Session:
    """Chat session state"""
    session_id: str
    language: str
    created_at: str
    last_activity: str
    is_active: bool = True
    ended_at: Optional[str] = None

    def to_dict(self) -> Dict:
        return asdict(self)


class ConversationStore:
    """
    Stores and retrieves conversation history per session.
    Written once per chat turn, after the assistant reply is chosen.
    """

    def __init__(self, max_messages: int = 200):
        """
        Args:
            max_messages: Messages kept per session; older ones are dropped
        """
        self.max_messages = max_messages
        self.sessions: Dict[str, Session] = {}
        self.conversations: Dict[str, List[Message]] = {}

    def start_session(self, session_id: str, language: str = "en") -> Session:
        """Open a new, active session"""
        now = datetime.now().isoformat()
        session = Session(session_id=session_id, language=language, created_at=now, last_activity=now)
        self.sessions[session_id] = session
        self.conversations.setdefault(session_id, [])
        logger.info(f"Started conversation: session={session_id} ({language})")
        return session

    def get_session(self, session_id: str) -> Optional[Session]:
        return self.sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Mark a session inactive, keeping its history; True if it existed"""
        session = self.sessions.get(session_id)
        if session is None:
            return False
        session.is_active = False
        session.ended_at = datetime.now().isoformat()
        logger.info(f"Ended conversation: session={session_id}")
        return True

    def add_message(
        self,
        session_id: str,
        role: str,
        content: str,
        language: str = "en",
        metadata: Optional[Dict] = None
    ) -> Message:
        """
        Append a message to a session, opening the session if needed

        Args:
            session_id: Session identifier
            role: "user" or "assistant"
            content: Message content
            language: Conversation language code
            metadata: Optional metadata (provider, score, ...)

        Returns:
            Saved Message object
        """
        session = self.sessions.get(session_id) or self.start_session(session_id, language)

        message = Message(
            session_id=session_id,
            role=role,
            content=content,
            language=language,
            timestamp=datetime.now().isoformat(),
            metadata=metadata
        )
        session.last_activity = message.timestamp

        history = self.conversations.setdefault(session_id, [])
        history.append(message)
        if len(history) > self.max_messages:
            del history[:-self.max_messages]

        logger.debug(f"Saved {role} message: session={session_id}")
        return message

    def get_history(self, session_id: str, limit: int = 20) -> List[Dict]:
        """Last `limit` messages of a session, oldest first"""
        if limit <= 0:
            return []
        return [m.to_dict() for m in self.conversations.get(session_id, [])[-limit:]]

    def get_page(self, session_id: str, page: int = 1, limit: int = 50) -> Tuple[List[Dict], int]:
        """
        One page of a session's history, oldest first

        Returns:
            (messages on the page, total messages in the session)
        """
        history = self.conversations.get(session_id, [])
        if page < 1 or limit <= 0:
            return [], len(history)
        start = (page - 1) * limit
        return [m.to_dict() for m in history[start:start + limit]], len(history)

    def has_session(self, session_id: str) -> bool:
        return session_id in self.sessions

    def clear(self, session_id: str) -> bool:
        """Drop a session and its history; True if it existed"""
        if session_id not in self.sessions:
            return False
        del self.sessions[session_id]
        self.conversations.pop(session_id, None)
        logger.info(f"Cleared conversation: session={session_id}")
        return True


# Global instance
conversation_store = ConversationStore()
