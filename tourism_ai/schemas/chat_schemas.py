# schemas/chat_schemas.py
"""
Pydantic v2 schemas for the tourism chat API
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


# ============================================
# Languages
# ============================================

class LanguageInfo(BaseModel):
    code: str
    name: str
    native_name: str


SUPPORTED_LANGUAGES: List[LanguageInfo] = [
    LanguageInfo(code="en", name="English", native_name="English"),
    LanguageInfo(code="hi", name="Hindi", native_name="हिन्दी"),
    LanguageInfo(code="bn", name="Bengali", native_name="বাংলা"),
    LanguageInfo(code="or", name="Odia", native_name="ଓଡ଼ିଆ"),
    LanguageInfo(code="ta", name="Tamil", native_name="தமிழ்"),
    LanguageInfo(code="te", name="Telugu", native_name="తెలుగు"),
    LanguageInfo(code="ml", name="Malayalam", native_name="മലയാളം"),
    LanguageInfo(code="kn", name="Kannada", native_name="ಕನ್ನಡ"),
    LanguageInfo(code="gu", name="Gujarati", native_name="ગુજરાતી"),
    LanguageInfo(code="pa", name="Punjabi", native_name="ਪੰਜਾਬੀ"),
    LanguageInfo(code="as", name="Assamese", native_name="অসমীয়া"),
    LanguageInfo(code="ne", name="Nepali", native_name="नेपाली"),
    LanguageInfo(code="ur", name="Urdu", native_name="اردو"),
    LanguageInfo(code="mr", name="Marathi", native_name="मराठी"),
]

SUPPORTED_LANGUAGE_CODES = [lang.code for lang in SUPPORTED_LANGUAGES]


def _check_language(code: str) -> str:
    if code not in SUPPORTED_LANGUAGE_CODES:
        raise ValueError("Invalid language code")
    return code


# ============================================
# Chat
# ============================================

class ChatRequest(BaseModel):
    """Chat request model"""
    message: str = Field(..., min_length=1, max_length=1000, description="Visitor's message")
    session_id: Optional[str] = Field(None, description="Session ID for context continuity")
    language: str = Field("en", description="Language code")

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message cannot be blank")
        return v.strip()

    @field_validator("language")
    @classmethod
    def language_supported(cls, v: str) -> str:
        return _check_language(v)


class ChatResponse(BaseModel):
    """Chat response model"""
    message: str = Field(..., description="Assistant's reply")
    session_id: str
    language: str
    provider: str = Field(..., description="Provider that produced the reply, or 'fallback'")
    confidence: float = Field(..., ge=0, le=1)
    score: Optional[float] = Field(None, description="Heuristic quality score of the winning response")
    context: Dict[str, Any] = Field(default_factory=dict)
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())


class ChatMessage(BaseModel):
    """Single stored chat message"""
    role: str
    content: str
    language: str
    timestamp: str
    metadata: Optional[Dict[str, Any]] = None


class StartSessionRequest(BaseModel):
    """Start-session request model"""
    language: str = Field("en", description="Language code")

    @field_validator("language")
    @classmethod
    def language_supported(cls, v: str) -> str:
        return _check_language(v)


class SessionInfo(BaseModel):
    session_id: str
    language: str
    is_active: bool
    created_at: str
    last_activity: str
    ended_at: Optional[str] = None


class StartSessionResponse(BaseModel):
    """New session with the assistant's welcome reply"""
    session_id: str
    language: str
    welcome_message: ChatResponse


class ConversationHistory(BaseModel):
    """One page of conversation history"""
    session: SessionInfo
    messages: List[ChatMessage]
    count: int = Field(..., description="Messages on this page")
    total: int
    page: int
    pages: int


# ============================================
# Service
# ============================================

class Capabilities(BaseModel):
    languages: List[str]
    features: List[str]
    providers: List[str]


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    providers: List[str]
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())
