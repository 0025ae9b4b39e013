# api/chat.py
"""
Chatbot API Endpoints
Conversational interface for the tourism assistant:
- Start a session with a welcome reply
- Send a message and get the best multi-provider answer
- Supported languages and capabilities
- Conversation history, ending and clearing sessions
"""

import math
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from loguru import logger

from ..agents.tourism_assistant import AssistantReply, TourismAssistant
from ..interfaces.conversation_store import ConversationStore, conversation_store
from ..schemas.chat_schemas import (
    SUPPORTED_LANGUAGES,
    SUPPORTED_LANGUAGE_CODES,
    Capabilities,
    ChatRequest,
    ChatResponse,
    ConversationHistory,
    SessionInfo,
    StartSessionRequest,
    StartSessionResponse,
)


router = APIRouter(prefix="/api/chatbot", tags=["chatbot"])


FEATURES = [
    "Destination Information",
    "Itinerary Planning",
    "Booking Assistance",
    "Weather Updates",
    "Transport Information",
    "Local Recommendations",
    "Cultural Information",
    "Multilingual Support",
]

# Sent on behalf of the visitor when a session starts
WELCOME_PROMPT = "Hello"


# ============================================
# Dependencies
# ============================================

def get_assistant(request: Request) -> TourismAssistant:
    """Assistant wired at application startup"""
    return request.app.state.assistant


def get_conversation_store() -> ConversationStore:
    return conversation_store


def _new_session_id() -> str:
    return f"session-{uuid.uuid4().hex[:12]}"


def _store_reply(store: ConversationStore, session_id: str, reply: AssistantReply, language: str):
    store.add_message(
        session_id,
        "assistant",
        reply.message,
        language,
        metadata={"provider": reply.provider, "confidence": reply.confidence, "score": reply.score}
    )


def _to_response(reply: AssistantReply, session_id: str, language: str) -> ChatResponse:
    return ChatResponse(
        message=reply.message,
        session_id=session_id,
        language=language,
        provider=reply.provider,
        confidence=reply.confidence,
        score=reply.score,
        context=reply.context
    )


def _require_session(store: ConversationStore, session_id: str):
    session = store.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Chat session not found")
    return session


# ============================================
# Chat
# ============================================

@router.post("/start-session", response_model=StartSessionResponse, status_code=201)
async def start_session(
    request: StartSessionRequest,
    assistant: TourismAssistant = Depends(get_assistant),
    store: ConversationStore = Depends(get_conversation_store)
):
    """
    Open a session and greet the visitor

    Example:
        POST /api/chatbot/start-session
        {"language": "hi"}
    """
    session_id = _new_session_id()
    store.start_session(session_id, request.language)

    reply = await assistant.respond(WELCOME_PROMPT, request.language)
    _store_reply(store, session_id, reply, request.language)

    return StartSessionResponse(
        session_id=session_id,
        language=request.language,
        welcome_message=_to_response(reply, session_id, request.language)
    )


@router.post("/message", response_model=ChatResponse)
async def send_message(
    request: ChatRequest,
    assistant: TourismAssistant = Depends(get_assistant),
    store: ConversationStore = Depends(get_conversation_store)
):
    """
    Answer one chat message

    Example:
        POST /api/chatbot/message
        {
            "message": "What festivals are celebrated in Ranchi?",
            "language": "en"
        }
    """
    session_id = request.session_id or _new_session_id()
    logger.info(f"[{session_id}] Chat message ({request.language}): '{request.message[:80]}'")

    reply = await assistant.respond(request.message, request.language)

    store.add_message(session_id, "user", request.message, request.language)
    _store_reply(store, session_id, reply, request.language)

    return _to_response(reply, session_id, request.language)


# ============================================
# Languages & Capabilities
# ============================================

@router.get("/languages")
async def get_languages():
    """Supported chat languages"""
    return {
        "status": "success",
        "data": {"languages": [lang.model_dump() for lang in SUPPORTED_LANGUAGES]}
    }


@router.get("/capabilities", response_model=Capabilities)
async def get_capabilities(assistant: TourismAssistant = Depends(get_assistant)):
    """Chatbot features and the AI providers currently registered"""
    return Capabilities(
        languages=SUPPORTED_LANGUAGE_CODES,
        features=FEATURES,
        providers=assistant.provider_ids
    )


# ============================================
# Conversation History
# ============================================

@router.get("/history/{session_id}", response_model=ConversationHistory)
async def get_conversation_history(
    session_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    store: ConversationStore = Depends(get_conversation_store)
):
    """Get one page of conversation history, oldest first"""
    session = _require_session(store, session_id)

    messages, total = store.get_page(session_id, page, limit)
    return ConversationHistory(
        session=SessionInfo(**session.to_dict()),
        messages=messages,
        count=len(messages),
        total=total,
        page=page,
        pages=math.ceil(total / limit)
    )


@router.post("/end-session/{session_id}")
async def end_session(
    session_id: str,
    store: ConversationStore = Depends(get_conversation_store)
):
    """End a session; its history stays readable"""
    _require_session(store, session_id)
    store.end_session(session_id)
    return {"session_id": session_id, "status": "ended"}


@router.delete("/sessions/{session_id}")
async def clear_conversation(
    session_id: str,
    store: ConversationStore = Depends(get_conversation_store)
):
    """Clear conversation history"""
    if not store.clear(session_id):
        raise HTTPException(status_code=404, detail="Chat session not found")
    return {"session_id": session_id, "status": "cleared"}
