"""
Tourism AI Chat Service - FastAPI Application
Every chat message is sent to all configured LLM providers
(OpenAI, DeepSeek, Grok, Gemini) and the best answer is returned.
"""

import sys
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from . import __version__
from .agents.tourism_assistant import TourismAssistant
from .api.chat import router as chat_router
from .config import settings
from .schemas.chat_schemas import HealthResponse


SERVICE_NAME = "tourism-ai-chat-service"


def configure_logging(level: str = settings.LOG_LEVEL):
    """Send loguru output to stderr at the configured level"""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss} - {name} - {level} - {message}"
    )


# ============================================
# Application Lifespan
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    logger.info("=" * 50)
    logger.info("Starting Tourism AI Chat Service")
    logger.info("=" * 50)
    logger.info(f"Environment: {settings.API_ENV}")
    logger.info(f"Region: {settings.TOURISM_REGION}")

    # Tests may install their own assistant before startup
    if getattr(app.state, "assistant", None) is None:
        app.state.assistant = TourismAssistant.from_settings(settings)

    providers = app.state.assistant.provider_ids
    logger.info(f"AI providers ready: {len(providers)}")
    for name in providers:
        logger.info(f"  ✓ {name}")
    if not providers:
        logger.warning("No AI provider configured; every chat turn will use the fallback reply")

    yield

    logger.info("AI Chat Service shutdown complete")


# ============================================
# FastAPI Application
# ============================================

def create_app() -> FastAPI:
    app = FastAPI(
        title="Tourism AI Chat Service",
        description="Multilingual tourism chatbot answering from the best of several LLM providers.",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(chat_router)

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": "Tourism AI Chat Service",
            "version": __version__,
            "status": "running",
            "docs": "/docs",
            "endpoints": [
                "/health",
                "/api/chatbot/start-session",
                "/api/chatbot/message",
                "/api/chatbot/languages",
                "/api/chatbot/capabilities",
                "/api/chatbot/history/{session_id}",
                "/api/chatbot/end-session/{session_id}"
            ]
        }

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check with the registered providers"""
        assistant = getattr(app.state, "assistant", None)
        providers = assistant.provider_ids if assistant else []
        return HealthResponse(
            status="healthy" if providers else "degraded",
            service=SERVICE_NAME,
            version=__version__,
            providers=providers,
            timestamp=datetime.now().isoformat()
        )

    return app


configure_logging()
app = create_app()


# ============================================
# Main
# ============================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "tourism_ai.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_ENV == "development"
    )
