# api/__init__.py
"""
API Endpoints Package

Contains the FastAPI routers for the AI service:
- chat: multilingual tourism chatbot
"""

from .chat import router as chat_router

__all__ = ["chat_router"]
