# tourism_ai/__init__.py
"""
Tourism AI Chat Service Package

The AI backend of the Jharkhand tourism platform:
- Multilingual chatbot (Tourism Assistant)
- Multi-provider answers: OpenAI, DeepSeek, Grok and Gemini are asked
  in parallel and the best response is selected by a heuristic score
- Conversation history per session
"""

__version__ = "1.0.0"

# Package structure:
# tourism_ai/
# ├── __init__.py           <- This file
# ├── main.py               <- FastAPI application entry
# ├── config.py             <- Configuration settings
# │
# ├── agents/               <- AI Agents
# │   └── tourism_assistant.py  <- Chat-facing agent, localized fallback
# │
# ├── api/                  <- FastAPI Routers
# │   └── chat.py           <- /api/chatbot
# │
# ├── providers/            <- One adapter per LLM backend
# │   ├── base.py           <- Candidate, InvocationResult, never-raise contract
# │   ├── openai_provider.py
# │   ├── openai_compatible.py  <- DeepSeek, Grok
# │   ├── gemini.py
# │   └── registry.py       <- Adapters built from settings
# │
# ├── orchestration/        <- Multi-provider pipeline
# │   ├── fan_out.py        <- Concurrent join-all
# │   └── selector.py       <- Filter, score, rank
# │
# ├── algorithms/           <- Scoring algorithms
# │   └── response_scorer.py
# │
# ├── llm/                  <- Prompt templates
# │   └── prompts.py
# │
# ├── interfaces/           <- Data Stores
# │   └── conversation_store.py
# │
# └── schemas/              <- Pydantic Models
#     └── chat_schemas.py
