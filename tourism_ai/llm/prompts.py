"""
Langchain Prompt Templates
Defines the tourism assistant prompts sent to every provider
"""

from langchain_core.prompts import PromptTemplate

# ============================================
# Tourism Assistant Prompts
# ============================================

SYSTEM_PROMPT = PromptTemplate(
    input_variables=["region"],
    template="""You are a knowledgeable tourism assistant for {region}, India. Provide comprehensive and detailed information about {region}'s tourism, culture, and heritage."""
)

USER_PROMPT = PromptTemplate(
    input_variables=["language", "message"],
    template='Question in {language}: "{message}"'
)

# Gemini takes a single user turn, so the instructions are inlined
SINGLE_TURN_PROMPT = PromptTemplate(
    input_variables=["region", "language", "message"],
    template="""You are a knowledgeable tourism assistant for {region}, India. Answer the following question:

Question in {language}: "{message}"

Provide a detailed response about {region} including its tourism destinations, cultural heritage, local customs, festivals, cuisine, art forms, and travel tips."""
)


def build_chat_messages(message: str, language: str, region: str) -> list:
    """Build the system + user message list for chat-completion style APIs"""
    return [
        {"role": "system", "content": SYSTEM_PROMPT.format(region=region)},
        {"role": "user", "content": USER_PROMPT.format(language=language, message=message)},
    ]


def build_single_turn_prompt(message: str, language: str, region: str) -> str:
    """Build the combined prompt for single-turn generation APIs"""
    return SINGLE_TURN_PROMPT.format(region=region, language=language, message=message)
