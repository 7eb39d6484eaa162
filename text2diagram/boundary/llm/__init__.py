"""
LLM boundary module.

Exposes the generate contract and its LangChain/Gemini implementation.
"""

from text2diagram.boundary.llm.client import ChatModelClient, LLMClient, LLMResponse
from text2diagram.boundary.llm.factory import create_chat_model, create_llm_client

__all__ = [
    "ChatModelClient",
    "LLMClient",
    "LLMResponse",
    "create_chat_model",
    "create_llm_client",
]
