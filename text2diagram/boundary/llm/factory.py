"""
LLM client factory.

Builds the Gemini chat model from settings and wraps it in the boundary
client.

Dependencies: langchain_google_genai, text2diagram.configs
System role: Provider wiring for production use
"""

import logging

from langchain_google_genai import ChatGoogleGenerativeAI

from text2diagram.boundary.llm.client import ChatModelClient
from text2diagram.configs.llm import LLMSettings

logger = logging.getLogger(__name__)


def create_chat_model(settings: LLMSettings) -> ChatGoogleGenerativeAI:
    """
    Create the Gemini chat model.

    Args:
        settings: LLM configuration

    Returns:
        ChatGoogleGenerativeAI: Configured chat model
    """
    kwargs = {
        "model": settings.model_id,
        "temperature": settings.temperature,
        "max_retries": settings.max_retries,
    }
    if settings.timeout_seconds is not None:
        kwargs["timeout"] = settings.timeout_seconds
    if settings.google_api_key is not None:
        kwargs["google_api_key"] = settings.google_api_key.get_secret_value()

    logger.info(f"{__name__}:create_chat_model - model_id={settings.model_id}")
    return ChatGoogleGenerativeAI(**kwargs)


def create_llm_client(settings: LLMSettings) -> ChatModelClient:
    """Create the production LLM client from settings."""
    return ChatModelClient(create_chat_model(settings))
