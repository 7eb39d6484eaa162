"""
LLM call boundary.

Defines the ``generate(prompt) -> LLMResponse`` contract used by the
analyzers and a LangChain chat-model adapter implementing it. The boundary
never retries; retry policy lives in the retrying analyzer.

Dependencies: langchain_core, pydantic
System role: Single seam between orchestration and the LLM provider
"""

import asyncio
import logging
from typing import Protocol, runtime_checkable

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage
from pydantic import BaseModel

from text2diagram.core.exceptions import LLMInvocationError

logger = logging.getLogger(__name__)


class LLMResponse(BaseModel):
    """Free-form completion returned by the provider."""

    content: str


@runtime_checkable
class LLMClient(Protocol):
    """Anything that turns a prompt string into a text completion."""

    async def generate(self, prompt: str) -> LLMResponse:
        ...


def _content_to_text(content) -> str:
    """Flatten LangChain message content (str or list of parts) to text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return str(content) if content is not None else ""


class ChatModelClient:
    """
    LLM client backed by a LangChain chat model.

    The wrapped model is stateless and safe to share across concurrent
    requests.
    """

    def __init__(self, chat_model: BaseChatModel) -> None:
        """
        Initialize client.

        Args:
            chat_model: Any LangChain chat model (Gemini in production)
        """
        self._model = chat_model

    async def generate(self, prompt: str) -> LLMResponse:
        """
        Send a single-turn prompt and return the completion text.

        Args:
            prompt: Fully rendered prompt

        Returns:
            LLMResponse: Completion content

        Raises:
            LLMInvocationError: If the provider call fails
        """
        logger.debug(f"{__name__}:generate - START prompt_len={len(prompt)}")
        try:
            message = await self._model.ainvoke([HumanMessage(content=prompt)])
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"{__name__}:generate - {type(e).__name__}: {e}")
            raise LLMInvocationError(
                f"LLM call failed: {type(e).__name__}: {e}",
                {"provider_error": type(e).__name__},
            ) from e

        text = _content_to_text(message.content)
        logger.debug(f"{__name__}:generate - COMPLETE response_len={len(text)}")
        return LLMResponse(content=text)
