"""Tests for the LLM call boundary and provider factory."""

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import SecretStr

from text2diagram.boundary.llm.client import ChatModelClient, LLMClient, LLMResponse, _content_to_text
from text2diagram.boundary.llm.factory import create_chat_model, create_llm_client
from text2diagram.configs.llm import LLMSettings
from text2diagram.core.exceptions import LLMInvocationError


class _FailingChatModel(FakeListChatModel):
    """Chat model whose every call fails like a provider outage."""

    async def ainvoke(self, *args, **kwargs):
        raise TimeoutError("deadline exceeded")


class TestChatModelClient:
    """LangChain chat-model adapter."""

    @pytest.mark.asyncio
    async def test_returns_completion_text(self) -> None:
        client = ChatModelClient(FakeListChatModel(responses=['```json\n{"Entities": ["A"]}\n```']))

        response = await client.generate("Find entities")

        assert isinstance(response, LLMResponse)
        assert response.content == '```json\n{"Entities": ["A"]}\n```'

    @pytest.mark.asyncio
    async def test_provider_errors_are_wrapped(self) -> None:
        client = ChatModelClient(_FailingChatModel(responses=["unused"]))

        with pytest.raises(LLMInvocationError) as exc_info:
            await client.generate("Find entities")

        assert exc_info.value.message == "LLM call failed: TimeoutError: deadline exceeded"
        assert exc_info.value.details == {"provider_error": "TimeoutError"}

    def test_satisfies_protocol(self) -> None:
        assert isinstance(ChatModelClient(FakeListChatModel(responses=["x"])), LLMClient)

    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            ("plain", "plain"),
            (["a", {"type": "text", "text": "b"}, {"type": "image_url", "image_url": "u"}], "ab"),
            (None, ""),
        ],
    )
    def test_content_flattening(self, content, expected) -> None:
        assert _content_to_text(content) == expected


class TestFactory:
    """Gemini wiring from settings."""

    def test_create_chat_model(self) -> None:
        settings = LLMSettings(
            model_id="gemini-2.0-flash",
            temperature=0.0,
            google_api_key=SecretStr("test-key"),
        )

        model = create_chat_model(settings)

        assert isinstance(model, ChatGoogleGenerativeAI)
        assert "gemini-2.0-flash" in model.model
        assert model.temperature == 0.0

    def test_create_llm_client(self) -> None:
        client = create_llm_client(LLMSettings(google_api_key=SecretStr("test-key")))
        assert isinstance(client, ChatModelClient)
