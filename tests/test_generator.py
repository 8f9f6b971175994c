"""Tests for structured and title generation."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from sop_assistant.ai.base import (
    ContentGenerationResult,
    ConversationRole,
    ConversationTurn,
    GenerationRequest,
)
from sop_assistant.ai.chat.exceptions import GenerationError
from sop_assistant.ai.chat.generator import StructuredGenerator, TitleGenerator
from sop_assistant.ai.chat.prompts import TITLE_INSTRUCTION
from sop_assistant.ai.chat.schemas import GeneratedAnswer
from sop_assistant.ai.gemini.config import GeminiSettings
from sop_assistant.ai.gemini.exceptions import (
    GeminiAPIError,
    GeminiContentGenerationError,
)
from sop_assistant.ai.providers import GeminiProvider


@pytest.fixture
def provider():
    return AsyncMock()


@pytest.fixture
def request_():
    return GenerationRequest(
        system_instruction="rules",
        conversation=[ConversationTurn(role=ConversationRole.USER, text="hi")],
    )


class TestStructuredGenerator:
    """Test cases for StructuredGenerator."""

    @pytest.mark.asyncio
    async def test_generate_passes_request_and_schema(self, provider, request_):
        answer = GeneratedAnswer(summary="X", sources=["Doc A"])
        provider.generate_structured_content.return_value = answer

        result = await StructuredGenerator(provider).generate(request_, GeneratedAnswer)

        assert result is answer
        provider.generate_structured_content.assert_awaited_once_with(
            system_instruction="rules",
            conversation=request_.conversation,
            response_model=GeneratedAnswer,
        )

    @pytest.mark.asyncio
    async def test_provider_status_is_kept(self, provider, request_):
        """Test provider error statuses survive the wrapping."""
        provider.generate_structured_content.side_effect = GeminiAPIError(
            "Gemini API error: unavailable", status_code=503
        )

        with pytest.raises(GenerationError) as exc_info:
            await StructuredGenerator(provider).generate(request_)

        assert exc_info.value.status_code == 503
        assert isinstance(exc_info.value.__cause__, GeminiAPIError)

    @pytest.mark.asyncio
    async def test_unparseable_output_is_a_generation_error(self, provider, request_):
        provider.generate_structured_content.side_effect = GeminiContentGenerationError(
            "Failed to parse structured response"
        )

        with pytest.raises(GenerationError) as exc_info:
            await StructuredGenerator(provider).generate(request_)

        assert "Failed to parse structured response" in exc_info.value.message
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_unexpected_errors_are_wrapped(self, provider, request_):
        provider.generate_structured_content.side_effect = RuntimeError("socket closed")

        with pytest.raises(GenerationError):
            await StructuredGenerator(provider).generate(request_)

    @pytest.mark.asyncio
    async def test_reply_with_unknown_keys_is_a_generation_error(self, request_):
        """Test a model reply with no schema fields never becomes an empty answer."""
        reply = MagicMock()
        reply.text = '{"answer": "free text", "confidence": 0.9}'
        reply.candidates = []
        reply.usage_metadata = None
        genai_client = MagicMock()
        genai_client.aio.models.generate_content = AsyncMock(return_value=reply)
        gemini = GeminiProvider(settings=GeminiSettings(api_key="test-gemini-key"))
        gemini._client = genai_client

        with pytest.raises(GenerationError):
            await StructuredGenerator(gemini).generate(request_)

    def test_answer_schema_forbids_unknown_keys(self):
        with pytest.raises(ValidationError):
            GeneratedAnswer.model_validate_json('{"answer": "free text", "confidence": 0.9}')


class TestTitleGenerator:
    """Test cases for TitleGenerator."""

    @pytest.mark.asyncio
    async def test_title_is_stripped(self, provider):
        provider.generate_content.return_value = ContentGenerationResult(
            text="  Handling New Leads \n"
        )

        title = await TitleGenerator(provider).generate("How do I handle a lead?")

        assert title == "Handling New Leads"
        provider.generate_content.assert_awaited_once_with(
            prompt="How do I handle a lead?", system_instruction=TITLE_INSTRUCTION
        )

    @pytest.mark.asyncio
    async def test_blank_title_falls_back(self, provider):
        provider.generate_content.return_value = ContentGenerationResult(text="   ")

        assert await TitleGenerator(provider).generate("hello") == "New Chat"

    @pytest.mark.asyncio
    async def test_provider_failure_raises(self, provider):
        provider.generate_content.side_effect = GeminiAPIError("quota", status_code=429)

        with pytest.raises(GenerationError):
            await TitleGenerator(provider).generate("hello")
