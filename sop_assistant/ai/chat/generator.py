"""
Structured and title generation on top of an AI provider.

Every provider or parsing failure is reported as a single GenerationError;
nothing here ever returns a partial result.
"""

from typing import TypeVar

from pydantic import BaseModel

from sop_assistant.ai.base import AIProvider, GenerationRequest
from sop_assistant.ai.chat.exceptions import GenerationError
from sop_assistant.ai.chat.prompts import TITLE_INSTRUCTION
from sop_assistant.ai.chat.schemas import GeneratedAnswer
from sop_assistant.utils.logger import logger

T = TypeVar("T", bound=BaseModel)

DEFAULT_TITLE = "New Chat"


class StructuredGenerator:
    """Runs a composed request against the model with a fixed output schema."""

    def __init__(self, provider: AIProvider):
        self.provider = provider

    async def generate(
        self,
        request: GenerationRequest,
        schema: type[T] = GeneratedAnswer,
    ) -> T:
        """
        Generate a schema-conformant reply.

        Args:
            request: The composed generation request
            schema: Pydantic model the reply must match

        Returns:
            Instance of schema parsed from the model output

        Raises:
            GenerationError: On transport failure, error status or unparseable output
        """
        logger.info(
            "Generating structured answer",
            turn_count=len(request.conversation),
            schema=schema.__name__,
        )
        try:
            return await self.provider.generate_structured_content(
                system_instruction=request.system_instruction,
                conversation=request.conversation,
                response_model=schema,
            )
        except Exception as e:
            logger.error("Structured generation failed", error=str(e))
            raise GenerationError(
                f"Structured generation failed: {e}",
                status_code=getattr(e, "status_code", None),
            ) from e


class TitleGenerator:
    """Asks the model for a short session title."""

    def __init__(self, provider: AIProvider):
        self.provider = provider

    async def generate(self, message: str) -> str:
        """
        Generate a title of at most five words for a session.

        Args:
            message: The first user message of the session

        Returns:
            str: The stripped title, or "New Chat" when the model returns nothing

        Raises:
            GenerationError: If the model call fails
        """
        try:
            result = await self.provider.generate_content(
                prompt=message, system_instruction=TITLE_INSTRUCTION
            )
        except Exception as e:
            logger.error("Title generation failed", error=str(e))
            raise GenerationError(f"Failed to generate title: {e}") from e

        return result.text.strip() or DEFAULT_TITLE
