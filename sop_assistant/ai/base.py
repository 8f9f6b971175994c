"""Base classes for AI provider abstraction."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T", bound=BaseModel)


class ConversationRole(str, Enum):
    """Speaker of a conversation turn, as the language model sees it."""

    USER = "user"
    MODEL = "model"


class ConversationTurn(BaseModel):
    """A single turn of conversation history sent to the model."""

    role: ConversationRole
    text: str


class GenerationRequest(BaseModel):
    """Everything the model needs to produce one structured reply.

    The system instruction carries the policy and the retrieved documents;
    the conversation carries the full chat history, oldest first.
    """

    system_instruction: str
    conversation: list[ConversationTurn] = Field(default_factory=list)


class ContentGenerationResult(BaseModel):
    """Result from content generation."""

    text: str
    usage: dict[str, Any] | None = None
    finish_reason: str | None = None


class AIProvider(ABC):
    """Abstract base class for AI providers.

    Provides a common interface for language-model backends so the chat
    pipeline does not depend on a concrete vendor SDK.
    """

    @abstractmethod
    async def generate_content(
        self,
        prompt: str,
        system_instruction: str | None = None,
        **kwargs,
    ) -> ContentGenerationResult:
        """Generate free-text content.

        Args:
            prompt: Text prompt for generation
            system_instruction: Optional system prompt
            **kwargs: Provider-specific options (temperature, model, etc.)

        Returns:
            ContentGenerationResult: Generated content with metadata
        """
        pass

    @abstractmethod
    async def generate_structured_content(
        self,
        system_instruction: str,
        conversation: list[ConversationTurn],
        response_model: type[T],
        **kwargs,
    ) -> T:
        """Generate schema-constrained content for a multi-turn conversation.

        Args:
            system_instruction: System prompt for the model
            conversation: Ordered conversation history
            response_model: Pydantic model describing the required output shape
            **kwargs: Provider-specific options

        Returns:
            Instance of response_model with generated data
        """
        pass
