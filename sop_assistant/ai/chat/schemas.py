"""
Pydantic schemas for the SOP chat pipeline.

Wire names follow the chat frontend's camelCase JSON (``isNotFound``,
``isOutOfScope``); every model also accepts the snake_case field names.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class GeneratedAnswer(BaseModel):
    """The output schema the language model must follow.

    Unknown keys are rejected and instances never change once built.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    summary: str | None = Field(None, description="A concise summary of the answer.")
    steps: list[str] | None = Field(
        None, description="A list of actionable steps from the SOP."
    )
    notes: list[str] | None = Field(
        None, description="A list of important notes or reminders from the SOP."
    )
    sources: list[str] | None = Field(
        None,
        description="An array containing the exact 'title' of the SOP(s) used for the answer.",
    )
    clarification: str | None = Field(
        None, description="A question to ask the user for clarification."
    )
    is_not_found: bool | None = Field(
        None,
        alias="isNotFound",
        description="Set to true if no relevant SOP is found.",
    )
    is_out_of_scope: bool | None = Field(
        None,
        alias="isOutOfScope",
        description="Set to true if the query is outside the scope of SOPs.",
    )

    @property
    def has_clarification(self) -> bool:
        """Whether a non-blank clarification question is present."""
        return bool(self.clarification and self.clarification.strip())


class StructuredResponse(GeneratedAnswer):
    """A generated answer plus retrieval introspection for the frontend."""

    debug_search_query: str | None = Field(
        None, alias="debugSearchQuery", description="Query sent to the document store"
    )
    debug_documents_found: int | None = Field(
        None,
        alias="debugDocumentsFound",
        description="Number of documents given to the model",
    )

    @classmethod
    def from_answer(
        cls,
        answer: GeneratedAnswer,
        search_query: str | None = None,
        documents_found: int | None = None,
    ) -> "StructuredResponse":
        return cls(
            **answer.model_dump(exclude_none=True),
            debug_search_query=search_query,
            debug_documents_found=documents_found,
        )


APOLOGY_SUMMARY = "Sorry, I encountered an error. Please try again."


class TextContent(BaseModel):
    """Plain text message content (what users type)."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class StructuredContent(BaseModel):
    """Structured assistant reply content."""

    model_config = ConfigDict(frozen=True)

    type: Literal["structured"] = "structured"
    response: StructuredResponse


MessageContent = Annotated[TextContent | StructuredContent, Field(discriminator="type")]


class Message(BaseModel):
    """A single chat message. Messages never change once appended."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique message ID")
    sender: Sender = Field(..., description="Who wrote the message")
    content: MessageContent = Field(..., description="Text or structured reply")


class ChatRequest(BaseModel):
    """Chat request with the full message history, newest last."""

    messages: list[Message] = Field(default_factory=list)


class GenerateTitleRequest(BaseModel):
    """Request model for generating a session title from the first message."""

    message: str = Field(..., description="The first user message of the session")


class GenerateTitleResponse(BaseModel):
    """Response model for a generated session title."""

    title: str


class ErrorResponse(BaseModel):
    """Error payload returned by the chat endpoints."""

    error: str
