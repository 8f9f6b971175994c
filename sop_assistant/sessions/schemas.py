"""Pydantic schemas for locally persisted chat sessions."""

from pydantic import BaseModel, ConfigDict, Field

from sop_assistant.ai.chat.schemas import Message

FALLBACK_TITLE_WORDS = 5


def fallback_title(message_text: str) -> str:
    """Provisional session title: the first few words of the first message."""
    return " ".join(message_text.split(" ")[:FALLBACK_TITLE_WORDS])


class ChatSession(BaseModel):
    """A named, ordered conversation thread.

    Sessions are never mutated in place; every change produces a new value
    so concurrent completions can each apply their own update.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable session ID")
    title: str = Field(..., description="Fallback or AI-generated title")
    messages: list[Message] = Field(
        default_factory=list, description="Full history, oldest first"
    )

    def with_message(self, message: Message) -> "ChatSession":
        return self.model_copy(update={"messages": [*self.messages, message]})

    def with_title(self, title: str) -> "ChatSession":
        return self.model_copy(update={"title": title})
