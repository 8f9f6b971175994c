"""
Response classification and rendering.

A structured reply may carry fields that contradict each other, so the
outcome is decided by a fixed precedence: not found, out of scope,
clarification, then answer.
"""

from enum import Enum

from pydantic import BaseModel, Field

from sop_assistant.ai.chat.schemas import Message, StructuredContent, StructuredResponse

NOT_FOUND_MESSAGE = "I couldn't find an SOP that covers this. You can request one here:"
OUT_OF_SCOPE_MESSAGE = (
    "I can only answer using our internal SOPs. "
    "Would you like me to search for an SOP on this topic?"
)


class Outcome(str, Enum):
    """Semantic outcome of one structured reply."""

    ANSWER = "answer"
    CLARIFICATION = "clarification"
    NOT_FOUND = "not_found"
    OUT_OF_SCOPE = "out_of_scope"


class DebugInfo(BaseModel):
    """What the retriever did for this reply."""

    search_query: str
    documents_found: int


class RenderedResponse(BaseModel):
    """Presentation-neutral view of a message, ready for any frontend."""

    outcome: Outcome | None = Field(
        None, description="Outcome for structured replies; None for plain text"
    )
    text: str | None = None
    steps: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)
    request_url: str | None = Field(
        None, description="Where to request a new SOP (not-found replies only)"
    )
    debug: DebugInfo | None = None


def classify(response: StructuredResponse) -> Outcome:
    """Assign exactly one outcome to a structured reply."""
    if response.is_not_found:
        return Outcome.NOT_FOUND
    if response.is_out_of_scope:
        return Outcome.OUT_OF_SCOPE
    if response.has_clarification:
        return Outcome.CLARIFICATION
    return Outcome.ANSWER


def _debug_info(response: StructuredResponse) -> DebugInfo | None:
    if response.debug_search_query is None or response.debug_documents_found is None:
        return None
    return DebugInfo(
        search_query=response.debug_search_query,
        documents_found=response.debug_documents_found,
    )


def render(response: StructuredResponse, request_url: str | None = None) -> RenderedResponse:
    """
    Turn a structured reply into what should be shown for its outcome.

    Clarifications show only the question even if an answer is also present.
    An answer without a summary still renders whatever fields it has.

    Args:
        response: The structured reply
        request_url: Link offered when no SOP was found

    Returns:
        RenderedResponse: The view for the reply's outcome
    """
    outcome = classify(response)
    debug = _debug_info(response)

    if outcome == Outcome.NOT_FOUND:
        return RenderedResponse(
            outcome=outcome, text=NOT_FOUND_MESSAGE, request_url=request_url, debug=debug
        )
    if outcome == Outcome.OUT_OF_SCOPE:
        return RenderedResponse(outcome=outcome, text=OUT_OF_SCOPE_MESSAGE, debug=debug)
    if outcome == Outcome.CLARIFICATION:
        return RenderedResponse(outcome=outcome, text=response.clarification, debug=debug)

    return RenderedResponse(
        outcome=outcome,
        text=response.summary or None,
        steps=response.steps or [],
        notes=response.notes or [],
        sources=response.sources or [],
        debug=debug,
    )


def render_message(message: Message, request_url: str | None = None) -> RenderedResponse:
    """Render either kind of message content."""
    if isinstance(message.content, StructuredContent):
        return render(message.content.response, request_url=request_url)
    return RenderedResponse(text=message.content.text)
