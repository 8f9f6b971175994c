"""
Prompt composition for the SOP chat pipeline.

The policy the model must follow lives in the instruction template, so it is
stated the same way on every turn; only the document block changes.
"""

import json

from sop_assistant.ai.base import ConversationRole, ConversationTurn, GenerationRequest
from sop_assistant.ai.chat.schemas import (
    Message,
    Sender,
    StructuredContent,
    StructuredResponse,
    TextContent,
)
from sop_assistant.ai.rag.schemas import RetrievedDocument

SYSTEM_INSTRUCTION_TEMPLATE = """You are the {assistant_name}, a sharp, friendly, and slightly witty AI partner for the team. Your primary mission is to provide clear, accurate answers based *only* on the provided Standard Operating Procedures (SOPs).

**Core Rules:**
1.  **Accuracy is Paramount:** Your answers MUST be derived exclusively from the content of the provided SOPs. Do not use external knowledge or invent information.
2.  **Engaging Personality:** Start your responses with a friendly greeting (e.g., "Happy to help!", "Alright, let's take a look at that for you."). Light humor is welcome where appropriate.
3.  **Cite Your Sources:** Every answer that provides SOP information must cite the exact 'title' of the SOP document(s) used in the 'sources' field. This is non-negotiable.
4.  **Prioritize Answering:** Your main goal is to be helpful. If a user's question is broad, use the provided SOPs to give a comprehensive summary. Only ask for clarification (in the 'clarification' field) if a query is completely ambiguous.
5.  **Use Chat History:** The entire conversation is provided. Use the context of previous messages to understand the user's intent.
6.  **Handle Empty Search Results:** If the "Provided SOPs" section is empty (i.e., "[]"), it means the search found no relevant documents. In this case, you MUST return {{"isNotFound": true}} immediately. Do not invent an answer.
7.  **Handle "Out of Scope":** If the user asks for something clearly unrelated to the team's SOPs (like writing a poem or telling a joke), respond with {{"isOutOfScope": true}}. For general questions about your capabilities (e.g., "What SOPs do you have?"), simply explain your purpose as an SOP assistant and do not set any flags.
8.  **Structured Responses:** Your final output must always be a JSON object adhering to the specified schema.

**Provided SOPs (based on user query):**
{documents}
"""

TITLE_INSTRUCTION = (
    "You are an expert at creating concise, descriptive titles. Based on the user's "
    "first message to a chatbot, create a short title for the chat session. The title "
    "should be no more than 5 words and should accurately summarize the user's main "
    'intent or question. Do not add any introductory text like "Here is the title:". '
    "Just return the title itself."
)

# Introspection fields are added by the service, never produced by the model
_DEBUG_FIELDS = {"debug_search_query", "debug_documents_found"}


def format_documents(documents: list[RetrievedDocument]) -> str:
    """Serialize documents into the JSON block embedded in the prompt."""
    return json.dumps(
        [document.model_dump() for document in documents],
        indent=2,
        ensure_ascii=False,
    )


def serialize_response(response: StructuredResponse) -> str:
    """Render an earlier assistant reply the way the model originally produced it."""
    if response.has_clarification:
        return response.clarification
    return json.dumps(
        response.model_dump(by_alias=True, exclude_none=True, exclude=_DEBUG_FIELDS),
        ensure_ascii=False,
    )


def message_to_turn(message: Message) -> ConversationTurn:
    """Convert a chat message into a model conversation turn."""
    if message.sender == Sender.USER:
        role = ConversationRole.USER
    else:
        role = ConversationRole.MODEL

    if isinstance(message.content, TextContent):
        text = message.content.text
    elif isinstance(message.content, StructuredContent):
        text = serialize_response(message.content.response)
    else:
        raise TypeError(f"Unsupported message content: {type(message.content).__name__}")

    return ConversationTurn(role=role, text=text)


class PromptComposer:
    """Builds the generation request for one chat turn."""

    def __init__(self, assistant_name: str = "SOP Assistant"):
        self.assistant_name = assistant_name

    def build_system_instruction(self, documents: list[RetrievedDocument]) -> str:
        return SYSTEM_INSTRUCTION_TEMPLATE.format(
            assistant_name=self.assistant_name,
            documents=format_documents(documents),
        )

    def compose(
        self, history: list[Message], documents: list[RetrievedDocument]
    ) -> GenerationRequest:
        """
        Merge retrieved documents and conversation history into one request.

        Args:
            history: Every message of the session so far, oldest first
            documents: Documents retrieved for the latest user message

        Returns:
            GenerationRequest: System instruction plus conversation turns
        """
        return GenerationRequest(
            system_instruction=self.build_system_instruction(documents),
            conversation=[message_to_turn(message) for message in history],
        )
