"""
SOP Chat Service for retrieval-augmented answers.

This service runs one chat turn end to end: it searches the document store
for the user's latest message, composes the prompt with the whole
conversation, and asks the model for a schema-constrained reply.
"""

from sop_assistant.ai.base import AIProvider
from sop_assistant.ai.chat.exceptions import InvalidChatRequestError
from sop_assistant.ai.chat.generator import StructuredGenerator
from sop_assistant.ai.chat.prompts import PromptComposer
from sop_assistant.ai.chat.schemas import (
    GeneratedAnswer,
    Message,
    Sender,
    StructuredResponse,
    TextContent,
)
from sop_assistant.ai.rag.retriever import DocumentRetriever
from sop_assistant.utils.logger import logger


class SopChatService:
    """Service for answering questions from SOP documents."""

    def __init__(
        self,
        retriever: DocumentRetriever,
        provider: AIProvider,
        composer: PromptComposer | None = None,
    ):
        """
        Initialize the chat service.

        Args:
            retriever: Retriever backed by the document store
            provider: Language model provider
            composer: Prompt composer; a default one is used when omitted
        """
        self.retriever = retriever
        self.composer = composer or PromptComposer()
        self.generator = StructuredGenerator(provider)

    @staticmethod
    def latest_user_query(messages: list[Message]) -> str:
        """
        Extract the query text from the newest message.

        Raises:
            InvalidChatRequestError: If there are no messages or the last one
                is not a plain-text user message
        """
        if not messages:
            raise InvalidChatRequestError(
                "Messages are required and must be a non-empty array."
            )
        last = messages[-1]
        if last.sender != Sender.USER or not isinstance(last.content, TextContent):
            raise InvalidChatRequestError("The last message must be from the user.")
        return last.content.text

    async def answer(self, messages: list[Message]) -> StructuredResponse:
        """
        Answer the newest user message using retrieved SOPs.

        Args:
            messages: Full conversation history, newest last

        Returns:
            StructuredResponse: The model's reply with retrieval introspection

        Raises:
            InvalidChatRequestError: If the request is malformed
            RetrievalTransportError: If the document store is unreachable
            GenerationError: If the model fails or breaks the schema
        """
        query = self.latest_user_query(messages)

        retrieval = await self.retriever.retrieve(query)
        request = self.composer.compose(messages, retrieval.documents)
        answer = await self.generator.generate(request, GeneratedAnswer)

        logger.info(
            "Generated answer",
            documents_found=retrieval.count,
            is_not_found=bool(answer.is_not_found),
            is_out_of_scope=bool(answer.is_out_of_scope),
            has_clarification=bool(answer.clarification),
        )
        return StructuredResponse.from_answer(
            answer, search_query=query, documents_found=retrieval.count
        )
