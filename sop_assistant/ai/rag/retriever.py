"""
Document retriever for the chat pipeline.

Searches the document store for the user's query, fetches every hit
concurrently and trims each document to a fixed character budget so the
prompt stays bounded regardless of document length.
"""

import asyncio

from sop_assistant.ai.rag.base import DocumentStore
from sop_assistant.ai.rag.exceptions import (
    DocumentStoreError,
    DocumentStoreTransportError,
    RetrievalTransportError,
)
from sop_assistant.ai.rag.schemas import (
    DocumentDetail,
    DocumentHit,
    RetrievalResult,
    RetrievedDocument,
)
from sop_assistant.utils.logger import logger

ELLIPSIS = "..."
DEFAULT_CHAR_LIMIT = 1000


def truncate_content(text: str, limit: int = DEFAULT_CHAR_LIMIT) -> str:
    """Cut text to `limit` characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


class DocumentRetriever:
    """Retrieves and prepares documents for a single chat turn."""

    def __init__(self, store: DocumentStore, char_limit: int = DEFAULT_CHAR_LIMIT):
        """
        Initialize the retriever.

        Args:
            store: Document store to search and read from
            char_limit: Maximum characters kept from each document
        """
        self.store = store
        self.char_limit = char_limit

    async def retrieve(self, query: str) -> RetrievalResult:
        """
        Find documents relevant to a query.

        A search that returns nothing, or that the store rejects, yields an
        empty result. Documents whose details cannot be fetched are dropped.

        Args:
            query: The user's latest raw message

        Returns:
            RetrievalResult: Truncated documents and how many were returned

        Raises:
            RetrievalTransportError: If the search call cannot reach the store
        """
        logger.info("Searching document store", query=query)

        try:
            hits = await self.store.search(query)
        except DocumentStoreTransportError as e:
            logger.error("Document search failed at transport level", error=str(e))
            raise RetrievalTransportError(f"Document search failed: {e}") from e
        except DocumentStoreError as e:
            logger.warning(
                "Document search was rejected, continuing without documents",
                error=str(e),
                status_code=e.status_code,
            )
            return RetrievalResult.empty()

        logger.info("Found potential documents", hit_count=len(hits))
        if not hits:
            return RetrievalResult.empty()

        details = await asyncio.gather(
            *(self.store.fetch_detail(hit.id) for hit in hits),
            return_exceptions=True,
        )

        documents: list[RetrievedDocument] = []
        for hit, detail in zip(hits, details):
            if isinstance(detail, BaseException):
                self._log_fetch_failure(hit, detail)
                continue
            documents.append(self._prepare(detail))

        logger.info(
            "Returning documents to the model",
            document_count=len(documents),
            dropped_count=len(hits) - len(documents),
        )
        return RetrievalResult(documents=documents, count=len(documents))

    def _prepare(self, detail: DocumentDetail) -> RetrievedDocument:
        return RetrievedDocument(
            title=detail.title,
            content=truncate_content(detail.plaintext, self.char_limit),
        )

    @staticmethod
    def _log_fetch_failure(hit: DocumentHit, error: BaseException) -> None:
        if not isinstance(error, Exception):
            # CancelledError and friends must still propagate
            raise error
        logger.warning(
            "Failed to fetch document details, dropping hit",
            document_id=hit.id,
            title=hit.title,
            error=str(error),
        )
