"""Document store capability consumed by the retriever."""

from abc import ABC, abstractmethod

from sop_assistant.ai.rag.schemas import DocumentDetail, DocumentHit


class DocumentStore(ABC):
    """Abstract knowledge store that can be searched and read.

    Implementations raise DocumentStoreTransportError when the backend is
    unreachable and DocumentStoreError for any other failed request.
    """

    @abstractmethod
    async def search(self, query: str) -> list[DocumentHit]:
        """Search for documents relevant to a free-text query.

        Args:
            query: The user's raw query text

        Returns:
            list[DocumentHit]: Matching documents, possibly empty
        """
        pass

    @abstractmethod
    async def fetch_detail(self, document_id: str) -> DocumentDetail:
        """Fetch the full plaintext of a document.

        Args:
            document_id: ID from a previous search hit

        Returns:
            DocumentDetail: The document's title and plaintext
        """
        pass
