"""Document retrieval for retrieval-augmented chat."""

from sop_assistant.ai.rag.base import DocumentStore
from sop_assistant.ai.rag.exceptions import (
    DocumentStoreError,
    DocumentStoreTransportError,
    RetrievalTransportError,
)
from sop_assistant.ai.rag.retriever import DocumentRetriever
from sop_assistant.ai.rag.schemas import (
    DocumentDetail,
    DocumentHit,
    RetrievalResult,
    RetrievedDocument,
)

__all__ = [
    "DocumentDetail",
    "DocumentHit",
    "DocumentRetriever",
    "DocumentStore",
    "DocumentStoreError",
    "DocumentStoreTransportError",
    "RetrievalResult",
    "RetrievalTransportError",
    "RetrievedDocument",
]
