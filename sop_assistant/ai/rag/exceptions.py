"""Exceptions raised by document stores and the retriever."""


class DocumentStoreError(Exception):
    """Base exception for document store failures.

    A store raising this (and not a transport error) got an answer from the
    backend, just not a usable one, e.g. a non-2xx status.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DocumentStoreTransportError(DocumentStoreError):
    """Raised when the document store could not be reached at all."""

    pass


class RetrievalTransportError(Exception):
    """Raised when the search call fails at the transport layer.

    Unlike an empty or rejected search, this aborts answer generation.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
