"""Pydantic schemas for document retrieval."""

from pydantic import BaseModel, Field


class DocumentHit(BaseModel):
    """A search hit returned by a document store."""

    id: str = Field(..., description="Store-specific document ID")
    title: str = Field(..., description="Document title")


class DocumentDetail(BaseModel):
    """Full plaintext of a single document."""

    id: str = Field(..., description="Store-specific document ID")
    title: str = Field(..., description="Document title")
    plaintext: str = Field("", description="Document body as plain text")


class RetrievedDocument(BaseModel):
    """A document prepared for the prompt, with its content truncated."""

    title: str
    content: str


class RetrievalResult(BaseModel):
    """Documents retrieved for one query."""

    documents: list[RetrievedDocument] = Field(default_factory=list)
    count: int = Field(0, description="Number of documents actually returned")

    @classmethod
    def empty(cls) -> "RetrievalResult":
        return cls(documents=[], count=0)
