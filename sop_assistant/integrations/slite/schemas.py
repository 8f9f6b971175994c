"""
Slite-specific Pydantic schemas for request and response models.

This module contains the Pydantic models for the subset of the Slite API
used for SOP retrieval and the connection test.
"""

from pydantic import BaseModel, Field, field_validator

from sop_assistant.integrations.slite.constants import NoteId


# Request Models
class SearchNotesRequest(BaseModel):
    """Request model for searching notes."""

    query: str = Field(..., description="Free-text search query")


# Nested Models
class NoteSummary(BaseModel):
    """A note as returned by search and list endpoints."""

    id: NoteId = Field(..., description="Unique ID of the note")
    title: str = Field("", description="Title of the note")


class Note(BaseModel):
    """Full note details."""

    id: NoteId = Field(..., description="Unique ID of the note")
    title: str = Field("", description="Title of the note")
    plaintext: str = Field("", description="Note body rendered as plain text")

    @field_validator("plaintext", mode="before")
    @classmethod
    def validate_plaintext(cls, v: str | None) -> str:
        """Treat a missing body as empty text."""
        return v or ""


# Response Models
class NoteListResponse(BaseModel):
    """Response model for search and list endpoints."""

    data: list[NoteSummary] | None = Field(
        None, description="Matching notes; absent when nothing matched"
    )

    @field_validator("data", mode="before")
    @classmethod
    def validate_data(cls, v: object) -> list | None:
        """Anything other than a list means no notes."""
        if not isinstance(v, list):
            return None
        return v


class NoteDetailsResponse(BaseModel):
    """Response model for the note details endpoint."""

    data: Note = Field(..., description="The requested note")


class ConnectionTestResponse(BaseModel):
    """Result of checking that the Slite API is reachable with our key."""

    success: bool = Field(..., description="Whether the connection succeeded")
    message: str = Field(..., description="Human readable outcome")
    data: list[str] | None = Field(
        None, description="Titles of the most recent notes on success"
    )
