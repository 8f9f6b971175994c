"""
Slite integration constants and enums.

This module contains the API endpoints and static values used
across the Slite integration.
"""

from enum import Enum


class SliteEndpoint(str, Enum):
    """Slite API endpoints."""

    SEARCH_NOTES = "/v1/search/notes"
    NOTE_DETAILS = "/v1/notes/{note_id}"
    LIST_NOTES = "/v1/notes"


CONNECTION_TEST_LIMIT = 5

# Type aliases for better readability
NoteId = str
