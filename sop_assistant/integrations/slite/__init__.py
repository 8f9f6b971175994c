"""
Slite integrations package.

This package provides the Slite-backed document store used to retrieve
SOPs, including note search, note details and a connection test.
"""

from .client import SliteClient
from .exceptions import (
    SliteAPIError,
    SliteAuthenticationError,
    SliteBadRequestError,
    SliteConnectionError,
    SliteNotFoundError,
    SliteRateLimitError,
    SliteServerError,
    SliteTimeoutError,
)
from .schemas import ConnectionTestResponse, Note, NoteSummary

__all__ = [
    "ConnectionTestResponse",
    "Note",
    "NoteSummary",
    "SliteAPIError",
    "SliteAuthenticationError",
    "SliteBadRequestError",
    "SliteClient",
    "SliteConnectionError",
    "SliteNotFoundError",
    "SliteRateLimitError",
    "SliteServerError",
    "SliteTimeoutError",
]
