"""Slite API client implementation."""

from typing import Any

import httpx
from pydantic import ValidationError

from sop_assistant.ai.rag.base import DocumentStore
from sop_assistant.ai.rag.schemas import DocumentDetail, DocumentHit
from sop_assistant.integrations.slite.config import SliteSettings
from sop_assistant.integrations.slite.constants import (
    CONNECTION_TEST_LIMIT,
    SliteEndpoint,
)
from sop_assistant.integrations.slite.exceptions import (
    SliteAPIError,
    SliteAuthenticationError,
    SliteBadRequestError,
    SliteConnectionError,
    SliteNotFoundError,
    SliteRateLimitError,
    SliteServerError,
    SliteTimeoutError,
)
from sop_assistant.integrations.slite.schemas import (
    NoteDetailsResponse,
    NoteListResponse,
    SearchNotesRequest,
)
from sop_assistant.utils.logger import logger


class SliteClient(DocumentStore):
    """Async client for the Slite API.

    Implements the document store used for SOP retrieval: note search and
    note details, plus a small listing call for connectivity checks.
    """

    def __init__(
        self,
        settings: SliteSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Slite client.

        Args:
            settings: Slite settings instance with API configuration
            transport: Optional httpx transport, mainly for tests
        """
        self.settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.settings.base_url,
                headers={
                    "Authorization": f"Bearer {self.settings.api_key.strip()}",
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                },
                timeout=self.settings.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        data: dict | None = None,
        params: dict | None = None,
    ) -> dict[str, Any]:
        """Make an HTTP request to the Slite API.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            data: Optional request body data
            params: Optional query parameters

        Returns:
            Response data as dictionary

        Raises:
            SliteAPIError: For error statuses and unparseable responses
            SliteConnectionError: If the API cannot be reached
        """
        client = await self._ensure_client()

        try:
            response = await client.request(method, endpoint, json=data, params=params)
        except httpx.TimeoutException as e:
            raise SliteTimeoutError(
                f"Request to {endpoint} timed out", timeout_duration=self.settings.timeout
            ) from e
        except httpx.RequestError as e:
            raise SliteConnectionError(f"Request error: {e}", original_error=e) from e

        if response.status_code == 401:
            raise SliteAuthenticationError("Invalid API key")
        elif response.status_code == 400:
            raise SliteBadRequestError(f"Bad request: {response.text}")
        elif response.status_code == 404:
            raise SliteNotFoundError(f"Not found: {endpoint}")
        elif response.status_code == 429:
            raise SliteRateLimitError(
                "Rate limit exceeded",
                retry_after=_retry_after(response),
            )
        elif response.status_code >= 500:
            raise SliteServerError(
                f"Server error: {response.status_code}", status_code=response.status_code
            )
        elif not response.is_success:
            raise SliteAPIError(
                f"HTTP error: {response.text}", status_code=response.status_code
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise SliteAPIError(f"Invalid JSON response: {e}") from e
        if not isinstance(payload, dict):
            raise SliteAPIError("Invalid response format: expected a JSON object")
        return payload

    async def search(self, query: str) -> list[DocumentHit]:
        """Search notes relevant to a query.

        Args:
            query: Free-text search query

        Returns:
            list[DocumentHit]: Matching notes, empty when nothing matched

        Raises:
            SliteAPIError: For API errors
        """
        logger.info("Searching Slite", query=query)
        request = SearchNotesRequest(query=query)

        response_data = await self._make_request(
            "POST", SliteEndpoint.SEARCH_NOTES.value, request.model_dump()
        )

        try:
            result = NoteListResponse(**response_data)
        except ValidationError as e:
            logger.error("Failed to parse search response", error=str(e))
            raise SliteAPIError(f"Invalid response format: {e}") from e

        notes = result.data or []
        return [DocumentHit(id=note.id, title=note.title) for note in notes]

    async def fetch_detail(self, document_id: str) -> DocumentDetail:
        """Fetch a note's full plaintext.

        Args:
            document_id: Slite note ID

        Returns:
            DocumentDetail: Title and plaintext of the note

        Raises:
            SliteAPIError: For API errors
        """
        endpoint = SliteEndpoint.NOTE_DETAILS.value.format(note_id=document_id)
        response_data = await self._make_request("GET", endpoint)

        try:
            note = NoteDetailsResponse(**response_data).data
        except ValidationError as e:
            logger.error(
                "Failed to parse note details", note_id=document_id, error=str(e)
            )
            raise SliteAPIError(f"Invalid response format: {e}") from e

        return DocumentDetail(id=note.id, title=note.title, plaintext=note.plaintext)

    async def list_notes(self, limit: int = CONNECTION_TEST_LIMIT) -> list[DocumentHit]:
        """List the most recent notes.

        Args:
            limit: Maximum number of notes to return

        Returns:
            list[DocumentHit]: Recent notes

        Raises:
            SliteAPIError: For API errors
        """
        response_data = await self._make_request(
            "GET", SliteEndpoint.LIST_NOTES.value, params={"limit": limit}
        )

        try:
            result = NoteListResponse(**response_data)
        except ValidationError as e:
            raise SliteAPIError(f"Invalid response format: {e}") from e

        return [DocumentHit(id=note.id, title=note.title) for note in result.data or []]


def _retry_after(response: httpx.Response) -> int | None:
    value = response.headers.get("Retry-After")
    if value is None or not value.isdigit():
        return None
    return int(value)
