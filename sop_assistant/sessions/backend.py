"""Chat backend used by the session orchestrator."""

from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import ValidationError

from sop_assistant.ai.chat.schemas import (
    ChatRequest,
    GenerateTitleRequest,
    GenerateTitleResponse,
    Message,
    StructuredResponse,
)
from sop_assistant.sessions.exceptions import ChatApiError
from sop_assistant.utils.logger import logger


class ChatBackend(ABC):
    """Network calls a chat turn depends on."""

    @abstractmethod
    async def send_chat(self, messages: list[Message]) -> StructuredResponse:
        """Get the assistant's reply to the newest message in `messages`."""
        pass

    @abstractmethod
    async def generate_title(self, message: str) -> str:
        """Get a short title for a session started with `message`."""
        pass

    async def close(self) -> None:
        """Release network resources. Backends without any can keep this no-op."""
        return None


class ChatApiClient(ChatBackend):
    """Async client for the SOP Assistant HTTP API."""

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the API client.

        Args:
            base_url: Server base URL, e.g. http://localhost:8080
            timeout: Request timeout in seconds; httpx's default when None
            transport: Optional httpx transport, mainly for tests
        """
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            kwargs: dict[str, Any] = {}
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
                **kwargs,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _post(self, endpoint: str, body: dict) -> dict[str, Any]:
        """POST a JSON body and return the decoded JSON object.

        Raises:
            ChatApiError: On transport failure, non-2xx status or a non-JSON body
        """
        client = await self._ensure_client()

        try:
            response = await client.post(endpoint, json=body)
        except httpx.RequestError as e:
            raise ChatApiError(f"Request error: {e}") from e

        if not response.is_success:
            raise ChatApiError(
                _error_details(response), status_code=response.status_code
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ChatApiError(f"Invalid JSON response: {e}") from e
        if not isinstance(payload, dict):
            raise ChatApiError("Invalid response format: expected a JSON object")
        return payload

    async def send_chat(self, messages: list[Message]) -> StructuredResponse:
        """Send the full history to the chat endpoint.

        Args:
            messages: Every message of the session, newest last

        Returns:
            StructuredResponse: The assistant's structured reply

        Raises:
            ChatApiError: For API errors
        """
        request = ChatRequest(messages=messages)
        payload = await self._post(
            "/api/chat", request.model_dump(mode="json", by_alias=True, exclude_none=True)
        )

        try:
            return StructuredResponse.model_validate(payload)
        except ValidationError as e:
            logger.error("Failed to parse chat response", error=str(e))
            raise ChatApiError(f"Invalid response format: {e}") from e

    async def generate_title(self, message: str) -> str:
        """Ask the title endpoint for a session title.

        Raises:
            ChatApiError: For API errors
        """
        request = GenerateTitleRequest(message=message)
        payload = await self._post("/api/generate-title", request.model_dump())

        try:
            return GenerateTitleResponse.model_validate(payload).title
        except ValidationError as e:
            raise ChatApiError(f"Invalid response format: {e}") from e


def _error_details(response: httpx.Response) -> str:
    """Prefer the server's `error` field, falling back to the status line."""
    details = f"API error: {response.status_code} {response.reason_phrase}"
    try:
        data = response.json()
    except ValueError:
        return details
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return details
