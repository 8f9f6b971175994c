"""Tests for the Slite API client."""

import json

import httpx
import pytest

from sop_assistant.ai.rag.exceptions import DocumentStoreTransportError
from sop_assistant.integrations.slite import SliteClient
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


def client_with(settings, handler) -> SliteClient:
    return SliteClient(settings=settings, transport=httpx.MockTransport(handler))


class TestSliteClient:
    """Test cases for SliteClient."""

    @pytest.mark.asyncio
    async def test_client_initialization(self, slite_settings):
        """Test the HTTP client is created lazily and released on close."""
        client = SliteClient(settings=slite_settings)
        assert client._client is None

        await client._ensure_client()
        assert client._client is not None

        await client.close()
        assert client._client is None

    @pytest.mark.asyncio
    async def test_search_success(self, slite_settings):
        """Test search posts the query and maps hits."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers["Authorization"]
            seen["accept"] = request.headers["Accept"]
            return httpx.Response(
                200,
                json={"data": [{"id": "n1", "title": "Lead Handling"}, {"id": "n2", "title": "Refunds"}]},
            )

        client = client_with(slite_settings, handler)
        hits = await client.search("how do I handle a lead?")

        assert [(h.id, h.title) for h in hits] == [("n1", "Lead Handling"), ("n2", "Refunds")]
        assert seen["method"] == "POST"
        assert seen["path"] == "/v1/search/notes"
        assert seen["body"] == {"query": "how do I handle a lead?"}
        assert seen["auth"] == "Bearer test-slite-key"
        assert seen["accept"] == "application/json"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"data": None}, {"data": "unexpected"}])
    async def test_search_without_data_list_returns_no_hits(self, slite_settings, payload):
        """Test a missing or non-list data field means no hits."""
        client = client_with(slite_settings, lambda request: httpx.Response(200, json=payload))

        assert await client.search("anything") == []

    @pytest.mark.asyncio
    async def test_fetch_detail_success(self, slite_settings):
        """Test note details are fetched by ID."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            return httpx.Response(
                200,
                json={"data": {"id": "n1", "title": "Lead Handling", "plaintext": "Call them back."}},
            )

        client = client_with(slite_settings, handler)
        detail = await client.fetch_detail("n1")

        assert detail.id == "n1"
        assert detail.title == "Lead Handling"
        assert detail.plaintext == "Call them back."
        assert seen == {"method": "GET", "path": "/v1/notes/n1"}

    @pytest.mark.asyncio
    async def test_fetch_detail_null_plaintext(self, slite_settings):
        """Test a note without a body has empty plaintext."""
        client = client_with(
            slite_settings,
            lambda request: httpx.Response(
                200, json={"data": {"id": "n1", "title": "Empty", "plaintext": None}}
            ),
        )

        detail = await client.fetch_detail("n1")

        assert detail.plaintext == ""

    @pytest.mark.asyncio
    async def test_list_notes_sends_limit(self, slite_settings):
        """Test listing notes passes the limit as a query parameter."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["limit"] = request.url.params.get("limit")
            return httpx.Response(200, json={"data": [{"id": "n1", "title": "Onboarding"}]})

        client = client_with(slite_settings, handler)
        notes = await client.list_notes()

        assert [n.title for n in notes] == ["Onboarding"]
        assert seen == {"path": "/v1/notes", "limit": "5"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status_code,error_class",
        [
            (401, SliteAuthenticationError),
            (400, SliteBadRequestError),
            (404, SliteNotFoundError),
            (429, SliteRateLimitError),
            (500, SliteServerError),
            (503, SliteServerError),
        ],
    )
    async def test_error_status_mapping(self, slite_settings, status_code, error_class):
        """Test error statuses map to specific exceptions."""
        client = client_with(
            slite_settings, lambda request: httpx.Response(status_code, text="nope")
        )

        with pytest.raises(error_class) as exc_info:
            await client.search("query")

        assert exc_info.value.status_code == status_code
        assert not isinstance(exc_info.value, DocumentStoreTransportError)

    @pytest.mark.asyncio
    async def test_rate_limit_retry_after(self, slite_settings):
        """Test the Retry-After header is kept on rate limit errors."""
        client = client_with(
            slite_settings,
            lambda request: httpx.Response(429, headers={"Retry-After": "30"}),
        )

        with pytest.raises(SliteRateLimitError) as exc_info:
            await client.search("query")

        assert exc_info.value.retry_after == 30

    @pytest.mark.asyncio
    async def test_other_error_status(self, slite_settings):
        """Test unmapped error statuses raise the base error."""
        client = client_with(slite_settings, lambda request: httpx.Response(418, text="teapot"))

        with pytest.raises(SliteAPIError) as exc_info:
            await client.search("query")

        assert type(exc_info.value) is SliteAPIError
        assert exc_info.value.status_code == 418
        assert "Slite API Error (418)" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_timeout_error(self, slite_settings):
        """Test timeouts raise a transport-level timeout error."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = client_with(slite_settings, handler)

        with pytest.raises(SliteTimeoutError) as exc_info:
            await client.search("query")

        assert isinstance(exc_info.value, DocumentStoreTransportError)
        assert exc_info.value.timeout_duration == 5

    @pytest.mark.asyncio
    async def test_connection_error(self, slite_settings):
        """Test unreachable hosts raise a transport-level connection error."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = client_with(slite_settings, handler)

        with pytest.raises(SliteConnectionError) as exc_info:
            await client.fetch_detail("n1")

        assert isinstance(exc_info.value, DocumentStoreTransportError)
        assert isinstance(exc_info.value.original_error, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_invalid_json_response(self, slite_settings):
        """Test a non-JSON body raises the base error."""
        client = client_with(
            slite_settings, lambda request: httpx.Response(200, text="<html>oops</html>")
        )

        with pytest.raises(SliteAPIError):
            await client.search("query")

    @pytest.mark.asyncio
    async def test_malformed_note_details(self, slite_settings):
        """Test details without a note raise the base error."""
        client = client_with(slite_settings, lambda request: httpx.Response(200, json={"data": None}))

        with pytest.raises(SliteAPIError):
            await client.fetch_detail("n1")
