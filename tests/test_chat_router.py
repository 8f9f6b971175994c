"""Tests for the chat and title API routes."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from sop_assistant.ai.chat import dependencies as chat_dependencies
from sop_assistant.ai.chat.dependencies import get_chat_service, get_title_generator
from sop_assistant.ai.chat.exceptions import GenerationError
from sop_assistant.ai.chat.generator import TitleGenerator
from sop_assistant.ai.chat.service import SopChatService
from sop_assistant.ai.gemini import config as gemini_config
from sop_assistant.ai.rag import DocumentRetriever, RetrievalTransportError
from sop_assistant.ai.rag.schemas import DocumentDetail, DocumentHit
from sop_assistant.main import app


def user_payload(text, message_id="m1"):
    return {"id": message_id, "sender": "user", "content": {"type": "text", "text": text}}


@pytest.fixture
def chat_service(fake_store_factory, policy_provider):
    store = fake_store_factory(
        hits=[DocumentHit(id="n1", title="Lead Handling")],
        details={"n1": DocumentDetail(id="n1", title="Lead Handling", plaintext="Call back")},
    )
    return SopChatService(DocumentRetriever(store), policy_provider)


@pytest.fixture
def title_generator():
    return AsyncMock(spec=TitleGenerator)


@pytest.fixture
def client(chat_service, title_generator):
    """Create a test client with the pipeline dependencies overridden."""
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    app.dependency_overrides[get_title_generator] = lambda: title_generator

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


class TestChatRoute:
    """Test suite for POST /api/chat."""

    def test_chat_success(self, client):
        response = client.post(
            "/api/chat", json={"messages": [user_payload("How do I handle a lead?")]}
        )

        assert response.status_code == 200
        assert response.json() == {
            "summary": "From the SOP",
            "sources": ["Lead Handling"],
            "debugSearchQuery": "How do I handle a lead?",
            "debugDocumentsFound": 1,
        }

    def test_chat_accepts_structured_history(self, client):
        messages = [
            user_payload("refunds?", "m1"),
            {
                "id": "m2",
                "sender": "assistant",
                "content": {
                    "type": "structured",
                    "response": {"clarification": "Which product?", "debugDocumentsFound": 0},
                },
            },
            user_payload("annual plan", "m3"),
        ]

        response = client.post("/api/chat", json={"messages": messages})

        assert response.status_code == 200
        assert response.json()["debugSearchQuery"] == "annual plan"

    def test_missing_messages(self, client):
        response = client.post("/api/chat", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Messages are required and must be a non-empty array."}

    def test_empty_messages(self, client):
        response = client.post("/api/chat", json={"messages": []})

        assert response.status_code == 400
        assert response.json() == {"error": "Messages are required and must be a non-empty array."}

    def test_malformed_messages(self, client):
        response = client.post("/api/chat", json={"messages": "not a list"})

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid request:")

    def test_unknown_content_type(self, client):
        message = {"id": "m1", "sender": "user", "content": {"type": "image", "url": "x"}}

        response = client.post("/api/chat", json={"messages": [message]})

        assert response.status_code == 400

    def test_last_message_not_from_user(self, client):
        messages = [
            user_payload("hi"),
            {
                "id": "m2",
                "sender": "assistant",
                "content": {"type": "text", "text": "Hello!"},
            },
        ]

        response = client.post("/api/chat", json={"messages": messages})

        assert response.status_code == 400
        assert response.json() == {"error": "The last message must be from the user."}

    def test_generation_failure(self, client, chat_service):
        chat_service.generator.generate = AsyncMock(
            side_effect=GenerationError("Structured generation failed: quota")
        )

        response = client.post("/api/chat", json={"messages": [user_payload("lead")]})

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to get response from AI service. Details: Structured generation failed: quota"
        }

    def test_retrieval_transport_failure(self, client, chat_service):
        chat_service.retriever.retrieve = AsyncMock(
            side_effect=RetrievalTransportError("Document search failed: refused")
        )

        response = client.post("/api/chat", json={"messages": [user_payload("lead")]})

        assert response.status_code == 500
        assert response.json()["error"].startswith("Failed to get response from AI service.")

    def test_get_not_allowed(self, client):
        assert client.get("/api/chat").status_code == 405


class TestGenerateTitleRoute:
    """Test suite for POST /api/generate-title."""

    def test_generate_title_success(self, client, title_generator):
        title_generator.generate.return_value = "Handling New Leads"

        response = client.post("/api/generate-title", json={"message": "How do I handle a lead?"})

        assert response.status_code == 200
        assert response.json() == {"title": "Handling New Leads"}
        title_generator.generate.assert_awaited_once_with("How do I handle a lead?")

    @pytest.mark.parametrize("body", [{}, {"message": 42}, {"message": None}])
    def test_invalid_message(self, client, body):
        response = client.post("/api/generate-title", json=body)

        assert response.status_code == 400
        assert "error" in response.json()

    def test_blank_message(self, client, title_generator):
        response = client.post("/api/generate-title", json={"message": "   "})

        assert response.status_code == 400
        assert response.json() == {"error": "Message is required and must be a string."}
        title_generator.generate.assert_not_awaited()

    def test_generation_failure(self, client, title_generator):
        title_generator.generate.side_effect = GenerationError("Failed to generate title: quota")

        response = client.post("/api/generate-title", json={"message": "hello"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to generate title. Details: Failed to generate title: quota"
        }

    def test_get_not_allowed(self, client):
        assert client.get("/api/generate-title").status_code == 405


class TestMissingConfiguration:
    def test_missing_gemini_key(self, monkeypatch):
        """Test a missing API key is reported as a server error payload."""
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.setattr(gemini_config, "_gemini_settings", None)
        monkeypatch.setattr(chat_dependencies, "_ai_provider", None)

        with TestClient(app) as client:
            response = client.post("/api/generate-title", json={"message": "hello"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "GEMINI_API_KEY is not configured in the server environment."
        }


class TestHealthRoutes:
    @pytest.mark.parametrize("path", ["/", "/healthcheck"])
    def test_health(self, path):
        with TestClient(app) as client:
            response = client.get(path)

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
