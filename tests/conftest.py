"""Shared fixtures for the SOP assistant tests."""

import itertools

import pytest

from sop_assistant.ai.base import (
    AIProvider,
    ContentGenerationResult,
    ConversationTurn,
)
from sop_assistant.ai.chat.schemas import (
    Message,
    Sender,
    StructuredContent,
    StructuredResponse,
    TextContent,
)
from sop_assistant.ai.rag.base import DocumentStore
from sop_assistant.ai.rag.schemas import DocumentDetail, DocumentHit
from sop_assistant.integrations.slite.config import SliteSettings


class FakeDocumentStore(DocumentStore):
    """In-memory document store.

    `details` maps note IDs to details; an Exception value is raised instead.
    """

    def __init__(self, hits=None, details=None, search_error=None):
        self.hits = hits or []
        self.details = details or {}
        self.search_error = search_error
        self.searched: list[str] = []
        self.fetched: list[str] = []

    async def search(self, query: str) -> list[DocumentHit]:
        self.searched.append(query)
        if self.search_error is not None:
            raise self.search_error
        return list(self.hits)

    async def fetch_detail(self, document_id: str) -> DocumentDetail:
        self.fetched.append(document_id)
        detail = self.details[document_id]
        if isinstance(detail, Exception):
            raise detail
        return detail


class PolicyFollowingProvider(AIProvider):
    """Provider that answers the way the system instruction tells the model to.

    With no documents it reports not found; otherwise it answers from the
    first document and cites it.
    """

    def __init__(self):
        self.requests: list[tuple[str, list[ConversationTurn]]] = []

    async def generate_content(self, prompt, system_instruction=None, **kwargs):
        return ContentGenerationResult(text=prompt[:20])

    async def generate_structured_content(
        self, system_instruction, conversation, response_model, **kwargs
    ):
        self.requests.append((system_instruction, list(conversation)))
        if system_instruction.rstrip().endswith("[]"):
            return response_model(is_not_found=True)
        return response_model(summary="From the SOP", sources=["Lead Handling"])


@pytest.fixture
def slite_settings():
    """Slite settings pointing at a fake host."""
    return SliteSettings(api_key=" test-slite-key ", base_url="https://slite.test", timeout=5)


@pytest.fixture
def fake_store_factory():
    return FakeDocumentStore


@pytest.fixture
def policy_provider():
    return PolicyFollowingProvider()


@pytest.fixture
def make_user_message():
    """Factory for user text messages with sequential IDs."""
    counter = itertools.count(1)

    def _make(text: str) -> Message:
        return Message(
            id=f"user-{next(counter)}",
            sender=Sender.USER,
            content=TextContent(text=text),
        )

    return _make


@pytest.fixture
def make_assistant_message():
    """Factory for structured assistant messages with sequential IDs."""
    counter = itertools.count(1)

    def _make(**fields) -> Message:
        return Message(
            id=f"assistant-{next(counter)}",
            sender=Sender.ASSISTANT,
            content=StructuredContent(response=StructuredResponse(**fields)),
        )

    return _make
