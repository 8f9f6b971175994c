"""Client-side chat sessions: persistence, the chat API client and turn orchestration."""

from sop_assistant.sessions.backend import ChatApiClient, ChatBackend
from sop_assistant.sessions.exceptions import (
    ChatApiError,
    SessionBusyError,
    SessionNotFoundError,
)
from sop_assistant.sessions.orchestrator import PendingTurn, SessionOrchestrator
from sop_assistant.sessions.schemas import ChatSession, fallback_title
from sop_assistant.sessions.store import SessionStore

__all__ = [
    "ChatApiClient",
    "ChatApiError",
    "ChatBackend",
    "ChatSession",
    "PendingTurn",
    "SessionBusyError",
    "SessionNotFoundError",
    "SessionOrchestrator",
    "SessionStore",
    "fallback_title",
]
