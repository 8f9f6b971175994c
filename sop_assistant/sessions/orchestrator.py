"""
Client-side chat session orchestration.

Every turn appends the user's message synchronously, then runs the answer
request and (for a new session) the title request concurrently. Each
completion re-reads the current sessions and updates its own session by
ID, so the two results can land in either order.
"""

import asyncio
import uuid
from collections.abc import Callable
from dataclasses import dataclass

from sop_assistant.ai.chat.classifier import RenderedResponse, render_message
from sop_assistant.ai.chat.schemas import (
    APOLOGY_SUMMARY,
    Message,
    Sender,
    StructuredContent,
    StructuredResponse,
    TextContent,
)
from sop_assistant.config import get_app_settings
from sop_assistant.sessions.backend import ChatApiClient, ChatBackend
from sop_assistant.sessions.exceptions import SessionBusyError, SessionNotFoundError
from sop_assistant.sessions.schemas import ChatSession, fallback_title
from sop_assistant.sessions.store import SessionStore
from sop_assistant.utils.logger import logger


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex}"


@dataclass(frozen=True)
class PendingTurn:
    """A submitted turn whose network calls have not run yet."""

    session_id: str
    message_text: str
    is_new_session: bool
    history: tuple[Message, ...]


class SessionOrchestrator:
    """Owns the chat sessions and reconciles each turn's results into them."""

    def __init__(
        self,
        backend: ChatBackend,
        store: SessionStore,
        request_url: str | None = None,
    ):
        """
        Initialize the orchestrator.

        Loads the stored sessions once and selects the most recent one.

        Args:
            backend: Chat API used for answers and titles
            store: Persistence for the session list
            request_url: Link offered when no SOP covers a question
        """
        self.backend = backend
        self.store = store
        self.request_url = request_url
        self._sessions: list[ChatSession] = store.load()
        self._active_chat_id: str | None = (
            self._sessions[0].id if self._sessions else None
        )
        self._busy: set[str] = set()

    @classmethod
    def from_settings(cls) -> "SessionOrchestrator":
        """Build an orchestrator against the configured server and state file."""
        settings = get_app_settings()
        return cls(
            backend=ChatApiClient(base_url=settings.server_base_url),
            store=SessionStore(settings.sessions_state_file),
            request_url=settings.request_form_url,
        )

    @property
    def sessions(self) -> list[ChatSession]:
        """All sessions, newest first."""
        return list(self._sessions)

    @property
    def active_chat_id(self) -> str | None:
        return self._active_chat_id

    @property
    def active_session(self) -> ChatSession | None:
        if self._active_chat_id is None:
            return None
        return self._find(self._active_chat_id)

    @property
    def is_loading(self) -> bool:
        """Whether the selected session is waiting for an answer."""
        return self._active_chat_id is not None and self.is_busy(self._active_chat_id)

    @property
    def any_busy(self) -> bool:
        """Whether a turn is in flight in any session."""
        return bool(self._busy)

    def is_busy(self, session_id: str) -> bool:
        return session_id in self._busy

    def render_active_session(self) -> list[RenderedResponse]:
        """Presentation-neutral view of every message in the selected session."""
        session = self.active_session
        if session is None:
            return []
        return [
            render_message(message, request_url=self.request_url)
            for message in session.messages
        ]

    def _find(self, session_id: str) -> ChatSession | None:
        return next((s for s in self._sessions if s.id == session_id), None)

    def _set_sessions(self, sessions: list[ChatSession]) -> None:
        self._sessions = sessions
        self.store.save(sessions)

    def new_chat(self) -> None:
        """Deselect the current session; the next message starts a new one."""
        self._active_chat_id = None

    def select_chat(self, session_id: str) -> None:
        """
        Select an existing session.

        Raises:
            SessionNotFoundError: If no session has this ID
        """
        if self._find(session_id) is None:
            raise SessionNotFoundError(session_id)
        self._active_chat_id = session_id

    def delete_chat(self, session_id: str) -> None:
        """Delete a session by ID. Unknown IDs are ignored."""
        remaining = [s for s in self._sessions if s.id != session_id]
        if len(remaining) != len(self._sessions):
            self._set_sessions(remaining)
            logger.info("Deleted chat session", session_id=session_id)
        if self._active_chat_id == session_id:
            self._active_chat_id = None

    def begin_turn(self, text: str) -> PendingTurn:
        """
        Append the user's message ahead of any network call.

        Starts a new session when none is selected.

        Args:
            text: What the user typed

        Returns:
            PendingTurn: Snapshot of the session history to send

        Raises:
            ValueError: If the text is blank
            SessionBusyError: If a turn is still in flight in any session
        """
        if not text.strip():
            raise ValueError("Message text must not be empty")

        if self._busy:
            raise SessionBusyError(next(iter(self._busy)))

        session_id = self._active_chat_id

        message = Message(
            id=_new_id("msg"), sender=Sender.USER, content=TextContent(text=text)
        )

        is_new_session = session_id is None or self._find(session_id) is None
        if is_new_session:
            session = ChatSession(
                id=_new_id("chat"), title=fallback_title(text), messages=[message]
            )
            self._set_sessions([session, *self._sessions])
            self._active_chat_id = session.id
            logger.info("Created chat session", session_id=session.id)
        else:
            session = self._find(session_id).with_message(message)
            self._set_sessions(
                [session if s.id == session.id else s for s in self._sessions]
            )

        self._busy.add(session.id)
        return PendingTurn(
            session_id=session.id,
            message_text=text,
            is_new_session=is_new_session,
            history=tuple(session.messages),
        )

    async def run_turn(self, turn: PendingTurn) -> None:
        """Run the answer request and, for a new session, the title request."""
        if turn.is_new_session:
            await asyncio.gather(self._answer(turn), self._refine_title(turn))
        else:
            await self._answer(turn)

    async def send_message(self, text: str) -> None:
        """Submit a user message and wait for the turn to finish."""
        await self.run_turn(self.begin_turn(text))

    async def close(self) -> None:
        """Close the backend's network resources."""
        await self.backend.close()

    async def _answer(self, turn: PendingTurn) -> None:
        try:
            try:
                response = await self.backend.send_chat(list(turn.history))
            except Exception as e:
                logger.error(
                    "Chat request failed",
                    session_id=turn.session_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                response = StructuredResponse(summary=APOLOGY_SUMMARY)

            reply = Message(
                id=_new_id("msg"),
                sender=Sender.ASSISTANT,
                content=StructuredContent(response=response),
            )
            self._update_session(turn.session_id, lambda s: s.with_message(reply))
        finally:
            self._busy.discard(turn.session_id)

    async def _refine_title(self, turn: PendingTurn) -> None:
        try:
            title = await self.backend.generate_title(turn.message_text)
        except Exception as e:
            logger.warning(
                "Title generation failed, keeping fallback title",
                session_id=turn.session_id,
                error=str(e),
            )
            return

        title = title.strip()
        if title:
            self._update_session(turn.session_id, lambda s: s.with_title(title))

    def _update_session(
        self, session_id: str, transform: Callable[[ChatSession], ChatSession]
    ) -> None:
        """Apply `transform` to the current value of one session, if it still exists."""
        current = self._sessions
        if not any(s.id == session_id for s in current):
            logger.info("Dropping result for deleted session", session_id=session_id)
            return
        self._set_sessions(
            [transform(s) if s.id == session_id else s for s in current]
        )
