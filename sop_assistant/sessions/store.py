"""
Local persistence for chat sessions.

All sessions live in a single JSON array, read once at startup and
rewritten in full after every change.
"""

import os
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from sop_assistant.sessions.schemas import ChatSession
from sop_assistant.utils.logger import logger

_sessions_adapter = TypeAdapter(list[ChatSession])


class SessionStore:
    """JSON file store for the device's chat sessions."""

    def __init__(self, path: Path):
        """
        Initialize the store.

        Args:
            path: Location of the JSON state file
        """
        self.path = Path(path)

    def load(self) -> list[ChatSession]:
        """
        Read all stored sessions.

        Missing, unreadable or corrupt state (bad JSON, not an array, or
        records that fail validation) is discarded and treated as empty.

        Returns:
            list[ChatSession]: Stored sessions, newest first
        """
        if not self.path.exists():
            return []

        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(
                "Failed to read chat sessions", path=str(self.path), error=str(e)
            )
            return []

        try:
            sessions = _sessions_adapter.validate_json(raw)
        except ValidationError as e:
            logger.error(
                "Failed to parse chat sessions, starting empty",
                path=str(self.path),
                error=str(e),
            )
            return []

        logger.info("Loaded chat sessions", session_count=len(sessions))
        return sessions

    def save(self, sessions: list[ChatSession]) -> None:
        """
        Replace the stored sessions.

        Writes to a temporary file first so a crash never leaves a
        half-written state file behind. Write failures are logged; the
        in-memory sessions stay authoritative.

        Args:
            sessions: Every session, newest first
        """
        payload = _sessions_adapter.dump_json(
            sessions, by_alias=True, exclude_none=True, indent=2
        )
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(payload)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(
                "Failed to write chat sessions", path=str(self.path), error=str(e)
            )
