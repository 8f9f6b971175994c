"""Exceptions raised by the session client."""


class ChatApiError(Exception):
    """Raised when a call to the chat API fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code:
            return f"Chat API Error ({self.status_code}): {self.message}"
        return f"Chat API Error: {self.message}"


class SessionNotFoundError(Exception):
    """Raised when selecting a session ID that does not exist."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id


class SessionBusyError(Exception):
    """Raised when submitting while a turn is still in flight."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id} is waiting for a response")
        self.session_id = session_id
