"""Exceptions raised by the SOP chat pipeline."""


class GenerationError(Exception):
    """Raised when the model call fails or returns output outside the schema."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidChatRequestError(Exception):
    """Raised when a chat request cannot be answered as sent."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
