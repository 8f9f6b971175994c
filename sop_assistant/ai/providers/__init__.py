"""AI provider implementations."""

from sop_assistant.ai.providers.gemini import GeminiProvider

__all__ = [
    "GeminiProvider",
]
