"""
FastAPI dependencies for the SOP chat endpoints.
"""

from fastapi import Depends
from pydantic import ValidationError

from sop_assistant.ai.base import AIProvider
from sop_assistant.ai.chat.generator import TitleGenerator
from sop_assistant.ai.chat.prompts import PromptComposer
from sop_assistant.ai.chat.service import SopChatService
from sop_assistant.ai.gemini.config import get_gemini_settings
from sop_assistant.ai.providers.gemini import GeminiProvider
from sop_assistant.ai.rag.retriever import DocumentRetriever
from sop_assistant.config import ConfigurationError, get_app_settings
from sop_assistant.integrations.slite.client import SliteClient
from sop_assistant.integrations.slite.dependencies import get_slite_client
from sop_assistant.utils.logger import logger

_ai_provider: AIProvider | None = None


def get_ai_provider() -> AIProvider:
    """
    Get or create the shared Gemini provider.

    Returns:
        AIProvider: The Gemini provider

    Raises:
        ConfigurationError: If GEMINI_API_KEY is not configured
    """
    global _ai_provider
    if _ai_provider is None:
        try:
            settings = get_gemini_settings()
        except ValidationError as e:
            raise ConfigurationError(
                "GEMINI_API_KEY is not configured in the server environment."
            ) from e
        project_name = get_app_settings().braintrust_project_name
        _ai_provider = GeminiProvider(
            settings=settings,
            enable_braintrust=project_name is not None,
            braintrust_project_name=project_name,
        )
        logger.info("Initialized Gemini provider")
    return _ai_provider


def get_chat_service(
    provider: AIProvider = Depends(get_ai_provider),
    slite_client: SliteClient = Depends(get_slite_client),
) -> SopChatService:
    """
    Build the chat service from the shared provider and document store.

    Returns:
        SopChatService: The chat service instance
    """
    app_settings = get_app_settings()
    return SopChatService(
        retriever=DocumentRetriever(
            slite_client, char_limit=app_settings.document_char_limit
        ),
        provider=provider,
        composer=PromptComposer(assistant_name=app_settings.assistant_name),
    )


def get_title_generator(
    provider: AIProvider = Depends(get_ai_provider),
) -> TitleGenerator:
    """
    Build the title generator.

    Titles only need the model, so a missing Slite key does not block them.
    """
    return TitleGenerator(provider)
