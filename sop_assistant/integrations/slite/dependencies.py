"""
FastAPI dependencies for Slite integration.

This module provides dependency injection functions for Slite-related
FastAPI endpoints.
"""

from fastapi import Depends
from pydantic import ValidationError

from sop_assistant.config import ConfigurationError
from sop_assistant.integrations.slite.client import SliteClient
from sop_assistant.integrations.slite.config import get_slite_settings
from sop_assistant.integrations.slite.service import SliteService

_slite_client: SliteClient | None = None


def get_slite_client() -> SliteClient:
    """
    FastAPI dependency for getting the shared Slite client instance.

    Returns:
        SliteClient: The configured Slite client

    Raises:
        ConfigurationError: If SLITE_API_KEY is not configured
    """
    global _slite_client
    if _slite_client is None:
        try:
            settings = get_slite_settings()
        except ValidationError as e:
            raise ConfigurationError(
                "SLITE_API_KEY is not configured in the server environment."
            ) from e
        _slite_client = SliteClient(settings=settings)
    return _slite_client


async def close_slite_client() -> None:
    """Close the shared Slite client, if one was created."""
    global _slite_client
    if _slite_client is not None:
        await _slite_client.close()
        _slite_client = None


def get_slite_service(
    slite_client: SliteClient = Depends(get_slite_client),
) -> SliteService:
    """
    FastAPI dependency for getting the Slite service instance.

    Args:
        slite_client: The Slite client from dependency injection

    Returns:
        SliteService: The Slite service instance
    """
    return SliteService(slite_client)
