"""
Slite service layer for business logic.

This module sits between the FastAPI routes and the Slite client.
"""

from sop_assistant.integrations.slite.client import SliteClient
from sop_assistant.integrations.slite.exceptions import SliteAPIError
from sop_assistant.integrations.slite.schemas import ConnectionTestResponse
from sop_assistant.utils.logger import logger


class SliteService:
    """Service class for Slite operations."""

    def __init__(self, slite_client: SliteClient):
        """
        Initialize the Slite service.

        Args:
            slite_client: The Slite client to use
        """
        self.slite_client = slite_client

    async def test_connection(self) -> ConnectionTestResponse:
        """
        Check that the Slite API is reachable with the configured key.

        Returns:
            ConnectionTestResponse: Outcome with the titles of recent notes on success
        """
        try:
            notes = await self.slite_client.list_notes()
        except SliteAPIError as e:
            logger.error("Slite connection test failed", error=str(e))
            return ConnectionTestResponse(
                success=False,
                message=f"Failed to connect to Slite. Details: {e}",
            )

        logger.info("Slite connection test succeeded", note_count=len(notes))
        return ConnectionTestResponse(
            success=True,
            message=f"Successfully connected to Slite and found {len(notes)} recent note(s).",
            data=[note.title for note in notes],
        )
