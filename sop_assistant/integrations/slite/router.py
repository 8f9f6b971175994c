"""
Slite router.

Exposes a connectivity check so operators can confirm the Slite API key
works before relying on retrieval.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from sop_assistant.integrations.slite.dependencies import get_slite_service
from sop_assistant.integrations.slite.schemas import ConnectionTestResponse
from sop_assistant.integrations.slite.service import SliteService

router = APIRouter(prefix="/slite", tags=["Slite"])


@router.post("/test", response_model=ConnectionTestResponse)
async def test_slite_connection(
    slite_service: SliteService = Depends(get_slite_service),
) -> ConnectionTestResponse | JSONResponse:
    """
    Test the connection to the Slite API.

    Args:
        slite_service: The Slite service instance from dependency injection

    Returns:
        ConnectionTestResponse: Titles of recent notes, or a 500 with the failure message
    """
    result = await slite_service.test_connection()

    if not result.success:
        return JSONResponse(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            content=result.model_dump(exclude_none=True),
        )

    return result
