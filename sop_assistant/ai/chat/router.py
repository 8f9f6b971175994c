"""FastAPI router for the SOP chat and title endpoints."""

from http import HTTPStatus

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from sop_assistant.ai.chat.dependencies import get_chat_service, get_title_generator
from sop_assistant.ai.chat.exceptions import GenerationError, InvalidChatRequestError
from sop_assistant.ai.chat.generator import TitleGenerator
from sop_assistant.ai.chat.schemas import (
    ChatRequest,
    ErrorResponse,
    GenerateTitleRequest,
    GenerateTitleResponse,
    StructuredResponse,
)
from sop_assistant.ai.chat.service import SopChatService
from sop_assistant.ai.rag.exceptions import RetrievalTransportError
from sop_assistant.utils.logger import logger

router = APIRouter(tags=["Chat"])


def error_response(status_code: HTTPStatus, error: str) -> JSONResponse:
    """Build the `{"error": ...}` payload the chat frontend expects."""
    return JSONResponse(
        status_code=status_code, content=ErrorResponse(error=error).model_dump()
    )


@router.post(
    "/chat",
    response_model=StructuredResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(
    request: ChatRequest,
    chat_service: SopChatService = Depends(get_chat_service),
) -> StructuredResponse | JSONResponse:
    """
    Answer the newest user message from the SOP knowledge base.

    Args:
        request: Chat request with the full message history
        chat_service: Chat service dependency

    Returns:
        StructuredResponse: The structured reply, or an error payload
    """
    logger.info("Chat request", message_count=len(request.messages))

    try:
        return await chat_service.answer(request.messages)
    except InvalidChatRequestError as e:
        return error_response(HTTPStatus.BAD_REQUEST, e.message)
    except (RetrievalTransportError, GenerationError) as e:
        logger.error(
            "Error answering chat request", error=str(e), error_type=type(e).__name__
        )
        return error_response(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            f"Failed to get response from AI service. Details: {e.message}",
        )


@router.post(
    "/generate-title",
    response_model=GenerateTitleResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_title(
    request: GenerateTitleRequest,
    title_generator: TitleGenerator = Depends(get_title_generator),
) -> GenerateTitleResponse | JSONResponse:
    """
    Generate a short title for a new chat session.

    Args:
        request: Request containing the session's first message
        title_generator: Title generator dependency

    Returns:
        GenerateTitleResponse: The generated title, or an error payload
    """
    if not request.message.strip():
        return error_response(
            HTTPStatus.BAD_REQUEST, "Message is required and must be a string."
        )

    try:
        title = await title_generator.generate(request.message)
    except GenerationError as e:
        return error_response(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            f"Failed to generate title. Details: {e.message}",
        )

    return GenerateTitleResponse(title=title)
