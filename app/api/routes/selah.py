import logging

from fastapi import APIRouter, Depends, Request

from app.adapters.llm.factory import create_llm_client
from app.content.questions import get_random_question
from app.core.errors import MESSAGE_INVALID_REQUEST, ValidationAppError
from app.core.rate_limit import enforce_rate_limit
from app.core.validation import ValidationFailure, validate_selah_request
from app.schemas.selah import QuestionResponse, SelahErrorResponse, SelahResponse
from app.services.selah_service import SelahService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Selah"])

_error_responses = {
    400: {"model": SelahErrorResponse, "description": "Invalid input"},
    429: {"model": SelahErrorResponse, "description": "Too many requests"},
    500: {"model": SelahErrorResponse, "description": "Server or upstream failure"},
}


async def _read_json_body(request: Request) -> object:
    """Decode the request body, mapping any decode failure to validation_error."""
    try:
        return await request.json()
    except (ValueError, RecursionError) as exc:  # JSONDecodeError, UnicodeDecodeError, nesting depth
        raise ValidationAppError(
            message=MESSAGE_INVALID_REQUEST,
            details={"cause": "body_not_json", "error_type": type(exc).__name__},
        ) from exc


@router.post(
    "/selah",
    response_model=SelahResponse,
    responses=_error_responses,
    dependencies=[Depends(enforce_rate_limit)],
)
async def create_reflection(request: Request) -> SelahResponse:
    """Reflect one user response back and close the session.

    Steps, each of which can end the request early:
    rate limit (dependency), JSON parse, validation, configuration check,
    upstream call.

    Returns:
        SelahResponse: reflection and exitSentence.

    Raises:
        ValidationAppError: 400 for unparseable or invalid bodies.
        RateLimitAppError: 429 when the caller or the upstream is throttled.
        ConfigAppError: 500 when the upstream credential is missing.
        LLMAppError: 500 for any other upstream failure.
    """
    body = await _read_json_body(request)

    validation = validate_selah_request(body)
    if isinstance(validation, ValidationFailure):
        raise ValidationAppError(message=validation.error)

    logger.info(
        "selah.request_validated",
        extra={
            "message_chars": len(validation.data.message),
            "question_chars": len(validation.data.question),
        },
    )

    service = SelahService(llm=create_llm_client())
    return await service.reflect(validation.data)


@router.get("/selah/question", response_model=QuestionResponse)
def get_opening_question() -> QuestionResponse:
    """Return one opening question, chosen at random."""

    return QuestionResponse(question=get_random_question())
