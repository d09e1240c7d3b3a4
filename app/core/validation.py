"""Validation of reflection requests.

Invalid input is a routine outcome here, so validators return a result
instead of raising. The route turns a failure into a ValidationAppError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from app.schemas.selah import SelahRequest

MIN_MESSAGE_LENGTH = 1
MAX_MESSAGE_LENGTH = 500

ERROR_INVALID_REQUEST = "Invalid request."
ERROR_INVALID_INPUT = "Invalid input."
ERROR_MESSAGE_REQUIRED = "Message is required."
ERROR_MESSAGE_EMPTY = "Please type a response."
ERROR_MESSAGE_TOO_LONG = "Response too long."
ERROR_QUESTION_REQUIRED = "Question is required."


@dataclass(frozen=True)
class ValidationSuccess:
    data: SelahRequest
    valid: Literal[True] = True


@dataclass(frozen=True)
class ValidationFailure:
    error: str
    valid: Literal[False] = False


ValidationResult = ValidationSuccess | ValidationFailure


def _check_message_length(trimmed: str) -> str | None:
    if len(trimmed) < MIN_MESSAGE_LENGTH:
        return ERROR_MESSAGE_EMPTY
    if len(trimmed) > MAX_MESSAGE_LENGTH:
        return ERROR_MESSAGE_TOO_LONG
    return None


def validate_selah_request(body: Any) -> ValidationResult:
    """Validate a decoded JSON body into a SelahRequest.

    Checks run in a fixed order and the first failure wins:
    body shape, message presence, message emptiness, message length,
    question presence.

    The question is trimmed but never checked for emptiness or length.
    An empty-string question is accepted, unlike a missing or non-string
    one, which fails with "Question is required.". Likewise an empty-string
    message is present, so it fails the emptiness check rather than the
    presence check.

    Args:
        body: Any value produced by JSON decoding.

    Returns:
        ValidationSuccess with trimmed fields, or ValidationFailure with a
        user-facing error string.
    """
    if not isinstance(body, dict):
        return ValidationFailure(error=ERROR_INVALID_REQUEST)

    message = body.get("message")
    if not isinstance(message, str):
        return ValidationFailure(error=ERROR_MESSAGE_REQUIRED)

    trimmed = message.strip()
    length_error = _check_message_length(trimmed)
    if length_error is not None:
        return ValidationFailure(error=length_error)

    question = body.get("question")
    if not isinstance(question, str):
        return ValidationFailure(error=ERROR_QUESTION_REQUIRED)

    return ValidationSuccess(
        data=SelahRequest(message=trimmed, question=question.strip())
    )


def validate_user_message(message: Any) -> str | None:
    """Validate a lone message value.

    Returns:
        None when the message is acceptable, otherwise the error string.
    """
    if not isinstance(message, str):
        return ERROR_INVALID_INPUT
    return _check_message_length(message.strip())
