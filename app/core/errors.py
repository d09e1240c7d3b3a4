"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses.

Every AppError maps to exactly one client-facing error kind and HTTP status.
The ``message`` attribute is what the client sees, so it must only ever hold
one of the pre-approved strings below; diagnostic context belongs in
``details``, which is logged and never serialized into a response.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, NotRequired, TypedDict


MESSAGE_INVALID_REQUEST = "Invalid request."
MESSAGE_RATE_LIMITED = "Please wait a moment."
MESSAGE_GENERIC_FAILURE = "Something went wrong."


class ErrorKind(str, Enum):
    """Client-facing error discriminant (the ``error`` field of a response)."""

    VALIDATION_ERROR = "validation_error"
    RATE_LIMIT = "rate_limit"
    API_ERROR = "api_error"
    CONFIG_ERROR = "config_error"


class UpstreamErrorKind(str, Enum):
    """Classification of a failed upstream model call."""

    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CONNECTION = "connection"
    STATUS = "status"
    UNKNOWN = "unknown"


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability (never sent to clients)."""

    cause: str
    error_type: str
    upstream_kind: str
    http_status: int
    retry_after: float
    model: str
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        message: Client-safe, pre-approved message.
        details: Optional structured details for logs only.
    """

    message: str
    details: ErrorDetails | None = None

    kind = ErrorKind.API_ERROR
    status_code = 500

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)

    def to_response(self) -> dict[str, str]:
        """Render the flat ``{error, message}`` envelope."""
        return {"error": self.kind.value, "message": self.message}


class ValidationAppError(AppError):
    """Raised when client input fails validation."""

    kind = ErrorKind.VALIDATION_ERROR
    status_code = 400


class RateLimitAppError(AppError):
    """Raised when the caller, or the upstream on its behalf, is throttled."""

    kind = ErrorKind.RATE_LIMIT
    status_code = 429


class ConfigAppError(AppError):
    """Raised when server configuration is missing or unusable."""

    kind = ErrorKind.CONFIG_ERROR
    status_code = 500


@dataclass
class LLMAppError(AppError):
    """Raised when the upstream model call fails.

    ``upstream_kind`` lets callers branch on the failure class without
    inspecting message text.
    """

    upstream_kind: UpstreamErrorKind = UpstreamErrorKind.UNKNOWN

    kind = ErrorKind.API_ERROR
    status_code = 500

    @property
    def is_rate_limited(self) -> bool:
        return self.upstream_kind is UpstreamErrorKind.RATE_LIMIT
