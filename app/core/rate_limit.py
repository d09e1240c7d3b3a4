"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

Design goals:
- Minimal coupling: API routes depend on a dependency function only.
- Swap-friendly: storage backend can be replaced (e.g., Redis) behind an
  abstract interface.

Rate limiting strategy:
- Sliding window per caller, keyed by the forwarded client address.
- Callers without a forwarded address share one "anonymous" bucket.
- Runs before the request body is read, so throttled callers never reach
  JSON parsing.
"""

from __future__ import annotations

import hashlib
import logging

from fastapi import Request

from app.adapters.rate_limit.base import AbstractRateLimiter
from app.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter
from app.core.config import settings
from app.core.errors import MESSAGE_RATE_LIMITED, RateLimitAppError

logger = logging.getLogger(__name__)


_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple[int, int] | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return a process-wide rate limiter instance.

    The instance is cached in-module to preserve state across requests.
    If configuration changes (primarily in tests), the limiter is rebuilt.

    Returns:
        AbstractRateLimiter: Configured limiter instance.
    """

    global _limiter, _limiter_config

    config = (
        settings.app.rate_limit_requests,
        settings.app.rate_limit_window_seconds,
    )

    if _limiter is None or _limiter_config != config:
        _limiter = InMemorySlidingWindowRateLimiter(
            limit=settings.app.rate_limit_requests,
            window_ms=settings.app.rate_limit_window_seconds * 1000,
        )
        _limiter_config = config

    return _limiter


def check_rate_limit(identifier: str) -> bool:
    """Record one request for identifier; False when it is over the limit."""
    return get_rate_limiter().check(identifier)


def reset_rate_limit(identifier: str | None = None) -> None:
    """Clear one identifier's state, or every identifier's when omitted."""
    get_rate_limiter().reset(identifier)


def get_client_identifier(request: Request) -> str:
    """Derive the rate limit identifier from request metadata.

    Args:
        request: FastAPI request.

    Returns:
        str: The forwarded-for header value, or the shared anonymous id.
    """

    forwarded = request.headers.get(settings.app.forwarded_for_header)
    return forwarded or settings.app.anonymous_identifier


def _hash_identifier(identifier: str) -> str:
    """Hash the identifier for logging without exposing client addresses."""
    return hashlib.sha256(identifier.encode()).hexdigest()[:16]


async def enforce_rate_limit(request: Request) -> None:
    """FastAPI dependency enforcing rate limits.

    Consumes one request from the caller's budget. Refused requests are not
    recorded.

    Args:
        request: FastAPI request.

    Raises:
        RateLimitAppError: When the caller exceeded the allowed rate.
    """

    if not settings.app.rate_limit_enabled:
        return

    limiter = get_rate_limiter()
    identifier = get_client_identifier(request)
    key_hash = _hash_identifier(identifier)

    result = limiter.consume(identifier)
    if result.allowed:
        logger.debug(
            "rate_limit.allowed",
            extra={
                "key_hash": key_hash,
                "limit": result.limit,
                "remaining": result.remaining,
            },
        )
        return

    logger.warning(
        "rate_limit.exceeded",
        extra={
            "key_hash": key_hash,
            "limit": result.limit,
            "window_s": settings.app.rate_limit_window_seconds,
            "retry_after_ms": result.retry_after_ms,
        },
    )

    raise RateLimitAppError(
        message=MESSAGE_RATE_LIMITED,
        details={"cause": "local_rate_limit"},
    )
