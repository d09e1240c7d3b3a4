"""Rate limiter interfaces.

The API should depend on this abstraction (not the concrete implementation)
so we can swap storage backends later (e.g., Redis) with minimal changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a rate limit check.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        limit: Max requests per window.
        remaining: Remaining requests in the current window (0 when blocked).
        retry_after_ms: Milliseconds until the oldest entry leaves the
            window, when blocked.

    Only ``allowed`` is ever surfaced to clients; the rest is for logs.
    """

    allowed: bool
    limit: int
    remaining: int
    retry_after_ms: int | None


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    def consume(self, key: str) -> RateLimitResult:
        """Check and record one request for a given key.

        Args:
            key: Unique identifier (e.g., forwarded client address).

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError

    @abstractmethod
    def reset(self, key: str | None = None) -> None:
        """Forget recorded requests for one key, or for every key when None."""
        raise NotImplementedError

    def check(self, key: str) -> bool:
        """Consume one request and return only the allow/deny decision."""
        return self.consume(key).allowed
