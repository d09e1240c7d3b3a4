"""In-memory sliding-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: uses a lock around shared state.
- Memory grows with the number of distinct keys; stale timestamps are only
  pruned when their key is checked again.
"""

from __future__ import annotations

import threading
import time
from typing import Callable

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult


def _now_ms() -> int:
    return int(time.time() * 1000)


class InMemorySlidingWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter counting requests inside a moving time window per key.

    Each key keeps the timestamps of its accepted requests. On every check,
    timestamps older than ``now - window_ms`` are dropped; if what remains
    already reaches the limit, the request is refused and NOT recorded.
    Otherwise ``now`` is appended.

    Unlike fixed buckets, capacity comes back one request at a time as each
    recorded timestamp individually ages out.

    Important:
        This limiter is per-process only. If the API runs with multiple workers
        (e.g., multiple Uvicorn/Gunicorn workers), each worker will enforce its
        own independent limits.
    """

    def __init__(
        self,
        *,
        limit: int = 10,
        window_ms: int = 60_000,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        """Initialize the in-memory rate limiter.

        Args:
            limit: Maximum number of accepted requests per window.
            window_ms: Window length in milliseconds.
            clock: Time source returning UNIX time in milliseconds.

        Raises:
            ValueError: If limit or window_ms are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_ms < 1:
            raise ValueError("window_ms must be >= 1")

        self._limit = limit
        self._window_ms = window_ms
        self._clock = clock
        self._lock = threading.Lock()
        self._timestamps_by_key: dict[str, list[int]] = {}

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_ms(self) -> int:
        return self._window_ms

    def consume(self, key: str) -> RateLimitResult:
        """Check the key's recent history and record this request if allowed.

        Args:
            key: Rate limit identifier.

        Returns:
            RateLimitResult with the allowance decision and metadata.
        """
        now = self._clock()
        window_start = now - self._window_ms

        # Filter and append must not interleave with another check on the same key
        with self._lock:
            recent = [ts for ts in self._timestamps_by_key.get(key, ()) if ts >= window_start]

            if len(recent) >= self._limit:
                self._timestamps_by_key[key] = recent
                retry_after = max(0, recent[0] - window_start)
                return RateLimitResult(
                    allowed=False,
                    limit=self._limit,
                    remaining=0,
                    retry_after_ms=retry_after,
                )

            recent.append(now)
            self._timestamps_by_key[key] = recent
            return RateLimitResult(
                allowed=True,
                limit=self._limit,
                remaining=self._limit - len(recent),
                retry_after_ms=None,
            )

    def reset(self, key: str | None = None) -> None:
        """Clear one key's history, or all history when key is None."""
        with self._lock:
            if key is None:
                self._timestamps_by_key.clear()
            else:
                self._timestamps_by_key.pop(key, None)

    def tracked_keys(self) -> int:
        """Number of keys currently holding state."""
        with self._lock:
            return len(self._timestamps_by_key)
