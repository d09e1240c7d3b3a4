"""Unit tests for the in-memory sliding-window rate limiter adapter."""

import threading
from unittest.mock import Mock

import pytest

from app.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter


def _limiter(clock: Mock, **kwargs) -> InMemorySlidingWindowRateLimiter:
    kwargs.setdefault("limit", 10)
    kwargs.setdefault("window_ms", 60_000)
    return InMemorySlidingWindowRateLimiter(clock=clock, **kwargs)


def test_allows_up_to_limit_then_blocks_eleventh() -> None:
    clock = Mock(return_value=1_000_000)
    limiter = _limiter(clock)

    for _ in range(10):
        assert limiter.check("test-ip") is True
    assert limiter.check("test-ip") is False


def test_unseen_identifier_always_allowed() -> None:
    clock = Mock(return_value=1_000_000)
    limiter = _limiter(clock, limit=1)

    assert limiter.check("never-seen") is True


def test_isolated_by_key() -> None:
    clock = Mock(return_value=1_000_000)
    limiter = _limiter(clock)

    for _ in range(10):
        limiter.check("ip-1")
    assert limiter.check("ip-1") is False
    assert limiter.check("ip-2") is True


def test_other_key_traffic_does_not_consume_budget() -> None:
    clock = Mock(return_value=1_000_000)
    limiter = _limiter(clock)

    for _ in range(50):
        limiter.check("ip-b")

    for _ in range(10):
        assert limiter.check("ip-a") is True


def test_allows_again_after_window_passes() -> None:
    clock = Mock(return_value=1_000_000)
    limiter = _limiter(clock)

    for _ in range(10):
        limiter.check("test-ip")
    assert limiter.check("test-ip") is False

    clock.return_value = 1_000_000 + 61_000
    assert limiter.check("test-ip") is True


def test_sliding_window_oldest_entries_expire_first() -> None:
    start = 1_000_000
    clock = Mock(return_value=start)
    limiter = _limiter(clock)

    for _ in range(5):
        assert limiter.check("test-ip") is True

    clock.return_value = start + 30_000
    for _ in range(5):
        assert limiter.check("test-ip") is True

    clock.return_value = start + 30_001
    assert limiter.check("test-ip") is False

    # t=0 entries are gone, t=30s entries still count
    clock.return_value = start + 61_000
    for _ in range(5):
        assert limiter.check("test-ip") is True
    assert limiter.check("test-ip") is False


def test_entry_at_exact_window_edge_still_counts() -> None:
    start = 1_000_000
    clock = Mock(return_value=start)
    limiter = _limiter(clock, limit=1)

    assert limiter.check("k") is True

    clock.return_value = start + 60_000
    assert limiter.check("k") is False

    clock.return_value = start + 60_001
    assert limiter.check("k") is True


def test_rejected_attempts_are_not_recorded() -> None:
    start = 1_000_000
    clock = Mock(return_value=start)
    limiter = _limiter(clock, limit=2)

    assert limiter.check("k") is True
    assert limiter.check("k") is True

    # Hammer while blocked; none of these should extend the block
    clock.return_value = start + 59_000
    for _ in range(20):
        assert limiter.check("k") is False

    clock.return_value = start + 60_001
    assert limiter.check("k") is True


def test_consume_reports_remaining_and_retry_after() -> None:
    start = 1_000_000
    clock = Mock(return_value=start)
    limiter = _limiter(clock, limit=2)

    first = limiter.consume("k")
    assert first.allowed is True
    assert first.remaining == 1
    assert first.retry_after_ms is None

    limiter.consume("k")
    clock.return_value = start + 20_000
    blocked = limiter.consume("k")
    assert blocked.allowed is False
    assert blocked.remaining == 0
    assert blocked.retry_after_ms == 40_000


def test_reset_single_key_leaves_others() -> None:
    clock = Mock(return_value=1_000_000)
    limiter = _limiter(clock)

    for _ in range(10):
        limiter.check("ip-1")
        limiter.check("ip-2")

    limiter.reset("ip-1")

    assert limiter.check("ip-1") is True
    assert limiter.check("ip-2") is False


def test_reset_without_key_clears_everything() -> None:
    clock = Mock(return_value=1_000_000)
    limiter = _limiter(clock)

    for _ in range(10):
        limiter.check("ip-1")
        limiter.check("ip-2")

    limiter.reset()

    assert limiter.tracked_keys() == 0
    assert limiter.check("ip-1") is True
    assert limiter.check("ip-2") is True


def test_reset_unknown_key_is_noop() -> None:
    limiter = _limiter(Mock(return_value=1_000_000))

    limiter.reset("missing")

    assert limiter.tracked_keys() == 0


def test_concurrent_checks_never_exceed_limit() -> None:
    limiter = _limiter(Mock(return_value=1_000_000))
    results: list[bool] = []
    results_lock = threading.Lock()
    barrier = threading.Barrier(50)

    def worker() -> None:
        barrier.wait()
        allowed = limiter.check("shared")
        with results_lock:
            results.append(allowed)

    threads = [threading.Thread(target=worker) for _ in range(50)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 10
    assert results.count(False) == 40


@pytest.mark.parametrize(
    "kwargs",
    [
        {"limit": 0, "window_ms": 60_000},
        {"limit": 1, "window_ms": 0},
    ],
)
def test_invalid_constructor_args(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        InMemorySlidingWindowRateLimiter(**kwargs)
