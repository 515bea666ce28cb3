"""Sliding-window limiter tests, driven by a fake clock"""
import pytest

from safarsorted.services.rate_limit import SlidingWindowRateLimiter


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return SlidingWindowRateLimiter(max_requests=30, window_seconds=60, clock=clock)


def test_thirty_calls_allowed_then_blocked(limiter, clock):
    for _ in range(30):
        assert limiter.allow("10.0.0.1")
        clock.advance(1)
    assert limiter.allow("10.0.0.1") is False


def test_window_slides_after_sixty_seconds(limiter, clock):
    for _ in range(30):
        assert limiter.allow("10.0.0.1")
    clock.advance(30)
    assert limiter.allow("10.0.0.1") is False
    clock.advance(31)  # 61s after the first call
    assert limiter.allow("10.0.0.1") is True


def test_rejected_calls_are_not_recorded(limiter, clock):
    for _ in range(30):
        limiter.allow("a")
    for _ in range(10):
        assert limiter.allow("a") is False
    clock.advance(60)
    # only the 30 accepted calls were tracked, and all have expired
    for _ in range(30):
        assert limiter.allow("a")


def test_keys_are_independent(limiter):
    for _ in range(30):
        limiter.allow("a")
    assert limiter.allow("a") is False
    assert limiter.allow("b") is True


def test_idle_keys_are_evicted_on_sweep(clock):
    limiter = SlidingWindowRateLimiter(max_requests=5, window_seconds=60, clock=clock, sweep_interval=3)
    limiter.allow("a")
    limiter.allow("b")
    assert limiter.tracked_keys() == 2
    clock.advance(120)
    limiter.allow("c")  # third call triggers the sweep
    assert limiter.tracked_keys() == 1


def test_reset_clears_state(limiter):
    for _ in range(30):
        limiter.allow("a")
    limiter.reset()
    assert limiter.tracked_keys() == 0
    assert limiter.allow("a")
