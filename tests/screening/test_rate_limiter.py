"""Tests for RequestRateLimiter sliding window behavior."""

import pytest

from verification_system.screening import RequestRateLimiter


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock) -> RequestRateLimiter:
    return RequestRateLimiter(max_requests=3, window_seconds=60, clock=clock)


def test_defaults_from_settings():
    limiter = RequestRateLimiter()
    assert limiter.max_requests == 10
    assert limiter.window_seconds == 60


def test_allows_up_to_limit(limiter):
    assert [limiter.allow("u1") for _ in range(4)] == [True, True, True, False]
    assert limiter.remaining("u1") == 0


def test_requesters_are_independent(limiter):
    for _ in range(3):
        limiter.allow("u1")
    assert limiter.allow("u2") is True
    assert limiter.remaining("u2") == 2


def test_capacity_returns_as_window_slides(limiter, clock):
    limiter.allow("u1")
    clock.now += 30
    limiter.allow("u1")
    limiter.allow("u1")
    assert limiter.allow("u1") is False

    clock.now += 29
    assert limiter.allow("u1") is False

    # first request is now exactly one window old
    clock.now += 1
    assert limiter.allow("u1") is True
    assert limiter.allow("u1") is False


def test_rejected_requests_are_not_recorded(limiter, clock):
    for _ in range(3):
        limiter.allow("u1")
    for _ in range(5):
        limiter.allow("u1")

    clock.now += 60
    assert limiter.remaining("u1") == 3


def test_reset(limiter):
    for _ in range(3):
        limiter.allow("u1")
        limiter.allow("u2")

    limiter.reset("u1")
    assert limiter.remaining("u1") == 3
    assert limiter.remaining("u2") == 0

    limiter.reset()
    assert limiter.remaining("u2") == 3
