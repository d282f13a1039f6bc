from __future__ import annotations

import asyncio

import pytest

from daybook.ai.rate_limiter import RequestLimiter


class FakeClock:
    """Monotonic clock that only moves when the limiter sleeps or the test advances it."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, delay: float) -> None:
        self.sleeps.append(delay)
        self.now += delay


@pytest.mark.asyncio
async def test_first_request_is_not_delayed() -> None:
    clock = FakeClock()
    limiter = RequestLimiter(1.0, clock=clock, sleep=clock.sleep)

    await limiter.wait_for_next()

    assert clock.sleeps == []
    assert limiter.last_request_at == 100.0


@pytest.mark.asyncio
async def test_back_to_back_requests_are_spaced_by_interval() -> None:
    clock = FakeClock()
    limiter = RequestLimiter(1.0, clock=clock, sleep=clock.sleep)

    await limiter.wait_for_next()
    clock.now += 0.25
    await limiter.wait_for_next()

    assert clock.sleeps == [pytest.approx(0.75)]
    assert limiter.last_request_at == pytest.approx(101.0)


@pytest.mark.asyncio
async def test_request_after_interval_elapsed_is_not_delayed() -> None:
    clock = FakeClock()
    limiter = RequestLimiter(1.0, clock=clock, sleep=clock.sleep)

    await limiter.wait_for_next()
    clock.now += 3.0
    await limiter.wait_for_next()

    assert clock.sleeps == []


@pytest.mark.asyncio
async def test_concurrent_callers_are_released_at_least_one_interval_apart() -> None:
    clock = FakeClock()
    limiter = RequestLimiter(1.0, clock=clock, sleep=clock.sleep)
    released: list[float] = []

    async def caller() -> None:
        await limiter.wait_for_next()
        released.append(clock())

    await asyncio.gather(*(caller() for _ in range(4)))

    assert len(released) == 4
    gaps = [later - earlier for earlier, later in zip(released, released[1:])]
    assert all(gap >= 1.0 for gap in gaps)
