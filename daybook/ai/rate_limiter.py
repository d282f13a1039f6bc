from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class RequestLimiter:
    """Spaces outbound chat-completion requests by a minimum interval.

    One instance is shared per process. Callers queue on an internal lock, so
    concurrent requests are released one at a time in arrival order.
    """

    def __init__(
        self,
        min_interval_seconds: float = 1.0,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._min_interval_seconds = min_interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._last_request_at: float | None = None
        self._lock = asyncio.Lock()

    @property
    def last_request_at(self) -> float | None:
        return self._last_request_at

    async def wait_for_next(self) -> None:
        async with self._lock:
            if self._last_request_at is not None:
                elapsed = self._clock() - self._last_request_at
                if elapsed < self._min_interval_seconds:
                    delay = self._min_interval_seconds - elapsed
                    logger.debug("throttling chat completion request", extra={"delay_seconds": round(delay, 3)})
                    await self._sleep(delay)
            self._last_request_at = self._clock()
