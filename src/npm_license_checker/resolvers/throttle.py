"""Fixed-delay throttle for registry requests.

Public registries apply abuse limits. Rather than a token bucket, requests
are spaced by a fixed minimum gap measured from the end of the previous
request, which is enough while lookups run one at a time. Running lookups
concurrently would need a shared scheduler instead.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 1.001


class FixedDelayThrottle:
    """Enforce a minimum delay between consecutive network requests.

    Use as an async context manager around each request::

        async with throttle:
            await session.get(url)

    Entering waits until ``delay`` seconds have passed since the previous
    request completed; leaving records the completion time, whether or not
    the request succeeded. The first request is not delayed.

    Attributes:
        delay: Minimum gap in seconds between requests.
    """

    def __init__(
        self,
        delay: float = DEFAULT_DELAY_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the throttle.

        Args:
            delay: Minimum gap in seconds between requests.
            clock: Monotonic clock returning seconds.
            sleep: Coroutine function used to wait.
        """
        self.delay = delay
        self._clock = clock
        self._sleep = sleep
        self._last_completed: Optional[float] = None
        self.request_count = 0

    async def wait(self) -> None:
        """Wait until the next request may be issued."""
        if self._last_completed is None:
            return

        remaining = self.delay - (self._clock() - self._last_completed)
        if remaining > 0:
            logger.debug("Throttling registry request for %.3fs", remaining)
            await self._sleep(remaining)

    def mark_completed(self) -> None:
        """Record that a request has just completed."""
        self._last_completed = self._clock()
        self.request_count += 1

    async def __aenter__(self) -> "FixedDelayThrottle":
        await self.wait()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.mark_completed()
