"""Process-wide pacing for outbound LLM calls."""
import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class RateGate:
    """
    Serializes callers so that any two passes start at least `interval` seconds apart.

    Holds a single "next allowed" stamp behind an asyncio lock. The lock is kept
    while sleeping, so waiting callers are released strictly one at a time.
    Does not batch and does not cap the total number of passes.
    """

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.interval = interval
        self.passes = 0
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._next_allowed: Optional[float] = None

    async def wait(self) -> None:
        async with self._lock:
            now = self._clock()
            while self._next_allowed is not None and now < self._next_allowed:
                delay = self._next_allowed - now
                logger.debug(f"Rate gate: waiting {delay:.2f}s")
                await self._sleep(delay)
                now = self._clock()
            self._next_allowed = now + self.interval
            self.passes += 1
