# ABOUTME: Fixed-delay pacer inserted between crawled companies and connections.
# ABOUTME: Waits the configured delay between items, never after the last one.

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from typing import TypeVar

from linkedin_networker.config import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RateLimiter:
    """Service that spaces out requests against LinkedIn.

    The delay is a courtesy limit: a fixed pause taken between logical
    units of work, not a reaction to overload responses.
    """

    def __init__(
        self, settings: Settings, sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ) -> None:
        """Initialize the rate limiter.

        Args:
            settings: Application settings containing the configured delay.
            sleep: Coroutine used to wait, replaceable in tests.
        """
        self._settings = settings
        self._sleep = sleep

    @property
    def delay_seconds(self) -> float:
        """Return the delay between items, never below one second."""
        return self._settings.effective_rate_limit_ms / 1000

    async def wait(self) -> None:
        """Pause for one inter-item delay."""
        logger.debug("Waiting %.1fs before the next item", self.delay_seconds)
        await self._sleep(self.delay_seconds)

    async def paced(self, items: Sequence[T]) -> AsyncIterator[tuple[int, T]]:
        """Yield (index, item) pairs with the delay between consecutive items.

        The pause happens when the consumer asks for the next item, so no
        delay follows the last one.
        """
        for index, item in enumerate(items):
            if index > 0:
                await self.wait()
            yield index, item
