"""Randomized delays between page requests."""

import asyncio
import random

from config.settings import settings


class DelayManager:
    """Waits a uniform random time in ``[min_delay, max_delay]`` between page requests."""

    def __init__(
        self,
        min_delay: float | None = None,
        max_delay: float | None = None,
        enabled: bool = True,
    ):
        """
        Initialize delay manager.

        Args:
            min_delay: Minimum delay in seconds
            max_delay: Maximum delay in seconds
            enabled: Whether delays are enabled
        """
        self.min_delay = settings.min_request_delay if min_delay is None else min_delay
        self.max_delay = settings.max_request_delay if max_delay is None else max_delay
        if self.min_delay > self.max_delay:
            raise ValueError("min_delay must not exceed max_delay")
        self.enabled = enabled

    def get_delay(self) -> float:
        """
        Pick the next delay.

        Returns:
            Delay in seconds
        """
        if not self.enabled:
            return 0.0
        return random.uniform(self.min_delay, self.max_delay)

    async def wait(self) -> float:
        """
        Wait for calculated delay.

        Returns:
            Actual delay waited
        """
        delay = self.get_delay()
        if delay > 0:
            await asyncio.sleep(delay)
        return delay
