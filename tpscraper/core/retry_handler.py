"""Retry handler with exponential backoff for failed navigations."""

import asyncio
import random
from typing import Awaitable, Callable, TypeVar

from loguru import logger

from config.settings import settings
from tpscraper.exceptions import RetryExhaustedError

T = TypeVar("T")


class RetryHandler:
    """
    Retries an async operation with exponential backoff and jitter.

    Between attempt k and k+1 the handler sleeps
    ``base_delay * 2**k + uniform(0, max_jitter)`` seconds. Every exception
    raised by the operation counts as a failed attempt.
    """

    def __init__(
        self,
        max_attempts: int | None = None,
        base_delay: float = 1.0,
        max_jitter: float = 1.0,
        exponential_base: float = 2.0,
    ):
        self.max_attempts = settings.max_retries if max_attempts is None else max_attempts
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.base_delay = base_delay
        self.max_jitter = max_jitter
        self.exponential_base = exponential_base

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        label: str = "Operation",
    ) -> T:
        """
        Run ``operation`` until it succeeds or the attempt budget is spent.

        Args:
            operation: Zero-argument coroutine function to run
            label: Name of the operation used in log messages

        Returns:
            The result of the first successful attempt

        Raises:
            RetryExhaustedError: wrapping the last error once all attempts failed
        """
        last_exception: Exception | None = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                return await operation()
            except Exception as e:
                last_exception = e
                if attempt >= self.max_attempts:
                    break

                delay = self._calculate_delay(attempt)
                logger.warning(
                    f"{label} attempt {attempt}/{self.max_attempts} failed: {e}. "
                    f"Retrying in {delay:.2f}s..."
                )
                await asyncio.sleep(delay)

        logger.error(f"{label} failed after {self.max_attempts} attempts: {last_exception}")
        raise RetryExhaustedError(label, self.max_attempts, last_exception) from last_exception

    def _calculate_delay(self, attempt: int) -> float:
        """Backoff delay in seconds after the given (1-based) failed attempt."""
        delay = self.base_delay * (self.exponential_base ** attempt)
        return delay + random.random() * self.max_jitter
