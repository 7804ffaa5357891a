"""Bounded retry with exponential backoff for transient write conflicts."""

import logging
import random
import time
from typing import Callable, Tuple, Type, TypeVar

from pumploss.core.exceptions import WriteConflictError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryConfig:
    """Configuration for retry behavior"""

    def __init__(
        self,
        max_attempts: int = 5,
        base_delay: float = 0.05,
        max_delay: float = 1.0,
        exponential_base: float = 2.0,
        jitter: bool = True,
        retryable_exceptions: Tuple[Type[Exception], ...] = (WriteConflictError,),
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.jitter = jitter
        self.retryable_exceptions = retryable_exceptions

    @classmethod
    def from_settings(cls, settings) -> "RetryConfig":
        return cls(
            max_attempts=settings.ledger_max_attempts,
            base_delay=settings.ledger_retry_base_delay_seconds,
            max_delay=settings.ledger_retry_max_delay_seconds,
        )


def calculate_delay(attempt: int, config: RetryConfig) -> float:
    """Calculate delay with exponential backoff and optional jitter"""
    delay = min(config.base_delay * (config.exponential_base**attempt), config.max_delay)
    if config.jitter:
        delay = delay * (0.5 + random.random())
    return delay


class RetriesExhausted(Exception):
    """Every attempt hit a retryable error; carries the last one."""

    def __init__(self, attempts: int, last_error: Exception):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"{attempts} attempts failed: {last_error}")


def run_with_retry(
    func: Callable[[], T],
    config: RetryConfig,
    label: str = "operation",
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call func until it succeeds or config.max_attempts is reached.

    Only config.retryable_exceptions are retried; anything else
    propagates at once. Exhaustion raises RetriesExhausted.
    """
    last_error = None
    for attempt in range(config.max_attempts):
        try:
            return func()
        except config.retryable_exceptions as e:
            last_error = e
            if attempt < config.max_attempts - 1:
                delay = calculate_delay(attempt, config)
                logger.warning(
                    "Retrying %s after %s (attempt %d/%d, delay %.3fs)",
                    label,
                    e,
                    attempt + 1,
                    config.max_attempts,
                    delay,
                )
                sleep(delay)
            else:
                logger.error(
                    "All %d attempts exhausted for %s: %s", config.max_attempts, label, e
                )

    raise RetriesExhausted(config.max_attempts, last_error)
