from abc import ABC, abstractmethod
import random

from task_manager.config import Settings


class RetryPolicy(ABC):
    """Bounded retry schedule.

    ``max_attempts`` is the total number of attempts, ``delay_for`` returns
    the number of seconds to wait after the given (1-based) failed attempt.
    """

    def __init__(self, max_attempts: int):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts

    @abstractmethod
    def delay_for(self, attempt: int) -> float:
        pass


class FixedDelayRetryPolicy(RetryPolicy):
    def __init__(self, max_attempts: int = 5, delay: float = 5.0):
        super().__init__(max_attempts)
        self.delay = delay

    def delay_for(self, attempt: int) -> float:
        return self.delay


class ExponentialBackoffRetryPolicy(RetryPolicy):
    def __init__(
        self,
        max_attempts: int = 5,
        base_delay: float = 1.0,
        multiplier: float = 2.0,
        max_delay: float = 60.0,
        jitter: bool = False,
    ):
        super().__init__(max_attempts)
        self.base_delay = base_delay
        self.multiplier = multiplier
        self.max_delay = max_delay
        self.jitter = jitter

    def delay_for(self, attempt: int) -> float:
        delay = min(self.base_delay * self.multiplier ** (attempt - 1), self.max_delay)
        if self.jitter:
            return random.uniform(0, delay)
        return delay


def create_retry_policy(settings: Settings) -> RetryPolicy:
    if settings.DB_CONNECT_BACKOFF == "fixed":
        return FixedDelayRetryPolicy(
            max_attempts=settings.DB_CONNECT_MAX_RETRIES,
            delay=settings.DB_CONNECT_RETRY_DELAY,
        )
    elif settings.DB_CONNECT_BACKOFF == "exponential":
        return ExponentialBackoffRetryPolicy(
            max_attempts=settings.DB_CONNECT_MAX_RETRIES,
            base_delay=settings.DB_CONNECT_RETRY_DELAY,
            max_delay=settings.DB_CONNECT_MAX_DELAY,
            jitter=settings.DB_CONNECT_JITTER,
        )
    else:
        raise ValueError(f"Unsupported backoff strategy: {settings.DB_CONNECT_BACKOFF}")
