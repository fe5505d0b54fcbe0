"""Backoff strategies for retried calls and task polling."""
from abc import ABC, abstractmethod


class RetryStrategy(ABC):
    """Computes the delay before the next attempt."""

    @abstractmethod
    def next_delay(self, attempt: int) -> float:
        """Delay in seconds after the given zero-based attempt."""


class ExponentialBackoffStrategy(RetryStrategy):
    """Doubles the delay after every attempt, bounded by max_delay."""

    def __init__(self, base_delay: float = 0.5, max_delay: float = 10.0, factor: float = 2.0):
        if base_delay < 0 or max_delay < 0:
            raise ValueError("Delays must be non-negative")
        if factor < 1:
            raise ValueError("Backoff factor must be at least 1")
        self.base_delay = base_delay
        self.max_delay = max(base_delay, max_delay)
        self.factor = factor

    def next_delay(self, attempt: int) -> float:
        return min(self.base_delay * (self.factor ** attempt), self.max_delay)
