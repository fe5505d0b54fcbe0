"""Bounded retry loop for remote calls."""
import logging
import time
from typing import Callable, Optional, TypeVar

from tcprovider.helpers.logger import get_log_id
from tcprovider.infrastructure.exceptions import RetryTimeoutError
from tcprovider.infrastructure.resilience.retry_errors import is_retryable_error
from tcprovider.infrastructure.resilience.strategy import ExponentialBackoffStrategy, RetryStrategy

T = TypeVar('T')

logger = logging.getLogger(__name__)


def retry_call(operation: Callable[[], T],
               timeout: float,
               name: Optional[str] = None,
               is_retryable: Callable[[BaseException], bool] = is_retryable_error,
               strategy: Optional[RetryStrategy] = None,
               sleep: Callable[[float], None] = time.sleep,
               clock: Callable[[], float] = time.monotonic) -> T:
    """
    Call operation until it returns, retrying transient failures.

    Args:
        operation: Zero-argument callable performing one attempt
        timeout: Overall budget in seconds across all attempts
        name: Operation name used in logs and errors
        is_retryable: Predicate deciding whether a raised error may be retried
        strategy: Backoff between attempts (exponential 0.5s..10s by default)
        sleep: Sleep function, injectable for tests
        clock: Monotonic clock, injectable for tests

    Returns:
        Whatever operation returns on its first successful attempt

    Raises:
        RetryTimeoutError: If transient failures persist past the budget
        Exception: Any non-retryable error, unchanged
    """
    name = name or getattr(operation, '__name__', 'operation')
    strategy = strategy or ExponentialBackoffStrategy()
    deadline = clock() + timeout
    attempt = 0

    while True:
        try:
            return operation()
        except Exception as e:
            if not is_retryable(e):
                raise

            remaining = deadline - clock()
            if remaining <= 0:
                logger.error(f"[CRITAL]{get_log_id()} {name} gave up after {attempt + 1} attempts: {e}")
                raise RetryTimeoutError(name, timeout, e) from e

            delay = min(strategy.next_delay(attempt), remaining)
            logger.warning(f"{get_log_id()} {name} attempt {attempt + 1} failed, retrying in {delay:.2f}s: {e}")
            sleep(delay)
            attempt += 1
