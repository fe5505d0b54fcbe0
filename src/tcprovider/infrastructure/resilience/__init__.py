"""Infrastructure resilience package - retry and async task polling."""

from .poller import AsyncTaskPoller
from .retry import retry_call
from .retry_errors import RETRYABLE_ERROR_CODES, get_error_code, is_retryable_error
from .strategy import ExponentialBackoffStrategy, RetryStrategy

__all__: list[str] = [
    "retry_call",
    "AsyncTaskPoller",
    "RETRYABLE_ERROR_CODES",
    "get_error_code",
    "is_retryable_error",
    "RetryStrategy",
    "ExponentialBackoffStrategy",
]
