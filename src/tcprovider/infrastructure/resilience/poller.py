"""Polling of remote asynchronous tasks until a terminal status."""
import logging
import time
from typing import Callable, FrozenSet, Iterable, Optional, Tuple

from tcprovider.domain.task import AsyncTask
from tcprovider.helpers.logger import get_log_id
from tcprovider.infrastructure.exceptions import AsyncTaskFailedError, AsyncTaskTimeoutError
from tcprovider.infrastructure.resilience.retry_errors import is_retryable_error
from tcprovider.infrastructure.resilience.strategy import ExponentialBackoffStrategy

logger = logging.getLogger(__name__)

StatusQuery = Callable[[str], Tuple[str, Optional[str]]]


class AsyncTaskPoller:
    """
    Blocks the calling operation until a remote task reaches a terminal status.

    The poller is parameterised by a status query capability, so every
    resource that triggers an asynchronous remote operation shares one loop:

    - a status in ``success_statuses`` returns immediately;
    - a status in ``pending_statuses`` is queried again after a backoff delay;
    - any other status raises AsyncTaskFailedError with the remote message;
    - a transient error from the query is retried until the deadline,
      a non-transient one propagates unchanged;
    - running out of time raises AsyncTaskTimeoutError.
    """

    def __init__(self,
                 query_status: StatusQuery,
                 timeout: float,
                 success_statuses: Iterable[str],
                 pending_statuses: Iterable[str],
                 min_interval: float = 0.5,
                 max_interval: float = 10.0,
                 description: str = "",
                 is_retryable: Callable[[BaseException], bool] = is_retryable_error,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.monotonic):
        self._query_status = query_status
        self._timeout = timeout
        self._success_statuses: FrozenSet[str] = frozenset(success_statuses)
        self._pending_statuses: FrozenSet[str] = frozenset(pending_statuses)
        self._min_interval = min_interval
        self._max_interval = max_interval
        self._description = description
        self._is_retryable = is_retryable
        self._sleep = sleep
        self._clock = clock

    def wait(self, task_id: str) -> AsyncTask:
        """
        Poll task_id until it succeeds, fails or the deadline elapses.

        Args:
            task_id: Identifier returned by the triggering call

        Returns:
            The task as last observed, with a success status

        Raises:
            AsyncTaskFailedError: If the task reports a non-success terminal status
            AsyncTaskTimeoutError: If the task is still in progress at the deadline
        """
        log_id = get_log_id()
        task = AsyncTask(task_id=str(task_id))
        strategy = ExponentialBackoffStrategy(self._min_interval, self._max_interval)
        deadline = self._clock() + self._timeout
        attempt = 0
        last_error: Optional[BaseException] = None

        while True:
            try:
                status, message = self._query_status(task.task_id)
            except Exception as e:
                if not self._is_retryable(e):
                    raise
                last_error = e
                logger.warning(f"{log_id} status query for task {task.task_id} failed, will retry: {e}")
            else:
                last_error = None
                task = task.observe(status, message)

                if task.is_success(self._success_statuses):
                    logger.info(f"{log_id} task {task.task_id} finished with status {status}")
                    return task

                if not task.is_pending(self._pending_statuses):
                    logger.error(f"[CRITAL]{log_id} task {task.task_id} ended with status {status}: {message}")
                    raise AsyncTaskFailedError(task.task_id, status, message, self._description)

                logger.debug(f"{log_id} task {task.task_id} status is {status}")

            remaining = deadline - self._clock()
            if remaining <= 0:
                logger.error(f"[CRITAL]{log_id} task {task.task_id} timed out, last status {task.status}")
                raise AsyncTaskTimeoutError(task.task_id, self._timeout, task.status) from last_error

            self._sleep(min(strategy.next_delay(attempt), remaining))
            attempt += 1
