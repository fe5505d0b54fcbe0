"""Asynchronous task observed through repeated status queries."""
from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict


class MysqlTaskStatus(str, Enum):
    """Status values reported by cdb:DescribeAsyncRequestInfo."""
    INITIAL = "INITIAL"
    RUNNING = "RUNNING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    KILLED = "KILLED"
    REMOVED = "REMOVED"
    PAUSED = "PAUSED"


MYSQL_SUCCESS_STATUSES: FrozenSet[str] = frozenset({MysqlTaskStatus.SUCCESS.value})
MYSQL_PENDING_STATUSES: FrozenSet[str] = frozenset({
    MysqlTaskStatus.INITIAL.value,
    MysqlTaskStatus.RUNNING.value,
})


class AsyncTask(BaseModel):
    """
    A remote long-running operation.

    The caller only observes it: status changes come from the remote
    service, and the last observed value is kept verbatim even when it is
    not one of the known enum members.
    """
    model_config = ConfigDict(frozen=True)

    task_id: str
    status: Optional[str] = None
    message: Optional[str] = None

    def observe(self, status: str, message: Optional[str] = None) -> 'AsyncTask':
        """Return the task as seen by the latest status query."""
        return self.model_copy(update={"status": status, "message": message})

    def is_success(self, success_statuses: FrozenSet[str]) -> bool:
        return self.status in success_statuses

    def is_pending(self, pending_statuses: FrozenSet[str]) -> bool:
        return self.status in pending_statuses
