from .aggregate import (
    MYSQL_PENDING_STATUSES,
    MYSQL_SUCCESS_STATUSES,
    AsyncTask,
    MysqlTaskStatus,
)

__all__ = [
    "AsyncTask",
    "MysqlTaskStatus",
    "MYSQL_SUCCESS_STATUSES",
    "MYSQL_PENDING_STATUSES",
]
