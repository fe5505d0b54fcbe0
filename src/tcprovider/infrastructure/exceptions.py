from typing import Optional, Any


class InfrastructureError(Exception):
    """Base exception for infrastructure-related errors."""
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details


class RetryTimeoutError(InfrastructureError):
    """Raised when a retried operation keeps failing transiently past its budget."""
    def __init__(self, operation: str, timeout: float, last_error: Optional[BaseException] = None):
        message = f"{operation} did not succeed within {timeout:g}s"
        if last_error is not None:
            message = f"{message}: {last_error}"
        super().__init__(message, details={"operation": operation, "timeout": timeout})
        self.operation = operation
        self.timeout = timeout
        self.last_error = last_error


class AsyncTaskFailedError(InfrastructureError):
    """Raised when a remote asynchronous task reports a non-success terminal status."""
    def __init__(self, task_id: str, status: str, message: Optional[str], description: str = ""):
        subject = description or f"task {task_id}"
        super().__init__(
            f"{subject} status is {status}, we won't wait for it finish, it show message:{message or ''}",
            details={"task_id": task_id, "status": status},
        )
        self.task_id = task_id
        self.status = status
        self.message = message


class AsyncTaskTimeoutError(InfrastructureError):
    """Raised when an asynchronous task is still in progress when the deadline elapses."""
    def __init__(self, task_id: str, timeout: float, last_status: Optional[str] = None):
        super().__init__(
            f"task {task_id} did not finish within {timeout:g}s, last status: {last_status or 'unknown'}",
            details={"task_id": task_id, "last_status": last_status},
        )
        self.task_id = task_id
        self.timeout = timeout
        self.last_status = last_status


class UnsupportedResourceError(InfrastructureError):
    """Raised when an unknown resource or data source type is requested."""
    pass


class OutputFileError(InfrastructureError):
    """Raised when a resolved record cannot be written to its output file."""
    pass
