import logging
import os
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from typing import Iterator, Optional

import structlog

from tcprovider.config.schemas import LoggingConfig

_log_id: ContextVar[Optional[str]] = ContextVar("tcprovider_log_id", default=None)


def setup_logging(config: Optional[LoggingConfig] = None, name: str = "tcprovider") -> structlog.BoundLogger:
    """
    Set up structured logging for the provider using structlog.

    Args:
        config: Logging configuration. If None, defaults are used.
        name: Logger name for the returned structlog logger.
    Returns:
        Configured structlog logger instance.
    """
    if config is None:
        config = LoggingConfig()

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.level.upper()))

    # Create custom formatter that includes caller information
    class DetailedFormatter(logging.Formatter):
        def format(self, record):
            record.caller_info = f"{record.module}.{record.funcName}:{record.lineno}"
            return super().format(record)

    log_format = "%(asctime)s - %(levelname)s - %(name)s [%(caller_info)s] - %(message)s"

    handlers = []

    if config.destination in ("file", "both"):
        log_dir = os.path.dirname(os.path.expandvars(config.file_path))
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.expandvars(config.file_path),
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count
        )
        file_handler.setFormatter(DetailedFormatter(log_format))
        handlers.append(file_handler)

    if config.destination in ("stdout", "both"):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(DetailedFormatter(log_format))
        handlers.append(console_handler)

    # Remove any existing handlers and add new ones
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.KeyValueRenderer(key_order=["event", "log_id"]),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger(name)

    logger.debug(
        "Logging configured",
        log_level=config.level,
        log_destination=config.destination,
        log_file=config.file_path if config.destination != "stdout" else None
    )

    return logger


def get_log_id() -> str:
    """Return the log id bound to the current operation, or a fresh one."""
    log_id = _log_id.get()
    if log_id is None:
        return str(uuid.uuid4())
    return log_id


@contextmanager
def log_context(log_id: Optional[str] = None) -> Iterator[str]:
    """Bind a log id to every log line emitted by the enclosed operation."""
    log_id = log_id or str(uuid.uuid4())
    token = _log_id.set(log_id)
    structlog.contextvars.bind_contextvars(log_id=log_id)
    try:
        yield log_id
    finally:
        structlog.contextvars.unbind_contextvars("log_id")
        _log_id.reset(token)


@contextmanager
def log_elapsed(operation: str) -> Iterator[None]:
    """Log how long the enclosed operation took."""
    logger = logging.getLogger("tcprovider.elapsed")
    start = time.monotonic()
    try:
        yield
    finally:
        logger.debug("[ELAPSED] %s elapsed %d ms", operation, int((time.monotonic() - start) * 1000))
