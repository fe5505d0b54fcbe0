"""Logging helpers."""

from .logger import get_log_id, log_context, log_elapsed, setup_logging

__all__ = ["setup_logging", "get_log_id", "log_context", "log_elapsed"]
