"""File utilities."""

from .json_utils import write_json_file

__all__ = ["write_json_file"]
