"""JSON file operations utilities."""

import json
import os
from typing import Any, Dict

from tcprovider.infrastructure.exceptions import OutputFileError


def write_json_file(
    file_path: str,
    data: Dict[str, Any],
    encoding: str = "utf-8",
    indent: int = 2,
    ensure_ascii: bool = False,
) -> None:
    """
    Write data to a JSON file, creating parent directories.

    Args:
        file_path: Path to JSON file
        data: Data to write
        encoding: File encoding (default: utf-8)
        indent: JSON indentation (default: 2)
        ensure_ascii: Whether to escape non-ASCII characters (default: False)

    Raises:
        OutputFileError: If the data cannot be serialized or the file cannot be written
    """
    try:
        parent = os.path.dirname(os.path.abspath(file_path))
        os.makedirs(parent, exist_ok=True)
        with open(file_path, "w", encoding=encoding) as f:
            json.dump(
                data,
                f,
                indent=indent,
                ensure_ascii=ensure_ascii,
                separators=(",", ": "),
            )
    except TypeError as e:
        raise OutputFileError(f"Failed to serialize data to JSON for {file_path}: {str(e)}") from e
    except OSError as e:
        raise OutputFileError(f"Failed to write JSON file {file_path}: {str(e)}") from e
