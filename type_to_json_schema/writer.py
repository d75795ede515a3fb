"""
Atomic file writer for generated schema documents.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

from .exceptions import SchemaOutputError
from .settings import OutputConfig, OutputMode


def serialize_schema(schema: dict, indent: int | None = 2) -> str:
    """Render a schema document as JSON text with a trailing newline."""
    return json.dumps(schema, indent=indent, ensure_ascii=False) + "\n"


class SchemaWriter:
    """Writes schema documents, honoring the configured output mode.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Atomically replace the target file
    """

    def __init__(self, output_config: OutputConfig | None = None):
        self._config = output_config or OutputConfig()

    def write(self, path: Path, schema: dict) -> None:
        """Write a schema document to a file.

        Raises:
            SchemaOutputError: If the file exists in ERROR_IF_EXISTS mode, or
                the schema is not JSON serializable
            OSError: If file operations fail
        """
        path = Path(path)
        if self._config.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
            raise SchemaOutputError(f"Output file already exists: {path}. Use force mode to overwrite.")
        try:
            content = serialize_schema(schema, self._config.indent)
        except (TypeError, ValueError) as e:
            raise SchemaOutputError(f"Generated schema is not serializable as JSON: {e}") from e
        path.parent.mkdir(parents=True, exist_ok=True)
        if not self._config.atomic_write:
            path.write_text(content, encoding="utf-8")
            return

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)
        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

