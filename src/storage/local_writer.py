# src/storage/local_writer.py - v1
"""Local filesystem output writer (default backend).

Writes go to a sibling ``.part`` file first and are moved into place with
``os.replace`` so readers never observe a partially written stylesheet.
"""

from __future__ import annotations

import os
import time
import uuid
from pathlib import Path

from sonar.core.errors import DirectoryError
from sonar.storage.base_output_writer import BaseOutputWriter


class LocalWriter(BaseOutputWriter):
    """Write outputs to the local filesystem."""

    async def ensure_dir(self, path: Path) -> None:
        """Create a directory (idempotent under concurrent first use)."""
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryError(path, e.strerror or str(e)) from e
        if not path.is_dir():
            raise DirectoryError(path, "not a directory")
        if not os.access(path, os.W_OK | os.X_OK):
            raise DirectoryError(path, "not writable")

    async def write(self, path: Path, content: bytes | str) -> None:
        """Atomically write content to a local file path."""
        path.parent.mkdir(parents=True, exist_ok=True)
        part = path.with_name(f".{path.name}.{time.time_ns()}.{uuid.uuid4().hex[:8]}.part")
        try:
            if isinstance(content, bytes):
                part.write_bytes(content)
            else:
                part.write_text(content, encoding="utf-8")
            os.replace(part, path)
        finally:
            if part.exists():
                part.unlink()

    async def read(self, path: Path) -> bytes:
        """Read content from a local file path."""
        return path.read_bytes()

    async def exists(self, path: Path) -> bool:
        """Check if a local file exists."""
        return path.is_file()

    async def delete(self, path: Path) -> bool:
        """Delete a local file."""
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

    async def list_dir(self, path: Path, pattern: str = "*") -> list[Path]:
        """List matching files, sorted by name."""
        if not path.is_dir():
            return []
        return sorted(p for p in path.glob(pattern) if p.is_file())
