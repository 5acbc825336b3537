# src/storage/base_output_writer.py - v1
"""Abstract output writer interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class BaseOutputWriter(ABC):
    """Filesystem operations needed to commit compiled output."""

    @abstractmethod
    async def ensure_dir(self, path: Path) -> None:
        """Create ``path`` if missing and check it is writable.

        Raises:
            DirectoryError: If the directory cannot be created or written.
        """

    @abstractmethod
    async def write(self, path: Path, content: bytes | str) -> None:
        """Write content to ``path``, replacing any existing file."""

    @abstractmethod
    async def read(self, path: Path) -> bytes:
        """Read content from ``path``."""

    @abstractmethod
    async def exists(self, path: Path) -> bool:
        """Check if ``path`` is an existing file."""

    @abstractmethod
    async def delete(self, path: Path) -> bool:
        """Delete ``path``. Returns False if it did not exist."""

    @abstractmethod
    async def list_dir(self, path: Path, pattern: str = "*") -> list[Path]:
        """List files in ``path`` matching a glob pattern."""
