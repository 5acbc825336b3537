# src/compile/base_compiler.py - v1
"""Abstract compiler backend interface and the default no-op backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from sonar.core.errors import NoBackendConfiguredError


class BaseCompiler(ABC):
    """Converts normalized stylesheet source into CSS."""

    @abstractmethod
    async def compile(self, source: str, source_path: Path | None = None) -> str:
        """Compile ``source`` and return CSS text.

        Args:
            source: Normalized source blob.
            source_path: Temporary file holding the same source, for backends
                that prefer reading from disk.

        Raises:
            CompileError: On syntax errors or backend failure.
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend identifier (none, libsass, dart_sass)."""


class NullCompiler(BaseCompiler):
    """Fallback used when no backend is configured; always fails."""

    async def compile(self, source: str, source_path: Path | None = None) -> str:
        raise NoBackendConfiguredError()

    @property
    def name(self) -> str:
        return "none"
