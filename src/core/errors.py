# src/core/errors.py - v1
"""Error kinds raised inside the build pipeline.

All of them are caught at the orchestrator boundary and turned into a
failed CompileResult; none reaches the page-rendering caller.
"""

from __future__ import annotations

from pathlib import Path


class SonarError(Exception):
    """Base class for build pipeline errors."""

    kind = "error"


class MissingSourceFileError(SonarError):
    """One or more file fragments point at paths that do not exist."""

    kind = "missing_source_file"

    def __init__(self, missing: dict[str, Path]) -> None:
        self.missing = dict(missing)
        listing = ", ".join(f"{fid}={path}" for fid, path in self.missing.items())
        super().__init__(f"Missing source file(s): {listing}")


class DirectoryError(SonarError):
    """Destination directory cannot be created or is not writable."""

    kind = "directory_error"

    def __init__(self, directory: Path, reason: str) -> None:
        self.directory = directory
        super().__init__(f"Cannot prepare directory {directory}: {reason}")


class TempWriteError(SonarError):
    """Temporary source file cannot be written."""

    kind = "temp_write_error"

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot write temporary source {path}: {reason}")


class CompileError(SonarError):
    """Backend compilation failure (syntax error, crash, timeout)."""

    kind = "compile_error"


class NoBackendConfiguredError(CompileError):
    """Raised by the default compiler when no backend is registered."""

    kind = "no_backend_configured"

    def __init__(self, message: str = "No stylesheet compiler backend configured") -> None:
        super().__init__(message)


class OutputWriteError(SonarError):
    """Compiled output could not be written to its final location."""

    kind = "output_write_error"

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot write compiled output {path}: {reason}")
