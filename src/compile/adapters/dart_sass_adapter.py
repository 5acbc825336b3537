# src/compile/adapters/dart_sass_adapter.py - v1
"""dart-sass backend implementing BaseCompiler.

Runs the external ``sass`` executable with the source on stdin.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from sonar.compile.base_compiler import BaseCompiler
from sonar.config.settings import DartSassOptions
from sonar.core.errors import CompileError

logger = logging.getLogger(__name__)


class DartSassCompiler(BaseCompiler):
    """Out-of-process SCSS compilation through the dart-sass CLI."""

    def __init__(self, options: DartSassOptions | None = None) -> None:
        self._options = options or DartSassOptions()

    def build_command(self, source_path: Path | None = None) -> list[str]:
        """Command line for one compilation."""
        cmd = [
            self._options.executable,
            "--stdin",
            f"--style={self._options.style}",
            "--no-source-map",
        ]
        if not self._options.charset:
            cmd.append("--no-charset")
        load_paths = list(self._options.load_paths)
        if source_path is not None:
            load_paths.append(source_path.parent)
        cmd.extend(f"--load-path={p}" for p in load_paths)
        return cmd

    async def compile(self, source: str, source_path: Path | None = None) -> str:
        cmd = self.build_command(source_path)
        logger.debug("Running %s", " ".join(cmd))
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise CompileError(f"Cannot run {self._options.executable!r}: {e}") from e

        try:
            stdout, stderr = await proc.communicate(source.encode("utf-8"))
        except asyncio.CancelledError:
            proc.kill()
            raise

        if proc.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            raise CompileError(message or f"sass exited with code {proc.returncode}")
        return stdout.decode("utf-8")

    @property
    def name(self) -> str:
        return "dart_sass"
