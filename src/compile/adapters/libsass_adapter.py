# src/compile/adapters/libsass_adapter.py - v1
"""libsass backend implementing BaseCompiler.

Requires 'libsass' package: pip install libsass. The compile call is
blocking C code, so it runs in a worker thread.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from sonar.compile.base_compiler import BaseCompiler
from sonar.config.settings import LibsassOptions
from sonar.core.errors import CompileError


class LibsassCompiler(BaseCompiler):
    """In-process SCSS compilation through libsass."""

    def __init__(self, options: LibsassOptions | None = None) -> None:
        self._options = options or LibsassOptions()

    async def compile(self, source: str, source_path: Path | None = None) -> str:
        try:
            import sass
        except ImportError as e:
            raise CompileError("libsass package required: pip install libsass") from e

        include_paths = [str(p) for p in self._options.include_paths]
        if source_path is not None:
            include_paths.append(str(source_path.parent))

        try:
            return await asyncio.to_thread(
                sass.compile,
                string=source,
                output_style=self._options.output_style,
                precision=self._options.precision,
                source_comments=self._options.source_comments,
                include_paths=include_paths,
            )
        except sass.CompileError as e:
            raise CompileError(str(e)) from e

    @property
    def name(self) -> str:
        return "libsass"
