# src/pipeline/orchestrator.py - v1
"""Build orchestrator: validate, compile and commit aggregated stylesheets.

States:
  unchecked -> validating -> skip
                          -> compiling -> committed
                                       -> failed
  validating -> failed (missing source files)

Every error is caught here and turned into a failed CompileResult; the
caller then serves whatever artifact already exists, if any.
"""

from __future__ import annotations

import asyncio
import logging
import time
import weakref
from datetime import datetime, timezone
from pathlib import Path

from sonar.api.reporting import ErrorReporter, SilentReporter
from sonar.cache.base_cache_store import BaseCacheStore
from sonar.cache.cache_factory import create_cache_store
from sonar.cache.identity import compute_key
from sonar.cache.models import CacheRecord
from sonar.cache.validator import needs_recompile
from sonar.compile.base_compiler import BaseCompiler
from sonar.compile.compiler_factory import create_compiler
from sonar.compile.normalizer import normalize, validate_fragments
from sonar.config.settings import Settings
from sonar.core.errors import (
    CompileError,
    MissingSourceFileError,
    OutputWriteError,
    SonarError,
    TempWriteError,
)
from sonar.core.models import (
    BuildContext,
    BuildState,
    CompilationRequest,
    CompiledArtifact,
    CompileResult,
)
from sonar.logging.context import set_build_context, set_state
from sonar.logging.logger import DEBUG_LOGGER
from sonar.pipeline.hooks import HookRegistry
from sonar.storage import layout
from sonar.storage.base_output_writer import BaseOutputWriter
from sonar.storage.writer_factory import create_writer

logger = logging.getLogger(__name__)
debug_logger = logging.getLogger(DEBUG_LOGGER)


class StyleCompiler:
    """Cache-aware stylesheet builder.

    Collaborators default to the ones selected by ``settings``.

    Args:
        settings: Application settings.
        cache_store: Key-value store holding compile records.
        compiler: Compiler backend.
        writer: Filesystem writer for temp sources and output.
        hooks: Post-compile hooks.
        reporter: Decides whether error detail reaches the caller.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        cache_store: BaseCacheStore | None = None,
        compiler: BaseCompiler | None = None,
        writer: BaseOutputWriter | None = None,
        hooks: HookRegistry | None = None,
        reporter: ErrorReporter | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._cache = cache_store or create_cache_store(self._settings)
        self._compiler = compiler or create_compiler(self._settings)
        self._writer = writer or create_writer(self._settings)
        self._hooks = hooks or HookRegistry()
        self._reporter = reporter or SilentReporter()
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    @property
    def hooks(self) -> HookRegistry:
        return self._hooks

    @property
    def destination_root(self) -> Path:
        return self._settings.resolved_destination_root

    def output_path(self, theme: str, key: str) -> Path:
        """Location of the compiled stylesheet for a key."""
        return layout.artifact_path(self.destination_root, theme, key)

    async def build(self, request: CompilationRequest) -> CompileResult:
        """Return a handle to an up-to-date stylesheet, compiling if needed.

        Never raises for build errors; check ``result.status``.
        """
        key = compute_key(request.theme, request.fragment_ids)
        output_path = self.output_path(request.theme, key)
        live_mode = (
            self._settings.live_mode if request.live_mode is None else request.live_mode
        )
        set_build_context(request.theme, key)
        self._transition(BuildState.UNCHECKED)

        try:
            compiled = await self._build(request, key, output_path, live_mode)
        except SonarError as e:
            return await self._fail(key, output_path, e)
        except Exception as e:
            logger.exception("Unexpected error while building %s", key)
            return await self._fail(key, output_path, CompileError(str(e)))

        if compiled:
            self._transition(BuildState.COMMITTED)
            logger.info("Compiled %s -> %s", key, output_path)
            return CompileResult(status="compiled", key=key, artifact_path=output_path)

        self._transition(BuildState.SKIP)
        return CompileResult(status="cached", key=key, artifact_path=output_path)

    async def _build(
        self,
        request: CompilationRequest,
        key: str,
        output_path: Path,
        live_mode: bool,
    ) -> bool:
        """Run validation and, if stale, compile. Returns True if compiled."""
        self._transition(BuildState.VALIDATING)
        missing = validate_fragments(request.fragments)
        if missing:
            raise MissingSourceFileError({m.fragment_id: m.path for m in missing})

        if not await self._is_stale(request, key, output_path, live_mode):
            return False

        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock

        async with lock:
            # A concurrent request may have committed while we waited.
            if not await self._is_stale(request, key, output_path, live_mode):
                logger.debug("%s compiled by a concurrent request", key)
                return False

            self._transition(BuildState.COMPILING)
            requested_at = datetime.now(timezone.utc)
            context = BuildContext(
                request=request,
                key=key,
                output_path=output_path,
                temp_path=layout.temp_source_path(
                    self.destination_root, request.theme, key, time.time_ns()
                ),
                source=normalize(request.fragments),
                requested_at=requested_at,
                live_mode=live_mode,
            )
            await self._compile_and_commit(context)
        return True

    async def _is_stale(
        self,
        request: CompilationRequest,
        key: str,
        output_path: Path,
        live_mode: bool,
    ) -> bool:
        record = await self._cache.get(key)
        return needs_recompile(
            key, output_path, request.fragments.values(), record, live_mode
        )

    async def _compile_and_commit(self, context: BuildContext) -> None:
        await self._writer.ensure_dir(context.output_path.parent)
        await self._remove_stale_temps(context)

        try:
            await self._writer.write(context.temp_path, context.source)
        except OSError as e:
            raise TempWriteError(context.temp_path, e.strerror or str(e)) from e

        if self._settings.debug_enabled:
            debug_logger.info(
                "Normalized source for %s", context.key,
                extra={"data": {"source": context.source}},
            )

        css = await self._run_compiler(context)

        if self._settings.debug_enabled:
            debug_logger.info(
                "Compiled output for %s", context.key,
                extra={"data": {"css": css}},
            )

        await self._remove_temp(context.temp_path)

        try:
            css = self._hooks.apply(css, context)
        except Exception as e:
            raise CompileError(f"Post-compile hook failed: {e}") from e

        try:
            await self._writer.write(context.output_path, css)
        except OSError as e:
            raise OutputWriteError(context.output_path, e.strerror or str(e)) from e

        await self._cache.set(
            context.key,
            CacheRecord(key=context.key, last_compiled_at=context.requested_at),
            ttl=None,
        )

    async def _run_compiler(self, context: BuildContext) -> str:
        timeout = self._settings.compile_timeout_s
        try:
            return await asyncio.wait_for(
                self._compiler.compile(context.source, context.temp_path),
                timeout=timeout,
            )
        except CompileError:
            raise
        except asyncio.TimeoutError as e:
            raise CompileError(
                f"{self._compiler.name} backend timed out after {timeout}s"
            ) from e
        except Exception as e:
            raise CompileError(f"{self._compiler.name} backend failed: {e}") from e

    async def _remove_stale_temps(self, context: BuildContext) -> None:
        """Drop temp sources left by earlier failed builds of the same key."""
        directory = context.output_path.parent
        for path in await self._writer.list_dir(directory, layout.temp_source_glob(context.key)):
            await self._remove_temp(path)

    async def _remove_temp(self, path: Path) -> None:
        try:
            await self._writer.delete(path)
        except OSError as e:
            logger.warning("Could not remove temporary source %s: %s", path, e)

    async def _fail(self, key: str, output_path: Path, error: SonarError) -> CompileResult:
        self._transition(BuildState.FAILED)
        logger.error("Build of %s failed: %s", key, error)
        try:
            self._reporter.report(error)
        except Exception:
            logger.exception("Error reporter failed for %s", key)
        try:
            existing = output_path if await self._writer.exists(output_path) else None
        except Exception:
            logger.exception("Cannot check existing artifact %s", output_path)
            existing = None
        return CompileResult(
            status="failed", key=key, artifact_path=existing, errors=[str(error)]
        )

    def _transition(self, state: BuildState) -> None:
        set_state(state.value)
        logger.debug("State -> %s", state.value)

    # --- Maintenance ---

    async def invalidate(self, theme: str, fragment_ids: list[str]) -> str:
        """Drop the compile record so the next build recompiles.

        Needed after editing sources in live mode, where mtimes are not
        checked. Returns the affected key.
        """
        key = compute_key(theme, fragment_ids)
        await self._cache.delete(key)
        logger.info("Invalidated %s", key)
        return key

    async def clear_temp_files(self, theme: str) -> int:
        """Delete temporary sources left behind by failed builds."""
        directory = layout.theme_dir(self.destination_root, theme)
        removed = 0
        for path in await self._writer.list_dir(directory, layout.TEMP_GLOB):
            if await self._writer.delete(path):
                removed += 1
        if removed:
            logger.info("Removed %d temporary source(s) from %s", removed, directory)
        return removed

    async def read_artifact(self, result: CompileResult) -> CompiledArtifact | None:
        """Load the artifact a result points at, if any."""
        if result.artifact_path is None:
            return None
        if not await self._writer.exists(result.artifact_path):
            return None
        content = await self._writer.read(result.artifact_path)
        return CompiledArtifact(path=result.artifact_path, content=content)
