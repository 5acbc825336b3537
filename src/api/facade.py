# src/api/facade.py - v1
"""Public API facade: one call per page request.

Usage:
    from sonar.api.facade import compile_styles
    result = await compile_styles(
        {"base": Fragment.file("/themes/bartik/base.scss"),
         "vars": Fragment.inline("$accent: #0074bd;")},
        theme="bartik",
    )
    href = result.artifact_path  # may be None when nothing could be built
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from sonar.config.settings import Settings
from sonar.core.models import CompilationRequest, CompileResult, Fragment
from sonar.pipeline.orchestrator import StyleCompiler

if TYPE_CHECKING:
    from sonar.api.reporting import ErrorReporter
    from sonar.cache.base_cache_store import BaseCacheStore
    from sonar.compile.base_compiler import BaseCompiler
    from sonar.pipeline.hooks import HookRegistry

logger = logging.getLogger(__name__)


def create_style_compiler(
    settings: Settings | None = None,
    cache_store: BaseCacheStore | None = None,
    compiler: BaseCompiler | None = None,
    hooks: HookRegistry | None = None,
    reporter: ErrorReporter | None = None,
) -> StyleCompiler:
    """Build a StyleCompiler, resolving unset collaborators from settings."""
    settings = settings or Settings()
    style_compiler = StyleCompiler(
        settings=settings,
        cache_store=cache_store,
        compiler=compiler,
        hooks=hooks,
        reporter=reporter,
    )
    logger.debug(
        "StyleCompiler ready: backend=%s, cache=%s, destination=%s",
        settings.compiler_backend, settings.cache_backend,
        settings.resolved_destination_root,
    )
    return style_compiler


async def compile_styles(
    fragments: Mapping[str, Fragment],
    theme: str | None = None,
    live_mode: bool | None = None,
    settings: Settings | None = None,
    style_compiler: StyleCompiler | None = None,
) -> CompileResult:
    """Build (or reuse) the aggregated stylesheet for a set of fragments.

    Args:
        fragments: Ordered mapping of fragment id to fragment.
        theme: Theme discriminator. Defaults to ``settings.default_theme``.
        live_mode: Override of the configured live mode.
        settings: Global settings. Loaded from .env if None.
        style_compiler: Reuse an existing compiler (keeps its locks and cache).

    Returns:
        CompileResult; never raises for build failures.
    """
    settings = settings or Settings()
    style_compiler = style_compiler or create_style_compiler(settings)
    request = CompilationRequest(
        fragments=dict(fragments),
        theme=theme or settings.default_theme,
        live_mode=live_mode,
    )
    return await style_compiler.build(request)
