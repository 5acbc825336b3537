# src/compile/compiler_factory.py - v1
"""Factory: instantiate the compiler backend from configuration.

Backends are registered by name in an explicit registry and resolved once,
when the StyleCompiler is built.
"""

from __future__ import annotations

import logging
from typing import Callable

from sonar.compile.adapters.dart_sass_adapter import DartSassCompiler
from sonar.compile.adapters.libsass_adapter import LibsassCompiler
from sonar.compile.base_compiler import BaseCompiler, NullCompiler
from sonar.config.settings import Settings

logger = logging.getLogger(__name__)

CompilerBuilder = Callable[[Settings], BaseCompiler]

_COMPILER_REGISTRY: dict[str, CompilerBuilder] = {
    "none": lambda settings: NullCompiler(),
    "libsass": lambda settings: LibsassCompiler(settings.libsass),
    "dart_sass": lambda settings: DartSassCompiler(settings.dart_sass),
}


class UnsupportedCompilerError(ValueError):
    """Raised when a backend name is not registered."""


def create_compiler(settings: Settings | None = None) -> BaseCompiler:
    """Instantiate the configured compiler backend.

    Args:
        settings: Application settings. None selects the NullCompiler.

    Returns:
        Configured BaseCompiler instance.

    Raises:
        UnsupportedCompilerError: If the backend is not registered.
    """
    if settings is None:
        return NullCompiler()

    backend = settings.compiler_backend
    builder = _COMPILER_REGISTRY.get(backend)
    if builder is None:
        raise UnsupportedCompilerError(
            f"Unsupported compiler backend: {backend!r}. "
            f"Available: {', '.join(sorted(_COMPILER_REGISTRY))}"
        )
    logger.debug("Creating compiler backend: %s", backend)
    return builder(settings)


def register_compiler(name: str, builder: CompilerBuilder) -> None:
    """Register a custom backend.

    Args:
        name: Backend identifier.
        builder: Callable taking Settings and returning a BaseCompiler.
    """
    _COMPILER_REGISTRY[name] = builder
    logger.info("Registered compiler backend: %s", name)


def available_compilers() -> list[str]:
    """Sorted list of registered backend names."""
    return sorted(_COMPILER_REGISTRY)
