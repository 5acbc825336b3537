# tests/conftest.py - v1
"""Shared test fixtures for all unit and integration tests.

Provides settings pointed at a temp destination root, an in-memory cache
store, a scriptable fake compiler and helpers to create source files with
controlled modification times. No external backend is required.
"""

from __future__ import annotations

import asyncio
import os
import time
from pathlib import Path
from typing import Callable

import pytest

from sonar.cache.memory_store import MemoryCacheStore
from sonar.compile.base_compiler import BaseCompiler
from sonar.config.settings import Settings
from sonar.pipeline.orchestrator import StyleCompiler


class FakeCompiler(BaseCompiler):
    """Records every call and returns ``/* compiled */`` plus the source."""

    def __init__(
        self,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.error = error
        self.delay = delay
        self.calls: list[str] = []
        self.source_paths: list[Path | None] = []

    async def compile(self, source: str, source_path: Path | None = None) -> str:
        self.calls.append(source)
        self.source_paths.append(source_path)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return f"/* compiled */\n{source}\n"

    @property
    def name(self) -> str:
        return "fake"


# === FIXTURES: Configuration ===


@pytest.fixture
def destination_root(tmp_path: Path) -> Path:
    """Destination root for compiled output (not created up front)."""
    return tmp_path / "public" / "css"


@pytest.fixture
def settings(destination_root: Path) -> Settings:
    """Settings isolated from any .env file."""
    return Settings(
        _env_file=None,
        destination_root=destination_root,
        cache_backend="memory",
        compile_timeout_s=5.0,
    )


# === FIXTURES: Collaborators ===


@pytest.fixture
def cache_store() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest.fixture
def fake_compiler() -> FakeCompiler:
    return FakeCompiler()


@pytest.fixture
def style_compiler(
    settings: Settings, cache_store: MemoryCacheStore, fake_compiler: FakeCompiler
) -> StyleCompiler:
    return StyleCompiler(
        settings=settings, cache_store=cache_store, compiler=fake_compiler
    )


# === FIXTURES: Source files ===


@pytest.fixture
def make_source(tmp_path: Path) -> Callable[..., Path]:
    """Create a source file, by default with an mtime one hour in the past."""
    src_dir = tmp_path / "src"
    src_dir.mkdir(exist_ok=True)

    def _make(name: str, content: str = "a { color: red; }", age_s: float = 3600.0) -> Path:
        path = src_dir / name
        path.write_text(content, encoding="utf-8")
        set_mtime(path, time.time() - age_s)
        return path

    return _make


def set_mtime(path: Path, timestamp: float) -> None:
    """Set both atime and mtime of ``path``."""
    os.utime(path, (timestamp, timestamp))
