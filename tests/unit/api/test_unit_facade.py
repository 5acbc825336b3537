# tests/unit/api/test_unit_facade.py - v1
"""Tests for api/facade.py."""

from __future__ import annotations

import pytest

from sonar.api.facade import compile_styles, create_style_compiler
from sonar.compile.base_compiler import NullCompiler
from sonar.core.models import Fragment
from sonar.pipeline.orchestrator import StyleCompiler


class TestCreateStyleCompiler:
    def test_defaults_from_settings(self, settings):
        compiler = create_style_compiler(settings)
        assert isinstance(compiler, StyleCompiler)
        assert isinstance(compiler._compiler, NullCompiler)
        assert compiler.destination_root == settings.destination_root


class TestCompileStyles:
    @pytest.mark.asyncio
    async def test_default_theme(self, settings, style_compiler):
        result = await compile_styles(
            {"i": Fragment.inline("a {}")}, settings=settings, style_compiler=style_compiler,
        )
        assert result.status == "compiled"
        assert result.key.startswith(f"sonar-{settings.default_theme}-")

    @pytest.mark.asyncio
    async def test_explicit_theme_and_reuse(self, settings, style_compiler, fake_compiler):
        fragments = {"i": Fragment.inline("a {}")}
        first = await compile_styles(fragments, theme="olivero", settings=settings, style_compiler=style_compiler)
        second = await compile_styles(fragments, theme="olivero", settings=settings, style_compiler=style_compiler)
        assert first.artifact_path.parent.name == "olivero"
        assert second.status == "cached"
        assert len(fake_compiler.calls) == 1

    @pytest.mark.asyncio
    async def test_without_backend_never_raises(self, settings):
        result = await compile_styles({"i": Fragment.inline("a {}")}, settings=settings)
        assert result.status == "failed"
        assert result.artifact_path is None
