# src/storage/layout.py - v1
"""Output directory structure definition.

    <destination_root>/<theme>/<key>.css
    <destination_root>/<theme>/tmp.<key>.<timestamp>.scss
"""

from __future__ import annotations

from pathlib import Path

OUTPUT_SUFFIX = ".css"
TEMP_PREFIX = "tmp."
TEMP_SUFFIX = ".scss"
TEMP_GLOB = f"{TEMP_PREFIX}*{TEMP_SUFFIX}"


def theme_dir(destination_root: Path, theme: str) -> Path:
    """Return the theme-scoped output directory."""
    return destination_root / theme


def artifact_path(destination_root: Path, theme: str, key: str) -> Path:
    """Return the compiled stylesheet path for a cache key."""
    return theme_dir(destination_root, theme) / f"{key}{OUTPUT_SUFFIX}"


def temp_source_path(
    destination_root: Path, theme: str, key: str, timestamp: int
) -> Path:
    """Return the per-request temporary source path."""
    return theme_dir(destination_root, theme) / f"{TEMP_PREFIX}{key}.{timestamp}{TEMP_SUFFIX}"


def temp_source_glob(key: str) -> str:
    """Glob matching every temporary source written for one key."""
    return f"{TEMP_PREFIX}{key}.*{TEMP_SUFFIX}"
