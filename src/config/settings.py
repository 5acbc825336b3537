# src/config/settings.py - v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for destination paths, compiler backend selection,
cache backend and logging. Per-backend compiler options are nested models
so their defaults come from model initialization and env overrides use the
``__`` delimiter (e.g. ``LIBSASS__OUTPUT_STYLE=compressed``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class LibsassOptions(BaseModel):
    """Options passed to ``sass.compile`` by the libsass backend."""

    output_style: Literal["nested", "expanded", "compact", "compressed"] = "expanded"
    precision: int = 5
    source_comments: bool = False
    include_paths: list[Path] = Field(default_factory=list)


class DartSassOptions(BaseModel):
    """Options for the external dart-sass executable."""

    executable: str = "sass"
    style: Literal["expanded", "compressed"] = "expanded"
    load_paths: list[Path] = Field(default_factory=list)
    charset: bool = True


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # === Output ===
    destination_root: Path = Path("public/css/sonar")
    default_theme: str = "default"

    # === Behaviour ===
    live_mode: bool = False
    debug_enabled: bool = False

    # === Compiler backend ===
    compiler_backend: str = "none"
    compile_timeout_s: float = 30.0
    libsass: LibsassOptions = Field(default_factory=LibsassOptions)
    dart_sass: DartSassOptions = Field(default_factory=DartSassOptions)

    # === Cache ===
    cache_backend: Literal["memory", "json", "sqlite", "redis"] = "json"
    cache_root: Path = Path("~/.sonar/cache")
    cache_redis_url: str = ""

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("compile_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:  # noqa: N805
        if v <= 0:
            raise ValueError("compile_timeout_s must be > 0")
        return v

    @field_validator("default_theme")
    @classmethod
    def validate_theme(cls, v: str) -> str:  # noqa: N805
        if not v or "/" in v or "\\" in v:
            raise ValueError("default_theme must be a non-empty name without path separators")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_backend == "redis" and not self.cache_redis_url:
            errors.append("CACHE_BACKEND=redis requires CACHE_REDIS_URL")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def resolved_destination_root(self) -> Path:
        """Destination root with ``~`` expanded."""
        return self.destination_root.expanduser()


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-site config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
