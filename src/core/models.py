# src/core/models.py - v1
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


# === INPUT ===


class Fragment(BaseModel):
    """One unit of stylesheet source: inline text or a reference to a file."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["inline", "file"]
    payload: str

    @classmethod
    def inline(cls, text: str) -> Fragment:
        return cls(kind="inline", payload=text)

    @classmethod
    def file(cls, path: str | Path) -> Fragment:
        """Reference a source file.

        Pass an absolute path: it is emitted as given in the ``@import``
        directive, and a relative one only resolves if the compiler's
        include paths happen to contain its base directory.
        """
        return cls(kind="file", payload=str(path))

    @property
    def is_file(self) -> bool:
        return self.kind == "file"

    @property
    def path(self) -> Path | None:
        """Source path for file fragments, None for inline ones."""
        return Path(self.payload) if self.is_file else None


class CompilationRequest(BaseModel):
    """Ordered fragments for one page/context plus the theme discriminator.

    Insertion order of ``fragments`` is the aggregation order.
    ``live_mode=None`` defers to the configured default.
    """

    model_config = ConfigDict(frozen=True)

    fragments: dict[str, Fragment]
    theme: str
    live_mode: bool | None = None

    @field_validator("theme")
    @classmethod
    def validate_theme(cls, v: str) -> str:  # noqa: N805
        if not v or "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError(f"Invalid theme name: {v!r}")
        return v

    @property
    def fragment_ids(self) -> list[str]:
        return list(self.fragments)


# === PIPELINE ===


class BuildState(str, Enum):
    """Orchestrator states, in transition order."""

    UNCHECKED = "unchecked"
    VALIDATING = "validating"
    SKIP = "skip"
    COMPILING = "compiling"
    COMMITTED = "committed"
    FAILED = "failed"


class BuildContext(BaseModel):
    """Immutable per-request value threaded through the pipeline stages."""

    model_config = ConfigDict(frozen=True)

    request: CompilationRequest
    key: str
    output_path: Path
    temp_path: Path
    source: str
    requested_at: datetime
    live_mode: bool

    @property
    def theme(self) -> str:
        return self.request.theme


# === OUTPUT ===


class CompiledArtifact(BaseModel):
    """Durable compiled output, keyed by cache key."""

    path: Path
    content: bytes


class CompileResult(BaseModel):
    """Outcome of one build request.

    ``artifact_path`` is the file callers should serve: the fresh output on
    success, the pre-existing (possibly stale) one on failure, or None when
    no artifact is available at all.
    """

    status: Literal["compiled", "cached", "failed"]
    key: str
    artifact_path: Path | None = None
    errors: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status != "failed"

    @property
    def fresh(self) -> bool:
        """True when this request produced new output."""
        return self.status == "compiled"
