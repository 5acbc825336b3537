# src/logging/context.py - v1
"""Contextual logging support: attach theme, cache key and build state to records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set per build request; asyncio tasks get their own copy.
_theme: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "theme", default=None
)
_cache_key: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "cache_key", default=None
)
_state: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "state", default=None
)


@dataclass
class LogContext:
    """Snapshot of current logging context."""

    theme: str | None = None
    cache_key: str | None = None
    state: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        theme=_theme.get(),
        cache_key=_cache_key.get(),
        state=_state.get(),
    )


def set_build_context(theme: str, cache_key: str) -> None:
    """Set request-level context (called once per build)."""
    _theme.set(theme)
    _cache_key.set(cache_key)
    _state.set(None)


def set_state(state: str) -> None:
    """Record the current orchestrator state."""
    _state.set(state)


def clear_context() -> None:
    """Reset all context variables."""
    _theme.set(None)
    _cache_key.set(None)
    _state.set(None)
