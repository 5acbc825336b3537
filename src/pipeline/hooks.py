# src/pipeline/hooks.py - v1
"""Post-compile hook registry.

Hooks receive the compiled CSS and the build context and return the
(possibly rewritten) CSS. They run in registration order, after the
backend succeeds and before the output is written.
"""

from __future__ import annotations

import logging
from typing import Callable

from sonar.core.models import BuildContext

logger = logging.getLogger(__name__)

PostCompileHook = Callable[[str, BuildContext], str]


class HookRegistry:
    """Ordered collection of post-compile hooks."""

    def __init__(self) -> None:
        self._hooks: list[PostCompileHook] = []

    def __len__(self) -> int:
        return len(self._hooks)

    def register(self, hook: PostCompileHook) -> PostCompileHook:
        """Register a hook. Returns it so this can be used as a decorator."""
        self._hooks.append(hook)
        logger.debug("Registered post-compile hook: %s", getattr(hook, "__name__", hook))
        return hook

    def unregister(self, hook: PostCompileHook) -> None:
        """Remove a previously registered hook."""
        self._hooks.remove(hook)

    def apply(self, css: str, context: BuildContext) -> str:
        """Run every hook over ``css``."""
        for hook in self._hooks:
            css = hook(css, context)
        return css
