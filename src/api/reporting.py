# src/api/reporting.py - v1
"""User-facing error reporting.

Build errors are always logged. Whether their text is also shown to the
current user as a transient notice depends on a permission check; users
without the privilege never see error detail.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from sonar.core.errors import SonarError


class ErrorReporter(ABC):
    """Surfaces build errors to the current caller."""

    @abstractmethod
    def report(self, error: SonarError) -> bool:
        """Report ``error``. Returns True if it was shown to the caller."""


class SilentReporter(ErrorReporter):
    """Never shows anything."""

    def report(self, error: SonarError) -> bool:
        return False


class NoticeReporter(ErrorReporter):
    """Shows error text as a notice to privileged callers only.

    Args:
        is_privileged: Permission check for the current caller.
        notify: Sink for the notice message (e.g. a flash-message queue).
    """

    def __init__(
        self,
        is_privileged: Callable[[], bool],
        notify: Callable[[str], None],
    ) -> None:
        self._is_privileged = is_privileged
        self._notify = notify

    def report(self, error: SonarError) -> bool:
        if not self._is_privileged():
            return False
        self._notify(f"Stylesheet build failed ({error.kind}): {error}")
        return True


class CollectingReporter(ErrorReporter):
    """Keeps reported errors in memory; for CLI runs and tests."""

    def __init__(self) -> None:
        self.errors: list[SonarError] = []

    def report(self, error: SonarError) -> bool:
        self.errors.append(error)
        return True
