# src/cache/validator.py - v1
"""Decide whether a compiled artifact must be regenerated.

Checks run in a fixed order and short-circuit:
  1. output file missing -> recompile
  2. no cache record -> recompile
  3. live mode -> trust the artifact, skip mtime scanning
  4. any file fragment modified after the last compile -> recompile
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from sonar.cache.models import CacheRecord
from sonar.core.models import Fragment

logger = logging.getLogger(__name__)


def needs_recompile(
    key: str,
    output_path: Path,
    fragments: Iterable[Fragment],
    record: CacheRecord | None,
    live_mode: bool,
) -> bool:
    """Return True when the artifact at ``output_path`` is missing or stale.

    Args:
        key: Cache key of the request.
        output_path: Location of the compiled artifact.
        fragments: Request fragments; only file fragments are inspected.
        record: Cache record for ``key``, or None if absent.
        live_mode: Production mode, disables staleness scanning.
    """
    if not output_path.is_file():
        logger.debug("Recompile %s: no output at %s", key, output_path)
        return True

    if record is None:
        logger.debug("Recompile %s: no cache record", key)
        return True

    if live_mode:
        return False

    for fragment in fragments:
        if not fragment.is_file:
            continue
        modified = source_mtime(Path(fragment.payload))
        if modified is not None and modified > record.last_compiled_at:
            logger.debug(
                "Recompile %s: %s modified at %s after %s",
                key, fragment.payload, modified.isoformat(),
                record.last_compiled_at.isoformat(),
            )
            return True

    return False


def source_mtime(path: Path) -> datetime | None:
    """Modification time of ``path`` as an aware UTC datetime, None if absent."""
    try:
        return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    except FileNotFoundError:
        return None
