# src/cache/identity.py - v1
"""Cache key derivation from theme and ordered fragment identifiers.

The key depends on which fragments are requested and in which order, not
on their bytes; content edits are detected by the validator through
modification times.
"""

from __future__ import annotations

import base64
import hashlib
from collections.abc import Iterable

KEY_PREFIX = "sonar"
HASH_LENGTH = 30


def compute_key(theme: str, fragment_ids: Iterable[str]) -> str:
    """Compute the cache key for a theme and an ordered list of fragment ids.

    Args:
        theme: Presentation context discriminator.
        fragment_ids: Fragment identifiers in aggregation order.

    Returns:
        Key of the form ``sonar-<theme>-<hash prefix>``.
    """
    joined = "".join(fragment_ids)
    return f"{KEY_PREFIX}-{theme}-{_hash_base64(joined)[:HASH_LENGTH]}"


def _hash_base64(data: str) -> str:
    """URL-safe base64 SHA-256 digest without padding."""
    digest = hashlib.sha256(data.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")
