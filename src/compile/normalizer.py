# src/compile/normalizer.py - v1
"""Turn an ordered fragment mapping into one compiler-ready source blob.

Inline fragments are emitted verbatim, file fragments become ``@import``
directives so the compiler resolves nested imports itself. Comment
stripping is regex based: comment markers inside string literals are not
protected.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from sonar.core.models import Fragment

_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
# "//" after ":" is a URL scheme (url(http://...)); after "(" or a quote it
# starts a protocol-relative URL (url(//cdn...)). Neither is a comment.
_LINE_COMMENT = re.compile(r"(?<![:(\"'])//[^\n]*")
_BLANK_LINES = re.compile(r"\n\s*\n")


@dataclass(frozen=True)
class MissingSourceFile:
    """A file fragment whose path does not exist."""

    fragment_id: str
    path: Path


def validate_fragments(fragments: Mapping[str, Fragment]) -> list[MissingSourceFile]:
    """Report every file fragment whose source path does not exist."""
    missing: list[MissingSourceFile] = []
    for fragment_id, fragment in fragments.items():
        if fragment.is_file and not Path(fragment.payload).is_file():
            missing.append(MissingSourceFile(fragment_id, Path(fragment.payload)))
    return missing


def expand_fragment(fragment: Fragment) -> str:
    """Source text contributed by a single fragment."""
    if fragment.is_file:
        path = fragment.payload.replace("\\", "/")
        return f'@import "{path}";'
    return fragment.payload


def strip_comments(text: str) -> str:
    """Remove block comments, then line comments."""
    text = _BLOCK_COMMENT.sub("", text)
    return _LINE_COMMENT.sub("", text)


def collapse_blank_lines(text: str) -> str:
    """Collapse runs of blank or whitespace-only lines into one newline."""
    return _BLANK_LINES.sub("\n", text)


def normalize(fragments: Mapping[str, Fragment]) -> str:
    """Concatenate fragments in order and clean the result.

    Args:
        fragments: Ordered mapping of fragment id to fragment.

    Returns:
        Comment-free source with blank-line runs collapsed.
    """
    source = "\n".join(expand_fragment(f) for f in fragments.values())
    return collapse_blank_lines(strip_comments(source))
