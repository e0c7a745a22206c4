"""Text helpers for building match previews."""

from __future__ import annotations

import re
from typing import Optional

from vaultfinder.models import Snippet

SNIPPET_BEFORE = 40
SNIPPET_AFTER = 60
ELLIPSIS = "…"

_WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs into single spaces and strip the edges."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def extract_snippet(text: str, query: str) -> Optional[Snippet]:
    """Build a short preview around the first occurrence of ``query`` in ``text``.

    The window spans ``SNIPPET_BEFORE`` characters before the match and
    ``SNIPPET_AFTER`` characters after it. Ellipsis markers flag a window that
    stops short of either end of the text.
    """
    if not text:
        return None

    offset = text.find(query)
    if offset == -1:
        return None

    start = max(0, offset - SNIPPET_BEFORE)
    end = min(len(text), offset + len(query) + SNIPPET_AFTER)

    snippet = collapse_whitespace(text[start:end])
    if start > 0:
        snippet = f"{ELLIPSIS} {snippet}"
    if end < len(text):
        snippet = f"{snippet} {ELLIPSIS}"

    return Snippet(text=snippet, offset=offset)
