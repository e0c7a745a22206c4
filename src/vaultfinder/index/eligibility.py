"""Decide which documents are worth keeping in the content index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet

from vaultfinder.models import DocumentRef

DEFAULT_EXTENSIONS: FrozenSet[str] = frozenset({"md", "txt", "canvas"})
DEFAULT_MAX_BYTES = 1_000_000


@dataclass(slots=True, frozen=True)
class EligibilityPolicy:
    allowed_extensions: FrozenSet[str] = DEFAULT_EXTENSIONS
    max_bytes: int = DEFAULT_MAX_BYTES

    def accepts(self, document: DocumentRef) -> bool:
        return is_eligible(self, document.extension, document.size)


def is_eligible(policy: EligibilityPolicy, extension: str, size: int) -> bool:
    """Return True when a document of this extension and byte size is indexable."""
    return extension in policy.allowed_extensions and size <= policy.max_bytes
