"""In-memory content index keyed by document path."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from vaultfinder.index.eligibility import EligibilityPolicy
from vaultfinder.models import DocumentRef, DocumentSource, Snippet
from vaultfinder.utils.text import extract_snippet

LOGGER = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 30


@dataclass(slots=True)
class IndexStats:
    indexed: int = 0
    skipped: int = 0
    failed: int = 0
    processed_files: list[str] = field(default_factory=list)

    def increment(self, status: str, path: str) -> None:
        if status == "indexed":
            self.indexed += 1
        elif status == "skipped":
            self.skipped += 1
        else:
            self.failed += 1
        self.processed_files.append(path)


class ContentIndex:
    """Lowercased text of every eligible, readable document in the vault.

    All mutation happens on the event loop thread. ``build_all`` is the only
    long-running operation and hands control back to the loop after every
    batch so that queries and update events can interleave with it.
    """

    def __init__(
        self,
        source: DocumentSource,
        policy: EligibilityPolicy | None = None,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        self.source = source
        self.policy = policy or EligibilityPolicy()
        self.batch_size = max(batch_size, 1)
        self._text_by_path: Dict[str, str] = {}
        self._building = False

    @property
    def building(self) -> bool:
        return self._building

    def __len__(self) -> int:
        return len(self._text_by_path)

    def __contains__(self, path: object) -> bool:
        return path in self._text_by_path

    def paths(self) -> List[str]:
        return sorted(self._text_by_path)

    def stats(self) -> Dict[str, Any]:
        return {
            "document_count": len(self._text_by_path),
            "total_chars": sum(len(text) for text in self._text_by_path.values()),
            "building": self._building,
        }

    async def build_all(self) -> Optional[IndexStats]:
        """Index the whole catalog, yielding to the event loop between batches.

        Returns ``None`` without doing anything when a build is already running.
        """
        if self._building:
            LOGGER.debug("Index build already in progress, ignoring request")
            return None
        self._building = True

        stats = IndexStats()
        try:
            documents = self.source.list_all_documents()
            LOGGER.info("Building content index for %d documents", len(documents))

            for position, document in enumerate(documents, start=1):
                status = await self.upsert_if_eligible(document)
                stats.increment(status, document.path)

                if position % self.batch_size == 0:
                    await asyncio.sleep(0)
        finally:
            self._building = False

        LOGGER.info(
            "Content index ready: indexed %d, skipped %d, failed %d",
            stats.indexed,
            stats.skipped,
            stats.failed,
        )
        return stats

    async def upsert_if_eligible(self, document: DocumentRef) -> str:
        """Refresh or evict the entry for ``document``.

        Returns ``"indexed"``, ``"skipped"`` (ineligible) or ``"failed"``
        (unreadable). Read errors never propagate.
        """
        if not self.policy.accepts(document):
            LOGGER.debug("Skipping ineligible document %s", document.path)
            self._text_by_path.pop(document.path, None)
            return "skipped"

        try:
            raw = await self.source.read_document_text(document.path)
        except Exception as exc:
            LOGGER.warning("Failed to read %s: %s", document.path, exc)
            self._text_by_path.pop(document.path, None)
            return "failed"

        self._text_by_path[document.path] = raw.lower()
        return "indexed"

    def remove(self, path: str) -> None:
        self._text_by_path.pop(path, None)

    def rename(self, old_path: str, document: DocumentRef) -> None:
        # Content is unchanged by a rename, so the stored text moves as is.
        text = self._text_by_path.pop(old_path, None)
        if text is None:
            return
        if not self.policy.accepts(document):
            LOGGER.debug("Dropping %s, renamed to ineligible %s", old_path, document.path)
            return
        self._text_by_path[document.path] = text

    def find_snippet(self, path: str, query: str) -> Optional[Snippet]:
        text = self._text_by_path.get(path)
        if text is None:
            return None
        return extract_snippet(text, query)

    def contains(self, path: str, query: str) -> bool:
        text = self._text_by_path.get(path)
        return bool(text) and query in text
