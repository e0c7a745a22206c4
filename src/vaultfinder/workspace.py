"""Wire the index, dispatcher and searcher for one vault."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from vaultfinder.config import AppConfig
from vaultfinder.index.indexer import UpdateDispatcher
from vaultfinder.index.search import Searcher
from vaultfinder.index.storage import ContentIndex, IndexStats
from vaultfinder.source import FileSystemSource


@dataclass(slots=True)
class Workspace:
    source: FileSystemSource
    index: ContentIndex
    dispatcher: UpdateDispatcher
    searcher: Searcher

    @classmethod
    def open(cls, config: AppConfig, base_dir: Path | None = None) -> "Workspace":
        source = FileSystemSource(config.resolve_root(base_dir))
        index = ContentIndex(source, config.policy(), batch_size=config.batch_size)
        return cls(
            source=source,
            index=index,
            dispatcher=UpdateDispatcher(index, source),
            searcher=Searcher(index, source),
        )

    async def rebuild(self) -> Optional[IndexStats]:
        """Rescan the vault off the event loop, then rebuild the content index.

        Returns ``None`` when a build is already running.
        """
        if self.index.building:
            return None
        catalog = await asyncio.to_thread(self.source.scan)
        self.source.replace(catalog)
        return await self.index.build_all()
