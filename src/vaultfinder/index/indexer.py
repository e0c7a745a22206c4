"""Apply vault mutation events to the content index."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from vaultfinder.index.storage import ContentIndex
from vaultfinder.models import Create, Delete, IndexCommand, Modify, MutableCatalog, Rename

LOGGER = logging.getLogger(__name__)


class UpdateDispatcher:
    """Translates create/modify/delete/rename commands into index operations.

    Commands are applied one at a time, in arrival order, with no batching or
    deduplication. Replaying a command leaves the index in the same state.
    When a catalog is given it is updated first, so path matching sees the
    change without rescanning the vault.
    """

    def __init__(self, index: ContentIndex, catalog: Optional[MutableCatalog] = None) -> None:
        self.index = index
        self.catalog = catalog

    async def dispatch(self, command: IndexCommand) -> None:
        if not isinstance(command, (Create, Modify, Delete, Rename)):
            raise TypeError(f"Unsupported index command: {command!r}")

        if self.catalog is not None:
            self.catalog.apply(command)

        if isinstance(command, (Create, Modify)):
            LOGGER.debug("%s %s", type(command).__name__, command.document.path)
            await self.index.upsert_if_eligible(command.document)
        elif isinstance(command, Delete):
            LOGGER.debug("Delete %s", command.path)
            self.index.remove(command.path)
        else:
            LOGGER.debug("Rename %s -> %s", command.old_path, command.document.path)
            self.index.rename(command.old_path, command.document)

    async def replay(self, commands: Iterable[IndexCommand]) -> None:
        for command in commands:
            await self.dispatch(command)
