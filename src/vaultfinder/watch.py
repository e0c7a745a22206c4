"""
Vault watcher for real-time content index maintenance.

Turns watchdog file system events into index commands. The observer thread
only builds commands; applying them is left to the event loop that owns the
index.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from vaultfinder.models import Create, Delete, DocumentRef, IndexCommand, Modify, Rename
from vaultfinder.source import FileSystemSource
from vaultfinder.utils.files import is_hidden, to_vault_path
from vaultfinder.workspace import Workspace

LOGGER = logging.getLogger(__name__)


class VaultEventHandler(FileSystemEventHandler):
    """File system event handler feeding index commands to ``submit``."""

    def __init__(self, source: FileSystemSource, submit: Callable[[IndexCommand], None]):
        super().__init__()
        self.source = source
        self.submit = submit

    def on_created(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self._upsert(Path(event.src_path), Create)

    def on_modified(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self._upsert(Path(event.src_path), Modify)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        vault_path = self._vault_path(Path(event.src_path))
        if vault_path is not None:
            self.submit(Delete(vault_path))

    def on_moved(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return

        old_path = self._vault_path(Path(event.src_path))
        new_file = Path(event.dest_path)
        if self._vault_path(new_file) is None:
            if old_path is not None:
                self.submit(Delete(old_path))
            return

        if old_path is None:
            self._upsert(new_file, Create)
            return

        document = self._describe(new_file)
        if document is None:
            self.submit(Delete(old_path))
            return
        self.submit(Rename(old_path, document))

    def _upsert(self, path: Path, command: Callable[[DocumentRef], IndexCommand]) -> None:
        vault_path = self._vault_path(path)
        if vault_path is None:
            return

        document = self._describe(path)
        if document is None:
            self.submit(Delete(vault_path))
            return
        self.submit(command(document))

    def _vault_path(self, path: Path) -> Optional[str]:
        vault_path = to_vault_path(self.source.root, path)
        if vault_path is None or is_hidden(Path(vault_path)):
            return None
        return vault_path

    def _describe(self, path: Path) -> Optional[DocumentRef]:
        try:
            return self.source.describe(path)
        except OSError as exc:
            LOGGER.debug("File vanished before it could be indexed: %s (%s)", path, exc)
            return None


class VaultWatcher:
    """Observer plus a single consumer applying commands in arrival order.

    The observer thread only enqueues; the consumer task awaits each command
    before taking the next, so a slow read can never be overtaken by a later
    delete or rename of the same document.
    """

    def __init__(self, workspace: Workspace, loop: asyncio.AbstractEventLoop) -> None:
        self.workspace = workspace
        self.loop = loop
        self.handler = VaultEventHandler(workspace.source, self.submit)
        self.observer = Observer()
        self._queue: asyncio.Queue[IndexCommand] = asyncio.Queue()
        self._consumer: Optional[asyncio.Task] = None

    def start(self) -> None:
        self._consumer = self.loop.create_task(self._consume())
        self.observer.schedule(self.handler, str(self.workspace.source.root), recursive=True)
        self.observer.start()
        LOGGER.info("Watching %s for changes", self.workspace.source.root)

    def submit(self, command: IndexCommand) -> None:
        self.loop.call_soon_threadsafe(self._queue.put_nowait, command)

    async def wait_idle(self) -> None:
        """Wait until every command submitted so far has been applied."""
        await asyncio.sleep(0)
        await self._queue.join()

    def stop(self) -> None:
        self.observer.stop()
        self.observer.join()
        if self._consumer is not None:
            self._consumer.cancel()
            self._consumer = None

    async def _consume(self) -> None:
        while True:
            command = await self._queue.get()
            try:
                await self.workspace.dispatcher.dispatch(command)
            except Exception as exc:
                LOGGER.error("Failed to apply index update %r: %s", command, exc)
            finally:
                self._queue.task_done()


def start_watching(workspace: Workspace, loop: asyncio.AbstractEventLoop) -> VaultWatcher:
    """Watch the workspace root and apply changes on ``loop``."""
    watcher = VaultWatcher(workspace, loop)
    watcher.start()
    return watcher
