"""File-system backed document catalog."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Dict, List, Optional

from vaultfinder.models import Create, Delete, DocumentRef, IndexCommand, Modify, Rename
from vaultfinder.utils.files import extension_of, iter_document_paths, to_vault_path

LOGGER = logging.getLogger(__name__)


class FileSystemSource:
    """Lists and reads the documents stored under a vault directory.

    The listing is scanned from disk once and then kept current through
    ``apply``, so per-query listings never touch the file system. ``refresh``
    (or ``replace`` with the result of ``scan``) picks up changes made while
    nothing was watching.
    """

    def __init__(self, root: Path, *, encoding: str = "utf-8") -> None:
        self.root = Path(root).resolve()
        self.encoding = encoding
        self._catalog: Optional[Dict[str, DocumentRef]] = None

    def list_all_documents(self) -> List[DocumentRef]:
        if self._catalog is None:
            self.refresh()
        return [self._catalog[path] for path in sorted(self._catalog)]

    def scan(self) -> Dict[str, DocumentRef]:
        """Walk the vault and describe every visible file."""
        catalog: Dict[str, DocumentRef] = {}
        for path in iter_document_paths(self.root):
            try:
                document = self.describe(path)
            except OSError as exc:
                # File disappeared between listing and stat.
                LOGGER.debug("Unable to stat %s: %s", path, exc)
                continue
            catalog[document.path] = document
        return catalog

    def replace(self, catalog: Dict[str, DocumentRef]) -> None:
        self._catalog = dict(catalog)

    def refresh(self) -> None:
        self.replace(self.scan())

    def apply(self, command: IndexCommand) -> None:
        """Keep the cached listing in step with a vault mutation."""
        if self._catalog is None:
            return
        if isinstance(command, (Create, Modify)):
            self._catalog[command.document.path] = command.document
        elif isinstance(command, Delete):
            self._catalog.pop(command.path, None)
        elif isinstance(command, Rename):
            self._catalog.pop(command.old_path, None)
            self._catalog[command.document.path] = command.document

    def describe(self, path: Path) -> DocumentRef:
        """Stat ``path`` into a DocumentRef. Raises OSError if it is gone."""
        vault_path = to_vault_path(self.root, path)
        if vault_path is None:
            raise ValueError(f"{path} is outside the vault {self.root}")
        return DocumentRef(
            path=vault_path,
            extension=extension_of(vault_path),
            size=path.stat().st_size,
        )

    def absolute(self, path: str) -> Path:
        return self.root / path

    async def read_document_text(self, path: str) -> str:
        return await asyncio.to_thread(self.absolute(path).read_text, encoding=self.encoding)
