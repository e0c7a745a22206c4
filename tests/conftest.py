"""Shared fixtures for vaultfinder tests."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import pytest

from vaultfinder.index.storage import ContentIndex
from vaultfinder.models import DocumentRef


class InMemorySource:
    """Document source backed by a dict, with switchable read failures."""

    def __init__(self) -> None:
        self.documents: Dict[str, DocumentRef] = {}
        self.texts: Dict[str, str] = {}
        self.failing: set[str] = set()
        self.reads: List[str] = []

    def add(self, path: str, text: str, *, size: int | None = None) -> DocumentRef:
        document = DocumentRef(
            path=path,
            extension=Path(path).suffix[1:],
            size=len(text.encode("utf-8")) if size is None else size,
        )
        self.documents[path] = document
        self.texts[path] = text
        return document

    def drop(self, path: str) -> None:
        self.documents.pop(path, None)
        self.texts.pop(path, None)

    def list_all_documents(self) -> List[DocumentRef]:
        return [self.documents[path] for path in sorted(self.documents)]

    async def read_document_text(self, path: str) -> str:
        self.reads.append(path)
        if path in self.failing:
            raise OSError(f"cannot read {path}")
        return self.texts[path]


@pytest.fixture
def source() -> InMemorySource:
    return InMemorySource()


@pytest.fixture
def content_index(source: InMemorySource) -> ContentIndex:
    return ContentIndex(source)
