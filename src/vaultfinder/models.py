"""Core vaultfinder data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Protocol, Set, Union, runtime_checkable


@dataclass(slots=True, frozen=True)
class DocumentRef:
    """Identity of a document in the vault catalog."""

    path: str
    extension: str
    size: int


@dataclass(slots=True, frozen=True)
class Snippet:
    """Whitespace-normalized excerpt around the first content match."""

    text: str
    offset: int


class MatchKind(str, Enum):
    PATH = "path"
    CONTENT = "content"


@dataclass(slots=True)
class SearchResult:
    document: DocumentRef
    is_open: bool
    is_active: bool
    match_kind: MatchKind
    snippet: Optional[Snippet] = None

    @property
    def path(self) -> str:
        return self.document.path


@dataclass(slots=True, frozen=True)
class Create:
    document: DocumentRef


@dataclass(slots=True, frozen=True)
class Modify:
    document: DocumentRef


@dataclass(slots=True, frozen=True)
class Delete:
    path: str


@dataclass(slots=True, frozen=True)
class Rename:
    old_path: str
    document: DocumentRef


IndexCommand = Union[Create, Modify, Delete, Rename]


@runtime_checkable
class DocumentSource(Protocol):
    """Catalog listing and text access supplied by the storage layer."""

    def list_all_documents(self) -> list[DocumentRef]: ...

    async def read_document_text(self, path: str) -> str: ...


@runtime_checkable
class MutableCatalog(Protocol):
    """Catalog listing that can follow mutation commands."""

    def apply(self, command: IndexCommand) -> None: ...


@runtime_checkable
class ViewState(Protocol):
    """Which documents the host currently shows."""

    def list_open_document_paths(self) -> Set[str]: ...

    def get_active_document_path(self) -> Optional[str]: ...


@dataclass(slots=True, frozen=True)
class StaticViewState:
    """View state captured once, e.g. from a CLI invocation or HTTP payload."""

    open_paths: FrozenSet[str] = field(default_factory=frozenset)
    active_path: Optional[str] = None

    def list_open_document_paths(self) -> Set[str]:
        return set(self.open_paths)

    def get_active_document_path(self) -> Optional[str]:
        return self.active_path
