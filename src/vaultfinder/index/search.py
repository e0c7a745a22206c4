"""Path and content lookup with tiered ranking."""

from __future__ import annotations

from typing import Iterable, List, Optional, Set

from vaultfinder.index.storage import ContentIndex
from vaultfinder.models import (
    DocumentRef,
    DocumentSource,
    MatchKind,
    SearchResult,
    Snippet,
    ViewState,
)

MIN_CONTENT_QUERY_CHARS = 3
MAX_RESULTS = 200


def normalize_query(query: str) -> str:
    return query.strip().lower()


def find_matches(
    query: str,
    documents: Iterable[DocumentRef],
    index: ContentIndex,
    open_paths: Set[str],
    active_path: Optional[str],
) -> List[SearchResult]:
    """Collect unranked path and content matches for a normalized query."""
    if not query:
        return []

    # Very short queries match almost every note's content; keep them path-only.
    search_content = len(query) >= MIN_CONTENT_QUERY_CHARS

    results: List[SearchResult] = []
    for document in documents:
        path_hit = query in document.path.lower()

        snippet: Optional[Snippet] = None
        if not path_hit and search_content:
            snippet = index.find_snippet(document.path, query)

        if not path_hit and snippet is None:
            continue

        results.append(
            SearchResult(
                document=document,
                is_open=document.path in open_paths,
                is_active=document.path == active_path,
                match_kind=MatchKind.PATH if path_hit else MatchKind.CONTENT,
                snippet=snippet,
            )
        )
    return results


def _rank_key(result: SearchResult) -> tuple:
    return (
        not result.is_active,
        not result.is_open,
        result.match_kind is not MatchKind.PATH,
        len(result.path),
        result.path,
    )


def rank_results(results: Iterable[SearchResult], *, limit: int = MAX_RESULTS) -> List[SearchResult]:
    """Order results active, open, path-before-content, shorter, then alphabetical."""
    return sorted(results, key=_rank_key)[: max(limit, 0)]


class Searcher:
    """High-level API to query the vault."""

    def __init__(
        self,
        index: ContentIndex,
        source: DocumentSource,
        view_state: ViewState | None = None,
    ) -> None:
        self.index = index
        self.source = source
        self.view_state = view_state

    def search(
        self,
        query: str,
        *,
        open_paths: Optional[Set[str]] = None,
        active_path: Optional[str] = None,
        limit: int = MAX_RESULTS,
    ) -> List[SearchResult]:
        normalized = normalize_query(query)
        if not normalized:
            return []

        if self.view_state is not None:
            if open_paths is None:
                open_paths = self.view_state.list_open_document_paths()
            if active_path is None:
                active_path = self.view_state.get_active_document_path()

        matches = find_matches(
            normalized,
            self.source.list_all_documents(),
            self.index,
            open_paths or set(),
            active_path,
        )
        return rank_results(matches, limit=min(limit, MAX_RESULTS))
