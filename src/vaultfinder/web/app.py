"""FastAPI application exposing vault search over HTTP."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from vaultfinder.index.search import MAX_RESULTS
from vaultfinder.models import SearchResult
from vaultfinder.watch import start_watching
from vaultfinder.workspace import Workspace

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="vaultfinder", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class SearchPayload(BaseModel):
    query: str
    open_paths: List[str] = []
    active_path: str | None = None
    limit: int = MAX_RESULTS


class SearchHit(BaseModel):
    path: str
    extension: str
    size: int
    is_open: bool
    is_active: bool
    match_kind: str
    snippet: str | None = None
    offset: int | None = None

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchHit":
        return cls(
            path=result.document.path,
            extension=result.document.extension,
            size=result.document.size,
            is_open=result.is_open,
            is_active=result.is_active,
            match_kind=result.match_kind.value,
            snippet=result.snippet.text if result.snippet else None,
            offset=result.snippet.offset if result.snippet else None,
        )


def _get_workspace() -> Workspace:
    workspace = getattr(app.state, "workspace", None)
    if workspace is None:
        raise HTTPException(status_code=503, detail="No vault configured")
    return workspace


def _log_build_failure(task: asyncio.Task) -> None:
    if not task.cancelled() and task.exception() is not None:
        LOGGER.error("Index build failed: %s", task.exception())


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    workspace = getattr(app.state, "workspace", None)
    if workspace is None:
        LOGGER.warning("No vault configured, search requests will fail")
        return

    app.state.watcher = start_watching(workspace, asyncio.get_running_loop())
    # Path matching works straight away; content matches fill in as the build progresses.
    app.state.build_task = asyncio.create_task(workspace.rebuild())
    app.state.build_task.add_done_callback(_log_build_failure)


@app.on_event("shutdown")
async def shutdown_event() -> None:
    watcher = getattr(app.state, "watcher", None)
    if watcher is not None:
        watcher.stop()
        app.state.watcher = None


@app.post("/search")
async def search_documents(payload: SearchPayload) -> dict[str, List[SearchHit]]:
    query = payload.query.strip()
    if not query:
        return {"results": []}

    workspace = _get_workspace()
    limit = max(1, min(payload.limit, MAX_RESULTS))
    results = workspace.searcher.search(
        query,
        open_paths=set(payload.open_paths),
        active_path=payload.active_path,
        limit=limit,
    )
    return {"results": [SearchHit.from_result(result) for result in results]}


@app.get("/documents")
async def list_documents() -> dict[str, Any]:
    """Report what the content index currently holds."""
    workspace = _get_workspace()
    return {
        "root": str(workspace.source.root),
        "documents": workspace.index.paths(),
        "stats": workspace.index.stats(),
    }


@app.post("/reindex")
async def reindex(background_tasks: BackgroundTasks) -> dict[str, str]:
    workspace = _get_workspace()
    if workspace.index.building:
        return {"status": "already_running"}

    background_tasks.add_task(workspace.rebuild)
    return {"status": "started"}
