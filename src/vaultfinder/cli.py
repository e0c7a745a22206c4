"""Command line interface for vaultfinder."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from vaultfinder.config import AppConfig
from vaultfinder.index.search import MAX_RESULTS
from vaultfinder.models import MatchKind, SearchResult
from vaultfinder.web.app import app as web_app
from vaultfinder.workspace import Workspace


console = Console()
app = typer.Typer(help="vaultfinder - quick path and content search for a notes vault")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _open_workspace(root: Optional[Path]) -> Workspace:
    config = AppConfig(root=root)
    resolved_root = config.resolve_root(Path.cwd())
    if not resolved_root.is_dir():
        raise typer.BadParameter(f"Vault directory not found: {resolved_root}")
    return Workspace.open(config, Path.cwd())


def _badges(result: SearchResult) -> str:
    badges = []
    if result.is_active:
        badges.append("[bold green]ACTIVE[/bold green]")
    elif result.is_open:
        badges.append("[cyan]OPEN[/cyan]")
    if result.match_kind is MatchKind.CONTENT:
        badges.append("[magenta]CONTENT[/magenta]")
    return " ".join(badges)


@app.command()
def index(
    root: Path = typer.Argument(..., help="Vault directory to index.", resolve_path=True),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Build the content index for a vault and report what was indexed."""
    _setup_logging(verbose)
    workspace = _open_workspace(root)

    console.print(f"Indexing [bold]{workspace.source.root}[/bold]...")
    stats = asyncio.run(workspace.rebuild())
    console.print(
        f"Indexed: {stats.indexed}, skipped: {stats.skipped}, failed: {stats.failed}"
    )


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to look for in paths and contents"),
    root: Path = typer.Option(None, "--root", help="Vault directory (defaults to cwd)"),
    open_paths: List[str] = typer.Option([], "--open", help="Vault path of an open document"),
    active: Optional[str] = typer.Option(None, "--active", help="Vault path of the active document"),
    limit: int = typer.Option(MAX_RESULTS, help="Number of results to display"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search document paths and contents."""
    _setup_logging(verbose)
    workspace = _open_workspace(root)
    asyncio.run(workspace.rebuild())

    results = workspace.searcher.search(
        query, open_paths=set(open_paths), active_path=active, limit=limit
    )
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Document")
    table.add_column("Match")
    table.add_column("Snippet")

    for result in results:
        snippet = result.snippet.text if result.snippet else ""
        table.add_row(result.path, _badges(result), snippet)

    console.print(table)


@app.command()
def web(
    root: Path = typer.Option(None, "--root", help="Vault directory (defaults to cwd)"),
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the web API with a live, watched index."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - optional extra
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    workspace = _open_workspace(root)
    web_app.state.workspace = workspace

    console.print(
        f"Starting web interface on http://{host}:{port} (vault: {workspace.source.root})"
    )
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
