"""Tests for CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import typer
from typer.testing import CliRunner

from vaultfinder.cli import _badges, _open_workspace, _setup_logging, app
from vaultfinder.models import DocumentRef, MatchKind, SearchResult


runner = CliRunner()


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    (tmp_path / "projects").mkdir()
    (tmp_path / "projects" / "roadmap.md").write_text("Launch the beta in March")
    (tmp_path / "groceries.txt").write_text("eggs, milk, roadmap paper")
    (tmp_path / "diagram.png").write_bytes(b"\x89PNG roadmap")
    return tmp_path


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("vaultfinder.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("vaultfinder.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestHelpers:
    """Tests for small CLI helpers."""

    def test_open_workspace_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(typer.BadParameter):
            _open_workspace(tmp_path / "missing")

    def test_badges(self) -> None:
        document = DocumentRef("a.md", "md", 1)

        active = SearchResult(document, is_open=True, is_active=True, match_kind=MatchKind.PATH)
        open_content = SearchResult(document, is_open=True, is_active=False, match_kind=MatchKind.CONTENT)
        plain = SearchResult(document, is_open=False, is_active=False, match_kind=MatchKind.PATH)

        assert "ACTIVE" in _badges(active) and "OPEN" not in _badges(active)
        assert "OPEN" in _badges(open_content) and "CONTENT" in _badges(open_content)
        assert _badges(plain) == ""


class TestIndexCommand:
    """Tests for the index command."""

    def test_index_reports_counts(self, vault: Path) -> None:
        result = runner.invoke(app, ["index", str(vault)])

        assert result.exit_code == 0
        assert "Indexed: 2, skipped: 1, failed: 0" in result.stdout

    def test_index_missing_directory(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["index", str(tmp_path / "nope")])

        assert result.exit_code != 0


class TestSearchCommand:
    """Tests for the search command."""

    def test_search_path_and_content(self, vault: Path) -> None:
        result = runner.invoke(app, ["search", "roadmap", "--root", str(vault)])

        assert result.exit_code == 0
        assert "projects/roadmap.md" in result.stdout
        assert "groceries.txt" in result.stdout
        assert "CONTENT" in result.stdout
        assert "diagram.png" not in result.stdout

    def test_search_content_snippet(self, vault: Path) -> None:
        result = runner.invoke(app, ["search", "beta", "--root", str(vault)])

        assert result.exit_code == 0
        assert "launch the beta in march" in result.stdout

    def test_search_no_results(self, vault: Path) -> None:
        result = runner.invoke(app, ["search", "zebra", "--root", str(vault)])

        assert result.exit_code == 0
        assert "No matches found" in result.stdout

    def test_search_marks_active(self, vault: Path) -> None:
        result = runner.invoke(
            app,
            ["search", "roadmap", "--root", str(vault), "--active", "groceries.txt", "--open", "groceries.txt"],
        )

        assert result.exit_code == 0
        assert "ACTIVE" in result.stdout
        assert result.stdout.index("groceries.txt") < result.stdout.index("projects/roadmap.md")


class TestWebCommand:
    """Tests for the web command."""

    def test_web_starts_uvicorn(self, vault: Path) -> None:
        mock_uvicorn = MagicMock()
        with patch.dict("sys.modules", {"uvicorn": mock_uvicorn}):
            result = runner.invoke(app, ["web", "--root", str(vault), "--port", "9000"])

        assert result.exit_code == 0
        mock_uvicorn.run.assert_called_once()
        assert mock_uvicorn.run.call_args[1]["port"] == 9000
