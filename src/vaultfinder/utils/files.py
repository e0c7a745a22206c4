"""Utility helpers for working with files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator


def is_hidden(relative: Path) -> bool:
    """True if any component of a vault-relative path starts with a dot."""
    return any(part.startswith(".") for part in relative.parts)


def iter_document_paths(root: Path) -> Iterator[Path]:
    """Yield every visible file under ``root``, never entering hidden directories."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if not name.startswith("."))
        for name in sorted(filenames):
            if not name.startswith("."):
                yield Path(dirpath) / name


def to_vault_path(root: Path, path: Path) -> str | None:
    """Vault-relative POSIX path for ``path``, or None when it lies outside ``root``."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return None


def extension_of(path: str) -> str:
    """File extension without the leading dot, as the file system reports it."""
    return Path(path).suffix[1:]
