"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet

from vaultfinder.index.eligibility import DEFAULT_EXTENSIONS, DEFAULT_MAX_BYTES, EligibilityPolicy
from vaultfinder.index.storage import DEFAULT_BATCH_SIZE


def _get_default_root() -> Path:
    """Use the working directory as the vault when none is given."""
    return Path.cwd()


@dataclass(slots=True)
class AppConfig:
    root: Path | None = None
    extensions: FrozenSet[str] = field(default_factory=lambda: DEFAULT_EXTENSIONS)
    max_file_bytes: int = DEFAULT_MAX_BYTES
    batch_size: int = DEFAULT_BATCH_SIZE

    def __post_init__(self) -> None:
        if self.root is None:
            self.root = _get_default_root()
        self.extensions = frozenset(ext.lstrip(".") for ext in self.extensions)

    def resolve_root(self, base_dir: Path | None = None) -> Path:
        if self.root is None:
            self.root = _get_default_root()
        if Path(self.root).is_absolute() or base_dir is None:
            return Path(self.root)
        return base_dir / self.root

    def policy(self) -> EligibilityPolicy:
        return EligibilityPolicy(allowed_extensions=self.extensions, max_bytes=self.max_file_bytes)
