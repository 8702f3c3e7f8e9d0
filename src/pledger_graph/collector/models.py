"""Data models for ledger collection."""
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class LedgerFile:
    """One monthly ledger file on disk."""
    period: str  # File name, e.g. "2020-01"
    path: Path

    @property
    def directory(self) -> Path:
        return self.path.parent
