"""Data models for ledger aggregation."""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Tuple

from pledger_graph.utils.exceptions import InvariantError


class EntryKind(str, Enum):
    """Kind of a ledger entry."""
    DEBIT = "Debit"
    CREDIT = "Credit"


@dataclass(frozen=True)
class Entry:
    """One ledger line."""
    kind: EntryKind
    amount: Decimal  # never negative, sign comes from kind
    tags: Tuple[str, ...] = ()

    def __post_init__(self):
        try:
            object.__setattr__(self, "kind", EntryKind(self.kind))
        except ValueError:
            raise InvariantError(f"Unknown entry kind: {self.kind!r}")

        # A bare string would turn tag lookups into substring matches
        if not isinstance(self.tags, (tuple, list, frozenset)):
            raise InvariantError(
                f"Entry tags must be a tuple of strings, got {type(self.tags).__name__}"
            )
        if not all(isinstance(tag, str) for tag in self.tags):
            raise InvariantError(f"Entry tags must be strings: {self.tags!r}")
        object.__setattr__(self, "tags", tuple(self.tags))

        if not isinstance(self.amount, Decimal):
            raise InvariantError(
                f"Entry amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise InvariantError(f"Negative {self.kind.value} amount: {self.amount}")


@dataclass(frozen=True)
class LedgerRecord:
    """One month of ledger entries."""
    period: str  # e.g. "2020-01"
    entries: Tuple[Entry, ...] = ()


@dataclass(frozen=True)
class Dataset:
    """One named series aligned to the chart categories."""
    label: str
    values: Tuple[Decimal, ...]


@dataclass(frozen=True)
class ChartData:
    """Categories plus the stacked datasets drawn over them."""
    categories: Tuple[str, ...]
    datasets: Tuple[Dataset, ...]

    def series(self, label: str) -> Dataset:
        """Return the dataset with the given label."""
        for dataset in self.datasets:
            if dataset.label == label:
                return dataset
        raise KeyError(label)


@dataclass
class AggregatedCharts:
    """Result of one aggregation run."""
    net: ChartData
    tags: ChartData
    tag_universe: List[str] = field(default_factory=list)
