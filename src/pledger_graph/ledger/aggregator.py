"""Ledger aggregation into stacked bar chart data."""
from decimal import Decimal
from typing import Iterable, List, Sequence

from .models import AggregatedCharts, ChartData, Dataset, Entry, EntryKind, LedgerRecord
from pledger_graph.utils.logger import get_logger
from pledger_graph.utils.exceptions import ConfigError, InvariantError

logger = get_logger()

TAG_ORDER_FIRST_SEEN = "first-seen"
TAG_ORDER_LEXICOGRAPHIC = "lexicographic"
TAG_ORDERS = (TAG_ORDER_FIRST_SEEN, TAG_ORDER_LEXICOGRAPHIC)

# Stacking order of the net chart
NET_SERIES = (EntryKind.DEBIT, EntryKind.CREDIT)


def signed_contribution(entry: Entry) -> Decimal:
    """Return the entry amount, negated for debits."""
    if entry.kind is EntryKind.DEBIT:
        return -entry.amount
    if entry.kind is EntryKind.CREDIT:
        return entry.amount
    raise InvariantError(f"Unknown entry kind: {entry.kind!r}")


def compute_tag_universe(
    collection: Iterable[LedgerRecord],
    order: str = TAG_ORDER_FIRST_SEEN
) -> List[str]:
    """
    Collect every distinct tag in the collection.

    Args:
        collection: Ledger records in chronological order
        order: "first-seen" (scan order) or "lexicographic"

    Returns:
        Distinct tags in a deterministic order
    """
    if order not in TAG_ORDERS:
        raise ConfigError(f"Unknown tag order: {order} (expected one of {', '.join(TAG_ORDERS)})")

    # dict keeps insertion order, so this is an ordered set
    seen = {}
    for record in collection:
        for entry in record.entries:
            for tag in entry.tags:
                seen.setdefault(tag, None)

    tags = list(seen)
    if order == TAG_ORDER_LEXICOGRAPHIC:
        tags.sort()
    return tags


def build_net_chart(collection: Sequence[LedgerRecord]) -> ChartData:
    """Total debits and total credits per period."""
    datasets = []
    for kind in NET_SERIES:
        values = tuple(
            sum(
                (signed_contribution(e) for e in record.entries if e.kind is kind),
                Decimal(0)
            )
            for record in collection
        )
        datasets.append(Dataset(label=kind.value, values=values))

    return ChartData(
        categories=tuple(record.period for record in collection),
        datasets=tuple(datasets)
    )


def build_tag_chart(tags: Iterable[str], collection: Sequence[LedgerRecord]) -> ChartData:
    """
    Net flow per tag per period.

    An entry carrying several tags counts in full towards each of them;
    tag series are independent views, not a partition of the totals.
    """
    datasets = []
    for tag in tags:
        values = tuple(
            sum(
                (signed_contribution(e) for e in record.entries if tag in e.tags),
                Decimal(0)
            )
            for record in collection
        )
        datasets.append(Dataset(label=tag, values=values))

    return ChartData(
        categories=tuple(record.period for record in collection),
        datasets=tuple(datasets)
    )


class Aggregator:
    """Aggregates monthly ledgers into net and per-tag charts."""

    def __init__(self, tag_order: str = TAG_ORDER_FIRST_SEEN):
        if tag_order not in TAG_ORDERS:
            raise ConfigError(f"Unknown tag order: {tag_order}")
        self.tag_order = tag_order

    def aggregate(self, collection: Sequence[LedgerRecord]) -> AggregatedCharts:
        """
        Build both charts for a collection.

        Args:
            collection: Ledger records, already in chronological order

        Returns:
            AggregatedCharts with net chart, tag chart and tag universe
        """
        collection = list(collection)
        tag_universe = compute_tag_universe(collection, self.tag_order)

        aggregated = AggregatedCharts(
            net=build_net_chart(collection),
            tags=build_tag_chart(tag_universe, collection),
            tag_universe=tag_universe
        )

        entry_count = sum(len(record.entries) for record in collection)
        logger.info(
            f"Aggregated {entry_count} entries over {len(collection)} months "
            f"into {len(tag_universe)} tag series"
        )

        return aggregated
