"""Ledger model and aggregation module."""
from .models import EntryKind, Entry, LedgerRecord, Dataset, ChartData, AggregatedCharts
from .aggregator import (
    Aggregator,
    signed_contribution,
    compute_tag_universe,
    build_net_chart,
    build_tag_chart
)
from .summary import summarize

__all__ = [
    "EntryKind",
    "Entry",
    "LedgerRecord",
    "Dataset",
    "ChartData",
    "AggregatedCharts",
    "Aggregator",
    "signed_contribution",
    "compute_tag_universe",
    "build_net_chart",
    "build_tag_chart",
    "summarize"
]
