"""Ledger collection module."""
from .models import LedgerFile
from .periods import parse_period, PERIOD_PATTERN
from .fetcher import MonthFetcher, PledgerFetcher, parse_ledger_json
from .collector import LedgerCollector

__all__ = [
    "LedgerFile",
    "parse_period",
    "PERIOD_PATTERN",
    "MonthFetcher",
    "PledgerFetcher",
    "parse_ledger_json",
    "LedgerCollector"
]
