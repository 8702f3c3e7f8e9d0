"""pledger-graph: stacked bar charts of monthly pledger ledgers."""

__version__ = "0.3.0"
