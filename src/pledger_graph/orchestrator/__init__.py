"""Report orchestration module."""
from .processor import ReportOrchestrator, ReportResult

__all__ = ["ReportOrchestrator", "ReportResult"]
