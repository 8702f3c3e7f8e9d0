"""Utility modules."""
from .logger import get_logger, configure_logging, set_period_context
from .exceptions import (
    PledgerGraphError,
    ConfigError,
    LedgerToolError,
    ValidationError,
    LedgerDataError,
    InvariantError,
    TemplateError
)

__all__ = [
    "get_logger",
    "configure_logging",
    "set_period_context",
    "PledgerGraphError",
    "ConfigError",
    "LedgerToolError",
    "ValidationError",
    "LedgerDataError",
    "InvariantError",
    "TemplateError"
]
