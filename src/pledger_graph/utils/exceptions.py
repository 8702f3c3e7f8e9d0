"""Custom exception classes for pledger-graph."""


class PledgerGraphError(Exception):
    """Base exception for pledger-graph."""
    pass


class ConfigError(PledgerGraphError):
    """Configuration-related errors."""
    pass


class LedgerToolError(PledgerGraphError):
    """The external ledger tool could not be run or exited with an error."""
    pass


class ValidationError(PledgerGraphError):
    """Data validation errors."""
    pass


class LedgerDataError(ValidationError):
    """Ledger tool output is not JSON or does not match the ledger schema."""
    pass


class InvariantError(PledgerGraphError):
    """Aggregation invariant violated by upstream data."""
    pass


class TemplateError(PledgerGraphError):
    """Chart template errors."""
    pass
