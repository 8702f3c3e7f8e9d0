"""Logging infrastructure with ledger period context."""
import logging
import sys
import threading
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional


class PeriodContextFilter(logging.Filter):
    """Add the ledger period being processed to log records."""

    def __init__(self):
        super().__init__()
        # Collector threads each work on their own month
        self._local = threading.local()

    @property
    def period(self) -> Optional[str]:
        return getattr(self._local, "period", None)

    @period.setter
    def period(self, value: Optional[str]):
        self._local.period = value

    def filter(self, record):
        """Add period to record."""
        record.period = self.period or "-"
        return True


class PledgerGraphLogger:
    """Centralized logging manager."""

    def __init__(
        self,
        log_level: str = "INFO",
        log_file: Optional[Path] = None,
        max_file_size_mb: int = 10,
        backup_count: int = 5
    ):
        self.log_file = Path(log_file) if log_file else None
        self.period_filter = PeriodContextFilter()

        self.logger = logging.getLogger("pledger_graph")
        self.logger.setLevel(getattr(logging, log_level.upper()))
        self.logger.propagate = False

        # Remove existing handlers, releasing any open log file
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [period:%(period)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        # stdout may carry the rendered page or JSON, so log to stderr
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(self.period_filter)
        self.logger.addHandler(console_handler)

        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=max_file_size_mb * 1024 * 1024,
                backupCount=backup_count,
                encoding="utf-8"
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(self.period_filter)
            self.logger.addHandler(file_handler)

    def set_period_context(self, period: Optional[str]):
        """Set current ledger period for logging."""
        self.period_filter.period = period

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[PledgerGraphLogger] = None


def get_logger(log_level: str = "INFO") -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = PledgerGraphLogger(log_level)
    return _logger_instance.get_logger()


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5
) -> logging.Logger:
    """Reconfigure the global logger once settings are known."""
    global _logger_instance
    _logger_instance = PledgerGraphLogger(log_level, log_file, max_file_size_mb, backup_count)
    return _logger_instance.get_logger()


def set_period_context(period: Optional[str]):
    """Set ledger period context for logging."""
    global _logger_instance
    if _logger_instance:
        _logger_instance.set_period_context(period)
