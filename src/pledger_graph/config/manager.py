"""Runtime configuration resolved once at startup."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .settings import AppSettings
from pledger_graph.collector.periods import parse_period
from pledger_graph.ledger.aggregator import TAG_ORDERS
from pledger_graph.utils.exceptions import ConfigError

LEDGER_DIR_ENV = "PLEDGER_DIR"
SETTINGS_ENV = "PLEDGER_GRAPH_SETTINGS"

OUTPUT_HTML = "html"
OUTPUT_JSON = "json"
OUTPUT_SUMMARY = "summary"

DEFAULT_OUTPUT = "pledger-graph.html"


@dataclass
class Config:
    """Everything one report run needs."""
    ledger_dir: Path
    settings: AppSettings
    output: str = DEFAULT_OUTPUT  # "-" writes to stdout
    output_format: str = OUTPUT_HTML
    since: Optional[str] = None
    until: Optional[str] = None


class ConfigManager:
    """Builds a Config from command line arguments and the environment."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ

    def load_settings(self, settings_path: Optional[str] = None) -> AppSettings:
        """Load settings from an explicit path, the environment, or the defaults."""
        path = settings_path or self.environ.get(SETTINGS_ENV)
        return AppSettings.load(Path(path) if path else None)

    def resolve(
        self,
        directory: Optional[str],
        settings: AppSettings,
        output: Optional[str] = None,
        output_format: str = OUTPUT_HTML,
        since: Optional[str] = None,
        until: Optional[str] = None
    ) -> Config:
        """
        Resolve the ledger directory and report options.

        Args:
            directory: Positional directory argument, if any
            settings: Loaded application settings
            output: Output path, "-" for stdout
            output_format: html, json or summary
            since: Earliest period to include (any form parse_period accepts)
            until: Latest period to include

        Returns:
            Config object
        """
        directory = directory or self.environ.get(LEDGER_DIR_ENV)
        if not directory:
            raise ConfigError(
                f"no ledger directory given (pass DIRECTORY or set {LEDGER_DIR_ENV})"
            )

        if output is None:
            output = DEFAULT_OUTPUT if output_format == OUTPUT_HTML else "-"

        return Config(
            ledger_dir=Path(directory),
            settings=settings,
            output=output,
            output_format=output_format,
            since=parse_period(since) if since else None,
            until=parse_period(until) if until else None
        )

    def validate_config(self, config: Config) -> tuple[bool, str]:
        """Validate configuration values."""
        if not config.ledger_dir.exists():
            return False, f"Ledger directory does not exist: {config.ledger_dir}"

        if not config.ledger_dir.is_dir():
            return False, f"Ledger directory is not a directory: {config.ledger_dir}"

        if config.output_format not in (OUTPUT_HTML, OUTPUT_JSON, OUTPUT_SUMMARY):
            return False, f"Unknown output format: {config.output_format}"

        if config.since and config.until and config.since > config.until:
            return False, f"Start period {config.since} is after end period {config.until}"

        settings = config.settings
        if settings.ledger_max_workers < 1:
            return False, "ledger.max_workers must be at least 1"

        if settings.ledger_timeout_seconds <= 0:
            return False, "ledger.timeout_seconds must be positive"

        if settings.tag_order not in TAG_ORDERS:
            return False, f"charts.tag_order must be one of: {', '.join(TAG_ORDERS)}"

        if (
            config.output_format == OUTPUT_HTML
            and settings.template_path
            and not Path(settings.template_path).is_file()
        ):
            return False, f"Chart template not found: {settings.template_path}"

        return True, "Configuration is valid"
