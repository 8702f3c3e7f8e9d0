"""Command line entry point."""
import sys
import argparse
from pathlib import Path
from typing import List, Optional

from pledger_graph import __version__
from pledger_graph.config.manager import (
    ConfigManager,
    LEDGER_DIR_ENV,
    SETTINGS_ENV,
    OUTPUT_HTML,
    OUTPUT_JSON,
    OUTPUT_SUMMARY
)
from pledger_graph.orchestrator import ReportOrchestrator
from pledger_graph.utils.logger import configure_logging, get_logger
from pledger_graph.utils.exceptions import ConfigError, PledgerGraphError

logger = get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pledger-graph",
        description="Stacked bar charts of monthly pledger ledgers"
    )
    parser.add_argument(
        "directory",
        nargs="?",
        help=f"ledger directory (default: ${LEDGER_DIR_ENV})"
    )
    parser.add_argument(
        "-o", "--output",
        help="output file, '-' for stdout (default: pledger-graph.html, stdout for --json/--summary)"
    )
    fmt = parser.add_mutually_exclusive_group()
    fmt.add_argument(
        "-j", "--json",
        dest="output_format",
        action="store_const",
        const=OUTPUT_JSON,
        help="emit chart data as JSON instead of an HTML page"
    )
    fmt.add_argument(
        "-s", "--summary",
        dest="output_format",
        action="store_const",
        const=OUTPUT_SUMMARY,
        help="print a plain-text summary instead of charts"
    )
    parser.add_argument("--since", help="first month to include (YYYY-MM, month name or number)")
    parser.add_argument("--until", help="last month to include (YYYY-MM, month name or number)")
    parser.add_argument("--settings", help=f"settings YAML file (default: ${SETTINGS_ENV})")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="override the configured log level"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.set_defaults(output_format=OUTPUT_HTML)
    return parser


def _fatal(message: str) -> None:
    print(f"Fatal: {message}", file=sys.stderr)
    sys.exit(1)


def main(argv: Optional[List[str]] = None, environ=None):
    """Main entry point for pledger-graph."""
    global logger

    parser = build_parser()
    args = parser.parse_args(argv)
    config_manager = ConfigManager(environ)

    try:
        settings = config_manager.load_settings(args.settings)
    except ConfigError as e:
        _fatal(str(e))

    logger = configure_logging(
        args.log_level or settings.log_level,
        Path(settings.log_file) if settings.log_file else None,
        settings.log_max_file_size_mb,
        settings.log_backup_count
    )

    try:
        config = config_manager.resolve(
            args.directory,
            settings,
            output=args.output,
            output_format=args.output_format,
            since=args.since,
            until=args.until
        )
    except ConfigError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        sys.exit(1)

    is_valid, message = config_manager.validate_config(config)
    if not is_valid:
        logger.critical(f"Invalid configuration: {message}")
        _fatal(message)

    try:
        orchestrator = ReportOrchestrator(config)
        orchestrator.run()
    except PledgerGraphError as e:
        logger.critical(f"Report failed: {e}")
        _fatal(str(e))
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
        sys.exit(130)


if __name__ == "__main__":
    main()
