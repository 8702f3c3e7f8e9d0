"""Report orchestration: collect -> aggregate -> emit."""
import sys
import time
from dataclasses import dataclass
from typing import Optional, TextIO

from pledger_graph.config.manager import Config, OUTPUT_HTML, OUTPUT_JSON, OUTPUT_SUMMARY
from pledger_graph.collector import LedgerCollector, MonthFetcher, PledgerFetcher
from pledger_graph.ledger import Aggregator, summarize
from pledger_graph.charts import ChartEmitter, dumps_charts
from pledger_graph.utils.logger import get_logger

logger = get_logger()


@dataclass
class ReportResult:
    """Result of one report run."""
    months: int
    entries: int
    tags: int
    output: str
    duration_seconds: float


class ReportOrchestrator:
    """Orchestrates the whole report pipeline."""

    def __init__(self, config: Config, fetcher: Optional[MonthFetcher] = None):
        """
        Initialize orchestrator.

        Args:
            config: Resolved run configuration
            fetcher: MonthFetcher to use instead of the pledger tool
        """
        self.config = config
        settings = config.settings

        if fetcher is None:
            fetcher = PledgerFetcher(
                command=settings.ledger_command,
                timeout_seconds=settings.ledger_timeout_seconds,
                combine_subunits=settings.combine_subunits
            )

        self.collector = LedgerCollector(
            fetcher,
            file_pattern=settings.ledger_file_pattern,
            max_workers=settings.ledger_max_workers
        )
        self.aggregator = Aggregator(tag_order=settings.tag_order)
        self.emitter = ChartEmitter(settings.template_path, settings.chart_title)

    def run(self, stdout: Optional[TextIO] = None) -> ReportResult:
        """
        Build the report once.

        Args:
            stdout: Stream used when the output is "-"

        Returns:
            ReportResult
        """
        stdout = stdout or sys.stdout
        start_time = time.time()

        records = self.collector.collect(
            self.config.ledger_dir,
            since=self.config.since,
            until=self.config.until
        )
        if not records:
            logger.warning(f"No ledger files found in {self.config.ledger_dir}")

        output_format = self.config.output_format
        if output_format == OUTPUT_SUMMARY:
            text = summarize(records)
            tag_count = len({tag for r in records for e in r.entries for tag in e.tags})
        else:
            aggregated = self.aggregator.aggregate(records)
            tag_count = len(aggregated.tag_universe)
            if output_format == OUTPUT_JSON:
                text = dumps_charts(aggregated.net, aggregated.tags) + "\n"
            else:
                text = self.emitter.render_html(aggregated.net, aggregated.tags)

        if self.config.output == "-":
            stdout.write(text)
        elif output_format == OUTPUT_HTML:
            self.emitter.write(self.config.output, text)
        else:
            with open(self.config.output, "w", encoding="utf-8") as f:
                f.write(text)
            logger.info(f"Wrote {output_format} report to {self.config.output}")

        result = ReportResult(
            months=len(records),
            entries=sum(len(record.entries) for record in records),
            tags=tag_count,
            output=self.config.output,
            duration_seconds=time.time() - start_time
        )
        logger.info(
            f"Report complete: {result.months} months, {result.entries} entries, "
            f"{result.tags} tags in {result.duration_seconds:.1f}s"
        )
        return result
