"""Monthly ledger discovery and collection."""
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import List, Optional

from .fetcher import MonthFetcher
from .models import LedgerFile
from .periods import PERIOD_PATTERN
from pledger_graph.ledger.models import LedgerRecord
from pledger_graph.utils.logger import get_logger, set_period_context
from pledger_graph.utils.exceptions import ConfigError

logger = get_logger()


class LedgerCollector:
    """Finds monthly ledger files and fetches them in chronological order."""

    def __init__(
        self,
        fetcher: MonthFetcher,
        file_pattern: str = PERIOD_PATTERN.pattern,
        max_workers: int = 4
    ):
        """
        Initialize collector.

        Args:
            fetcher: MonthFetcher used for every matched file
            file_pattern: Regex a ledger file name must match in full
            max_workers: Number of concurrent fetches
        """
        self.fetcher = fetcher
        self.file_pattern = re.compile(file_pattern)
        self.max_workers = max_workers

    def scan(
        self,
        directory: Path,
        since: Optional[str] = None,
        until: Optional[str] = None
    ) -> List[LedgerFile]:
        """
        List ledger files in a directory, sorted by period.

        Args:
            directory: Ledger directory
            since: Earliest period to include
            until: Latest period to include

        Returns:
            List of LedgerFile objects
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise ConfigError(f"invalid ledger directory: {directory}")

        files = []
        for path in directory.iterdir():
            if not path.is_file() or not self.file_pattern.fullmatch(path.name):
                continue
            # The file name is passed to the tool as --date
            if not PERIOD_PATTERN.match(path.name):
                logger.warning(f"Skipping {path.name}: ledger file names must be YYYY-MM")
                continue
            if since and path.name < since:
                continue
            if until and path.name > until:
                continue
            files.append(LedgerFile(period=path.name, path=path))

        files.sort(key=lambda f: f.period)
        logger.info(f"Found {len(files)} ledger files in {directory}")
        return files

    def collect(
        self,
        directory: Path,
        since: Optional[str] = None,
        until: Optional[str] = None
    ) -> List[LedgerRecord]:
        """
        Fetch every ledger in a directory.

        Any failed month aborts the whole collection; a chart with a
        missing month would misstate the totals.

        Returns:
            LedgerRecords sorted by period
        """
        ledger_files = self.scan(directory, since, until)
        if not ledger_files:
            return []

        records = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(self._fetch, ledger_file): ledger_file
                for ledger_file in ledger_files
            }

            for future in as_completed(futures):
                ledger_file = futures[future]
                try:
                    records.append(future.result())
                except Exception as e:
                    logger.error(f"Failed to read ledger {ledger_file.path.name}: {e}")
                    for pending in futures:
                        pending.cancel()
                    raise

        # Completion order is arbitrary
        records.sort(key=lambda record: record.period)
        logger.info(f"Collected {len(records)} monthly ledgers")
        return records

    def _fetch(self, ledger_file: LedgerFile) -> LedgerRecord:
        set_period_context(ledger_file.period)
        try:
            return self.fetcher.fetch_month(ledger_file)
        finally:
            set_period_context(None)
