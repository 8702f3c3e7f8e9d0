"""Monthly ledger retrieval through the external pledger tool."""
import json
import subprocess
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Literal, Sequence

from pydantic import BaseModel, Field, ValidationError

from .models import LedgerFile
from pledger_graph.ledger.models import Entry, EntryKind, LedgerRecord
from pledger_graph.utils.logger import get_logger
from pledger_graph.utils.exceptions import LedgerToolError, LedgerDataError

logger = get_logger()


class EntrySchema(BaseModel):
    """Pydantic schema for one ledger entry."""
    kind: Literal["Debit", "Credit"]
    amount: List[Decimal] = Field(min_length=1, description="Amount first, formatting metadata after")
    tags: List[str]


class LedgerSchema(BaseModel):
    """Pydantic schema for the ledger tool's JSON output."""
    date: str
    entries: List[EntrySchema]


class MonthFetcher(ABC):
    """Source of one LedgerRecord per monthly ledger file."""

    @abstractmethod
    def fetch_month(self, ledger_file: LedgerFile) -> LedgerRecord:
        """Return the parsed ledger for ledger_file or raise."""


def parse_ledger_json(text: str, combine_subunits: bool = False) -> LedgerRecord:
    """
    Validate ledger tool JSON and convert it to a LedgerRecord.

    Args:
        text: Raw JSON document
        combine_subunits: Treat amount as [units, subunits] instead of
            reading the first element only

    Returns:
        LedgerRecord
    """
    try:
        # Keep amounts exact
        data = json.loads(text, parse_float=Decimal)
        validated = LedgerSchema.model_validate(data)
    except json.JSONDecodeError as e:
        raise LedgerDataError(f"Invalid JSON from ledger tool: {e}")
    except ValidationError as e:
        raise LedgerDataError(f"Ledger output does not match expected schema: {e}")

    entries = tuple(
        Entry(
            kind=EntryKind(entry.kind),
            amount=_amount(entry.amount, combine_subunits),
            tags=tuple(entry.tags)
        )
        for entry in validated.entries
    )
    return LedgerRecord(period=validated.date, entries=entries)


def _amount(parts: List[Decimal], combine_subunits: bool) -> Decimal:
    amount = parts[0]
    if combine_subunits and len(parts) > 1:
        amount += parts[1] / 100
    return amount


class PledgerFetcher(MonthFetcher):
    """Runs `pledger --json` once per monthly file."""

    def __init__(
        self,
        command: Sequence[str] = ("pledger",),
        timeout_seconds: float = 30,
        combine_subunits: bool = False
    ):
        self.command = list(command)
        self.timeout_seconds = timeout_seconds
        self.combine_subunits = combine_subunits

    def build_command(self, ledger_file: LedgerFile) -> List[str]:
        return self.command + ["--json", "--date", ledger_file.period, str(ledger_file.directory)]

    def fetch_month(self, ledger_file: LedgerFile) -> LedgerRecord:
        """
        Run the ledger tool for one month.

        Args:
            ledger_file: LedgerFile to read

        Returns:
            LedgerRecord for that month
        """
        cmd = self.build_command(ledger_file)
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout_seconds,
                check=False
            )
        except subprocess.TimeoutExpired:
            raise LedgerToolError(
                f"Ledger tool timed out after {self.timeout_seconds}s on {ledger_file.path}"
            )
        except OSError as e:
            raise LedgerToolError(f"Failed to execute ledger tool {self.command[0]}: {e}")

        if result.returncode != 0:
            stderr = result.stderr.strip() or "no error output"
            raise LedgerToolError(
                f"Ledger tool exited with {result.returncode} on {ledger_file.path}: {stderr}"
            )

        try:
            record = parse_ledger_json(result.stdout, self.combine_subunits)
        except LedgerDataError as e:
            logger.debug(f"Ledger tool output: {result.stdout[:500]}")
            raise LedgerDataError(f"{ledger_file.path}: {e}")

        if record.period != ledger_file.period:
            logger.warning(
                f"Ledger tool reported period {record.period} for file {ledger_file.path.name}"
            )

        logger.debug(f"Read {len(record.entries)} entries from {ledger_file.path}")
        return record
