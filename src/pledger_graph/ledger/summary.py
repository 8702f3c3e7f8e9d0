"""Plain-text summary of a ledger collection."""
from collections import defaultdict
from decimal import Decimal
from typing import Dict, List, Sequence

from .models import EntryKind, LedgerRecord


def format_amount(amount: Decimal) -> str:
    return f"{amount:.2f}"


def _ranked(totals: Dict[str, Decimal]) -> List[tuple]:
    # Largest first, ties broken by tag name
    return sorted(totals.items(), key=lambda item: (-item[1], item[0]))


def summarize(collection: Sequence[LedgerRecord]) -> str:
    """
    Render totals per month and the top tags by credit and by debit.

    Args:
        collection: Ledger records in chronological order

    Returns:
        Multi-line report text
    """
    lines = [f"Summary of {len(collection)} ledgers", ""]

    tags_by_credit = defaultdict(Decimal)
    tags_by_debit = defaultdict(Decimal)

    for record in collection:
        credits = sum((e.amount for e in record.entries if e.kind is EntryKind.CREDIT), Decimal(0))
        debits = sum((e.amount for e in record.entries if e.kind is EntryKind.DEBIT), Decimal(0))

        if credits >= debits:
            net, direction = credits - debits, "credit"
        else:
            net, direction = debits - credits, "debit"

        lines.append(
            f"{record.period:<10} {len(record.entries):>4} entries  "
            f"credits {format_amount(credits):>10}  debits {format_amount(debits):>10}  "
            f"net {format_amount(net):>10} in {direction}"
        )

        for entry in record.entries:
            totals = tags_by_credit if entry.kind is EntryKind.CREDIT else tags_by_debit
            for tag in entry.tags:
                totals[tag] += entry.amount

    lines.append("")
    lines.append("Top credit tags:")
    for tag, amount in _ranked(tags_by_credit):
        lines.append(f"{tag:<16} {format_amount(amount):>10}")

    lines.append("")
    lines.append("Top debit tags:")
    for tag, amount in _ranked(tags_by_debit):
        lines.append(f"{tag:<16} {format_amount(amount):>10}")

    return "\n".join(lines) + "\n"
