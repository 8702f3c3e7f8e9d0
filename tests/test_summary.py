"""Tests for the plain-text summary."""
import unittest
from decimal import Decimal

from pledger_graph.ledger.models import Entry, EntryKind, LedgerRecord
from pledger_graph.ledger.summary import summarize


class TestSummarize(unittest.TestCase):

    def setUp(self):
        self.collection = [
            LedgerRecord("2020-01", (
                Entry(EntryKind.DEBIT, Decimal("8.00"), ("lunch",)),
                Entry(EntryKind.CREDIT, Decimal("130.00"), ("bonus",)),
            )),
            LedgerRecord("2020-02", (
                Entry(EntryKind.DEBIT, Decimal("50"), ("rent", "home")),
                Entry(EntryKind.DEBIT, Decimal("4.5"), ("lunch",)),
            )),
        ]

    def test_month_lines(self):
        text = summarize(self.collection)
        lines = text.splitlines()

        self.assertEqual(lines[0], "Summary of 2 ledgers")
        jan = next(" ".join(line.split()) for line in lines if line.startswith("2020-01"))
        feb = next(" ".join(line.split()) for line in lines if line.startswith("2020-02"))

        self.assertIn("2 entries", jan)
        self.assertIn("credits 130.00", jan)
        self.assertIn("net 122.00 in credit", jan)
        self.assertIn("debits 54.50", feb)
        self.assertIn("net 54.50 in debit", feb)

    def test_top_tags(self):
        lines = summarize(self.collection).splitlines()

        credit_start = lines.index("Top credit tags:")
        debit_start = lines.index("Top debit tags:")

        self.assertEqual(lines[credit_start + 1].split(), ["bonus", "130.00"])
        debit_rows = [line.split() for line in lines[debit_start + 1:]]
        self.assertEqual(
            debit_rows,
            [["home", "50.00"], ["rent", "50.00"], ["lunch", "12.50"]]
        )

    def test_empty(self):
        text = summarize([])
        self.assertIn("Summary of 0 ledgers", text)
        self.assertTrue(text.rstrip().endswith("Top debit tags:"))


if __name__ == "__main__":
    unittest.main()
