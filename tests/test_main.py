"""End-to-end tests for the command line."""
import io
import json
import sys
import unittest
import tempfile
import shutil
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

import yaml

from pledger_graph.charts.emitter import from_chart_json
from pledger_graph.main import main

FAKE_PLEDGER = Path(__file__).parent / "fake_pledger.py"

JANUARY = {
    "date": "2020-01",
    "entries": [
        {"kind": "Debit", "amount": [8.00], "comment": "sandwich #lunch", "tags": ["#lunch"]},
        {"kind": "Credit", "amount": [130.00], "comment": "#bonus", "tags": ["#bonus"]},
    ]
}
FEBRUARY = {
    "date": "2020-02",
    "entries": [
        {"kind": "Debit", "amount": [3.50], "comment": "#lunch", "tags": ["#lunch"]},
    ]
}


class TestMain(unittest.TestCase):
    """Test the pledger-graph command."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        self.ledger_dir = self.test_dir / "ledgers"
        self.ledger_dir.mkdir()
        (self.ledger_dir / "2020-02").write_text(json.dumps(FEBRUARY), encoding="utf-8")
        (self.ledger_dir / "2020-01").write_text(json.dumps(JANUARY), encoding="utf-8")

        self.settings_path = self.test_dir / "settings.yaml"
        self.settings_path.write_text(
            yaml.safe_dump({"ledger": {"command": [sys.executable, str(FAKE_PLEDGER)]}}),
            encoding="utf-8"
        )
        self.environ = {"PLEDGER_GRAPH_SETTINGS": str(self.settings_path)}

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def _run(self, argv, environ=None):
        stdout, stderr = io.StringIO(), io.StringIO()
        code = 0
        with redirect_stdout(stdout), redirect_stderr(stderr):
            try:
                main(argv, self.environ if environ is None else environ)
            except SystemExit as e:
                code = e.code
        return code, stdout.getvalue(), stderr.getvalue()

    def test_missing_directory_is_usage_error(self):
        code, stdout, stderr = self._run([], environ={})

        self.assertEqual(code, 1)
        self.assertEqual(stdout, "")
        self.assertIn("usage:", stderr)
        self.assertIn("PLEDGER_DIR", stderr)

    def test_nonexistent_directory(self):
        code, _, stderr = self._run([str(self.test_dir / "missing")])

        self.assertEqual(code, 1)
        self.assertIn("does not exist", stderr)

    def test_json_output(self):
        code, stdout, _ = self._run([str(self.ledger_dir), "--json"])

        self.assertEqual(code, 0)
        document = json.loads(stdout)
        net = from_chart_json(document["net"])
        tags = from_chart_json(document["tags"])

        self.assertEqual(net.categories, ("2020-01", "2020-02"))
        self.assertEqual([float(v) for v in net.series("Debit").values], [-8.0, -3.5])
        self.assertEqual([float(v) for v in net.series("Credit").values], [130.0, 0.0])
        self.assertEqual([d.label for d in tags.datasets], ["#lunch", "#bonus"])
        self.assertEqual([float(v) for v in tags.series("#lunch").values], [-8.0, -3.5])

    def test_directory_from_env(self):
        environ = dict(self.environ, PLEDGER_DIR=str(self.ledger_dir))

        code, stdout, _ = self._run(["--json"], environ=environ)

        self.assertEqual(code, 0)
        self.assertEqual(json.loads(stdout)["net"]["labels"], ["2020-01", "2020-02"])

    def test_since_bound(self):
        code, stdout, _ = self._run([str(self.ledger_dir), "--json", "--since", "2020-02"])

        self.assertEqual(code, 0)
        self.assertEqual(json.loads(stdout)["net"]["labels"], ["2020-02"])

    def test_html_output(self):
        output = self.test_dir / "report.html"

        code, stdout, _ = self._run([str(self.ledger_dir), "-o", str(output)])

        self.assertEqual(code, 0)
        self.assertEqual(stdout, "")
        page = output.read_text(encoding="utf-8")
        self.assertIn("<canvas", page)
        self.assertIn('"labels": ["2020-01", "2020-02"]', page)

    def test_summary_output(self):
        code, stdout, _ = self._run([str(self.ledger_dir), "--summary"])

        self.assertEqual(code, 0)
        self.assertIn("Summary of 2 ledgers", stdout)
        self.assertIn("#bonus", stdout)

    def test_upstream_failure_aborts(self):
        (self.ledger_dir / "2020-03").write_text("FAIL parse error on line 1", encoding="utf-8")
        output = self.test_dir / "report.html"

        code, _, stderr = self._run([str(self.ledger_dir), "-o", str(output)])

        self.assertEqual(code, 1)
        self.assertIn("Fatal:", stderr)
        self.assertFalse(output.exists())

    def test_json_output_ignores_missing_template(self):
        self.settings_path.write_text(
            yaml.safe_dump({
                "ledger": {"command": [sys.executable, str(FAKE_PLEDGER)]},
                "charts": {"template": str(self.test_dir / "missing.html")}
            }),
            encoding="utf-8"
        )

        code, stdout, _ = self._run([str(self.ledger_dir), "--json"])

        self.assertEqual(code, 0)
        self.assertEqual(json.loads(stdout)["net"]["labels"], ["2020-01", "2020-02"])

    def test_bad_settings_file(self):
        environ = {"PLEDGER_GRAPH_SETTINGS": str(self.test_dir / "nope.yaml")}

        code, _, stderr = self._run([str(self.ledger_dir)], environ=environ)

        self.assertEqual(code, 1)
        self.assertIn("Settings file not found", stderr)


if __name__ == "__main__":
    unittest.main()
