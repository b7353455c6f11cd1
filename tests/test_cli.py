"""
Tests for CLI entry points and the interactive editor.

These tests focus on:
- Basic CLI argument validation
- Searching a catalog stored in a temporary folder
  (to avoid depending on any real catalog data)
- A scripted interactive session: search + add, then move the block
"""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import patch

import requests

from mytimetable.cli import main
from mytimetable.config import LIBERAL_ARTS_FILE, MAJORS_FILE
from mytimetable.interactive import run_interactive
from mytimetable.model import Lecture
from mytimetable.store import ScheduleStore

MAJORS = [
    {"id": "CS201", "title": "Data Structures", "credits": "3", "grade": 2, "major": "CS", "schedule": "Mon1~2(101)"},
    {"id": "BIO101", "title": "Biology", "credits": "3", "grade": 1, "major": "Biology", "schedule": "Wed3~4(202)"},
]
LIBERAL = [{"id": "PHI100", "title": "Ethics", "credits": "2", "grade": 1, "major": "Liberal Arts", "schedule": ""}]


def run_cli(argv: list[str]) -> tuple[object, str]:
    """
    Run main() and return (exit code, captured stdout).
    """
    buf = io.StringIO()
    with redirect_stdout(buf):
        try:
            main(argv)
        except SystemExit as exc:
            return exc.code, buf.getvalue()
    return None, buf.getvalue()


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.data_dir = Path(self._tmp.name)
        (self.data_dir / MAJORS_FILE).write_text(json.dumps(MAJORS), encoding="utf-8")
        (self.data_dir / LIBERAL_ARTS_FILE).write_text(json.dumps(LIBERAL), encoding="utf-8")

    def test_cli_search_query(self) -> None:
        code, out = run_cli(["--catalog-dir", str(self.data_dir), "search", "--query", "cs"])
        self.assertEqual(code, 0)
        self.assertIn("CS201", out)
        self.assertNotIn("BIO101", out)
        self.assertIn("Results: 1", out)

    def test_cli_search_day_filter(self) -> None:
        code, out = run_cli(["--catalog-dir", str(self.data_dir), "search", "--day", "Wed"])
        self.assertEqual(code, 0)
        self.assertIn("BIO101", out)
        self.assertIn("Results: 1", out)

    def test_cli_search_no_results(self) -> None:
        code, out = run_cli(["--catalog-dir", str(self.data_dir), "search", "--grade", "2", "--major", "Biology"])
        self.assertEqual(code, 0)
        self.assertIn("No results.", out)

    def test_cli_search_bundled_catalog_by_default(self) -> None:
        code, out = run_cli(["search", "--query", "data"])
        self.assertEqual(code, 0)
        self.assertIn("CS201", out)
        self.assertIn("CS420", out)
        self.assertIn("Results: 2", out)

    def test_cli_search_requires_positive_pages(self) -> None:
        code, _ = run_cli(["--catalog-dir", str(self.data_dir), "search", "--pages", "0"])
        self.assertNotEqual(code, 0)

    def test_cli_rejects_bad_grade(self) -> None:
        with redirect_stdout(io.StringIO()), patch("sys.stderr", new=io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["search", "--grade", "two"])
        self.assertNotEqual(ctx.exception.code, 0)

    def test_cli_majors(self) -> None:
        code, out = run_cli(["--catalog-dir", str(self.data_dir), "majors"])
        self.assertEqual(code, 0)
        self.assertEqual(out.split(), ["CS", "Biology", "Liberal", "Arts"])

    def test_cli_fetch_failure_exits_nonzero(self) -> None:
        with patch("mytimetable.cli.fetch_catalog", side_effect=requests.ConnectionError("down")):
            code, out = run_cli(["--base-url", "https://example.org/", "majors"])
        self.assertEqual(code, 1)
        self.assertIn("Could not load", out)


class TestInteractive(unittest.TestCase):
    def test_search_add_then_move(self) -> None:
        lectures = [Lecture.from_dict(x) for x in MAJORS]
        store = ScheduleStore()
        answers = iter([
            "2",      # search + add
            "",       # any day
            "",       # any time
            "q cs",   # filter
            "1",      # add CS201
            "3",      # move a block
            "0",      # block #0
            "2",      # two days right
            "1",      # one slot down
            "0",      # exit
        ])

        with redirect_stdout(io.StringIO()):
            with patch("mytimetable.interactive._prompt", side_effect=lambda msg: next(answers)):
                run_interactive(lectures, store)

        entries = store.state["schedule-1"]
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].lecture.id, "CS201")
        self.assertEqual(entries[0].day, "Wed")
        self.assertEqual(entries[0].range, (2, 3))


if __name__ == "__main__":
    unittest.main()
