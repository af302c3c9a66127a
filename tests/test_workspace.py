"""
Workspace & MCP server tests: run against tests/mock_project.

mock_project layout:
  math_ops.h / math_ops.c      in order (static helper before the bodies)
  shapes.h / shapes.c          bodies swapped
  util/strings.h / strings.c   in order, plus main()
  inline_only.h                no sibling source (unpaired)
  build/                       skipped directory
"""

import json
import os
import sys
import tempfile
import unittest
from unittest import mock

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

MOCK_PROJECT = os.path.join(PROJECT_ROOT, "tests", "mock_project")

from declorder.models import Mode
from declorder.workspace import FilePair, check_pair, check_workspace, discover_pairs


class TestDiscovery(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.pairs, cls.unpaired = discover_pairs(MOCK_PROJECT)

    def test_pairs(self):
        self.assertEqual(self.pairs, [
            FilePair("math_ops.h", "math_ops.c"),
            FilePair("shapes.h", "shapes.c"),
            FilePair("util/strings.h", "util/strings.c"),
        ])

    def test_unpaired_headers(self):
        self.assertEqual(self.unpaired, ["inline_only.h"])

    def test_build_dir_skipped(self):
        names = [p.header for p in self.pairs] + self.unpaired
        self.assertFalse(any(n.startswith("build/") for n in names))

    def test_mode(self):
        self.assertEqual(self.pairs[0].mode, Mode.SPLIT)


class TestCheckWorkspace(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.reports = {r.header: r for r in check_workspace(MOCK_PROJECT)}

    def test_all_pairs_checked(self):
        self.assertEqual(len(self.reports), 3)

    def test_passing_pairs(self):
        self.assertTrue(self.reports["math_ops.h"].ok)
        self.assertTrue(self.reports["util/strings.h"].ok)

    def test_failing_pair(self):
        report = self.reports["shapes.h"]
        self.assertFalse(report.ok)
        self.assertEqual(report.violation.kind, "out-of-order")
        declared, defined = report.violation.locations
        self.assertEqual((declared.file, declared.line), ("shapes.h", 1))
        self.assertEqual((defined.file, defined.line), ("shapes.c", 3))

    def test_unreadable_pair(self):
        with tempfile.TemporaryDirectory() as tmp:
            report = check_pair(tmp, FilePair("gone.h", "gone.c"))
        self.assertFalse(report.ok)
        self.assertIsNone(report.violation)
        self.assertIsNotNone(report.error)


class TestServerTools(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        import fastmcp_server
        cls.server = fastmcp_server

    def _path(self, name: str) -> str:
        return os.path.join(MOCK_PROJECT, name)

    def test_check_files_ok(self):
        out = self.server.check_files(self._path("math_ops.h"), self._path("math_ops.c"))
        self.assertTrue(out.startswith("OK:"))
        self.assertIn("split mode", out)

    def test_check_files_header_only(self):
        out = self.server.check_files(self._path("inline_only.h"))
        self.assertIn("header-only mode", out)

    def test_check_files_violation_text(self):
        out = self.server.check_files(self._path("shapes.h"), self._path("shapes.c"))
        self.assertTrue(out.startswith("error: declaration and definition not in order"))
        self.assertIn("double perimeter(double w, double h)", out)

    def test_check_files_json(self):
        out = self.server.check_files(
            self._path("shapes.h"), self._path("shapes.c"), output_format="json"
        )
        data = json.loads(out)
        self.assertFalse(data["ok"])
        self.assertEqual(data["mode"], "split")
        self.assertEqual(data["violation"]["kind"], "out-of-order")

    def test_check_files_missing(self):
        out = self.server.check_files(self._path("nope.h"))
        self.assertTrue(out.startswith("Error:"))

    def test_bad_format(self):
        out = self.server.check_files(self._path("math_ops.h"), output_format="xml")
        self.assertTrue(out.startswith("Error:"))

    def test_check_workspace_text(self):
        out = self.server.check_workspace(MOCK_PROJECT)
        self.assertIn("| Pairs checked | 3 |", out)
        self.assertIn("| Passed | 2 |", out)
        self.assertIn("| Unpaired headers (skipped) | 1 |", out)
        self.assertIn("**declaration and definition not in order** at shapes.h:1", out)

    def test_check_workspace_walks_tree_once(self):
        with mock.patch.object(
            self.server, "discover_pairs", wraps=self.server.discover_pairs
        ) as discover:
            self.server.check_workspace(MOCK_PROJECT)
        self.assertEqual(discover.call_count, 1)

    def test_check_workspace_json(self):
        data = json.loads(self.server.check_workspace(MOCK_PROJECT, output_format="json"))
        self.assertEqual(sorted(r["header"] for r in data),
                         ["math_ops.h", "shapes.h", "util/strings.h"])

    def test_check_workspace_missing_root(self):
        out = self.server.check_workspace(os.path.join(MOCK_PROJECT, "nope"))
        self.assertTrue(out.startswith("Error:"))

    def test_explain_violation(self):
        out = self.server.explain_violation("out-of-order")
        self.assertIn("declaration and definition not in order", out)
        self.assertIn("unknown violation kind", self.server.explain_violation("bogus"))


if __name__ == "__main__":
    unittest.main()
