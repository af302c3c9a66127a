"""
CLI tests: argument handling, exit codes and printed diagnostics.
"""

import io
import os
import sys
import tempfile
import unittest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from rich.console import Console

from declorder.cli import main

HDR = b"int add(int, int);\nint sub(int, int);\n"
SRC_OK = b"int add(int a, int b) { return a + b; }\nint sub(int a, int b) { return a - b; }\n"
SRC_SWAPPED = b"int sub(int a, int b) { return a - b; }\nint add(int a, int b) { return a + b; }\n"


class TestMain(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.out = io.StringIO()
        self.console = Console(file=self.out, width=200, highlight=False)

    def _write(self, name: str, data: bytes) -> str:
        path = os.path.join(self.tmp.name, name)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def _run(self, *args: str) -> int:
        return main(["declorder", *args], console=self.console)

    def test_usage_no_arguments(self):
        self.assertEqual(self._run(), 1)
        self.assertEqual(self.out.getvalue().strip(), "Usage: declorder file [file]")

    def test_usage_too_many_arguments(self):
        self.assertEqual(self._run("a", "b", "c"), 1)
        self.assertIn("Usage:", self.out.getvalue())

    def test_pair_ok(self):
        code = self._run(self._write("m.h", HDR), self._write("m.c", SRC_OK))
        self.assertEqual(code, 0)
        self.assertEqual(self.out.getvalue(), "")

    def test_header_only_ok(self):
        self.assertEqual(self._run(self._write("m.h", HDR + SRC_OK)), 0)

    def test_violation(self):
        hdr = self._write("m.h", HDR)
        src = self._write("m.c", SRC_SWAPPED)
        self.assertEqual(self._run(hdr, src), 1)
        out = self.out.getvalue()
        self.assertIn("error: declaration and definition not in order", out)
        self.assertIn(f"{hdr}:1:5", out)
        self.assertIn(f"{src}:1:5", out)
        self.assertIn("1 | int sub(int a, int b) { return a - b; }", out)

    def test_header_only_without_definitions(self):
        self.assertEqual(self._run(self._write("m.h", b"extern int x;\n")), 1)
        self.assertIn("header-only file doesn't contain any definition", self.out.getvalue())

    def test_missing_file(self):
        missing = os.path.join(self.tmp.name, "missing.h")
        self.assertEqual(self._run(missing), 1)
        out = self.out.getvalue()
        self.assertIn("error:", out)
        self.assertIn("missing.h", out)

    def test_missing_source_file(self):
        hdr = self._write("m.h", HDR)
        self.assertEqual(self._run(hdr, os.path.join(self.tmp.name, "m.c")), 1)


if __name__ == "__main__":
    unittest.main()
