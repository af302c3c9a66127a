"""
Workspace checks: run the validator over every header/source pair.

A header ``foo.h`` is paired with ``foo.c`` in the same directory.
Headers without such a sibling are reported as unpaired and skipped.
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Tuple

from declorder.errors import Violation
from declorder.models import Mode
from declorder.report import PairReport
from declorder.validator import validate

logger = logging.getLogger(__name__)

HEADER_EXTENSIONS = {".h"}
SOURCE_EXTENSIONS = {".c"}

_SKIP_DIRS = {
    ".git", "build", "cmake-build-debug", "cmake-build-release",
    "__pycache__", "node_modules", ".vscode", ".idea", "venv",
}


def _norm_path(p: str) -> str:
    return p.replace("\\", "/")


@dataclass(frozen=True)
class FilePair:
    """Paths relative to the workspace root, forward slashes."""
    header: str
    source: str

    @property
    def mode(self) -> Mode:
        return Mode.for_files(self.header, self.source)


def discover_pairs(workspace_root: str) -> Tuple[List[FilePair], List[str]]:
    """Return ``(pairs, unpaired_headers)``, both sorted."""
    pairs: List[FilePair] = []
    unpaired: List[str] = []
    for root, dirs, filenames in os.walk(workspace_root):
        dirs[:] = [d for d in dirs if d not in _SKIP_DIRS]
        names = set(filenames)
        for fname in filenames:
            stem, ext = os.path.splitext(fname)
            if ext not in HEADER_EXTENSIONS:
                continue
            rel_dir = os.path.relpath(root, workspace_root)
            header = _norm_path(os.path.normpath(os.path.join(rel_dir, fname)))
            for src_ext in sorted(SOURCE_EXTENSIONS):
                if stem + src_ext in names:
                    source = _norm_path(os.path.normpath(os.path.join(rel_dir, stem + src_ext)))
                    pairs.append(FilePair(header=header, source=source))
                    break
            else:
                unpaired.append(header)
    pairs.sort(key=lambda p: p.header)
    unpaired.sort()
    logger.info(
        "Found %d header/source pair(s), %d unpaired header(s) in %s",
        len(pairs), len(unpaired), workspace_root,
    )
    return pairs, unpaired


def check_pair(workspace_root: str, pair: FilePair) -> PairReport:
    """Validate one pair; never raises for violations or unreadable files."""
    report = PairReport(
        header=pair.header, source=pair.source, mode=pair.mode.value, ok=False,
    )
    # Diagnostics name files relative to the workspace root
    header_path = os.path.join(workspace_root, pair.header)
    source_path = os.path.join(workspace_root, pair.source)
    try:
        with open(header_path, "rb") as f:
            header_source = f.read()
        with open(source_path, "rb") as f:
            source_source = f.read()
    except OSError as e:
        logger.error("Cannot read %s / %s: %s", pair.header, pair.source, e)
        report.error = str(e)
        return report

    try:
        validate(pair.header, header_source, pair.source, source_source)
    except Violation as v:
        report.violation = v.to_report()
        return report
    report.ok = True
    return report


def check_workspace(workspace_root: str) -> List[PairReport]:
    pairs, _ = discover_pairs(workspace_root)
    return [check_pair(workspace_root, pair) for pair in pairs]
