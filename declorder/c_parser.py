"""
C parsing via tree-sitter.

Wraps the tree-sitter C grammar and the handful of tree operations the
checker needs:
  • parsing raw bytes into a tree bound to its file name
  • locating the first ERROR node (pre-order)
  • reading node text and source lines for diagnostics
  • cursor-based pre-order walks
"""

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Iterator, List, Optional, Set

import tree_sitter_c as tsc
from tree_sitter import Language, Node, Parser, Tree

from declorder.errors import SourceSyntaxError
from declorder.models import SourceLocation

logger = logging.getLogger(__name__)

C_LANGUAGE = Language(tsc.language())
_parser = Parser(C_LANGUAGE)


@dataclass
class ParsedSource:
    """A parsed file: its name, raw bytes and syntax tree."""
    path: str
    source: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @cached_property
    def lines(self) -> List[str]:
        return self.source.decode("utf-8", errors="replace").split("\n")

    def line_at(self, row: int) -> str:
        """Return the text of a 0-indexed row without its line ending."""
        if 0 <= row < len(self.lines):
            return self.lines[row].rstrip("\r")
        return ""

    def location(self, node: Node) -> SourceLocation:
        row, column = node.start_point[0], node.start_point[1]
        return SourceLocation(
            row=row,
            column=column,
            file=self.path,
            line_text=self.line_at(row),
        )

    def text(self, node: Node) -> str:
        return node_text(node, self.source)


def parse_source(path: str, source: bytes) -> ParsedSource:
    """Parse C source bytes; ``path`` is only used for diagnostics."""
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")
    tree = _parser.parse(source)
    logger.debug("Parsed %s (%d bytes)", path, len(source))
    return ParsedSource(path=path, source=source, tree=tree)


def parse_checked(path: str, source: bytes) -> ParsedSource:
    """Parse and reject the file if the tree contains an ERROR node."""
    parsed = parse_source(path, source)
    error = find_error_node(parsed.root)
    if error is not None:
        location = parsed.location(error)
        logger.info("Syntax error in %s at %s", path, location)
        raise SourceSyntaxError(location)
    return parsed


def find_error_node(node: Node) -> Optional[Node]:
    """First ERROR node in pre-order, or None."""
    if not node.has_error:
        return None
    for n in walk_all(node):
        if n.is_error:
            return n
    return None


def node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


# ────────────────────────────────────────────────────────────────
#  Tree traversal helpers
# ────────────────────────────────────────────────────────────────

def walk_all(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in pre-order."""
    cursor = node.walk()
    visited = False
    while True:
        if not visited:
            yield cursor.node
        if not visited and cursor.goto_first_child():
            visited = False
            continue
        if cursor.goto_next_sibling():
            visited = False
            continue
        if cursor.goto_parent():
            visited = True
            continue
        break


def walk_types(node: Node, types: Set[str]) -> Iterator[Node]:
    """Yield all nodes (``node`` included) whose type is in ``types``."""
    for n in walk_all(node):
        if n.type in types:
            yield n
