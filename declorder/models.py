"""
Data types shared by the extractor, matcher and dispatcher.

Locations keep tree-sitter's zero-based row/column; the ``line`` and
``col`` helpers give the 1-based values shown to users.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

# Definitions with this name never need a prior declaration
ENTRY_POINT_NAME = "main"


@dataclass(frozen=True)
class SourceLocation:
    """Where a node starts, plus the full text of its line."""
    row: int                # 0-indexed
    column: int             # 0-indexed, in bytes
    file: str
    line_text: str

    @property
    def line(self) -> int:
        return self.row + 1

    @property
    def col(self) -> int:
        return self.column + 1

    def __str__(self):
        return f"{self.file}:{self.line}:{self.col}"


@dataclass(frozen=True)
class DeclarationItem:
    """A function prototype (declaration with a function declarator).

    ``location`` points at the function name; ``node_location`` at the
    start of the whole declaration, including its specifiers.
    """
    identifier: str
    location: SourceLocation
    node_location: Optional[SourceLocation] = None


@dataclass(frozen=True)
class DefinitionItem:
    """A function with a body."""
    identifier: str
    location: SourceLocation
    is_file_scoped: bool = False

    @property
    def is_exempt(self) -> bool:
        """Static functions and ``main`` are never matched."""
        return self.is_file_scoped or self.identifier == ENTRY_POINT_NAME


Item = Union[DeclarationItem, DefinitionItem]


class Mode(Enum):
    HEADER_ONLY = "header-only"
    SPLIT = "split"

    @classmethod
    def for_files(cls, header_name: str, source_name: str) -> "Mode":
        if header_name == source_name:
            return cls.HEADER_ONLY
        return cls.SPLIT
