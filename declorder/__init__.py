"""
declorder: checks that C function definitions follow their prototypes
in the same order, either in a header/source pair or a header-only file.
"""

from declorder.errors import (
    DeclarationWithoutDefinition,
    DeclOrderError,
    DefinitionWithoutDeclaration,
    EmptyHeaderOnlyFile,
    OutOfOrderMatch,
    SourceSyntaxError,
    UnexpectedDeclaration,
    UsageError,
    Violation,
    ViolationKind,
)
from declorder.models import DeclarationItem, DefinitionItem, Mode, SourceLocation
from declorder.validator import validate, validate_files

__all__ = [
    "DeclOrderError",
    "Violation",
    "ViolationKind",
    "SourceSyntaxError",
    "DefinitionWithoutDeclaration",
    "OutOfOrderMatch",
    "UnexpectedDeclaration",
    "DeclarationWithoutDefinition",
    "EmptyHeaderOnlyFile",
    "UsageError",
    "SourceLocation",
    "DeclarationItem",
    "DefinitionItem",
    "Mode",
    "validate",
    "validate_files",
]
