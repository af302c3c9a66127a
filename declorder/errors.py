"""
Violation taxonomy.

Every check fails fast by raising one of the ``Violation`` subclasses
below; each carries the locations the diagnostic points at, in the order
they should be shown.
"""

from enum import Enum
from typing import Tuple

from declorder.models import SourceLocation
from declorder.report import LocationReport, ViolationReport


class ViolationKind(Enum):
    SYNTAX_ERROR = "syntax-error"
    DEFINITION_WITHOUT_DECLARATION = "definition-without-declaration"
    OUT_OF_ORDER = "out-of-order"
    UNEXPECTED_DECLARATION = "unexpected-declaration"
    DECLARATION_WITHOUT_DEFINITION = "declaration-without-definition"
    EMPTY_HEADER_ONLY_FILE = "empty-header-only-file"


MESSAGES = {
    ViolationKind.SYNTAX_ERROR: "syntax error",
    ViolationKind.DEFINITION_WITHOUT_DECLARATION: "definition without matching declaration",
    ViolationKind.OUT_OF_ORDER: "declaration and definition not in order",
    ViolationKind.UNEXPECTED_DECLARATION: "found declaration but expected definition",
    ViolationKind.DECLARATION_WITHOUT_DEFINITION: "declaration without matching definition",
    ViolationKind.EMPTY_HEADER_ONLY_FILE: "header-only file doesn't contain any definition",
}


class DeclOrderError(Exception):
    """Base class for everything the checker reports."""


class UsageError(DeclOrderError):
    """Wrong command-line arguments."""

    def __init__(self, program: str):
        self.program = program
        super().__init__(f"Usage: {program} file [file]")


class Violation(DeclOrderError):
    """A file (pair) breaks the declaration order contract."""

    kind: ViolationKind

    def __init__(self, *locations: SourceLocation):
        self.locations: Tuple[SourceLocation, ...] = locations
        super().__init__(self.message)

    @property
    def message(self) -> str:
        return MESSAGES[self.kind]

    def __str__(self):
        where = ", ".join(str(loc) for loc in self.locations)
        return f"{self.message} ({where})" if where else self.message

    def to_report(self) -> ViolationReport:
        return ViolationReport(
            kind=self.kind.value,
            message=self.message,
            locations=[
                LocationReport(
                    file=loc.file,
                    line=loc.line,
                    column=loc.col,
                    text=loc.line_text,
                )
                for loc in self.locations
            ],
        )


class SourceSyntaxError(Violation):
    kind = ViolationKind.SYNTAX_ERROR


class DefinitionWithoutDeclaration(Violation):
    kind = ViolationKind.DEFINITION_WITHOUT_DECLARATION


class OutOfOrderMatch(Violation):
    """The queue front names a different function than the definition.

    Locations: the popped declaration first, then the definition.
    """
    kind = ViolationKind.OUT_OF_ORDER


class UnexpectedDeclaration(Violation):
    kind = ViolationKind.UNEXPECTED_DECLARATION


class DeclarationWithoutDefinition(Violation):
    kind = ViolationKind.DECLARATION_WITHOUT_DEFINITION


class EmptyHeaderOnlyFile(Violation):
    kind = ViolationKind.EMPTY_HEADER_ONLY_FILE

    def __init__(self, file: str):
        self.file = file
        super().__init__()

    def __str__(self):
        return f"{self.message} ({self.file})"

    def to_report(self) -> ViolationReport:
        report = super().to_report()
        report.file = self.file
        return report
