"""
Human-readable diagnostics.

Rendering is a pure function of the violation and an explicit
``DiagnosticStyle``; pass ``PLAIN_STYLE`` for uncoloured output.

    error: declaration and definition not in order
    math.h:2:5
      |
    2 | int add(int, int);
      |

    math.c:7:5
      |
    7 | int sub(int lhs, int rhs)
      |
"""

from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.text import Text

from declorder.errors import EmptyHeaderOnlyFile, Violation
from declorder.models import SourceLocation


@dataclass(frozen=True)
class DiagnosticStyle:
    """rich style strings for each part of a diagnostic."""
    error: str = "bold red"
    message: str = "bold"
    location: str = "blue"
    gutter: str = "green"


DEFAULT_STYLE = DiagnosticStyle()
PLAIN_STYLE = DiagnosticStyle(error="", message="", location="", gutter="")


def render_message(message: str, style: DiagnosticStyle = DEFAULT_STYLE) -> Text:
    """``error: <message>`` header line."""
    text = Text()
    text.append("error:", style=style.error)
    text.append(" ")
    text.append(message, style=style.message)
    return text


def render_location(location: SourceLocation, style: DiagnosticStyle = DEFAULT_STYLE) -> Text:
    """``file:line:col`` followed by the source line in a numbered gutter."""
    number = str(location.line)
    pad = " " * len(number)

    text = Text()
    text.append(str(location), style=style.location)
    text.append("\n")
    text.append(f"{pad} |", style=style.gutter)
    text.append("\n")
    text.append(f"{number} |", style=style.gutter)
    text.append(f" {location.line_text}")
    text.append("\n")
    text.append(f"{pad} |", style=style.gutter)
    return text


def render_violation(violation: Violation, style: DiagnosticStyle = DEFAULT_STYLE) -> Text:
    parts = [render_message(violation.message, style)]
    if isinstance(violation, EmptyHeaderOnlyFile):
        parts.append(Text(violation.file, style=style.location))
    blocks = [render_location(loc, style) for loc in violation.locations]
    if blocks:
        parts.append(Text("\n\n").join(blocks))
    return Text("\n").join(parts)


def format_violation(violation: Violation) -> str:
    """Plain-text rendering, e.g. for logs and MCP responses."""
    return render_violation(violation, PLAIN_STYLE).plain


def print_diagnostic(text: Text, console: Optional[Console] = None) -> None:
    console = console or Console(highlight=False, soft_wrap=True)
    console.print(text)
