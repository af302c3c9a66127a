"""
Command-line entry point.

    declorder header.h              header-only mode
    declorder header.h source.c     split mode

Exit status 0 when the file(s) follow the declaration order, 1 otherwise.
"""

import logging
import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from declorder.diagnostics import (
    DEFAULT_STYLE,
    DiagnosticStyle,
    print_diagnostic,
    render_message,
    render_violation,
)
from declorder.errors import UsageError, Violation
from declorder.validator import validate_files

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "DECLORDER_LOG_LEVEL"


def _configure_logging() -> None:
    level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def run(argv: List[str]) -> None:
    """Validate the files named in ``argv`` (``argv[0]`` is the program)."""
    if len(argv) == 2:
        validate_files(argv[1])
    elif len(argv) == 3:
        validate_files(argv[1], argv[2])
    else:
        raise UsageError(argv[0] if argv else "declorder")


def main(
    argv: Optional[List[str]] = None,
    style: DiagnosticStyle = DEFAULT_STYLE,
    console: Optional[Console] = None,
) -> int:
    if argv is None:
        argv = sys.argv
    _configure_logging()

    try:
        run(argv)
    except UsageError as e:
        print_diagnostic(Text(str(e)), console)
        return 1
    except Violation as v:
        print_diagnostic(render_violation(v, style), console)
        return 1
    except OSError as e:
        logger.debug("I/O failure", exc_info=True)
        message = f"{e.strerror}: {e.filename}" if e.filename else str(e)
        print_diagnostic(render_message(message, style), console)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
