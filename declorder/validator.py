"""
Validator: picks the mode and feeds the matcher.

Header-only mode (same file name twice): one scan supplies the leading
declarations and then the definitions.

Split mode: the header supplies the declarations and the source file the
definitions.  The source is parsed only once the header turns out to be
pure prototypes.  A header that itself contains a function body is
reconciled on its own from that body onwards and the source file is not
examined at all.
"""

import logging
from itertools import chain
from typing import Optional

from declorder.c_parser import parse_checked
from declorder.errors import DeclarationWithoutDefinition, EmptyHeaderOnlyFile
from declorder.extractor import extract_items
from declorder.matcher import OrderMatcher
from declorder.models import Mode

logger = logging.getLogger(__name__)


def validate(
    header_name: str,
    header_source: bytes,
    source_name: Optional[str] = None,
    source_source: Optional[bytes] = None,
) -> None:
    """Check one header/source pair (or a single header-only file).

    Returns None on success and raises a ``Violation`` for the first
    problem found.
    """
    if source_name is None:
        source_name, source_source = header_name, header_source
    mode = Mode.for_files(header_name, source_name)
    logger.info("Checking %s (%s mode)", header_name, mode.value)

    header = parse_checked(header_name, header_source)
    matcher = OrderMatcher()
    items = extract_items(header)
    first_definition = matcher.scan(items)

    if first_definition is not None:
        if mode is Mode.SPLIT:
            logger.warning(
                "%s contains function definitions; reconciling the header on its "
                "own, %s is not examined and its bodies are not matched against "
                "the remaining prototypes",
                header_name, source_name,
            )
        matcher.reconcile(chain([first_definition], items))
    elif mode is Mode.HEADER_ONLY:
        if matcher.pending:
            raise DeclarationWithoutDefinition(matcher.pending[0].location)
        raise EmptyHeaderOnlyFile(header_name)
    else:
        if source_source is None:
            raise TypeError("source_source is required when source_name is given")
        source = parse_checked(source_name, source_source)
        matcher.reconcile(extract_items(source))

    matcher.finish()


def validate_files(header_path: str, source_path: Optional[str] = None) -> None:
    """Read the file(s) from disk and validate them.

    ``OSError`` from reading propagates to the caller.
    """
    with open(header_path, "rb") as f:
        header_source = f.read()
    if source_path is None or source_path == header_path:
        validate(header_path, header_source)
        return
    with open(source_path, "rb") as f:
        source_source = f.read()
    validate(header_path, header_source, source_path, source_source)
