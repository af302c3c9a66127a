"""
Declaration Order Checker: MCP Server

Exposes tools via the Model Context Protocol:

  1. check_files       : validate a header/source pair or a header-only file
  2. check_workspace   : validate every foo.h / foo.c pair under a directory
  3. explain_violation : describe a violation kind and how to fix it

Each tool returns either a plain-text diagnostic or, with
``output_format="json"``, the pydantic report serialised to JSON.
"""

import json
import os
import sys

from mcp.server.fastmcp import FastMCP

from declorder.diagnostics import format_violation
from declorder.errors import ViolationKind, MESSAGES, Violation
from declorder.models import Mode
from declorder.report import PairReport
from declorder.validator import validate_files
from declorder.workspace import check_pair, discover_pairs

# ═══════════════════════════════════════════════════════════════════════
#  Server Setup
# ═══════════════════════════════════════════════════════════════════════

mcp = FastMCP("Declaration Order Checker")

_FORMATS = ("text", "json")

_EXPLANATIONS = {
    ViolationKind.SYNTAX_ERROR: (
        "The parser produced an ERROR node, so the file is not checked further. "
        "Fix the reported line (stray characters, unbalanced braces) first."
    ),
    ViolationKind.DEFINITION_WITHOUT_DECLARATION: (
        "A non-static function other than main has a body but every prototype "
        "has already been matched. Add a prototype for it to the header, at the "
        "position matching the body's position."
    ),
    ViolationKind.OUT_OF_ORDER: (
        "The next unmatched prototype names a different function than the body "
        "being checked. Reorder the prototypes or the bodies so both lists "
        "follow the same sequence."
    ),
    ViolationKind.UNEXPECTED_DECLARATION: (
        "A function prototype appears after the first function body. All "
        "prototypes must precede all bodies."
    ),
    ViolationKind.DECLARATION_WITHOUT_DEFINITION: (
        "A prototype was never matched by a body. Define the function or remove "
        "the prototype."
    ),
    ViolationKind.EMPTY_HEADER_ONLY_FILE: (
        "A file checked on its own must contain at least one function body. "
        "Pass the matching source file as well, or add the definitions."
    ),
}


def _check_format(output_format: str):
    if output_format not in _FORMATS:
        return f"Error: output_format must be one of {', '.join(_FORMATS)}"
    return None


# ═══════════════════════════════════════════════════════════════════════
#  Tool 1: Check Files
# ═══════════════════════════════════════════════════════════════════════

@mcp.tool()
def check_files(header_path: str, source_path: str = "", output_format: str = "text") -> str:
    """
    Checks that every non-static function body follows its prototype, in order.

    Args:
        header_path:   Path to the header (or the header-only file).
        source_path:   Path to the matching source file.  Leave empty for
                       header-only mode.
        output_format: "text" for a diagnostic, "json" for a structured report.
    """
    err = _check_format(output_format)
    if err:
        return err

    source = source_path or header_path
    report = PairReport(
        header=header_path,
        source=source,
        mode=Mode.for_files(header_path, source).value,
        ok=False,
    )
    try:
        validate_files(header_path, source)
        report.ok = True
    except Violation as v:
        report.violation = v.to_report()
        if output_format == "text":
            return format_violation(v)
    except OSError as e:
        report.error = f"{e.strerror}: {e.filename}" if e.filename else str(e)
        if output_format == "text":
            return f"Error: {report.error}"

    if output_format == "json":
        return report.model_dump_json(indent=2)
    return f"OK: {header_path} ({report.mode} mode) follows the declaration order."


# ═══════════════════════════════════════════════════════════════════════
#  Tool 2: Check Workspace
# ═══════════════════════════════════════════════════════════════════════

@mcp.tool()
def check_workspace(workspace_root: str, output_format: str = "text") -> str:
    """
    Checks every header/source pair (foo.h next to foo.c) under a directory.

    Args:
        workspace_root: Root directory to scan.
        output_format:  "text" for a markdown summary, "json" for reports.
    """
    err = _check_format(output_format)
    if err:
        return err
    if not os.path.isdir(workspace_root):
        return f"Error: Workspace root not found at {workspace_root}"

    pairs, unpaired = discover_pairs(workspace_root)
    reports = [check_pair(workspace_root, pair) for pair in pairs]
    if output_format == "json":
        return json.dumps([r.model_dump() for r in reports], indent=2)

    passed = sum(1 for r in reports if r.ok)
    summary = f"## Declaration order: {workspace_root}\n\n"
    summary += f"| Pairs checked | {len(reports)} |\n|---|---|\n"
    summary += f"| Passed | {passed} |\n"
    summary += f"| Failed | {len(reports) - passed} |\n"
    summary += f"| Unpaired headers (skipped) | {len(unpaired)} |\n"

    if reports:
        summary += "\n| Header | Source | Result |\n|--------|--------|--------|\n"
        for r in reports:
            if r.ok:
                result = "ok"
            elif r.violation is not None:
                first = r.violation.locations[0] if r.violation.locations else None
                where = f" at {first.file}:{first.line}" if first else ""
                result = f"**{r.violation.message}**{where}"
            else:
                result = f"error: {r.error}"
            summary += f"| {r.header} | {r.source} | {result} |\n"
    return summary


# ═══════════════════════════════════════════════════════════════════════
#  Tool 3: Explain Violation
# ═══════════════════════════════════════════════════════════════════════

@mcp.tool()
def explain_violation(kind: str) -> str:
    """
    Explains a violation kind reported by check_files / check_workspace.

    Args:
        kind: Violation kind, e.g. "out-of-order".
    """
    try:
        vk = ViolationKind(kind.strip())
    except ValueError:
        known = ", ".join(k.value for k in ViolationKind)
        return f"Error: unknown violation kind '{kind}'. Known kinds: {known}"
    return f"### {vk.value}: {MESSAGES[vk]}\n\n{_EXPLANATIONS[vk]}"


if __name__ == "__main__":
    try:
        tools = mcp._tool_manager._tools.keys()
        print(f"DEBUG: declaration order checker starting with {len(tools)} tools: {list(tools)}",
              file=sys.stderr)
    except AttributeError:
        print("DEBUG: declaration order checker starting (cannot inspect tools)", file=sys.stderr)

    mcp.run()
