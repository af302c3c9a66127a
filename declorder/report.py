"""
JSON-serialisable result models (pydantic).

Used by the MCP server and the workspace checker to hand structured
results to callers that do not want to parse terminal output.
"""

from typing import List, Optional

from pydantic import BaseModel


class LocationReport(BaseModel):
    file: str
    line: int               # 1-indexed
    column: int             # 1-indexed
    text: str = ""


class ViolationReport(BaseModel):
    kind: str
    message: str
    locations: List[LocationReport] = []
    file: Optional[str] = None


class PairReport(BaseModel):
    header: str
    source: str
    mode: str
    ok: bool
    violation: Optional[ViolationReport] = None
    error: Optional[str] = None     # I/O problems, not contract violations
