"""Parsed traceback frame."""

from dataclasses import dataclass

UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class StackFrame:
    """One frame of a parsed traceback, innermost last."""

    function_name: str = UNKNOWN
    file_name: str = UNKNOWN
    line_number: int = -1
    column_number: int = -1
    type_name: str = UNKNOWN
