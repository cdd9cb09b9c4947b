"""Locate logging and console-print calls and assemble them into statements."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence

from . import buffers
from .models import LogStatement

LOG_METHOD_PATTERN = re.compile(
    r"\b(logger|log|LOGGER|LOG)\s*\.\s*(info|debug|warn|error|trace|fatal)\s*\("
)

SYSTEM_PRINT_PATTERN = re.compile(
    r"\bSystem\s*\.\s*(out|err)\s*\.\s*(print|println|printf)\s*\("
)

# modifiers, return type, name, parameter list, optional { or ;
METHOD_SIGNATURE_PATTERN = re.compile(
    r"^\s*"
    r"(?:public|private|protected|static|final|abstract|synchronized|native|strictfp|\s)*"
    r"\s*"
    r"(?:void|boolean|byte|char|short|int|long|float|double|[A-Z][a-zA-Z0-9_<>\[\],\s]*)"
    r"\s+"
    r"[a-zA-Z_][a-zA-Z0-9_]*"
    r"\s*\([^)]*\)"
    r"\s*[{;]?"
)

STATEMENT_TERMINATOR = ";"


def is_log_statement(line: Optional[str]) -> bool:
    """True if the line opens a logger or ``System.out/err`` call."""
    if line is None or not line.strip():
        return False
    if LOG_METHOD_PATTERN.search(line):
        return True
    return SYSTEM_PRINT_PATTERN.search(line) is not None


def is_method_signature(line: Optional[str]) -> bool:
    """True for declaration lines such as ``public void log(String ssn) {``."""
    if line is None or not line.strip():
        return False
    return METHOD_SIGNATURE_PATTERN.search(line.strip()) is not None


def statement_end(lines: Sequence[str], start: int) -> int:
    """Index of the line that terminates the statement opened at ``start``.

    Falls back to ``start`` when no later line ends with a terminator.
    """
    if lines[start].strip().endswith(STATEMENT_TERMINATOR):
        return start
    for index in range(start + 1, len(lines)):
        if lines[index].strip().endswith(STATEMENT_TERMINATOR):
            return index
    return start


def extract(
    lines: Sequence[str],
    file: str = "",
    buffer_map: Optional[Dict[str, List[str]]] = None,
) -> List[LogStatement]:
    """Extract every log statement from a file's lines.

    Args:
        lines: Physical source lines, in order.
        file: Name recorded on each statement.
        buffer_map: Output of :func:`buffers.track` for the same lines.
            Computed here when not supplied.

    Returns:
        Statements in source order, numbered by their opening line.
    """
    if not lines:
        return []
    if buffer_map is None:
        buffer_map = buffers.track(lines)

    statements: List[LogStatement] = []
    index = 0
    while index < len(lines):
        line = lines[index]

        if is_method_signature(line):
            index += 1
            continue

        if not is_log_statement(line):
            index += 1
            continue

        end = statement_end(lines, index)
        text = " ".join(lines[i].strip() for i in range(index, end + 1))
        statements.append(
            LogStatement(
                file=file,
                start_line=index + 1,
                text=text,
                buffer_traces=buffers.related_buffers(text, buffer_map),
            )
        )
        index = end + 1

    return statements
