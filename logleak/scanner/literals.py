"""Quoted string literal regions within a statement.

Literals are ``"..."`` spans with no escape handling: ``"a \\" b"`` is read
as the literal ``"a \\"`` followed by code. Statements containing escaped
quotes are therefore mis-segmented; this mirrors how the scanner has always
behaved and is pinned by tests.
"""

from __future__ import annotations

import re
from typing import List, Tuple

STRING_LITERAL_PATTERN = re.compile(r'"([^"]*)"')

Range = Tuple[int, int]


def literal_ranges(text: str) -> List[Range]:
    """Half-open ``(start, end)`` offsets of every quoted span, quotes included."""
    if not text:
        return []
    return [m.span() for m in STRING_LITERAL_PATTERN.finditer(text)]


def in_literal(position: int, ranges: List[Range]) -> bool:
    for start, end in ranges:
        if start <= position < end:
            return True
    return False


def literal_contents(text: str) -> List[str]:
    """Contents of quoted spans without quotes; blank contents are skipped."""
    if not text:
        return []
    return [
        m.group(1)
        for m in STRING_LITERAL_PATTERN.finditer(text)
        if m.group(1).strip()
    ]


def strip_literals(text: str) -> str:
    return STRING_LITERAL_PATTERN.sub("", text)
