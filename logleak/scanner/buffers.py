"""File-wide tracking of StringBuilder/StringBuffer append history."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List

BUFFER_TYPES = ("StringBuilder", "StringBuffer")

DECLARATION_PATTERN = re.compile(
    r"(StringBuilder|StringBuffer)\s+([a-zA-Z_][a-zA-Z0-9_]*)\s*="
)
APPEND_PATTERN = re.compile(r"\.\s*append\s*\(([^)]+)\)")


def track(lines: Iterable[str]) -> Dict[str, List[str]]:
    """Map each declared buffer variable to its append arguments, in file order.

    The whole file is read before any statement is examined, so a log call
    sees appends written below it as well as above it.
    """
    appends: Dict[str, List[str]] = {}
    receivers: Dict[str, re.Pattern] = {}

    for line in lines:
        for match in DECLARATION_PATTERN.finditer(line):
            name = match.group(2)
            if name not in appends:
                appends[name] = []
                receivers[name] = re.compile(
                    r"(?<![a-zA-Z0-9_])" + re.escape(name) + r"\.append"
                )

        for name, receiver in receivers.items():
            if receiver.search(line):
                appends[name].extend(m.group(1) for m in APPEND_PATTERN.finditer(line))

    return appends


def related_buffers(text: str, appends: Dict[str, List[str]]) -> Dict[str, List[str]]:
    """Entries of ``appends`` whose variable occurs in ``text`` as a whole word."""
    related: Dict[str, List[str]] = {}
    for name, history in appends.items():
        if re.search(r"\b" + re.escape(name) + r"\b", text):
            related[name] = list(history)
    return related
