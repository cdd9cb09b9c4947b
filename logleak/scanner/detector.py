"""Sensitive-data detection over assembled log statements.

Detection runs a fixed sequence of passes over one statement. Identifier
passes (bare names, accessor calls, buffer appends, join arguments) are
independent extraction strategies feeding the same keyword matcher; object
references and keyword-bearing string literals follow. A token reported by
any pass is never reported again within the same statement.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Set

from .keywords import KeywordRule
from .literals import in_literal, literal_contents, literal_ranges, strip_literals
from .models import Detection, LogStatement

VARIABLE_PATTERN = re.compile(r"\b([a-zA-Z_][a-zA-Z0-9_]*)\b")
METHOD_CALL_PATTERN = re.compile(r"\.?([a-zA-Z_][a-zA-Z0-9_]*)\s*\(")
BUFFER_APPEND_PATTERN = re.compile(r"\.append\s*\(([^)]+)\)")
STRING_JOIN_PATTERN = re.compile(r"String\.join\s*\([^,]+,\s*(.+)\)")
STRING_JOINER_ADD_PATTERN = re.compile(r"StringJoiner.*\.add\s*\(([^)]+)\)")

CALL_PREFIX_PATTERNS = (
    re.compile(r"(logger|log|LOGGER|LOG)\s*\.\s*(info|debug|warn|error|trace|fatal)\s*\("),
    re.compile(r"System\s*\.\s*(out|err)\s*\.\s*(print|println|printf)\s*\("),
)
CALL_PUNCTUATION_PATTERN = re.compile(r"[();]")
IDENTIFIER_PATTERN = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")

LITERAL_LABEL_SUFFIX = " (in string literal)"
LITERAL_KEY_PREFIX = "literal:"


def extract_variables(text: Optional[str]) -> List[str]:
    """Identifiers outside quoted literals, in order, duplicates kept."""
    if not text:
        return []
    ranges = literal_ranges(text)
    return [
        m.group(1)
        for m in VARIABLE_PATTERN.finditer(text)
        if not in_literal(m.start(), ranges)
    ]


def extract_method_calls(text: Optional[str]) -> List[str]:
    """Names immediately followed by ``(``, outside quoted literals."""
    if not text:
        return []
    ranges = literal_ranges(text)
    return [
        m.group(1)
        for m in METHOD_CALL_PATTERN.finditer(text)
        if not in_literal(m.start(1), ranges)
    ]


def _identifiers_in(fragment: str) -> List[str]:
    fragment = fragment.strip()
    return extract_variables(fragment) + extract_method_calls(fragment)


def extract_buffer_appends(text: Optional[str]) -> List[str]:
    """Identifiers inside ``.append(...)`` of an inline StringBuilder/StringBuffer."""
    if not text:
        return []
    if "StringBuilder" not in text and "StringBuffer" not in text:
        return []
    identifiers: List[str] = []
    for match in BUFFER_APPEND_PATTERN.finditer(text):
        identifiers.extend(_identifiers_in(match.group(1)))
    return identifiers


def extract_join_identifiers(text: Optional[str]) -> List[str]:
    """Identifiers among the joined arguments of ``String.join(sep, ...)``."""
    if not text:
        return []
    identifiers: List[str] = []
    for match in STRING_JOIN_PATTERN.finditer(text):
        identifiers.extend(_identifiers_in(match.group(1)))
    return identifiers


def extract_joiner_identifiers(text: Optional[str]) -> List[str]:
    """Identifiers passed to ``StringJoiner.add(...)``."""
    if not text or "StringJoiner" not in text:
        return []
    identifiers: List[str] = []
    for match in STRING_JOINER_ADD_PATTERN.finditer(text):
        identifiers.extend(_identifiers_in(match.group(1)))
    return identifiers


def extract_traced_appends(statement: LogStatement) -> List[str]:
    """Identifiers from append arguments collected for referenced buffers."""
    identifiers: List[str] = []
    for appends in statement.buffer_traces.values():
        for argument in appends:
            identifiers.extend(extract_variables(argument))
            identifiers.extend(extract_method_calls(argument))
    return identifiers


def has_dynamic_content(text: Optional[str]) -> bool:
    """Whether anything other than quoted text is passed to the call.

    ``log("SSN: ")`` is static; ``log("SSN: " + x)`` is not.
    """
    if text is None or not text.strip():
        return False

    cleaned = strip_literals(text)
    for prefix in CALL_PREFIX_PATTERNS:
        cleaned = prefix.sub("", cleaned)
    cleaned = CALL_PUNCTUATION_PATTERN.sub("", cleaned)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()

    if "+" in cleaned and any(part.strip() for part in cleaned.split("+")):
        return True

    return IDENTIFIER_PATTERN.search(cleaned) is not None


@dataclass(frozen=True)
class IdentifierStrategy:
    """A named way of pulling candidate identifiers out of a statement."""

    name: str
    extract: Callable[[LogStatement], List[str]]


IDENTIFIER_STRATEGIES: Sequence[IdentifierStrategy] = (
    IdentifierStrategy("variables", lambda s: extract_variables(s.text)),
    IdentifierStrategy("method_calls", lambda s: extract_method_calls(s.text)),
    IdentifierStrategy("buffer_appends", lambda s: extract_buffer_appends(s.text)),
    IdentifierStrategy("buffer_traces", extract_traced_appends),
    IdentifierStrategy("string_join", lambda s: extract_join_identifiers(s.text)),
    IdentifierStrategy("string_joiner", lambda s: extract_joiner_identifiers(s.text)),
)


class DetectionEngine:
    """Match one statement's identifiers and literals against rule sets."""

    def __init__(
        self,
        strategies: Sequence[IdentifierStrategy] = IDENTIFIER_STRATEGIES,
    ):
        self.strategies = tuple(strategies)

    def detect(
        self,
        statement: Optional[LogStatement],
        keyword_rules: Optional[Sequence[KeywordRule]],
        object_type_rules: Optional[Sequence[KeywordRule]] = (),
    ) -> List[Detection]:
        if statement is None or keyword_rules is None or object_type_rules is None:
            return []

        detections: List[Detection] = []
        reported: Set[str] = set()

        def report(key: str, label: str) -> None:
            detections.append(
                Detection(statement.file, statement.start_line, label, statement.text)
            )
            reported.add(key)

        for strategy in self.strategies:
            for identifier in strategy.extract(statement):
                if identifier in reported:
                    continue
                rule = _first_match(identifier, keyword_rules)
                if rule is not None:
                    report(identifier, rule.text)

        for reference in extract_variables(statement.text):
            if reference in reported:
                continue
            rule = _first_match(reference, object_type_rules)
            if rule is not None:
                report(reference, rule.text)

        if has_dynamic_content(statement.text):
            for literal in literal_contents(statement.text):
                for rule in keyword_rules:
                    key = LITERAL_KEY_PREFIX + rule.text
                    if key not in reported and rule.contained_in(literal):
                        report(key, rule.text + LITERAL_LABEL_SUFFIX)
                        break

        return detections


def _first_match(token: str, rules: Iterable[KeywordRule]) -> Optional[KeywordRule]:
    for rule in rules:
        if rule.matches(token):
            return rule
    return None


_default_engine = DetectionEngine()


def detect(
    statement: Optional[LogStatement],
    keyword_rules: Optional[Sequence[KeywordRule]],
    object_type_rules: Optional[Sequence[KeywordRule]] = (),
) -> List[Detection]:
    """Detect sensitive data in ``statement`` with the default strategy list."""
    return _default_engine.detect(statement, keyword_rules, object_type_rules)
