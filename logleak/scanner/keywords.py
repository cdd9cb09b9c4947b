"""Keyword rules: one literal or pattern matcher per configured entry."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Pattern

from ..error import InvalidRuleError


class RuleKind(Enum):
    """How a rule's text is interpreted."""

    LITERAL = "text"
    PATTERN = "regex"

    @classmethod
    def from_attribute(cls, value: str) -> "RuleKind":
        """Map a config ``type`` attribute to a kind; anything but regex is literal."""
        return cls.PATTERN if value.strip().lower() == "regex" else cls.LITERAL


@dataclass(frozen=True)
class KeywordRule:
    """A single sensitive keyword or object-type rule.

    Literal rules compare whole tokens case-insensitively. Pattern rules are
    compiled once, at construction, and searched (not fully matched).
    """

    text: str
    kind: RuleKind = RuleKind.LITERAL
    _compiled: Optional[Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )
    _compiled_nocase: Optional[Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not self.text or not self.text.strip():
            raise InvalidRuleError("Rule text cannot be empty", rule=self.text or "")
        if self.kind is RuleKind.PATTERN:
            try:
                compiled = re.compile(self.text)
                compiled_nocase = re.compile(self.text, re.IGNORECASE)
            except re.error as e:
                raise InvalidRuleError(
                    f"Invalid regex pattern: {self.text} - {e}", rule=self.text
                ) from e
            object.__setattr__(self, "_compiled", compiled)
            object.__setattr__(self, "_compiled_nocase", compiled_nocase)

    @classmethod
    def literal(cls, text: str) -> "KeywordRule":
        return cls(text, RuleKind.LITERAL)

    @classmethod
    def pattern(cls, text: str) -> "KeywordRule":
        return cls(text, RuleKind.PATTERN)

    @property
    def is_pattern(self) -> bool:
        return self.kind is RuleKind.PATTERN

    def matches(self, token: Optional[str]) -> bool:
        """Match an identifier or accessor name."""
        if token is None:
            return False
        if self._compiled is not None:
            return self._compiled.search(token) is not None
        return token.lower() == self.text.lower()

    def contained_in(self, text: Optional[str]) -> bool:
        """Match the content of a quoted literal (substring semantics)."""
        if text is None:
            return False
        if self._compiled_nocase is not None:
            return self._compiled_nocase.search(text) is not None
        return self.text.lower() in text.lower()
