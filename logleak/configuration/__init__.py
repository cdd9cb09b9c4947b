"""Rule-set configuration: loading keyword, object-type and exclusion rules."""

from .loader import (
    DEFAULT_KEYWORDS,
    DEFAULT_OBJECT_TYPES,
    RuleSet,
    load_rule_set,
)

__all__ = [
    "RuleSet",
    "load_rule_set",
    "DEFAULT_KEYWORDS",
    "DEFAULT_OBJECT_TYPES",
]
