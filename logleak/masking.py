"""Mask sensitive fields of an object before it is logged.

The counterpart of the scanner: application code can pass objects through
:func:`mask_and_serialize` instead of logging them raw.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any, Iterable, List, Optional, Set

from pydantic import BaseModel

DEFAULT_SENSITIVE_PATTERNS: List[str] = [
    "password", "passwd", "pwd",
    "ssn", "social_security", "socialsecurity",
    "credit_card", "creditcard", "debit_card", "debitcard",
    "api_key", "apikey", "secret",
    "token", "auth_token", "authtoken",
    "pin", "cvv", "cvc",
    "dob", "date_of_birth", "dateofbirth",
]

MASK_VALUE = "***"
CIRCULAR_REFERENCE = "[Circular Reference]"

_SCALARS = (str, int, float, bool, type(None))


def is_sensitive_field(name: str, patterns: Iterable[str]) -> bool:
    lowered = name.lower()
    return any(p.lower() in lowered for p in patterns)


def mask_object(obj: Any, patterns: Iterable[str], _seen: Optional[Set[int]] = None) -> Any:
    """Return a JSON-ready copy of ``obj`` with sensitive names masked."""
    patterns = list(patterns)
    seen = _seen if _seen is not None else set()

    if isinstance(obj, _SCALARS):
        return obj

    if id(obj) in seen:
        return CIRCULAR_REFERENCE
    seen.add(id(obj))
    try:
        return _mask_container(obj, patterns, seen)
    finally:
        # only ancestors count as circular; siblings may share objects
        seen.discard(id(obj))


def _json_key(key: Any) -> Any:
    return key if isinstance(key, (str, int)) else str(key)


def _mask_container(obj: Any, patterns: List[str], seen: Set[int]) -> Any:
    if isinstance(obj, dict):
        return {
            _json_key(key): MASK_VALUE
            if isinstance(key, str) and is_sensitive_field(key, patterns)
            else mask_object(value, patterns, seen)
            for key, value in obj.items()
        }
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [mask_object(item, patterns, seen) for item in obj]
    if isinstance(obj, BaseModel):
        fields = {name: getattr(obj, name) for name in type(obj).model_fields}
    elif dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        fields = {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    elif hasattr(obj, "__dict__"):
        fields = dict(vars(obj))
    else:
        return str(obj)

    return {
        name: MASK_VALUE
        if is_sensitive_field(name, patterns)
        else mask_object(value, patterns, seen)
        for name, value in fields.items()
    }


def mask_and_serialize(obj: Any, patterns: Optional[Iterable[str]] = None) -> str:
    """Serialize ``obj`` to indented JSON with sensitive fields replaced by ``***``."""
    if obj is None:
        return "null"
    masked = mask_object(obj, patterns if patterns is not None else DEFAULT_SENSITIVE_PATTERNS)
    return json.dumps(masked, indent=2, default=str)
