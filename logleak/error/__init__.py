"""Error taxonomy for logleak."""

from .core import (
    ConfigurationError,
    InvalidRuleError,
    ReportError,
    ScanError,
    ScannerError,
)

__all__ = [
    "ScannerError",
    "ConfigurationError",
    "InvalidRuleError",
    "ScanError",
    "ReportError",
]
