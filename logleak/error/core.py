"""Core error classes for logleak scanning."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class ScannerError(Exception):
    """Base exception with error context for logleak operations."""

    def __init__(
        self,
        message: str,
        error_code: str,
        context: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/reporting."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "type": self.__class__.__name__
        }


class ConfigurationError(ScannerError):
    """Rule set or settings could not be loaded. Always fatal."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        error_code: str = "CONFIGURATION_ERROR"
    ):
        super().__init__(message, error_code, context)
        self.source = source


class InvalidRuleError(ConfigurationError):
    """A pattern rule whose text does not compile."""

    def __init__(
        self,
        message: str,
        rule: str,
        role: str = "keyword",
        context: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None
    ):
        super().__init__(message, context, source, error_code="INVALID_RULE")
        self.rule = rule
        self.role = role


class ScanError(ScannerError):
    """Scan roots are unusable, or a single file failed to process."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        path: Optional[str] = None
    ):
        super().__init__(message, "SCAN_ERROR", context)
        self.path = path


class ReportError(ScannerError):
    """Report rendering or writing failed."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        output_path: Optional[str] = None
    ):
        super().__init__(message, "REPORT_ERROR", context)
        self.output_path = output_path
