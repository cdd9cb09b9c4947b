"""Observability for logleak: structured, scan-correlated logging."""

from .logging import (
    LoggingContext,
    ScanLogger,
    TimedOperation,
    configure_logging,
    disable_logging,
    get_logger,
)

__all__ = [
    "ScanLogger",
    "LoggingContext",
    "TimedOperation",
    "configure_logging",
    "disable_logging",
    "get_logger",
]
