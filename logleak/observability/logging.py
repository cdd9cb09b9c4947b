"""Structured logging with scan correlation for logleak.

Events are emitted through structlog on top of the standard library
``logging`` module, so they honour the configured log level and can be
captured by ordinary handlers. Each event carries the current scan id when
one is set.

Can be disabled via LOGLEAK_DISABLE_OBSERVABILITY environment variable.
"""

import logging
import os
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog

logger = logging.getLogger(__name__)

# Context variable for scan correlation
SCAN_ID_CONTEXT: ContextVar[Optional[str]] = ContextVar("scan_id", default=None)


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Route structlog through stdlib logging at ``level``."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper()))
    logging.getLogger("logleak").setLevel(getattr(logging, level.upper()))

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.processors.KeyValueRenderer(key_order=["event"])
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


class ScanLogger:
    """Structured event logging for scan runs."""

    def __init__(self, enabled: Optional[bool] = None):
        """Initialize structured logger.

        Args:
            enabled: Override default enabled state. If None, uses environment.
        """
        if enabled is None:
            self.enabled = not os.getenv("LOGLEAK_DISABLE_OBSERVABILITY", "false").lower() == "true"
        else:
            self.enabled = enabled

        if not self.enabled:
            logger.debug("logleak structured logging disabled")
            return

        self.logger = structlog.get_logger("logleak")

    def _get_base_context(self) -> Dict[str, Any]:
        context = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "component": "logleak",
        }
        scan_id = SCAN_ID_CONTEXT.get()
        if scan_id:
            context["scan_id"] = scan_id
        return context

    def _log_structured(self, level: str, event: str, **kwargs):
        if not self.enabled:
            return

        try:
            context = self._get_base_context()
            context.update(kwargs)
            log_method = getattr(self.logger, level.lower())
            log_method(event, **context)
        except Exception as e:
            logging.getLogger("logleak.fallback").error(
                f"Structured logging failed: {e}, original event: {event}"
            )

    def log_configuration_loaded(self, source: str, keywords: int,
                                 object_types: int, exclusions: int = 0):
        self._log_structured(
            "INFO",
            "configuration_loaded",
            source=source,
            keywords=keywords,
            object_types=object_types,
            exclusions=exclusions,
        )

    def log_scan_started(self, roots: list, files: int, workers: int = 1):
        self._log_structured(
            "INFO", "scan_started", roots=[str(r) for r in roots], files=files, workers=workers
        )

    def log_file_scanned(self, path: str, statements: int, detections: int):
        self._log_structured(
            "DEBUG", "file_scanned", path=path, statements=statements, detections=detections
        )

    def log_file_skipped(self, path: str, reason: str):
        """Log a recoverable per-file failure."""
        self._log_structured("WARNING", "file_skipped", path=path, reason=reason)

    def log_detection(self, file: str, line: int, label: str):
        self._log_structured("DEBUG", "sensitive_data_detected", file=file, line=line, label=label)

    def log_scan_completed(self, files_scanned: int, detections: int,
                           duration_ms: int, warnings: int = 0):
        self._log_structured(
            "INFO",
            "scan_completed",
            files_scanned=files_scanned,
            detections=detections,
            duration_ms=duration_ms,
            warnings=warnings,
        )

    def log_performance_metric(self, operation: str, duration: float,
                               resource_usage: Optional[Dict[str, Any]] = None):
        context = {"operation": operation, "duration": duration}
        if resource_usage:
            context.update(resource_usage)
        self._log_structured("DEBUG", "performance_metric", **context)


class LoggingContext:
    """Context manager binding a scan id to every event logged inside it."""

    def __init__(self, scan_id: Optional[str] = None):
        self.scan_id = scan_id or str(uuid.uuid4())
        self._token = None

    def __enter__(self):
        self._token = SCAN_ID_CONTEXT.set(self.scan_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._token is not None:
            SCAN_ID_CONTEXT.reset(self._token)
            self._token = None


class TimedOperation:
    """Context manager for timing operations with automatic logging."""

    def __init__(self, logger: ScanLogger, operation: str, **context):
        self.logger = logger
        self.operation = operation
        self.context = context
        self.start_time = None

    def __enter__(self):
        self.start_time = time.time()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is not None:
            duration = time.time() - self.start_time
            self.logger.log_performance_metric(
                operation=self.operation,
                duration=duration,
                resource_usage={
                    "success": exc_type is None,
                    "error": str(exc_val) if exc_val else None,
                    **self.context,
                },
            )


_global_logger: Optional[ScanLogger] = None


def get_logger() -> ScanLogger:
    """Get the global logger instance, initializing if needed."""
    global _global_logger
    if _global_logger is None:
        _global_logger = ScanLogger()
    return _global_logger


def disable_logging():
    """Disable structured logging globally."""
    global _global_logger
    _global_logger = ScanLogger(enabled=False)
