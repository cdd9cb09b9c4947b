"""Statement extraction and sensitive-data detection.

Discovery and the multi-file runner live in :mod:`logleak.scanner.discovery`
and :mod:`logleak.scanner.pipeline`.
"""

from .buffers import track
from .detector import DetectionEngine, detect, has_dynamic_content
from .extractor import extract, is_log_statement, is_method_signature
from .keywords import KeywordRule, RuleKind
from .models import Detection, FileWarning, LogStatement, ScanResult, ScanStatistics

__all__ = [
    "KeywordRule",
    "RuleKind",
    "LogStatement",
    "Detection",
    "FileWarning",
    "ScanResult",
    "ScanStatistics",
    "DetectionEngine",
    "detect",
    "has_dynamic_content",
    "extract",
    "is_log_statement",
    "is_method_signature",
    "track",
]
