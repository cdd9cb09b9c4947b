"""Records produced and consumed by the scanning pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

BufferTraces = Mapping[str, Tuple[str, ...]]


def _freeze_traces(traces: Optional[Mapping[str, Any]]) -> BufferTraces:
    frozen = {name: tuple(appends) for name, appends in (traces or {}).items()}
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class LogStatement:
    """One logging call, joined onto a single line.

    ``buffer_traces`` holds the append arguments of every buffer variable
    referenced by ``text``.
    """

    file: str
    start_line: int
    text: str
    buffer_traces: BufferTraces = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "buffer_traces", _freeze_traces(self.buffer_traces))


@dataclass(frozen=True)
class Detection:
    """A rule hit inside one log statement."""

    file: str
    line: int
    label: str
    statement: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "line": self.line,
            "label": self.label,
            "statement": self.statement,
        }


@dataclass
class ScanStatistics:
    """Counters for one scan run."""

    files_scanned: int = 0
    total_detections: int = 0
    duration_ms: int = 0

    def increment_files_scanned(self) -> None:
        self.files_scanned += 1

    def increment_detections(self, count: int) -> None:
        self.total_detections += count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files_scanned": self.files_scanned,
            "total_detections": self.total_detections,
            "duration_ms": self.duration_ms,
        }


@dataclass(frozen=True)
class FileWarning:
    """A file that was skipped; the scan carried on without it."""

    path: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "reason": self.reason}


@dataclass
class ScanResult:
    detections: List[Detection] = field(default_factory=list)
    statistics: ScanStatistics = field(default_factory=ScanStatistics)
    warnings: List[FileWarning] = field(default_factory=list)

    @property
    def has_detections(self) -> bool:
        return bool(self.detections)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "statistics": self.statistics.to_dict(),
            "detections": [d.to_dict() for d in self.detections],
            "warnings": [w.to_dict() for w in self.warnings],
        }
