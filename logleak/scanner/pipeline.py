"""Per-file scanning pipeline and the multi-file scan runner.

Each file goes through two phases: buffer tracking over every line, then
statement extraction with detection on each statement. Files share no
mutable state, so the runner can hand them to a thread pool; results are
always concatenated in discovery order.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Sequence, Union

from ..config import ScannerSettings
from ..error import ScanError
from ..observability.logging import LoggingContext, ScanLogger, get_logger
from . import buffers, extractor
from .detector import detect
from .discovery import discover
from .models import Detection, FileWarning, ScanResult

if TYPE_CHECKING:
    from ..configuration import RuleSet

logger = logging.getLogger(__name__)


@dataclass
class FileOutcome:
    path: str
    detections: List[Detection]
    statements: int = 0
    warning: Optional[FileWarning] = None


def read_lines(path: Path, encoding: str = "utf-8", max_bytes: Optional[int] = None) -> List[str]:
    """Read a source file as lines.

    Raises:
        ScanError: If the file is too big, unreadable or not valid text.
    """
    try:
        if max_bytes is not None and path.stat().st_size > max_bytes:
            raise ScanError(
                f"File exceeds {max_bytes} bytes", path=str(path),
                context={"size": path.stat().st_size},
            )
        text = path.read_text(encoding=encoding)
    except UnicodeDecodeError as e:
        raise ScanError(f"Cannot decode file as {encoding}: {e.reason}", path=str(path)) from e
    except OSError as e:
        raise ScanError(f"Cannot read file: {e.strerror or e}", path=str(path)) from e

    # only \n, \r\n and \r end a line; form feeds and U+2028 stay inside it
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def scan_file(
    path: Union[str, Path],
    rules: "RuleSet",
    settings: Optional[ScannerSettings] = None,
) -> FileOutcome:
    """Scan one file, turning read failures into a warning instead of raising."""
    settings = settings or ScannerSettings()
    path = Path(path)
    display = str(path)

    try:
        lines = read_lines(path, settings.file_encoding, settings.max_file_bytes)
    except ScanError as e:
        logger.debug("Skipping %s: %s", display, e.message)
        return FileOutcome(display, [], warning=FileWarning(display, e.message))

    buffer_map = buffers.track(lines)
    statements = extractor.extract(lines, file=display, buffer_map=buffer_map)
    detections: List[Detection] = []
    for statement in statements:
        detections.extend(detect(statement, rules.keywords, rules.object_types))

    return FileOutcome(display, detections, statements=len(statements))


def run_scan(
    roots: Sequence[str],
    rules: "RuleSet",
    settings: Optional[ScannerSettings] = None,
    scan_logger: Optional[ScanLogger] = None,
) -> ScanResult:
    """
    Discover and scan every source file under ``roots``.

    Args:
        roots: Directories to walk.
        rules: Loaded rule set.
        settings: Scanner settings; defaults are read from the environment.
        scan_logger: Structured logger; the global one when omitted.

    Returns:
        ScanResult with detections, statistics and per-file warnings.

    Raises:
        ScanError: If a root is unusable. Per-file problems never raise.
    """
    settings = settings or ScannerSettings()
    scan_logger = scan_logger or get_logger()
    started = time.monotonic()
    result = ScanResult()

    with LoggingContext():
        files, stopped = discover(
            roots,
            extensions=settings.file_extensions,
            exclude_dir_names=settings.exclude_dir_names,
            exclusions=rules.exclusions,
            follow_symlinks=settings.follow_symlinks,
            max_seconds=settings.scan_timeout,
        )
        if stopped:
            result.warnings.append(
                FileWarning(", ".join(str(r) for r in roots), f"discovery stopped: {stopped}")
            )
        scan_logger.log_scan_started(roots, len(files), settings.workers)

        if settings.workers > 1 and len(files) > 1:
            with ThreadPoolExecutor(max_workers=settings.workers) as pool:
                outcomes = list(pool.map(lambda p: scan_file(p, rules, settings), files))
        else:
            outcomes = [scan_file(p, rules, settings) for p in files]

        for outcome in outcomes:
            if outcome.warning is not None:
                scan_logger.log_file_skipped(outcome.warning.path, outcome.warning.reason)
                result.warnings.append(outcome.warning)
                continue
            result.statistics.increment_files_scanned()
            result.statistics.increment_detections(len(outcome.detections))
            result.detections.extend(outcome.detections)
            scan_logger.log_file_scanned(outcome.path, outcome.statements, len(outcome.detections))
            for detection in outcome.detections:
                scan_logger.log_detection(detection.file, detection.line, detection.label)

        result.statistics.duration_ms = int((time.monotonic() - started) * 1000)
        scan_logger.log_scan_completed(
            result.statistics.files_scanned,
            result.statistics.total_detections,
            result.statistics.duration_ms,
            len(result.warnings),
        )

    return result
