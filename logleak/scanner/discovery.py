"""Recursive discovery of source files under one or more scan roots."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from ..error import ScanError
from .keywords import KeywordRule

logger = logging.getLogger(__name__)


def is_excluded(relative_path: str, exclusions: Iterable[KeywordRule]) -> bool:
    """Literal exclusions match as substrings, pattern exclusions by search."""
    for rule in exclusions:
        if rule.contained_in(relative_path):
            return True
    return False


def validate_root(root: str) -> Path:
    if root is None or not str(root).strip():
        raise ScanError("Root path cannot be null or empty")
    path = Path(root)
    if not path.exists():
        raise ScanError(f"Path does not exist: {root}", path=str(root))
    if not path.is_dir():
        raise ScanError(f"Path is not a directory: {root}", path=str(root))
    if not os.access(path, os.R_OK):
        raise ScanError(f"Path is not readable: {root}", path=str(root))
    return path


def discover(
    roots: Sequence[str],
    extensions: Sequence[str] = (".java",),
    exclude_dir_names: Sequence[str] = (),
    exclusions: Sequence[KeywordRule] = (),
    follow_symlinks: bool = False,
    max_seconds: Optional[float] = None,
) -> Tuple[List[Path], Optional[str]]:
    """
    Walk every root and collect matching source files.

    Returns:
        ``(files, stopped_reason)``. ``stopped_reason`` is ``None`` unless the
        walk was cut short by ``max_seconds``.

    Raises:
        ScanError: If a root is missing, not a directory or unreadable.
    """
    validated = [validate_root(root) for root in roots]
    excluded_dirs = set(exclude_dir_names)
    started = time.monotonic()
    files: List[Path] = []
    seen = set()

    def _on_walk_error(error: OSError) -> None:
        logger.warning("Cannot access %s: %s", error.filename, error.strerror)

    for root in validated:
        for dirpath, dirnames, filenames in os.walk(
            root, onerror=_on_walk_error, followlinks=follow_symlinks
        ):
            if max_seconds is not None and time.monotonic() - started > max_seconds:
                logger.warning("File discovery stopped after %.1fs", max_seconds)
                return files, "max_seconds"

            dirnames[:] = sorted(d for d in dirnames if d not in excluded_dirs)
            for filename in sorted(filenames):
                if not filename.endswith(tuple(extensions)):
                    continue
                path = Path(dirpath) / filename
                if not follow_symlinks and path.is_symlink():
                    continue
                if not path.is_file():
                    continue
                relative = path.relative_to(root).as_posix()
                if exclusions and is_excluded(relative, exclusions):
                    logger.debug("Excluded by rule: %s", path)
                    continue
                key = path.resolve()
                if key in seen:
                    continue
                seen.add(key)
                files.append(path)

    return files, None
