"""Load rule sets from a configuration directory of XML files.

Expected layout (every file optional)::

    config/
        keywords.xml            <keyword type="text|regex">ssn</keyword>
        object-types.xml        <object-type type="regex">.*Request</object-type>
        exclusions.xml          <exclusion type="text">generated/</exclusion>
        scan-directories.xml    <directory>src/main/java</directory>
"""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ..error import ConfigurationError, InvalidRuleError
from ..scanner.keywords import KeywordRule, RuleKind

logger = logging.getLogger(__name__)

KEYWORDS_FILE = "keywords.xml"
OBJECT_TYPES_FILE = "object-types.xml"
EXCLUSIONS_FILE = "exclusions.xml"
SCAN_DIRECTORIES_FILE = "scan-directories.xml"

DEFAULT_KEYWORDS = (
    "password",
    "passwd",
    "ssn",
    "socialSecurityNumber",
    "creditCard",
    "cardNumber",
    "cvv",
    "pin",
    "dob",
    "dateOfBirth",
    "apiKey",
    "secret",
    "token",
)
DEFAULT_OBJECT_TYPES = ("request", "response")


@dataclass(frozen=True)
class RuleSet:
    """Loaded, validated rules. Read-only once built."""

    keywords: Tuple[KeywordRule, ...] = ()
    object_types: Tuple[KeywordRule, ...] = ()
    exclusions: Tuple[KeywordRule, ...] = ()
    scan_directories: Tuple[str, ...] = ()
    source: Optional[str] = field(default=None, compare=False)

    @classmethod
    def default(cls) -> "RuleSet":
        """Built-in rules used when no configuration directory is given."""
        return cls(
            keywords=tuple(KeywordRule.literal(k) for k in DEFAULT_KEYWORDS),
            object_types=tuple(KeywordRule.literal(o) for o in DEFAULT_OBJECT_TYPES),
        )


def load_rule_set(config_dir: Optional[str]) -> RuleSet:
    """
    Load every rule file found in ``config_dir``.

    Args:
        config_dir: Directory holding the XML rule files.

    Returns:
        RuleSet with rules in file order.

    Raises:
        ConfigurationError: If the directory is unusable or any file is invalid.
    """
    if config_dir is None or not str(config_dir).strip():
        raise ConfigurationError("Configuration directory path cannot be null or empty")

    directory = Path(config_dir)
    if not directory.exists():
        raise ConfigurationError(
            f"Configuration directory not found: {config_dir}", source=str(config_dir)
        )
    if not directory.is_dir():
        raise ConfigurationError(
            f"Configuration path is not a directory: {config_dir}", source=str(config_dir)
        )
    if not os.access(directory, os.R_OK):
        raise ConfigurationError(
            f"Configuration directory is not readable: {config_dir}", source=str(config_dir)
        )

    keywords: List[KeywordRule] = []
    object_types: List[KeywordRule] = []
    exclusions: List[KeywordRule] = []
    scan_directories: List[str] = []

    if (directory / SCAN_DIRECTORIES_FILE).exists():
        scan_directories = _load_directories(directory / SCAN_DIRECTORIES_FILE)
    if (directory / KEYWORDS_FILE).exists():
        keywords = _load_rules(directory / KEYWORDS_FILE, "keyword")
    if (directory / OBJECT_TYPES_FILE).exists():
        object_types = _load_rules(directory / OBJECT_TYPES_FILE, "object-type")
    if (directory / EXCLUSIONS_FILE).exists():
        exclusions = _load_rules(directory / EXCLUSIONS_FILE, "exclusion")

    logger.debug(
        "Loaded %d keywords, %d object types, %d exclusions from %s",
        len(keywords), len(object_types), len(exclusions), directory,
    )
    return RuleSet(
        keywords=tuple(keywords),
        object_types=tuple(object_types),
        exclusions=tuple(exclusions),
        scan_directories=tuple(scan_directories),
        source=str(directory),
    )


def _parse(path: Path) -> ET.Element:
    try:
        return ET.parse(path).getroot()
    except ET.ParseError as e:
        raise ConfigurationError(
            f"Invalid XML structure in {path.name}: {e}", source=str(path)
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Error reading {path.name}: {e}", source=str(path)
        ) from e


def _load_rules(path: Path, tag: str) -> List[KeywordRule]:
    root = _parse(path)
    rules: List[KeywordRule] = []

    for position, element in enumerate(root.iter(tag)):
        text = (element.text or "").strip()
        kind = element.get("type", "").strip()

        if not text:
            raise ConfigurationError(
                f"Empty {tag} found at position {position} in {path.name}",
                source=str(path),
            )
        if not kind:
            raise ConfigurationError(
                f"Missing 'type' attribute for {tag}: {text} in {path.name}",
                source=str(path),
            )

        try:
            rules.append(KeywordRule(text, RuleKind.from_attribute(kind)))
        except InvalidRuleError as e:
            raise InvalidRuleError(
                f"Invalid regex pattern for {tag} in {path.name}: {e.message}",
                rule=text,
                role=tag,
                source=str(path),
            ) from e

    return rules


def _load_directories(path: Path) -> List[str]:
    root = _parse(path)
    directories: List[str] = []

    for position, element in enumerate(root.iter("directory")):
        directory = (element.text or "").strip()
        if not directory:
            raise ConfigurationError(
                f"Empty directory found at position {position} in {path.name}",
                source=str(path),
            )
        directories.append(directory)

    return directories
