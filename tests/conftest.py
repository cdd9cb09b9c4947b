"""Test configuration and shared fixtures."""

import os
from pathlib import Path
from typing import Callable, Dict
from unittest.mock import patch

import pytest

from logleak.config import ScannerSettings, get_settings
from logleak.configuration import RuleSet
from logleak.observability import ScanLogger, configure_logging
from logleak.scanner.keywords import KeywordRule


@pytest.fixture
def clean_env():
    """Run with no LOGLEAK_* variables and a fresh settings cache."""
    with patch.dict(os.environ, {}, clear=True):
        get_settings.cache_clear()
        yield
    get_settings.cache_clear()


@pytest.fixture
def ssn_rule():
    return KeywordRule.literal("ssn")


@pytest.fixture
def keyword_rules():
    """Keyword rules in configured order."""
    return [
        KeywordRule.literal("ssn"),
        KeywordRule.literal("password"),
        KeywordRule.literal("creditCard"),
        KeywordRule.pattern(r"^api[A-Z]\w*Key$"),
    ]


@pytest.fixture
def object_type_rules():
    return [KeywordRule.literal("request"), KeywordRule.pattern(r"^\w+Response$")]


@pytest.fixture
def rule_set(keyword_rules, object_type_rules):
    return RuleSet(keywords=tuple(keyword_rules), object_types=tuple(object_type_rules))


@pytest.fixture
def settings():
    """Scanner settings independent of the calling environment."""
    with patch.dict(os.environ, {}, clear=True):
        return ScannerSettings()


@pytest.fixture
def stdlib_logging():
    """Route structlog events through stdlib logging so caplog sees them."""
    configure_logging("INFO")
    yield


@pytest.fixture
def quiet_logger():
    return ScanLogger(enabled=False)


@pytest.fixture
def write_java(tmp_path) -> Callable[..., Path]:
    """Write a Java source file below ``tmp_path`` and return its path."""

    def _write(relative: str, source: str, root: Path = tmp_path) -> Path:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return _write


USER_SERVICE_SOURCE = """\
package com.example;

public class UserService {
    private static final Logger logger = LoggerFactory.getLogger(UserService.class);

    public void register(String username, String ssn) {
        logger.info("User: " + username + " SSN: " + ssn);
        logger.debug("Registration finished");
    }
}
"""


@pytest.fixture
def user_service_source():
    return USER_SERVICE_SOURCE


@pytest.fixture
def write_config(tmp_path) -> Callable[[Dict[str, str]], Path]:
    """Create a configuration directory from ``{file name: xml}``."""

    def _write(files: Dict[str, str]) -> Path:
        directory = tmp_path / "config"
        directory.mkdir(exist_ok=True)
        for name, content in files.items():
            (directory / name).write_text(content, encoding="utf-8")
        return directory

    return _write


KEYWORDS_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<keywords>
    <keyword type="text">ssn</keyword>
    <keyword type="text">password</keyword>
    <keyword type="regex">^credit\\w*$</keyword>
</keywords>
"""

OBJECT_TYPES_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<object-types>
    <object-type type="text">request</object-type>
</object-types>
"""


@pytest.fixture
def config_dir(write_config):
    """A configuration directory with keyword and object-type rules."""
    return write_config({"keywords.xml": KEYWORDS_XML, "object-types.xml": OBJECT_TYPES_XML})
