"""Runtime settings for logleak, read from ``LOGLEAK_*`` environment variables."""

import codecs
import json
from functools import lru_cache
from typing import Annotated, Any, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_EXCLUDE_DIRS = [
    ".git",
    ".hg",
    ".svn",
    ".idea",
    ".vscode",
    "node_modules",
    "target",
    "build",
    "out",
    ".gradle",
    "__pycache__",
]


def _split_list(v: Any) -> Any:
    """Allow comma-separated string or JSON array for list settings."""
    if isinstance(v, tuple):
        return list(v)
    if isinstance(v, str):
        try:
            parsed = json.loads(v)
            if isinstance(parsed, list):
                return [str(item) for item in parsed]
        except (json.JSONDecodeError, TypeError, ValueError):
            pass
        return [t.strip() for t in v.split(",") if t.strip()]
    return v


class ScannerSettings(BaseSettings):
    """
    Scanner configuration using Pydantic BaseSettings.
    Every field can be overridden with a ``LOGLEAK_``-prefixed variable.
    """

    # Environment identification
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Rule and root locations
    config_dir: Optional[str] = Field(default=None)
    scan_roots: Annotated[List[str], NoDecode] = Field(default_factory=list)

    # Discovery
    file_extensions: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: [".java"]
    )
    exclude_dir_names: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS)
    )
    follow_symlinks: bool = Field(default=False)
    max_file_bytes: int = Field(default=10 * 1024 * 1024, ge=1)
    file_encoding: str = Field(default="utf-8")

    # Execution
    workers: int = Field(default=1, ge=1, le=64)
    scan_timeout: Optional[float] = Field(default=None, gt=0)

    # Reporting
    report_dir: str = Field(default=".")
    report_format: str = Field(default="html")

    # Observability
    observability_enabled: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="LOGLEAK_",
        env_file=None,
        case_sensitive=False,
        env_ignore_empty=True,
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        allowed = ["development", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        v = v.upper()
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v

    @field_validator("report_format")
    @classmethod
    def validate_report_format(cls, v):
        v = v.lower()
        allowed = ["html", "json"]
        if v not in allowed:
            raise ValueError(f"report_format must be one of {allowed}")
        return v

    @field_validator("file_encoding")
    @classmethod
    def validate_file_encoding(cls, v):
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"unknown file_encoding: {v}")
        return v

    @field_validator("scan_roots", "file_extensions", "exclude_dir_names", mode="before")
    @classmethod
    def parse_list(cls, v):
        return _split_list(v)

    @field_validator("file_extensions")
    @classmethod
    def normalize_extensions(cls, v):
        return [e if e.startswith(".") else f".{e}" for e in v]


@lru_cache(maxsize=1)
def get_settings() -> ScannerSettings:
    """Get cached scanner settings."""
    return ScannerSettings()
