from __future__ import annotations

import os
from typing import Optional, Tuple

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

# Load environment from .env before importing settings
try:
    from dotenv import load_dotenv

    load_dotenv()
except Exception:
    pass

from logleak.config import get_settings
from logleak.configuration import RuleSet, load_rule_set
from logleak.error import ConfigurationError, ReportError, ScanError
from logleak.observability import ScanLogger, TimedOperation, configure_logging
from logleak.report import (
    default_report_path,
    render_console,
    write_html_report,
    write_json_report,
)
from logleak.scanner.pipeline import run_scan

console = Console()

EXIT_DETECTIONS = 2


def _fail(title: str, message: str) -> click.ClickException:
    console.rule("[bold red]Error")
    console.print(Panel.fit(escape(message), title=title))
    return click.ClickException(message)


@click.command()
@click.argument("roots", nargs=-1, type=click.Path(file_okay=False))
@click.option(
    "--config",
    "config_dir",
    default=None,
    help="Directory with keywords.xml, object-types.xml, exclusions.xml and scan-directories.xml",
)
@click.option("--output", "output", default=None, help="Report file path")
@click.option(
    "--format",
    "report_format",
    type=click.Choice(["html", "json"], case_sensitive=False),
    default=None,
    help="Report format (default: html)",
)
@click.option("--workers", type=click.IntRange(1, 64), default=None, help="Files scanned in parallel")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None,
              help="Stop file discovery after this many seconds")
@click.option("--verbose", is_flag=True, help="Show full log statements in the console table")
@click.option("--fail-on-detection", is_flag=True, help="Exit with status 2 when anything is detected")
def main(
    roots: Tuple[str, ...],
    config_dir: Optional[str],
    output: Optional[str],
    report_format: Optional[str],
    workers: Optional[int],
    timeout: Optional[float],
    verbose: bool,
    fail_on_detection: bool,
):
    """Scan Java sources for sensitive data written to log statements."""
    try:
        settings = get_settings()
    except ValidationError as e:
        raise _fail("Configuration error", f"Invalid LOGLEAK_* settings: {e}") from e
    overrides = {}
    if workers is not None:
        overrides["workers"] = workers
    if timeout is not None:
        overrides["scan_timeout"] = timeout
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging("DEBUG" if verbose else settings.log_level)
    # None defers to LOGLEAK_DISABLE_OBSERVABILITY
    scan_logger = ScanLogger(enabled=None if settings.observability_enabled else False)

    config_dir = config_dir or settings.config_dir
    try:
        with TimedOperation(scan_logger, "load_rule_set", source=config_dir or "built-in"):
            rules = load_rule_set(config_dir) if config_dir else RuleSet.default()
    except ConfigurationError as e:
        raise _fail("Configuration error", e.message) from e

    scan_logger.log_configuration_loaded(
        rules.source or "built-in",
        len(rules.keywords),
        len(rules.object_types),
        len(rules.exclusions),
    )

    scan_roots = list(roots) or list(rules.scan_directories) or list(settings.scan_roots)
    if not scan_roots:
        raise _fail(
            "No scan roots",
            "No directories to scan: pass ROOTS, list them in scan-directories.xml "
            "or set LOGLEAK_SCAN_ROOTS",
        )

    try:
        result = run_scan(scan_roots, rules, settings, scan_logger=scan_logger)
    except ScanError as e:
        raise _fail("Scan failed", e.message) from e

    render_console(result, console, verbose=verbose)

    fmt = (report_format or settings.report_format).lower()
    report_path = output or os.path.join(settings.report_dir, default_report_path(fmt))
    try:
        if fmt == "json":
            written = write_json_report(result, report_path)
        else:
            written = write_html_report(result, report_path)
    except ReportError as e:
        raise _fail("Report error", e.message) from e

    console.print(f"[green]Report written to[/green] {escape(str(written))}")

    if fail_on_detection and result.has_detections:
        click.get_current_context().exit(EXIT_DETECTIONS)


if __name__ == "__main__":
    main()
