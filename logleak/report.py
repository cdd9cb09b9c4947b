"""Report rendering: HTML file, JSON file and rich console summary."""

from __future__ import annotations

import html
import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .error import ReportError
from .scanner.models import ScanResult

_CSS = """\
body { font-family: Arial, sans-serif; margin: 20px; background-color: #f5f5f5; }
h1 { color: #333; border-bottom: 2px solid #4CAF50; padding-bottom: 10px; }
.summary { background-color: #fff; padding: 15px; margin: 20px 0; border-radius: 5px;
           box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
.summary p { margin: 8px 0; font-size: 14px; }
.summary strong { color: #555; }
table { width: 100%; border-collapse: collapse; background-color: #fff;
        box-shadow: 0 2px 4px rgba(0,0,0,0.1); margin-top: 20px; }
th { background-color: #4CAF50; color: white; padding: 12px; text-align: left; }
td { padding: 10px 12px; border-bottom: 1px solid #ddd; }
tr:hover { background-color: #f5f5f5; }
.line-number { text-align: center; font-weight: bold; color: #666; }
.keyword { color: #d32f2f; font-weight: bold; }
.log-statement { font-family: 'Courier New', monospace; font-size: 13px;
                 background-color: #f9f9f9; padding: 5px; border-radius: 3px; }
.no-detections { background-color: #e8f5e9; color: #2e7d32; padding: 20px; margin: 20px 0;
                 border-radius: 5px; text-align: center; font-size: 16px; font-weight: bold; }
.warnings { color: #8a6d3b; }
"""


def format_duration(duration_ms: int) -> str:
    """``850 ms``, ``1.50 seconds`` or ``2 min 5 sec``."""
    if duration_ms < 1000:
        return f"{duration_ms} ms"
    if duration_ms < 60000:
        return f"{duration_ms / 1000.0:.2f} seconds"
    minutes, remainder = divmod(duration_ms, 60000)
    return f"{minutes} min {remainder // 1000} sec"


def default_report_path(suffix: str = "html", now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"scan-report-{now.strftime('%Y-%m-%d-%H%M%S')}.{suffix}"


def render_html(result: ScanResult, generated_at: Optional[datetime] = None) -> str:
    """Render a self-contained HTML page; every value is escaped."""
    generated_at = generated_at or datetime.now()
    stats = result.statistics
    parts = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        '    <meta charset="UTF-8">',
        "    <title>Sensitive Data Scan Report</title>",
        f"    <style>\n{_CSS}    </style>",
        "</head>",
        "<body>",
        "    <h1>Sensitive Data Scan Report</h1>",
        '    <div class="summary">',
        f"        <p><strong>Scan Date:</strong> {generated_at.strftime('%Y-%m-%d %H:%M:%S')}</p>",
        f"        <p><strong>Total Files Scanned:</strong> {stats.files_scanned}</p>",
        f"        <p><strong>Total Detections:</strong> {stats.total_detections}</p>",
        f"        <p><strong>Scan Duration:</strong> {format_duration(stats.duration_ms)}</p>",
        "    </div>",
    ]

    if not result.detections:
        parts += [
            '    <div class="no-detections">',
            "        <p>No sensitive data detected</p>",
            "    </div>",
        ]
    else:
        parts += [
            "    <table>",
            "        <thead>",
            "            <tr><th>File Name</th><th>Line Number</th>"
            "<th>Matched Keyword</th><th>Log Statement</th></tr>",
            "        </thead>",
            "        <tbody>",
        ]
        for d in result.detections:
            parts.append(
                "            <tr>"
                f"<td>{html.escape(d.file)}</td>"
                f'<td class="line-number">{d.line}</td>'
                f'<td class="keyword">{html.escape(d.label)}</td>'
                f'<td class="log-statement">{html.escape(d.statement)}</td>'
                "</tr>"
            )
        parts += ["        </tbody>", "    </table>"]

    if result.warnings:
        parts.append('    <div class="warnings"><h2>Skipped Files</h2><ul>')
        for w in result.warnings:
            parts.append(f"        <li>{html.escape(w.path)}: {html.escape(w.reason)}</li>")
        parts.append("    </ul></div>")

    parts += ["</body>", "</html>", ""]
    return "\n".join(parts)


def _write(content: str, output_path: str) -> Path:
    path = Path(output_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ReportError(
            f"Failed to write report: {e}", output_path=str(output_path)
        ) from e
    return path


def write_html_report(result: ScanResult, output_path: Optional[str] = None) -> Path:
    """Write the HTML report, creating parent directories as needed."""
    return _write(render_html(result), output_path or default_report_path("html"))


def write_json_report(result: ScanResult, output_path: Optional[str] = None) -> Path:
    content = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    return _write(content + "\n", output_path or default_report_path("json"))


def render_console(result: ScanResult, console: Console, verbose: bool = False) -> None:
    """Print a summary panel and, when there are any, a detection table."""
    stats = result.statistics
    console.print(
        Panel.fit(
            f"Files scanned: {stats.files_scanned}\n"
            f"Detections: {stats.total_detections}\n"
            f"Duration: {format_duration(stats.duration_ms)}",
            title="Scan Summary",
        )
    )

    if result.detections:
        table = Table(title="Sensitive data in log statements")
        table.add_column("File", style="cyan")
        table.add_column("Line", justify="right")
        table.add_column("Keyword", style="bold red")
        if verbose:
            table.add_column("Statement", overflow="fold")
        for d in result.detections:
            row = [escape(d.file), str(d.line), escape(d.label)]
            if verbose:
                row.append(escape(d.statement))
            table.add_row(*row)
        console.print(table)
    else:
        console.print("[green]No sensitive data detected[/green]")

    for w in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] skipped {escape(w.path)}: {escape(w.reason)}")
