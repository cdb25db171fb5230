"""
Report Emitter

Prints a run report to stdout: severity summary, per-bug details and a
pretty-printed JSON block for an orchestrating script to scrape.
"""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from .models import RunReport

logger = logging.getLogger(__name__)

JSON_MARKER = "📄 JSON REPORT FOR ORCHESTRATOR:"

SEVERITY_ROWS = [
    ('🔴', 'Critical', 'critical'),
    ('🟠', 'High', 'high'),
    ('🟡', 'Medium', 'medium'),
    ('🟢', 'Low', 'low'),
]


class ReportEmitter:
    """Renders RunReports for humans and scripts."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def emit(self, report: RunReport, title: str = "AUDIT COMPLETE", include_json: bool = True) -> None:
        self.emit_summary(report, title)
        self.emit_details(report)
        if include_json:
            self.emit_json(report)

    def emit_summary(self, report: RunReport, title: str = "AUDIT COMPLETE") -> None:
        self.console.out(f"\n🎯 {title}", highlight=False)
        table = Table(show_header=True)
        table.add_column("Severity")
        table.add_column("Count", justify="right")
        for icon, label, attr in SEVERITY_ROWS:
            table.add_row(f"{icon} {label}", str(getattr(report, attr)))
        table.add_row("📊 Total", str(report.total_bugs))
        self.console.print(table)

    def emit_details(self, report: RunReport) -> None:
        if not report.bugs:
            self.console.out("\n🎉 NO BUGS FOUND!", highlight=False)
            return

        self.console.out("\n🐛 DETAILED BUG REPORT:", highlight=False)
        for index, bug in enumerate(report.bugs, start=1):
            tag = f" [{bug.tag}]" if bug.tag else ""
            lines = [
                f"\n{index}. [{bug.severity.value.upper()}]{tag} {bug.page}",
                f"   Element: {bug.element}",
                f"   Issue: {bug.issue}",
            ]
            if bug.screenshot:
                lines.append(f"   Screenshot: {bug.screenshot}")
            if bug.console_errors:
                lines.append(f"   Console Errors: {', '.join(bug.console_errors)}")
            if bug.network_errors:
                lines.append(f"   Network Issues: {', '.join(bug.network_errors)}")
            self.console.out("\n".join(lines), highlight=False)

    def emit_json(self, report: RunReport) -> None:
        self.console.out(f"\n{JSON_MARKER}", highlight=False)
        self.console.out(self.to_json(report), highlight=False)

    @staticmethod
    def to_json(report: RunReport) -> str:
        return report.to_json(indent=2, ensure_ascii=False)

    def write_json(self, report: RunReport, path: str) -> str:
        """Persist the JSON report and return its path."""
        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, 'w', encoding='utf-8') as f:
            f.write(self.to_json(report))
        logger.info(f"📁 JSON report saved: {output}")
        return str(output)
