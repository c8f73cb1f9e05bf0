"""
Terminal renderer using Rich.

Outputs colour-coded scan reports for interactive use.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from complyscan.domain.models import CheckEntry, FailResult, Severity, SkipResult
from complyscan.renderers.text import classification_label

if TYPE_CHECKING:
    from complyscan.domain.report import ScanReport


class TerminalRenderer:
    """
    Renders scan reports to the terminal using Rich.

    Shows one table row per check grouped by category, with violations,
    skip reasons and optionally fix hints beneath the failing rows.
    """

    STATUS_STYLES = {
        "pass": ("PASS", "green"),
        "fail": ("FAIL", "red bold"),
        "skip": ("SKIP", "dim"),
    }

    SEVERITY_COLORS = {
        Severity.ERROR: "red",
        Severity.WARNING: "yellow",
        Severity.INFO: "blue",
    }

    def __init__(
        self,
        console: Console | None = None,
        show_hints: bool = True,
        show_skipped: bool = True,
    ) -> None:
        """
        Initialize the terminal renderer.

        Args:
            console: Rich console to use (creates new one if None).
            show_hints: Whether to show fix hints under violations.
            show_skipped: Whether to list skipped checks.
        """
        self.console = console or Console()
        self.show_hints = show_hints
        self.show_skipped = show_skipped

    def render(self, report: ScanReport) -> None:
        """
        Render a scan report to the terminal.

        Args:
            report: The scan report to render.
        """
        self._render_header(report)
        for category, entries in report.entries_by_category().items():
            self._render_category(category, entries)
        self._render_footer(report)

    def _render_header(self, report: ScanReport) -> None:
        lines = [
            f"[bold]complyscan {report.scanner.value} scan[/bold]",
            f"[cyan]{classification_label(report)}[/cyan]",
        ]
        if report.project_root:
            lines.append(f"Root: [dim]{report.project_root}[/dim]")
        if report.standard:
            lines.append(f"Standard: [dim]{report.standard} clause {report.clause}[/dim]")
        self.console.print()
        self.console.print(Panel("\n".join(lines), border_style="blue"))

    def _render_category(self, category: str, entries: list[CheckEntry]) -> None:
        visible = [e for e in entries if self.show_skipped or e.status != "skip"]
        if not visible:
            return

        table = Table(title=category, title_justify="left", show_header=False, box=None, padding=(0, 1))
        table.add_column("Status", width=6)
        table.add_column("ID", justify="right", style="cyan")
        table.add_column("Description")

        for entry in visible:
            label, style = self.STATUS_STYLES[entry.status]
            table.add_row(Text(label, style=style), str(entry.id), entry.description)
            for detail in self._details(entry):
                table.add_row("", "", detail)

        self.console.print()
        self.console.print(table)

    def _details(self, entry: CheckEntry) -> list[Text]:
        result = entry.result
        if isinstance(result, SkipResult):
            return [Text(f"-> {result.reason}", style="dim")]
        if not isinstance(result, FailResult):
            return []

        details: list[Text] = []
        for v in result.violations:
            line = Text("-> ")
            if v.path:
                line.append(f"{v.path}: ", style="bold")
            line.append(v.message, style=self.SEVERITY_COLORS[v.severity])
            details.append(line)
        hint = result.violations[0].fix_hint
        if self.show_hints and hint:
            details.append(Text(f"   fix: {hint}", style="green"))
        return details

    def _render_footer(self, report: ScanReport) -> None:
        s = report.summary
        if report.passed:
            status = "[green]PASSED[/green]"
        else:
            status = "[red]FAILED[/red]"

        self.console.print()
        self.console.print(
            f"Status: {status} | "
            f"[green]{s.passed}[/green]/{s.total} passed, "
            f"[red]{s.failed}[/red] failed, "
            f"[dim]{s.skipped}[/dim] skipped"
        )
        self.console.print()


def render_report(report: ScanReport, **kwargs) -> None:
    """
    Convenience function to render a report to terminal.

    Args:
        report: The scan report to render.
        **kwargs: Options passed to TerminalRenderer.
    """
    TerminalRenderer(**kwargs).render(report)
