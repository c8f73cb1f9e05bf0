"""
Plain-text renderer.

Produces the stable, uncoloured report format used for piping and for
the stdout sink.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from complyscan.domain.models import FailResult, SkipResult

if TYPE_CHECKING:
    from complyscan.domain.report import ScanReport

RULE_WIDTH = 60
STATUS_LABELS = {"pass": "PASS", "fail": "FAIL", "skip": "SKIP"}


def classification_label(report: ScanReport) -> str:
    """Human-readable classification, e.g. 'project type: open_source, scope: large'."""
    parts = []
    if report.project_type is not None:
        parts.append(f"project type: {report.project_type.value}")
    if report.project_scope is not None:
        parts.append(f"scope: {report.project_scope.value}")
    if report.project_kind is not None:
        parts.append(f"project kind: {report.project_kind.value}")
    return ", ".join(parts)


class TextRenderer:
    """Renders scan reports as grouped plain text."""

    def render(self, report: ScanReport) -> str:
        lines = [f"complyscan {report.scanner.value} scan results ({classification_label(report)})"]
        lines.append("=" * RULE_WIDTH)

        for category, entries in report.entries_by_category().items():
            lines.append("")
            lines.append(f"## {category}")
            for entry in entries:
                lines.append(f"  [{STATUS_LABELS[entry.status]}] {entry.id}: {entry.description}")
                result = entry.result
                if isinstance(result, FailResult):
                    for v in result.violations:
                        if v.path:
                            lines.append(f"    -> {v.path}: {v.message}")
                        else:
                            lines.append(f"    -> {v.message}")
                elif isinstance(result, SkipResult):
                    lines.append(f"    -> {result.reason}")

        s = report.summary
        lines.append("")
        lines.append(
            f"{s.passed}/{s.total} passed, {s.failed} failed, {s.skipped} skipped"
        )
        return "\n".join(lines) + "\n"


def format_report_text(report: ScanReport) -> str:
    """Convenience function to render a report as plain text."""
    return TextRenderer().render(report)
