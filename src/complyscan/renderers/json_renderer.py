"""
JSON renderer for complyscan.

Outputs machine-readable JSON scan reports and parses them back.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from complyscan.domain.exceptions import ScanConfigError
from complyscan.domain.report import ScanReport


class JsonRenderer:
    """
    Renders scan reports as JSON.

    Fields that are None are omitted, so a docs report carries
    ``project_type``/``project_scope`` and a structure report carries
    ``project_kind``. Audit fields appear only on audit reports.
    """

    def __init__(self, indent: int = 2) -> None:
        """
        Initialize the JSON renderer.

        Args:
            indent: JSON indentation level.
        """
        self.indent = indent

    def render(self, report: ScanReport) -> str:
        """
        Render a scan report as JSON string.

        Args:
            report: The scan report to render.

        Returns:
            JSON string.
        """
        return json.dumps(self.to_dict(report), indent=self.indent)

    def to_dict(self, report: ScanReport) -> dict[str, Any]:
        """Convert a scan report to a JSON-compatible dictionary."""
        return report.model_dump(mode="json", exclude_none=True)

    @staticmethod
    def parse(text: str) -> ScanReport:
        """
        Parse a JSON report produced by `render()`.

        Raises:
            ScanConfigError: If the text is not a valid report.
        """
        try:
            return ScanReport.model_validate(json.loads(text))
        except (json.JSONDecodeError, ValidationError) as e:
            raise ScanConfigError(f"Invalid JSON report: {e}")


def format_report_json(report: ScanReport, **kwargs) -> str:
    """
    Convenience function to render a report as JSON.

    Args:
        report: The scan report to render.
        **kwargs: Options passed to JsonRenderer.

    Returns:
        JSON string.
    """
    return JsonRenderer(**kwargs).render(report)
