"""
Report sinks: where a finished report is sent.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, TextIO

from complyscan.domain.exceptions import ScanIoError
from complyscan.domain.report import ScanReport
from complyscan.renderers.json_renderer import JsonRenderer
from complyscan.renderers.text import TextRenderer


class ReportSink(Protocol):
    """Anything that can consume a finished report."""

    def emit(self, report: ScanReport) -> None: ...


class StdoutSink:
    """Writes the report to a stream as text or JSON."""

    def __init__(self, format: str = "text", stream: TextIO | None = None) -> None:
        if format not in ("text", "json"):
            raise ValueError(f"unknown report format: {format}")
        self.format = format
        self.stream = stream

    def emit(self, report: ScanReport) -> None:
        import sys

        stream = self.stream or sys.stdout
        if self.format == "json":
            stream.write(JsonRenderer().render(report) + "\n")
        else:
            stream.write(TextRenderer().render(report))


class FileSink:
    """Writes the report as pretty JSON, creating parent directories."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def emit(self, report: ScanReport) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(JsonRenderer().render(report) + "\n", encoding="utf-8")
        except OSError as e:
            raise ScanIoError(
                f"Cannot write report to {self.path}: {e}", path=str(self.path), cause=e
            ) from e
