"""
Scan report models.

A report is the ordered list of check entries produced by one scan, its
summary counts, the classification the scan ran under and, for audit
scans, provenance metadata.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from complyscan.domain.config import ScannerKind
from complyscan.domain.models import (
    CheckEntry,
    FailResult,
    ProjectKind,
    ProjectScope,
    ProjectType,
    Severity,
    Violation,
)


class ScanSummary(BaseModel):
    """Outcome counts for a scan."""

    model_config = ConfigDict(frozen=True)

    total: int = Field(default=0, ge=0, description="Number of checks reported")
    passed: int = Field(default=0, ge=0, description="Checks that passed")
    failed: int = Field(default=0, ge=0, description="Checks that failed")
    skipped: int = Field(default=0, ge=0, description="Checks that were skipped")

    @model_validator(mode="after")
    def check_total(self) -> ScanSummary:
        if self.total != self.passed + self.failed + self.skipped:
            raise ValueError(
                f"total ({self.total}) must equal passed + failed + skipped "
                f"({self.passed} + {self.failed} + {self.skipped})"
            )
        return self

    @classmethod
    def from_entries(cls, entries: list[CheckEntry]) -> ScanSummary:
        """Create a summary from a list of check entries."""
        counts = {"pass": 0, "fail": 0, "skip": 0}
        for entry in entries:
            counts[entry.status] += 1

        return cls(
            total=len(entries),
            passed=counts["pass"],
            failed=counts["fail"],
            skipped=counts["skip"],
        )


class ScanReport(BaseModel):
    """
    Complete scan report.

    This is the primary output of a scan. ``results`` keep catalogue order
    after filtering. The docs scanner fills ``project_type`` and
    ``project_scope``; the structure scanner fills ``project_kind``.
    """

    model_config = ConfigDict(frozen=True)

    scanner: ScannerKind = Field(default=ScannerKind.DOCS, description="Scanner that ran")
    results: list[CheckEntry] = Field(default_factory=list, description="One entry per rule")
    summary: ScanSummary = Field(default_factory=ScanSummary, description="Outcome counts")
    project_type: ProjectType | None = Field(default=None)
    project_scope: ProjectScope | None = Field(default=None)
    project_kind: ProjectKind | None = Field(default=None)

    # Audit metadata, only set by audit scans
    standard: str | None = Field(default=None, description="Standard the audit refers to")
    clause: str | None = Field(default=None, description="Clause of the standard")
    tool: str | None = Field(default=None)
    tool_version: str | None = Field(default=None)
    timestamp: str | None = Field(default=None, description="UTC time, YYYY-MM-DDTHH:MM:SSZ")
    project_root: str | None = Field(default=None, description="Absolute scanned root")

    @model_validator(mode="after")
    def check_summary(self) -> ScanReport:
        if self.summary.total != len(self.results):
            raise ValueError(
                f"summary total ({self.summary.total}) does not match "
                f"result count ({len(self.results)})"
            )
        return self

    @classmethod
    def build(cls, results: list[CheckEntry], **fields) -> ScanReport:
        """Create a report whose summary is computed from ``results``."""
        return cls(results=results, summary=ScanSummary.from_entries(results), **fields)

    @property
    def passed(self) -> bool:
        """Whether no check failed."""
        return self.summary.failed == 0

    @property
    def exit_code(self) -> int:
        """Exit code for CLI (0 = clean, 1 = failing checks)."""
        return 0 if self.passed else 1

    @property
    def violations(self) -> list[Violation]:
        """Every violation across all failed checks, in report order."""
        found: list[Violation] = []
        for entry in self.results:
            if isinstance(entry.result, FailResult):
                found.extend(entry.result.violations)
        return found

    def violations_by_severity(self, severity: Severity) -> list[Violation]:
        return [v for v in self.violations if v.severity == severity]

    def entries_by_category(self) -> dict[str, list[CheckEntry]]:
        """Entries grouped by category, categories sorted by label."""
        grouped: dict[str, list[CheckEntry]] = {}
        for entry in self.results:
            grouped.setdefault(entry.category, []).append(entry)
        return dict(sorted(grouped.items()))
