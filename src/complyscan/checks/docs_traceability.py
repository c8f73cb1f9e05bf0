"""
Traceability checks between SDLC phases.

Design documents should point back at requirements, plans at the design and
the backlog at requirements. Each check skips when the phase it inspects is
absent from the project.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from complyscan.checks.base import BaseCheck
from complyscan.domain.exceptions import ScanIoError
from complyscan.domain.models import CheckResult, Violation

if TYPE_CHECKING:
    from complyscan.engine.context import ScanContext

logger = logging.getLogger(__name__)

DESIGN_DIR = "docs/3-design"
PLANNING_DIR = "docs/2-planning"
BACKLOG = "docs/2-planning/backlog.md"

# Phase directory -> substrings one of its entries must contain
PHASE_ARTIFACTS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("docs/1-requirements", ("requirements", "srs")),
    ("docs/2-planning", ("plan", "implementation")),
    ("docs/3-design", ("architecture.md",)),
)

DESIGN_REQ_RE = re.compile(r"(?i)requirements\.md|FR-\d|STK-\d|SRS|1-requirements")
PLAN_ARCH_RE = re.compile(r"(?i)architecture\.md|3-design|architectural")
BACKLOG_REQ_RE = re.compile(
    r"(?i)requirements\.md|requirements\b|FR-\d|STK-\d|SRS|1-requirements|BL-\d"
)


class PhaseArtifactPresence(BaseCheck):
    """Each phase directory that exists holds its expected artifact."""

    def run(self, context: ScanContext) -> CheckResult:
        present = [(d, p) for d, p in PHASE_ARTIFACTS if context.is_dir(d)]
        if not present:
            return self._skip("No SDLC phase directories exist")

        violations: list[Violation] = []
        for directory, patterns in present:
            names = [entry.name.lower() for entry in (context.root / directory).iterdir()]
            if any(pattern in name for name in names for pattern in patterns):
                continue
            expected = "' or '".join(patterns)
            violations.append(
                self._violation(
                    f"Phase directory '{directory}' exists but is missing expected artifact "
                    f"containing '{expected}'",
                    directory,
                )
            )
        return self._outcome(violations)


class _TracesCheck(BaseCheck):
    """Every qualifying Markdown file in a phase directory matches a reference pattern."""

    directory = ""
    excluded_prefixes: tuple[str, ...] = ()
    pattern = re.compile("")
    noun = "Document"
    target = ""

    def _qualifies(self, path: str) -> bool:
        return (
            path.endswith(".md")
            and path != f"{self.directory}/README.md"
            and not path.startswith(self.excluded_prefixes)
        )

    def run(self, context: ScanContext) -> CheckResult:
        if not context.is_dir(self.directory):
            return self._skip(f"{self.directory}/ does not exist")
        files = [f for f in context.files_under(self.directory) if self._qualifies(f)]
        if not files:
            return self._skip(f"No qualifying .md files in {self.directory}/")

        violations: list[Violation] = []
        for path in files:
            try:
                content = context.read(path)
            except ScanIoError as e:
                logger.warning("Rule %d: skipping unreadable %s: %s", self.id, path, e.message)
                continue
            if not self.pattern.search(content):
                violations.append(
                    self._violation(
                        f"{self.noun} '{path}' does not reference {self.target}", path
                    )
                )
        return self._outcome(violations)


class DesignTracesRequirements(_TracesCheck):
    directory = DESIGN_DIR
    excluded_prefixes = (f"{DESIGN_DIR}/adr/", f"{DESIGN_DIR}/compliance/")
    pattern = DESIGN_REQ_RE
    noun = "Design document"
    target = (
        "requirements (expected pattern: requirements.md, FR-N, STK-N, SRS, or 1-requirements)"
    )


class PlanTracesDesign(_TracesCheck):
    directory = PLANNING_DIR
    pattern = PLAN_ARCH_RE
    noun = "Planning document"
    target = "architecture (expected pattern: architecture.md, 3-design, or architectural)"


class BacklogTracesRequirements(BaseCheck):
    """The backlog references the requirements it implements."""

    def run(self, context: ScanContext) -> CheckResult:
        if not context.is_file(BACKLOG):
            return self._skip(f"{BACKLOG} does not exist")
        try:
            content = context.read(BACKLOG)
        except ScanIoError as e:
            return self._skip(f"Cannot read backlog.md: {e.message}")
        if BACKLOG_REQ_RE.search(content):
            return self._outcome([])
        return self._outcome(
            [
                self._violation(
                    "Backlog does not reference requirements "
                    "(expected: requirements.md, FR-N, STK-N, SRS, 1-requirements, or BL-N)",
                    BACKLOG,
                )
            ]
        )
