"""
Standards section checks.

Each check looks for the sections an ISO/IEC/IEEE document standard expects
in one artifact:

    srs_29148_attributes   29148:2018 attributes on every FR/NFR block
    arch_42010_sections    42010:2022 stakeholders, concerns and views
    test_29119_sections    29119-3:2021 strategy, cases and coverage
    prod_readiness_exists  the production readiness review is present

Section detection is keyword based: a section counts as present when its
pattern matches anywhere in the document.
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

SRS = "docs/1-requirements/srs.md"
ARCHITECTURE = "docs/3-design/architecture.md"
TESTING_STRATEGY = "docs/5-testing/testing_strategy.md"
PRODUCTION_READINESS = "docs/6-deployment/production_readiness.md"

SRS_HEADING_RE = re.compile(r"^####\s+((?:FR|NFR)-\d+):\s+.+$")
SRS_NEXT_HEADING_RE = re.compile(r"^#{1,4}\s+")

SRS_ATTRIBUTES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Priority", re.compile(r"\*\*Priority\*\*")),
    ("State", re.compile(r"\*\*State\*\*")),
    ("Verification", re.compile(r"\*\*Verification\*\*")),
    ("Traces to", re.compile(r"\*\*Traces\s+to\*\*|\*\*Traceability\*\*")),
    ("Acceptance", re.compile(r"\*\*Acceptance\*\*")),
)

ARCH_SECTIONS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Stakeholders", re.compile(r"(?i)(stakeholder|## who\b)")),
    ("Concerns/rationale", re.compile(r"(?i)(concern|rationale|## why\b|design.decision)")),
    (
        "Viewpoints/views",
        re.compile(r"(?i)(viewpoint|## what\b|## how\b|layer.model|layer.architect|system.diagram)"),
    ),
)

TEST_SECTIONS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Strategy/scope", re.compile(r"(?i)(test.strateg|test.scope|test.design|test.approach)")),
    ("Test cases/categories", re.compile(r"(?i)(test.categor|test.case|test.plan|test.pyramid)")),
    (
        "Coverage/criteria",
        re.compile(r"(?i)(coverage.target|exit.criteria|entry.criteria|test.procedure)"),
    ),
)


def _plural(items: list[str]) -> str:
    return "s" if len(items) > 1 else ""


def requirement_blocks(content: str) -> list[tuple[str, str]]:
    """
    Split an SRS into (requirement id, body) pairs.

    A block starts at a ``#### FR-N: title`` heading and runs until the next
    heading of level 1 to 4.
    """
    blocks: list[tuple[str, str]] = []
    current: str | None = None
    body: list[str] = []
    for line in content.splitlines():
        if current is not None and SRS_NEXT_HEADING_RE.match(line):
            blocks.append((current, "\n".join(body)))
            current = None
        match = SRS_HEADING_RE.match(line)
        if match:
            current, body = match.group(1), []
        elif current is not None:
            body.append(line)
    if current is not None:
        blocks.append((current, "\n".join(body)))
    return blocks


class Srs29148Attributes(BaseCheck):
    """Every SRS requirement block carries the five mandatory attributes."""

    def run(self, context: ScanContext) -> CheckResult:
        if not context.exists(SRS):
            return self._outcome([self._violation(f"File '{SRS}' does not exist", SRS)])
        try:
            content = context.read(SRS)
        except ScanIoError as e:
            return self._skip(f"Cannot read srs.md: {e.message}")

        blocks = requirement_blocks(content)
        if not blocks:
            return self._skip("No FR/NFR requirement blocks found in SRS")

        violations: list[Violation] = []
        for requirement, body in blocks:
            missing = [name for name, pattern in SRS_ATTRIBUTES if not pattern.search(body)]
            if missing:
                violations.append(
                    self._violation(
                        f"{requirement} missing {', '.join(missing)} attribute{_plural(missing)}",
                        SRS,
                    )
                )
        return self._outcome(violations)


class _SectionsCheck(BaseCheck):
    """
    Checks one document, at project level and in every module, for sections.

    Absent, empty and unreadable documents are ignored; the check skips when
    no document was inspected at all.
    """

    document = ""
    sections: tuple[tuple[str, re.Pattern[str]], ...] = ()
    standard = ""
    title = ""
    project_label = ""

    def _missing(self, context: ScanContext, path: str) -> list[str] | None:
        if not context.is_file(path):
            return None
        try:
            content = context.read(path)
        except ScanIoError as e:
            logger.warning("Rule %d: skipping unreadable %s: %s", self.id, path, e.message)
            return None
        if not content.strip():
            return None
        return [name for name, pattern in self.sections if not pattern.search(content)]

    def run(self, context: ScanContext) -> CheckResult:
        targets = [(self.project_label, self.document)]
        targets.extend(
            (f"Module '{module.rsplit('/', 1)[-1]}' {self.title}", f"{module}/{self.document}")
            for module in context.discover_modules()
        )

        inspected = False
        violations: list[Violation] = []
        for label, path in targets:
            missing = self._missing(context, path)
            if missing is None:
                continue
            inspected = True
            if missing:
                violations.append(
                    self._violation(
                        f"{label} missing {self.standard} section{_plural(missing)}: "
                        f"{', '.join(missing)}",
                        path,
                    )
                )

        if not inspected:
            name = self.document.rsplit("/", 1)[-1]
            return self._skip(f"No {name} files found (project or module level)")
        return self._outcome(violations)


class Arch42010Sections(_SectionsCheck):
    document = ARCHITECTURE
    sections = ARCH_SECTIONS
    standard = "42010"
    title = "architecture"
    project_label = "Architecture document"


class Test29119Sections(_SectionsCheck):
    __test__ = False

    document = TESTING_STRATEGY
    sections = TEST_SECTIONS
    standard = "29119-3"
    title = "testing strategy"
    project_label = "Testing strategy"


class ProdReadinessExists(BaseCheck):
    def run(self, context: ScanContext) -> CheckResult:
        if context.exists(PRODUCTION_READINESS):
            return self._outcome([])
        return self._outcome(
            [
                self._violation(
                    "Production readiness document does not exist", PRODUCTION_READINESS
                )
            ]
        )
