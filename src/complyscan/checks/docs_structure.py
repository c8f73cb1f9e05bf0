"""
Documentation tree structure checks.

Covers the numbered SDLC phase directories, per-module doc folders and the
community files expected of open source projects.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from complyscan.checks.base import BaseCheck
from complyscan.domain.exceptions import ScanIoError
from complyscan.domain.models import CheckResult, Violation

if TYPE_CHECKING:
    from complyscan.engine.context import ScanContext

MAX_PHASE = 7
PHASE_NUMBER_RE = re.compile(r"^(\d+)-")
CHECKBOX_RE = re.compile(r"- \[([ xX])\]")
CHECKLIST = "docs/3-design/compliance/compliance_checklist.md"
MIN_CHECKBOXES = 10
COMMUNITY_FILES = ("CODE_OF_CONDUCT.md", "SUPPORT.md")


def _doc_parents(files: tuple[str, ...], folder: str) -> set[str]:
    """Parents (below the root) of every ``folder`` directory seen in the file list."""
    parents: set[str] = set()
    for path in files:
        parts = path.split("/")
        for i, part in enumerate(parts[:-1]):
            if part == folder and i > 0:
                parents.add("/".join(parts[:i]))
    return parents


def _numbered_phases(context: ScanContext) -> list[tuple[int, str]] | None:
    docs = context.root / "docs"
    if not docs.is_dir():
        return None
    phases = []
    for entry in docs.iterdir():
        match = PHASE_NUMBER_RE.match(entry.name)
        if entry.is_dir() and match:
            phases.append((int(match.group(1)), entry.name))
    return sorted(phases)


class ModuleDocsPlural(BaseCheck):
    """Module doc folders are named docs/, never doc/."""

    def run(self, context: ScanContext) -> CheckResult:
        return self._outcome(
            [
                self._violation(
                    f"Module '{parent}' uses doc/ (singular); should use docs/", f"{parent}/doc"
                )
                for parent in sorted(_doc_parents(context.files, "doc"))
            ]
        )


class ModuleDocsNotBoth(BaseCheck):
    """No module has both doc/ and docs/."""

    def run(self, context: ScanContext) -> CheckResult:
        both = _doc_parents(context.files, "doc") & _doc_parents(context.files, "docs")
        return self._outcome(
            [
                self._violation(f"Module '{parent}' has both doc/ and docs/", parent)
                for parent in sorted(both)
            ]
        )


class SdlcPhaseNumbering(BaseCheck):
    """Phase directories are numbered 0 to 7."""

    def run(self, context: ScanContext) -> CheckResult:
        phases = _numbered_phases(context)
        if phases is None:
            return self._skip("docs/ directory does not exist")
        return self._outcome(
            [
                self._violation(f"Phase directory '{name}' has number > {MAX_PHASE}", f"docs/{name}")
                for number, name in phases
                if number > MAX_PHASE
            ]
        )


class SdlcPhaseOrder(BaseCheck):
    """Phase numbers are strictly increasing, so no two phases share a number."""

    def run(self, context: ScanContext) -> CheckResult:
        phases = _numbered_phases(context)
        if phases is None:
            return self._skip("docs/ directory does not exist")
        return self._outcome(
            [
                self._violation(
                    f"Phase '{current[1]}' is out of order (follows '{previous[1]}')",
                    f"docs/{current[1]}",
                )
                for previous, current in zip(phases, phases[1:])
                if current[0] <= previous[0]
            ]
        )


class ChecklistCompleteness(BaseCheck):
    """The compliance checklist has a checkbox per enforceable rule."""

    def run(self, context: ScanContext) -> CheckResult:
        if not context.is_file(CHECKLIST):
            return self._skip("Compliance checklist not found")
        try:
            content = context.read(CHECKLIST)
        except ScanIoError as e:
            return self._skip(f"Cannot read checklist: {e.message}")

        count = len(CHECKBOX_RE.findall(content))
        if count >= MIN_CHECKBOXES:
            return self._outcome([])
        return self._outcome(
            [
                self._violation(
                    f"Checklist has only {count} checkboxes; expected comprehensive coverage",
                    CHECKLIST,
                )
            ]
        )


class OpenSourceCommunityFiles(BaseCheck):
    def run(self, context: ScanContext) -> CheckResult:
        return self._outcome(
            [
                self._violation(f"{name} does not exist", name)
                for name in COMMUNITY_FILES
                if not context.exists(name)
            ]
        )


class OpenSourceGithubTemplates(BaseCheck):
    def run(self, context: ScanContext) -> CheckResult:
        violations: list[Violation] = []
        if not context.is_dir(".github/ISSUE_TEMPLATE"):
            violations.append(
                self._violation(
                    ".github/ISSUE_TEMPLATE/ directory does not exist", ".github/ISSUE_TEMPLATE"
                )
            )
        if not context.exists(".github/PULL_REQUEST_TEMPLATE.md"):
            violations.append(
                self._violation(
                    ".github/PULL_REQUEST_TEMPLATE.md does not exist",
                    ".github/PULL_REQUEST_TEMPLATE.md",
                )
            )
        return self._outcome(violations)


class TemplatesPopulated(BaseCheck):
    """If docs/templates/ exists it holds at least one template."""

    def run(self, context: ScanContext) -> CheckResult:
        if not context.is_dir("docs/templates"):
            return self._skip("docs/templates/ does not exist")
        if any(f.endswith(".md") for f in context.files_under("docs/templates")):
            return self._outcome([])
        return self._outcome(
            [
                self._violation(
                    "docs/templates/ exists but contains no template files", "docs/templates"
                )
            ]
        )
