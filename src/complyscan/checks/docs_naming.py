"""
File naming conventions for the documentation tree.
"""

from __future__ import annotations

import re
from abc import abstractmethod
from typing import TYPE_CHECKING

from complyscan.checks.base import BaseCheck
from complyscan.domain.models import CheckResult, Violation

if TYPE_CHECKING:
    from complyscan.engine.context import ScanContext

ADR_PREFIX = "docs/3-design/adr/"

# Upper-case by convention
CONVENTION_FILES = frozenset({"README.md", "CHANGELOG.md", "CONTRIBUTING.md", "SECURITY.md"})

PHASE_PREFIX_RE = re.compile(r"^\d+-")
GUIDE_RE = re.compile(r"^[a-z_]+_[a-z]+_guide\.md$")


def _filename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


class _DocsFilenameCheck(BaseCheck):
    """Applies a per-filename test to every markdown file under docs/."""

    def run(self, context: ScanContext) -> CheckResult:
        docs_files = [f for f in context.files_under("docs") if f.endswith(".md")]
        if not docs_files:
            return self._skip("No .md files in docs/")

        violations: list[Violation] = []
        for path in docs_files:
            if path.startswith(ADR_PREFIX):
                continue
            filename = _filename(path)
            if filename in CONVENTION_FILES:
                continue
            message = self._problem(filename)
            if message:
                violations.append(self._violation(message, path))
        return self._outcome(violations)

    @abstractmethod
    def _problem(self, filename: str) -> str | None:
        raise NotImplementedError


class DocsFilenamesLowercase(_DocsFilenameCheck):
    def _problem(self, filename: str) -> str | None:
        stem = filename.removesuffix(".md")
        if stem != stem.lower():
            return f"Filename '{filename}' contains uppercase characters"
        return None


class DocsFilenamesNoHyphens(_DocsFilenameCheck):
    def _problem(self, filename: str) -> str | None:
        stem = filename.removesuffix(".md")
        if "-" in stem and not PHASE_PREFIX_RE.match(stem):
            return f"Filename '{filename}' contains hyphens; use underscores"
        return None


class DocsFilenamesNoSpaces(_DocsFilenameCheck):
    def _problem(self, filename: str) -> str | None:
        if " " in filename:
            return f"Filename '{filename}' contains spaces"
        return None


class GuideNaming(BaseCheck):
    """Guide files follow the name_{phase}_guide.md convention."""

    def run(self, context: ScanContext) -> CheckResult:
        guides = [f for f in context.files if "guide/" in f and f.endswith(".md")]
        if not guides:
            return self._skip("No guide files found")

        violations = [
            self._violation(
                f"Guide file '{_filename(path)}' doesn't follow name_{{phase}}_guide.md convention",
                path,
            )
            for path in guides
            if _filename(path) != "README.md" and not GUIDE_RE.match(_filename(path))
        ]
        return self._outcome(violations)


class TestingFilePlacement(BaseCheck):
    """No *_testing_* documents outside the 5-testing phase."""

    __test__ = False

    def run(self, context: ScanContext) -> CheckResult:
        violations = [
            self._violation(f"Testing file '{_filename(path)}' found outside 5-testing/", path)
            for path in context.files_under("docs")
            if "_testing_" in _filename(path) and "5-testing" not in path
        ]
        return self._outcome(violations)
