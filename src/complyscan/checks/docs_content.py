"""
Document content checks: TLDR sections and the glossary.
"""

from __future__ import annotations

import logging
import re
from abc import abstractmethod
from typing import TYPE_CHECKING

from complyscan.checks.base import BaseCheck
from complyscan.domain.exceptions import ScanIoError
from complyscan.domain.models import CheckResult, Violation

if TYPE_CHECKING:
    from complyscan.engine.context import ScanContext

logger = logging.getLogger(__name__)

GLOSSARY = "docs/glossary.md"
TLDR_THRESHOLD = 200

TLDR_RE = re.compile(r"(?i)\*\*TLDR\*\*|## TLDR|## TL;DR")
TERM_RE = re.compile(r"^\*\*([^*]+)\*\*")
VALID_TERM_RE = re.compile(r"^\*\*[^*]+\*\*\s*[-—–:]\s+\S")
DEFINITION_RE = re.compile(r"^\*\*([^*]+)\*\*\s*[-—–:]\s*(.*)")
ACRONYM_RE = re.compile(r"^[A-Z]{2,}$")


class _TldrCheck(BaseCheck):
    def run(self, context: ScanContext) -> CheckResult:
        docs_files = [f for f in context.files_under("docs") if f.endswith(".md")]
        if not docs_files:
            return self._skip("No .md files in docs/")

        violations: list[Violation] = []
        for path in docs_files:
            try:
                content = context.read(path)
            except ScanIoError as e:
                logger.warning("Rule %d: skipping unreadable %s: %s", self.id, path, e.message)
                continue
            message = self._problem(len(content.splitlines()), bool(TLDR_RE.search(content)))
            if message:
                violations.append(self._violation(message, path))
        return self._outcome(violations)

    @abstractmethod
    def _problem(self, line_count: int, has_tldr: bool) -> str | None:
        raise NotImplementedError


class TldrRequired(_TldrCheck):
    """Long documents open with a TLDR."""

    def _problem(self, line_count, has_tldr):
        if line_count >= TLDR_THRESHOLD and not has_tldr:
            return f"File has {line_count} lines but no TLDR section"
        return None


class TldrUnnecessary(_TldrCheck):
    """Short documents do not need a TLDR."""

    def _problem(self, line_count, has_tldr):
        if line_count < TLDR_THRESHOLD and has_tldr:
            return f"File has only {line_count} lines but has a TLDR section (unnecessary)"
        return None


class _GlossaryCheck(BaseCheck):
    def run(self, context: ScanContext) -> CheckResult:
        if not context.is_file(GLOSSARY):
            return self._skip(f"{GLOSSARY} not found")
        try:
            content = context.read(GLOSSARY)
        except ScanIoError as e:
            return self._skip(f"Cannot read glossary: {e.message}")
        return self._outcome(self._inspect(content.splitlines()))

    @abstractmethod
    def _inspect(self, lines: list[str]) -> list[Violation]:
        raise NotImplementedError


class GlossaryFormat(_GlossaryCheck):
    """Terms follow the '**Term** - Definition' format."""

    def _inspect(self, lines):
        return [
            self._violation(
                f"Line {i}: Term definition doesn't follow '**Term** - Definition' format",
                GLOSSARY,
            )
            for i, line in enumerate(lines, start=1)
            if TERM_RE.match(line.strip()) and not VALID_TERM_RE.match(line.strip())
        ]


class GlossaryAlphabetized(_GlossaryCheck):
    """Terms are in case-insensitive alphabetical order."""

    def _inspect(self, lines):
        terms = [m.group(1).lower() for m in (TERM_RE.match(l.strip()) for l in lines) if m]
        return [
            self._violation(f"Term '{current}' should come before '{previous}'", GLOSSARY)
            for previous, current in zip(terms, terms[1:])
            if current < previous
        ]


class GlossaryAcronyms(_GlossaryCheck):
    """Acronym terms carry their expansion."""

    def _inspect(self, lines):
        violations = []
        for i, line in enumerate(lines, start=1):
            match = DEFINITION_RE.match(line.strip())
            if not match or not ACRONYM_RE.match(match.group(1)):
                continue
            definition = match.group(2)
            if not any(any(c.islower() for c in word) for word in definition.split()):
                violations.append(
                    self._violation(
                        f"Line {i}: Acronym '{match.group(1)}' lacks expansion in definition",
                        GLOSSARY,
                    )
                )
        return violations
