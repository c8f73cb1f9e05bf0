"""
Architecture decision record checks.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from complyscan.checks.base import BaseCheck
from complyscan.domain.exceptions import ScanIoError
from complyscan.domain.models import CheckResult

if TYPE_CHECKING:
    from complyscan.engine.context import ScanContext

ADR_DIR = "docs/3-design/adr"
ADR_NAME_RE = re.compile(r"^\d{3}-[a-z0-9_-]+\.md$")
ADR_NUMBERED_RE = re.compile(r"^\d{3}-")
INDEX_FILES = ("README.md", "index.md")


def _adr_files(context: ScanContext) -> list[str]:
    return [f for f in context.files_under(ADR_DIR) if f.endswith(".md")]


class AdrNaming(BaseCheck):
    """ADR files follow the NNN-title.md convention."""

    def run(self, context: ScanContext) -> CheckResult:
        if not context.is_dir(ADR_DIR):
            return self._skip("ADR directory does not exist")

        adr_files = _adr_files(context)
        if not adr_files:
            return self._skip("No ADR files found")

        violations = []
        for path in adr_files:
            filename = path.rsplit("/", 1)[-1]
            if filename in INDEX_FILES:
                continue
            if not ADR_NAME_RE.match(filename):
                violations.append(
                    self._violation(
                        f"ADR file '{filename}' doesn't follow NNN-title.md naming convention",
                        path,
                    )
                )
        return self._outcome(violations)


class AdrIndexCompleteness(BaseCheck):
    """Every numbered ADR is referenced from the ADR index."""

    def run(self, context: ScanContext) -> CheckResult:
        if not context.is_dir(ADR_DIR):
            return self._skip("ADR directory does not exist")

        index_path = next(
            (f"{ADR_DIR}/{name}" for name in INDEX_FILES if context.is_file(f"{ADR_DIR}/{name}")),
            None,
        )
        if index_path is None:
            return self._skip("No ADR index file found")

        try:
            index = context.read(index_path)
        except ScanIoError as e:
            return self._skip(f"Cannot read ADR index: {e.message}")

        numbered = [
            name
            for name in (f.rsplit("/", 1)[-1] for f in _adr_files(context))
            if ADR_NUMBERED_RE.match(name)
        ]
        violations = [
            self._violation(f"ADR '{name}' not referenced in index", ADR_DIR)
            for name in numbered
            if name not in index
        ]
        return self._outcome(violations)
