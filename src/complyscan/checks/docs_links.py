"""
Markdown link resolution.

Links are resolved against the filesystem relative to the linking file's
directory; a leading ``/`` resolves from the project root. External links,
pure anchors and mailto links are ignored.
"""

from __future__ import annotations

import logging
import posixpath
import re
from abc import abstractmethod
from collections.abc import Iterator
from typing import TYPE_CHECKING

from complyscan.checks.base import BaseCheck
from complyscan.domain.exceptions import ScanIoError
from complyscan.domain.models import CheckResult, Violation

if TYPE_CHECKING:
    from complyscan.engine.context import ScanContext

logger = logging.getLogger(__name__)

LINK_RE = re.compile(r"\[([^\]]*)\]\(([^)]+)\)")
EXTERNAL_PREFIXES = ("http://", "https://", "#", "mailto:")


class _LinkCheck(BaseCheck):
    def run(self, context: ScanContext) -> CheckResult:
        md_files = [f for f in context.files_under("docs") if f.endswith(".md")]
        if not md_files:
            return self._skip("No .md files in docs/")

        violations: list[Violation] = []
        for path in md_files:
            try:
                content = context.read(path)
            except ScanIoError as e:
                logger.warning("Rule %d: skipping unreadable %s: %s", self.id, path, e.message)
                continue
            for target, target_path, resolved in self._links(path, content):
                message = self._problem(context, target, target_path, resolved)
                if message:
                    violations.append(self._violation(message, path))
        return self._outcome(violations)

    @staticmethod
    def _links(path: str, content: str) -> Iterator[tuple[str, str, str]]:
        """Yield (raw target, target without anchor, root-relative resolved path)."""
        file_dir = posixpath.dirname(path)
        for match in LINK_RE.finditer(content):
            target = match.group(2).strip()
            if target.startswith(EXTERNAL_PREFIXES):
                continue
            target_path = target.split("#", 1)[0]
            if not target_path:
                continue
            if target_path.startswith("/"):
                resolved = target_path.lstrip("/")
            else:
                resolved = posixpath.normpath(posixpath.join(file_dir, target_path))
            yield target, target_path, resolved

    @abstractmethod
    def _problem(
        self, context: ScanContext, target: str, target_path: str, resolved: str
    ) -> str | None:
        raise NotImplementedError


class InternalLinksResolve(_LinkCheck):
    """Links to other markdown documents point at files that exist."""

    def _problem(self, context, target, target_path, resolved):
        if target_path.endswith(".md") and not context.exists(resolved):
            return f"Broken link: '{target}' does not exist"
        return None


class RelativeLinksResolve(_LinkCheck):
    """Every relative link points at something that exists."""

    def _problem(self, context, target, target_path, resolved):
        if not target_path.startswith("/") and not context.exists(resolved):
            return f"Broken relative link: '{target}' does not exist"
        return None
