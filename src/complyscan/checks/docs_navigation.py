"""
Navigation checks for the docs hub and the root README.
"""

from __future__ import annotations

import re
from abc import abstractmethod
from typing import TYPE_CHECKING

from complyscan.checks.base import BaseCheck
from complyscan.domain.exceptions import ScanIoError
from complyscan.domain.models import CheckResult

if TYPE_CHECKING:
    from complyscan.engine.context import ScanContext

HUB = "docs/README.md"
W3H_KEYWORDS = ("who", "what", "why", "how")
PHASE_DIR_RE = re.compile(r"^\d+-[a-z_]+$")
DEEP_LINK_RE = re.compile(r"\]\(docs/\d+-[^)]+\)")


def heading_mentions(content: str, keyword: str) -> bool:
    """Whether a level 1-3 heading contains ``keyword``, case-insensitively."""
    return re.search(rf"(?i)#{{1,3}}\s+.*{keyword}", content) is not None


def phase_dirs(context: ScanContext) -> list[str]:
    """Names of the numbered phase directories directly under docs/, sorted."""
    docs = context.root / "docs"
    if not docs.is_dir():
        return []
    return sorted(p.name for p in docs.iterdir() if p.is_dir() and PHASE_DIR_RE.match(p.name))


class _DocumentCheck(BaseCheck):
    """Reads one document and skips when it is absent or unreadable."""

    document = HUB

    def run(self, context: ScanContext) -> CheckResult:
        if not context.is_file(self.document):
            return self._skip(f"{self.document} not found")
        try:
            content = context.read(self.document)
        except ScanIoError as e:
            return self._skip(f"Cannot read {self.document}: {e.message}")
        return self._inspect(context, content)

    @abstractmethod
    def _inspect(self, context: ScanContext, content: str) -> CheckResult:
        raise NotImplementedError


class W3hHub(_DocumentCheck):
    """The docs hub answers who, what, why and how."""

    def _inspect(self, context, content):
        lowered = content.lower()
        missing = [
            k for k in W3H_KEYWORDS if not heading_mentions(content, k) and f"**{k}**" not in lowered
        ]
        if not missing:
            return self._outcome([])
        return self._outcome(
            [self._violation(f"Hub document missing W3H sections: {', '.join(missing)}", HUB)]
        )


class HubLinksPhases(_DocumentCheck):
    """The docs hub links every phase directory that exists."""

    def _inspect(self, context, content):
        return self._outcome(
            [
                self._violation(f"Hub does not link to phase directory '{name}'", HUB)
                for name in phase_dirs(context)
                if name not in content
            ]
        )


class NoDeepLinks(_DocumentCheck):
    """The root README links the docs hub, not pages inside phase directories."""

    document = "README.md"

    def _inspect(self, context, content):
        return self._outcome(
            [
                self._violation(
                    f"Line {i}: Root README deep-links into docs/ subdirectory", self.document
                )
                for i, line in enumerate(content.splitlines(), start=1)
                if DEEP_LINK_RE.search(line)
            ]
        )
