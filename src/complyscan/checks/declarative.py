"""
Declarative check interpreter.

One interpreter evaluates every data-only rule kind. Patterns were already
validated when the rule was loaded; they are compiled once per check here.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from complyscan.checks.base import BaseCheck
from complyscan.domain.exceptions import ScanIoError
from complyscan.domain.models import CheckResult, Violation
from complyscan.domain.rules import (
    DirExists,
    DirNotExists,
    FileContentMatches,
    FileContentNotMatches,
    FileExists,
    GlobContentMatches,
    GlobContentNotMatches,
    GlobNamingMatches,
    GlobNamingNotMatches,
    ManifestKeyExists,
    ManifestKeyMatches,
)

if TYPE_CHECKING:
    from complyscan.domain.rules import RuleDefinition
    from complyscan.engine.context import ScanContext

logger = logging.getLogger(__name__)

MANIFEST_PATH = "pyproject.toml"


def _basename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


class DeclarativeCheck(BaseCheck):
    """Evaluates a declarative rule against the scan context."""

    def __init__(self, rule: RuleDefinition) -> None:
        super().__init__(rule)
        pattern = getattr(rule.kind, "pattern", None)
        self._pattern = re.compile(pattern) if pattern is not None else None
        exclude = getattr(rule.kind, "exclude_pattern", None)
        self._exclude = re.compile(exclude) if exclude else None

    def run(self, context: ScanContext) -> CheckResult:
        kind = self.rule.kind
        match kind:
            case FileExists():
                return self._check_file_exists(context, kind.path)
            case DirExists():
                return self._check_dir_exists(context, kind.path)
            case DirNotExists():
                return self._check_dir_not_exists(context, kind.path, kind.message)
            case FileContentMatches():
                return self._check_file_content(context, kind.path, expect_match=True)
            case FileContentNotMatches():
                return self._check_file_content(context, kind.path, expect_match=False)
            case GlobContentMatches():
                return self._check_glob_content_matches(context, kind.glob)
            case GlobContentNotMatches():
                return self._check_glob_content_not_matches(context, kind.glob)
            case GlobNamingMatches():
                return self._check_glob_naming(context, kind.glob, expect_match=True)
            case GlobNamingNotMatches():
                return self._check_glob_naming(
                    context, kind.glob, expect_match=False, exclude_paths=kind.exclude_paths
                )
            case ManifestKeyExists():
                return self._check_manifest_key(context, kind.key)
            case ManifestKeyMatches():
                return self._check_manifest_key(context, kind.key)
            case _:
                raise TypeError(f"{kind.tag} is not a declarative rule kind")

    def _check_file_exists(self, context: ScanContext, path: str) -> CheckResult:
        if context.is_file(path):
            return self._outcome([])
        return self._outcome([self._violation(f"File '{path}' does not exist", path)])

    def _check_dir_exists(self, context: ScanContext, path: str) -> CheckResult:
        if context.is_dir(path):
            return self._outcome([])
        return self._outcome([self._violation(f"Directory '{path}' does not exist", path)])

    def _check_dir_not_exists(self, context: ScanContext, path: str, message: str) -> CheckResult:
        if context.is_dir(path):
            return self._outcome([self._violation(message, path)])
        return self._outcome([])

    def _check_file_content(
        self, context: ScanContext, path: str, expect_match: bool
    ) -> CheckResult:
        if not context.is_file(path):
            # A missing file cannot contain anything
            if expect_match:
                return self._outcome([self._violation(f"File '{path}' does not exist", path)])
            return self._outcome([])

        try:
            content = context.read(path)
        except ScanIoError as e:
            return self._skip(f"Cannot read '{path}': {e.message}")

        found = self._pattern.search(content) is not None
        if expect_match and not found:
            message = f"File '{path}' does not match pattern '{self._pattern.pattern}'"
            return self._outcome([self._violation(message, path)])
        if not expect_match and found:
            message = f"File '{path}' contains forbidden pattern '{self._pattern.pattern}'"
            return self._outcome([self._violation(message, path)])
        return self._outcome([])

    def _check_glob_content_matches(self, context: ScanContext, glob: str) -> CheckResult:
        violations: list[Violation] = []
        for path in context.glob(glob):
            try:
                content = context.read(path)
            except ScanIoError as e:
                logger.warning("Rule %d: skipping unreadable %s: %s", self.id, path, e.message)
                continue
            if not self._pattern.search(content):
                violations.append(
                    self._violation(
                        f"File does not match pattern '{self._pattern.pattern}'", path
                    )
                )
        return self._outcome(violations)

    def _check_glob_content_not_matches(self, context: ScanContext, glob: str) -> CheckResult:
        violations: list[Violation] = []
        for path in context.glob(glob):
            try:
                content = context.read(path)
            except ScanIoError as e:
                logger.warning("Rule %d: skipping unreadable %s: %s", self.id, path, e.message)
                continue
            line_no = self._first_forbidden_line(content)
            if line_no is not None:
                violations.append(
                    self._violation(
                        f"File contains forbidden pattern '{self._pattern.pattern}' "
                        f"(line {line_no})",
                        path,
                    )
                )
        return self._outcome(violations)

    def _first_forbidden_line(self, content: str) -> int | None:
        for line_no, line in enumerate(content.splitlines(), start=1):
            if self._exclude is not None and self._exclude.search(line):
                continue
            if self._pattern.search(line):
                return line_no
        return None

    def _check_glob_naming(
        self,
        context: ScanContext,
        glob: str,
        expect_match: bool,
        exclude_paths: list[str] | None = None,
    ) -> CheckResult:
        violations: list[Violation] = []
        for path in context.glob(glob):
            if exclude_paths and any(path.startswith(prefix) for prefix in exclude_paths):
                continue
            filename = _basename(path)
            found = self._pattern.search(filename) is not None
            if expect_match and not found:
                violations.append(
                    self._violation(
                        f"Filename '{filename}' does not match pattern '{self._pattern.pattern}'",
                        path,
                    )
                )
            elif not expect_match and found:
                violations.append(
                    self._violation(
                        f"Filename '{filename}' matches forbidden pattern "
                        f"'{self._pattern.pattern}'",
                        path,
                    )
                )
        return self._outcome(violations)

    def _check_manifest_key(self, context: ScanContext, key: str) -> CheckResult:
        manifest = context.manifest
        if manifest is None:
            return self._skip(f"No {MANIFEST_PATH} found")

        if not manifest.has(key):
            return self._outcome(
                [self._violation(f"Key '{key}' is missing", MANIFEST_PATH)]
            )
        if self._pattern is None:
            return self._outcome([])

        value = manifest.get(key)
        if not isinstance(value, str) or not self._pattern.search(value):
            message = f"Key '{key}' value {value!r} does not match pattern '{self._pattern.pattern}'"
            return self._outcome([self._violation(message, MANIFEST_PATH)])
        return self._outcome([])
