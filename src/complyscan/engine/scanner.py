"""
Compliance engine: the core of the scanner.

Loads the rules, builds the scan context, filters the rules down to the
applicable set, runs each check and assembles the report.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from complyscan.adapters.fs import FileSystemScanner
from complyscan.adapters.pyproject import load_manifest
from complyscan.domain.config import ScanConfig, ScannerKind
from complyscan.domain.exceptions import ScanConfigError, ScanPathError
from complyscan.domain.models import CheckEntry, CheckResult, ProjectKind, SkipResult
from complyscan.domain.report import ScanReport
from complyscan.engine.classify import detect_project_kind, detect_project_type
from complyscan.engine.context import ScanContext
from complyscan.engine.loader import build_registry, handlers_for, load_rules

if TYPE_CHECKING:
    from complyscan.checks.base import Check
    from complyscan.domain.rules import RuleDefinition

logger = logging.getLogger(__name__)

AUDIT_STANDARD = "ISO/IEC/IEEE 15289:2019"
AUDIT_CLAUSE = "9.2"
TOOL_NAME = "complyscan"


def scan(root: Path | str) -> ScanReport:
    """
    Scan a project with the default docs catalogue.

    Example:
        >>> report = scan("./my-project")
        >>> print(report.summary)
    """
    return scan_with_config(root, ScanConfig())


def scan_with_config(root: Path | str, config: ScanConfig) -> ScanReport:
    """
    Scan a project.

    This is the primary public API.

    Args:
        root: Project directory.
        config: Scan options.

    Returns:
        ScanReport with one entry per selected rule.

    Raises:
        ScanPathError: If the root does not exist or is not a directory.
        ScanConfigError: If the rules or the configuration are invalid.
    """
    return ComplianceEngine(config).scan(root)


def audit_scan(root: Path | str, config: ScanConfig | None = None) -> ScanReport:
    """Scan a project and stamp the report with audit provenance."""
    config = config or ScanConfig()
    report = scan_with_config(root, config)

    from complyscan import __version__

    return report.model_copy(
        update={
            "standard": AUDIT_STANDARD,
            "clause": AUDIT_CLAUSE,
            "tool": TOOL_NAME,
            "tool_version": __version__,
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "project_root": str(resolve_root(root)),
        }
    )


def kind_applies(required: ProjectKind, actual: ProjectKind) -> bool:
    """A ``both`` project satisfies library-only and application-only rules."""
    if required == actual:
        return True
    return actual is ProjectKind.BOTH and required in (ProjectKind.LIBRARY, ProjectKind.APPLICATION)


def resolve_root(root: Path | str) -> Path:
    """
    Resolve the scan root to an absolute directory path.

    Raises:
        ScanPathError: If the path does not exist or is not a directory.
    """
    path = Path(root)
    try:
        resolved = path.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise ScanPathError(f"Cannot resolve {path}: {e}", root=str(path))
    if not resolved.is_dir():
        raise ScanPathError(f"Not a directory: {path}", root=str(path))
    return resolved


class ComplianceEngine:
    """
    Runs a rule catalogue against projects.

    Rules are loaded and resolved to checks once per engine; every call to
    `scan()` builds a fresh context, so nothing is shared between scans.
    """

    def __init__(
        self,
        config: ScanConfig | None = None,
        scanner: FileSystemScanner | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            config: Scan options. Defaults to the docs scanner with no filters.
            scanner: Filesystem adapter, replaceable in tests.

        Raises:
            ScanConfigError: If the rules cannot be loaded or resolved.
        """
        self.config = config or ScanConfig()
        self.fs = scanner or FileSystemScanner()
        self.rules = load_rules(self.config.scanner, self.config.rules_path)
        self.checks = build_registry(self.rules, handlers_for(self.config.scanner))
        self._validate_phases()

    def _validate_phases(self) -> None:
        if not self.config.phases:
            return
        categories = {rule.category for rule in self.rules}
        unknown = [p for p in self.config.phases if p not in categories]
        if unknown:
            raise ScanConfigError(
                f"Unknown phase(s): {', '.join(unknown)}. "
                f"Available: {', '.join(sorted(categories))}"
            )

    def selected(self) -> list[Check]:
        """Checks left after the phase and ID filters, in catalogue order."""
        checks = self.checks
        if self.config.phases:
            checks = [c for c in checks if c.rule.category in self.config.phases]
        if self.config.checks is not None:
            wanted = set(self.config.checks)
            checks = [c for c in checks if c.rule.id in wanted]
        return checks

    def build_context(self, root: Path) -> ScanContext:
        """Classify the project and snapshot its file list."""
        project_type = self.config.project_type or detect_project_type(root)
        if self.config.scanner is ScannerKind.STRUCTURE:
            manifest = load_manifest(root)
            kind = self.config.project_kind or detect_project_kind(root, manifest)
            return ScanContext.build(
                root,
                scanner=self.fs,
                project_type=project_type,
                project_kind=kind,
                scope=self.config.scope,
                manifest=manifest,
                modules=self.config.modules,
            )

        return ScanContext.build(
            root,
            scanner=self.fs,
            project_type=project_type,
            scope=self.config.scope,
            modules=self.config.modules,
        )

    def scan(self, root: Path | str) -> ScanReport:
        """
        Scan a project with the configured rules.

        Args:
            root: Project directory.

        Returns:
            ScanReport with one entry per selected rule.
        """
        resolved = resolve_root(root)
        context = self.build_context(resolved)
        checks = self.selected()
        logger.info(
            "Scanning %s with %d %s rules", resolved, len(checks), self.config.scanner.value
        )

        entries = [
            CheckEntry(
                id=check.rule.id,
                category=check.rule.category,
                description=check.rule.description,
                result=self._evaluate(check, context),
            )
            for check in checks
        ]

        report = ScanReport.build(entries, scanner=self.config.scanner, **self._classification(context))
        logger.info(
            "Scan finished: %d passed, %d failed, %d skipped",
            report.summary.passed,
            report.summary.failed,
            report.summary.skipped,
        )
        return report

    def _classification(self, context: ScanContext) -> dict:
        if self.config.scanner is ScannerKind.STRUCTURE:
            return {"project_kind": context.project_kind}
        return {"project_type": context.project_type, "project_scope": context.scope}

    def _evaluate(self, check: Check, context: ScanContext) -> CheckResult:
        rule = check.rule
        reason = self._skip_reason(rule, context)
        if reason is not None:
            logger.debug("Rule %d skipped: %s", rule.id, reason)
            return SkipResult(reason=reason)

        try:
            result = check.run(context)
        except Exception as e:
            logger.exception("Rule %d crashed", rule.id)
            return SkipResult(reason=f"Check raised {type(e).__name__}: {e}")

        logger.debug("Rule %d: %s", rule.id, result.status)
        return result

    @staticmethod
    def _skip_reason(rule: RuleDefinition, context: ScanContext) -> str | None:
        if rule.project_type is not None and rule.project_type != context.project_type:
            return f"{rule.project_type.value} only (project is {context.project_type.value})"
        if (
            rule.project_kind is not None
            and context.project_kind is not None
            and not kind_applies(rule.project_kind, context.project_kind)
        ):
            return f"{rule.project_kind.value} only (project is {context.project_kind.value})"
        if rule.scope is not None and rule.scope > context.scope:
            return f"requires {rule.scope.value} scope (configured {context.scope.value})"
        return None
