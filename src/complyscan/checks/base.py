"""
Base check infrastructure.

Defines the Check protocol and the base class shared by the declarative
interpreter and every procedural handler. Checks only read the context;
they never write to it or to the project.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from complyscan.domain.models import (
    CheckResult,
    FailResult,
    PassResult,
    Severity,
    SkipResult,
    Violation,
)

if TYPE_CHECKING:
    from complyscan.domain.rules import RuleDefinition
    from complyscan.engine.context import ScanContext


@runtime_checkable
class Check(Protocol):
    """
    Protocol for all checks.

    A check is bound to exactly one rule and turns a scan context into a
    pass, fail or skip outcome.
    """

    @property
    def rule(self) -> RuleDefinition:
        """The rule this check evaluates."""
        ...

    def run(self, context: ScanContext) -> CheckResult:
        """
        Evaluate the rule against a project.

        Args:
            context: Snapshot of the project under scan.

        Returns:
            The outcome. Fail always carries at least one violation.
        """
        ...


class BaseCheck(ABC):
    """
    Base class for checks.

    Subclasses implement `run()` and build violations through
    `_violation()` so severity, tag and fix hint always come from the rule.
    """

    def __init__(self, rule: RuleDefinition) -> None:
        self._rule = rule

    @property
    def rule(self) -> RuleDefinition:
        return self._rule

    @property
    def id(self) -> int:
        return self._rule.id

    @property
    def category(self) -> str:
        return self._rule.category

    @property
    def description(self) -> str:
        return self._rule.description

    @property
    def severity(self) -> Severity:
        return self._rule.severity

    @abstractmethod
    def run(self, context: ScanContext) -> CheckResult:
        raise NotImplementedError

    def _violation(self, message: str, path: str | None = None) -> Violation:
        """Helper to create a violation with this rule's metadata."""
        return Violation(
            check_id=self._rule.id,
            path=path,
            message=message,
            severity=self._rule.severity,
            rule_type=self._rule.kind.tag,
            fix_hint=self._rule.hint,
        )

    @staticmethod
    def _outcome(violations: list[Violation]) -> CheckResult:
        """Fail iff any violation was collected."""
        if violations:
            return FailResult(violations=violations)
        return PassResult()

    @staticmethod
    def _skip(reason: str) -> SkipResult:
        return SkipResult(reason=reason)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self._rule.id}>"
