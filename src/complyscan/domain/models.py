"""
Domain models for complyscan.

Core value types shared by the loader, the checks and the renderers.
All models are Pydantic v2 so reports serialize to JSON and parse back
without loss.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _OrderedEnum(str, Enum):
    """String enum whose members compare by declaration order."""

    def _get_order(self) -> int:
        return list(type(self)).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._get_order() < other._get_order()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._get_order() <= other._get_order()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._get_order() > other._get_order()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._get_order() >= other._get_order()


class Severity(_OrderedEnum):
    """Severity of a rule and of every violation it produces."""

    INFO = "info"  # No compliance impact
    WARNING = "warning"  # Should be addressed
    ERROR = "error"  # Must be fixed before release


class ProjectScope(_OrderedEnum):
    """Project size tier used to gate rules that only make sense for bigger projects."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class ProjectType(str, Enum):
    """Licensing classification used by the docs scanner."""

    OPEN_SOURCE = "open_source"
    INTERNAL = "internal"


class ProjectKind(str, Enum):
    """Packaging classification used by the structure scanner."""

    LIBRARY = "library"
    APPLICATION = "application"
    BOTH = "both"
    WORKSPACE = "workspace"


class Violation(BaseModel):
    """
    One concrete instance of a rule failing.

    The severity is always copied from the rule that produced it.
    """

    model_config = ConfigDict(frozen=True)

    check_id: int = Field(..., ge=1, le=255, description="ID of the rule that failed")
    path: str | None = Field(
        default=None, description="Root-relative POSIX path the violation refers to"
    )
    message: str = Field(..., description="Human-readable explanation")
    severity: Severity = Field(..., description="Severity copied from the rule")
    rule_type: str | None = Field(
        default=None, description="Machine-readable matcher tag, e.g. 'file_exists'"
    )
    fix_hint: str | None = Field(default=None, description="Actionable remediation hint")


class PassResult(BaseModel):
    """The check passed."""

    model_config = ConfigDict(frozen=True)

    status: Literal["pass"] = "pass"


class FailResult(BaseModel):
    """The check failed with one or more violations."""

    model_config = ConfigDict(frozen=True)

    status: Literal["fail"] = "fail"
    violations: list[Violation] = Field(..., min_length=1)


class SkipResult(BaseModel):
    """The check was not applicable or could not be evaluated."""

    model_config = ConfigDict(frozen=True)

    status: Literal["skip"] = "skip"
    reason: str


CheckResult = Annotated[
    Union[PassResult, FailResult, SkipResult],
    Field(discriminator="status"),
]


class CheckEntry(BaseModel):
    """A rule's metadata paired with the outcome of running it."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1, le=255)
    category: str
    description: str
    result: CheckResult

    @property
    def status(self) -> str:
        return self.result.status
