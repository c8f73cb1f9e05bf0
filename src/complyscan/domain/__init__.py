"""
Domain layer for complyscan.

Contains all core data structures with zero external dependencies
beyond Pydantic and PyYAML.
"""

from complyscan.domain.config import ScanConfig, ScannerKind, parse_check_ids
from complyscan.domain.exceptions import (
    ScanConfigError,
    ScanError,
    ScanIoError,
    ScanPathError,
)
from complyscan.domain.models import (
    CheckEntry,
    CheckResult,
    FailResult,
    PassResult,
    ProjectKind,
    ProjectScope,
    ProjectType,
    Severity,
    SkipResult,
    Violation,
)
from complyscan.domain.report import ScanReport, ScanSummary
from complyscan.domain.rules import RuleDefinition, RuleKind

__all__ = [
    # Models
    "CheckEntry",
    "CheckResult",
    "FailResult",
    "PassResult",
    "ProjectKind",
    "ProjectScope",
    "ProjectType",
    "Severity",
    "SkipResult",
    "Violation",
    # Rules
    "RuleDefinition",
    "RuleKind",
    # Config
    "ScanConfig",
    "ScannerKind",
    "parse_check_ids",
    # Reports
    "ScanReport",
    "ScanSummary",
    # Exceptions
    "ScanError",
    "ScanIoError",
    "ScanPathError",
    "ScanConfigError",
]
