"""
complyscan: declarative compliance scanner for project documentation and
Python package structure.

Usage:
    # CLI
    $ complyscan scan ./my-project
    $ complyscan scan ./my-project --scanner structure --json

    # Python API
    from complyscan import scan_with_config, ScanConfig, format_report_text

    report = scan_with_config("./my-project", ScanConfig(checks="1-13"))
    print(format_report_text(report))
"""

__version__ = "0.1.0"

from complyscan.domain.config import ScanConfig, ScannerKind, parse_check_ids
from complyscan.domain.exceptions import (
    ScanConfigError,
    ScanError,
    ScanIoError,
    ScanPathError,
)
from complyscan.domain.models import (
    CheckEntry,
    ProjectKind,
    ProjectScope,
    ProjectType,
    Severity,
    Violation,
)
from complyscan.domain.report import ScanReport, ScanSummary
from complyscan.engine.scanner import ComplianceEngine, audit_scan, scan, scan_with_config
from complyscan.renderers.json_renderer import format_report_json
from complyscan.renderers.text import format_report_text

__all__ = [
    # Version
    "__version__",
    # Domain models
    "CheckEntry",
    "ProjectKind",
    "ProjectScope",
    "ProjectType",
    "Severity",
    "Violation",
    # Config
    "ScanConfig",
    "ScannerKind",
    "parse_check_ids",
    # Reports
    "ScanReport",
    "ScanSummary",
    # Errors
    "ScanError",
    "ScanIoError",
    "ScanPathError",
    "ScanConfigError",
    # Engine
    "ComplianceEngine",
    "audit_scan",
    "scan",
    "scan_with_config",
    # Formatters
    "format_report_json",
    "format_report_text",
]
