"""
Engine layer for complyscan.

Contains rule loading, project classification and scan orchestration.
"""

from complyscan.engine.context import ContentCache, ScanContext
from complyscan.engine.loader import build_registry, load_rules, parse_rules
from complyscan.engine.scanner import ComplianceEngine, audit_scan, scan, scan_with_config

__all__ = [
    "ComplianceEngine",
    "ContentCache",
    "ScanContext",
    "audit_scan",
    "build_registry",
    "load_rules",
    "parse_rules",
    "scan",
    "scan_with_config",
]
