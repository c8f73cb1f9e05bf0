"""
Pytest configuration and shared fixtures for complyscan tests.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml

from complyscan.domain.models import (
    CheckEntry,
    FailResult,
    PassResult,
    ProjectScope,
    ProjectType,
    Severity,
    SkipResult,
    Violation,
)
from complyscan.domain.report import ScanReport
from complyscan.domain.rules import RuleDefinition
from complyscan.engine.context import ScanContext


# --- Markers ---

def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that scan whole project trees"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow"
    )


# --- Fixtures: Project trees ---

@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """
    Build a project tree under tmp_path.

    Keys are root-relative paths; a key ending in '/' creates an empty
    directory, anything else a file with the given text.
    """

    def _make(files: dict[str, str] | None = None, name: str = "project") -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        for relative, content in (files or {}).items():
            path = root / relative
            if relative.endswith("/"):
                path.mkdir(parents=True, exist_ok=True)
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def docs_project(make_project: Callable[..., Path]) -> Path:
    """A small, mostly compliant open source documentation tree."""
    return make_project(
        {
            "README.md": "# Demo\n\nSee [the docs](docs/README.md).\n",
            "LICENSE": "MIT License\n\nCopyright (c) 2024\n",
            "docs/README.md": (
                "# Docs hub\n\n## Who\n\n## What\n\n## Why\n\n## How\n\n"
                "- [Requirements](1-requirements/srs.md)\n"
            ),
            "docs/glossary.md": "# Glossary\n\n**API** - Application programming interface\n",
            "docs/1-requirements/srs.md": "# Requirements\n",
        }
    )


@pytest.fixture
def rules_file(tmp_path: Path) -> Callable[[list[dict[str, Any]]], Path]:
    """Write a YAML rule document and return its path."""

    def _write(rules: list[dict[str, Any]], name: str = "rules.yaml") -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump({"rules": rules}, sort_keys=False), encoding="utf-8")
        return path

    return _write


# --- Fixtures: Rules and contexts ---

@pytest.fixture
def make_rule() -> Callable[..., RuleDefinition]:
    """Build a RuleDefinition from a matcher mapping."""

    def _make(kind: dict[str, Any], rule_id: int = 1, **fields: Any) -> RuleDefinition:
        fields.setdefault("category", "test")
        fields.setdefault("description", "test rule")
        fields.setdefault("severity", Severity.ERROR)
        return RuleDefinition(id=rule_id, kind=kind, **fields)

    return _make


@pytest.fixture
def make_context() -> Callable[..., ScanContext]:
    """Build a ScanContext by walking a project root."""

    def _make(root: Path, **classification: Any) -> ScanContext:
        classification.setdefault("project_type", ProjectType.OPEN_SOURCE)
        classification.setdefault("scope", ProjectScope.LARGE)
        return ScanContext.build(root.resolve(), **classification)

    return _make


# --- Fixtures: Reports ---

@pytest.fixture
def sample_violation() -> Violation:
    """A violation as a failing file_exists rule produces it."""
    return Violation(
        check_id=2,
        path="docs/README.md",
        message="File 'docs/README.md' does not exist",
        severity=Severity.ERROR,
        rule_type="file_exists",
        fix_hint="Create the file 'docs/README.md'",
    )


@pytest.fixture
def sample_report(sample_violation: Violation) -> ScanReport:
    """A report with one pass, one fail and one skip."""
    entries = [
        CheckEntry(id=1, category="structure", description="docs/ exists", result=PassResult()),
        CheckEntry(
            id=2,
            category="structure",
            description="hub exists",
            result=FailResult(violations=[sample_violation]),
        ),
        CheckEntry(
            id=14,
            category="root_files",
            description="LICENSE exists",
            result=SkipResult(reason="open_source only (project is internal)"),
        ),
    ]
    return ScanReport.build(
        entries, project_type=ProjectType.INTERNAL, project_scope=ProjectScope.LARGE
    )
