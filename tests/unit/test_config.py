"""
Unit tests for scan configuration and the check-ID filter parser.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from complyscan.domain.config import ScanConfig, ScannerKind, parse_check_ids
from complyscan.domain.exceptions import ScanConfigError
from complyscan.domain.models import ProjectScope, ProjectType


class TestParseCheckIds:
    """Tests for parse_check_ids."""

    def test_range(self) -> None:
        """Should expand an inclusive range."""
        assert parse_check_ids("1-13") == list(range(1, 14))

    def test_list(self) -> None:
        """Should accept a comma list."""
        assert parse_check_ids("1,5,10") == [1, 5, 10]

    def test_mixed(self) -> None:
        """Should combine ranges and single IDs."""
        assert parse_check_ids("1-3,7,10-12") == [1, 2, 3, 7, 10, 11, 12]

    def test_whitespace_tolerated(self) -> None:
        """Should ignore surrounding whitespace."""
        assert parse_check_ids(" 2 , 4-5 ") == [2, 4, 5]

    def test_reversed_range_rejected(self) -> None:
        """A range whose start exceeds its end should be rejected."""
        with pytest.raises(ValueError, match="invalid range"):
            parse_check_ids("5-3")

    @pytest.mark.parametrize("text", ["abc", "1,x", "1-y", "-3"])
    def test_non_numeric_rejected(self, text: str) -> None:
        """Non-numeric tokens should be rejected."""
        with pytest.raises(ValueError):
            parse_check_ids(text)


class TestScanConfig:
    """Tests for ScanConfig."""

    def test_defaults(self) -> None:
        """Defaults should be the docs scanner, large scope and no filters."""
        config = ScanConfig()
        assert config.scanner is ScannerKind.DOCS
        assert config.scope is ProjectScope.LARGE
        assert config.checks is None
        assert config.project_type is None

    def test_checks_from_string(self) -> None:
        """A filter string should be parsed into IDs."""
        assert ScanConfig(checks="1-3,7").checks == [1, 2, 3, 7]

    def test_project_type_accepts_cli_spelling(self) -> None:
        """'open-source' should be accepted for open_source."""
        assert ScanConfig(project_type="open-source").project_type is ProjectType.OPEN_SOURCE

    def test_phases_from_string(self) -> None:
        """Comma separated phases should be split."""
        assert ScanConfig(phases="structure, naming").phases == ["structure", "naming"]

    def test_merged_applies_non_none(self) -> None:
        """Overrides should replace values; None should leave them alone."""
        base = ScanConfig(scope="small", checks=[1])
        merged = base.merged(scope=ProjectScope.MEDIUM, checks=None)
        assert merged.scope is ProjectScope.MEDIUM
        assert merged.checks == [1]

    def test_from_file(self, tmp_path: Path) -> None:
        """Should load options from YAML."""
        path = tmp_path / "complyscan.yaml"
        path.write_text("scanner: structure\nchecks: '1-2'\nscope: medium\n", encoding="utf-8")
        config = ScanConfig.from_file(path)
        assert config.scanner is ScannerKind.STRUCTURE
        assert config.checks == [1, 2]
        assert config.scope is ProjectScope.MEDIUM

    def test_from_file_missing(self, tmp_path: Path) -> None:
        """A missing file should raise ScanConfigError."""
        with pytest.raises(ScanConfigError, match="not found"):
            ScanConfig.from_file(tmp_path / "nope.yaml")

    def test_from_file_unknown_option(self, tmp_path: Path) -> None:
        """Unknown options should be rejected."""
        path = tmp_path / "bad.yaml"
        path.write_text("colour: blue\n", encoding="utf-8")
        with pytest.raises(ScanConfigError):
            ScanConfig.from_file(path)

    def test_from_file_bad_checks(self, tmp_path: Path) -> None:
        """An invalid check filter should surface as ScanConfigError."""
        path = tmp_path / "bad.yaml"
        path.write_text("checks: '9-1'\n", encoding="utf-8")
        with pytest.raises(ScanConfigError):
            ScanConfig.from_file(path)
