"""
Scan configuration.

A ScanConfig is built fresh for every invocation, either directly, from CLI
options, or from a YAML file via ``ScanConfig.from_file``.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from complyscan.domain.exceptions import ScanConfigError
from complyscan.domain.models import ProjectKind, ProjectScope, ProjectType

if TYPE_CHECKING:
    from pathlib import Path


class ScannerKind(str, Enum):
    """Which scanner variant and default catalogue to use."""

    DOCS = "docs"
    STRUCTURE = "structure"


def parse_check_ids(text: str) -> list[int]:
    """
    Parse a check filter such as ``"1-3,7,10-12"`` into a list of IDs.

    Raises:
        ValueError: On a non-numeric part or a range whose start exceeds its end.
    """
    ids: list[int] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start_text, _, end_text = part.partition("-")
            start = _parse_id(start_text)
            end = _parse_id(end_text)
            if start > end:
                raise ValueError(f"invalid range: {start} > {end}")
            ids.extend(range(start, end + 1))
        else:
            ids.append(_parse_id(part))
    return ids


def _parse_id(text: str) -> int:
    text = text.strip()
    if not text.isdigit():
        raise ValueError(f"invalid check id: '{text}'")
    return int(text)


class ScanConfig(BaseModel):
    """Options for one scan."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    scanner: ScannerKind = Field(default=ScannerKind.DOCS, description="Scanner variant")
    checks: list[int] | None = Field(
        default=None, description="Only run these rule IDs (None = all)"
    )
    project_type: ProjectType | None = Field(
        default=None, description="Override project type detection"
    )
    project_kind: ProjectKind | None = Field(
        default=None, description="Override project kind detection"
    )
    scope: ProjectScope = Field(default=ProjectScope.LARGE, description="Project scope tier")
    rules_path: str | None = Field(
        default=None, description="Rule document replacing the default catalogue"
    )
    phases: list[str] | None = Field(
        default=None, description="Only run rules in these categories"
    )
    modules: list[str] | None = Field(
        default=None, description="Only inspect these modules in module-aware checks"
    )

    @field_validator("checks", mode="before")
    @classmethod
    def parse_checks(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_check_ids(v)
        if isinstance(v, int) and not isinstance(v, bool):
            return [v]
        return v

    @field_validator("phases", "modules", mode="before")
    @classmethod
    def split_names(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [name.strip() for name in v.split(",") if name.strip()]
        return v

    @field_validator("project_type", mode="before")
    @classmethod
    def normalize_project_type(cls, v: Any) -> Any:
        # CLI users write "open-source"
        if isinstance(v, str):
            return v.replace("-", "_")
        return v

    @classmethod
    def from_file(cls, path: Path | str) -> ScanConfig:
        """
        Load a scan configuration from a YAML file.

        Raises:
            ScanConfigError: If the file cannot be read, parsed or validated.
        """
        from pathlib import Path

        path = Path(path)

        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ScanConfigError(f"Config file not found: {path}", source=str(path))
        except OSError as e:
            raise ScanConfigError(f"Error reading config {path}: {e}", source=str(path))

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ScanConfigError(f"Invalid YAML in config {path}: {e}", source=str(path))

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ScanConfigError(
                f"Config {path} must be a mapping of options", source=str(path)
            )

        try:
            return cls(**data)
        except (ValidationError, ValueError) as e:
            raise ScanConfigError(f"Invalid config {path}: {e}", source=str(path))

    def merged(self, **overrides: Any) -> ScanConfig:
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if not values:
            return self
        try:
            return self.model_validate({**self.model_dump(), **values})
        except ValidationError as e:
            raise ScanConfigError(f"Invalid scan options: {e}")
