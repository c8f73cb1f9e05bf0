"""
Rule definition models.

A rule is one numbered compliance assertion. Its ``kind`` is a closed set of
declarative matchers plus ``builtin``, which names a procedural handler
resolved when the catalogue is loaded.
"""

from __future__ import annotations

import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from complyscan.domain.models import ProjectKind, ProjectScope, ProjectType, Severity


def _compile_pattern(value: str | None) -> str | None:
    if value is None:
        return value
    try:
        re.compile(value)
    except re.error as e:
        raise ValueError(f"invalid regular expression '{value}': {e}") from e
    return value


class _Kind(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def tag(self) -> str:
        return self.type  # type: ignore[attr-defined]

    def auto_fix_hint(self) -> str:
        raise NotImplementedError


class _PatternKind(_Kind):
    pattern: str

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        return _compile_pattern(v)  # type: ignore[return-value]


class FileExists(_Kind):
    type: Literal["file_exists"] = "file_exists"
    path: str

    def auto_fix_hint(self) -> str:
        return f"Create the file '{self.path}'"


class DirExists(_Kind):
    type: Literal["dir_exists"] = "dir_exists"
    path: str

    def auto_fix_hint(self) -> str:
        return f"Create the directory '{self.path}'"


class DirNotExists(_Kind):
    type: Literal["dir_not_exists"] = "dir_not_exists"
    path: str
    message: str = ""

    @model_validator(mode="before")
    @classmethod
    def default_message(cls, data: object) -> object:
        if isinstance(data, dict) and not data.get("message") and data.get("path"):
            data = {**data, "message": f"{data['path']} should not exist"}
        return data

    def auto_fix_hint(self) -> str:
        return f"Remove the directory '{self.path}'"


class FileContentMatches(_PatternKind):
    type: Literal["file_content_matches"] = "file_content_matches"
    path: str

    def auto_fix_hint(self) -> str:
        return f"Update '{self.path}' so its content matches pattern '{self.pattern}'"


class FileContentNotMatches(_PatternKind):
    type: Literal["file_content_not_matches"] = "file_content_not_matches"
    path: str

    def auto_fix_hint(self) -> str:
        return f"Remove content matching '{self.pattern}' from '{self.path}'"


class GlobContentMatches(_PatternKind):
    type: Literal["glob_content_matches"] = "glob_content_matches"
    glob: str

    def auto_fix_hint(self) -> str:
        return f"Ensure files matching '{self.glob}' contain pattern '{self.pattern}'"


class GlobContentNotMatches(_PatternKind):
    type: Literal["glob_content_not_matches"] = "glob_content_not_matches"
    glob: str
    exclude_pattern: str | None = None

    @field_validator("exclude_pattern")
    @classmethod
    def validate_exclude(cls, v: str | None) -> str | None:
        return _compile_pattern(v)

    def auto_fix_hint(self) -> str:
        return f"Remove content matching '{self.pattern}' from files matching '{self.glob}'"


class GlobNamingMatches(_PatternKind):
    type: Literal["glob_naming_matches"] = "glob_naming_matches"
    glob: str

    def auto_fix_hint(self) -> str:
        return f"Rename files matching '{self.glob}' to conform to pattern '{self.pattern}'"


class GlobNamingNotMatches(_PatternKind):
    type: Literal["glob_naming_not_matches"] = "glob_naming_not_matches"
    glob: str
    exclude_paths: list[str] = Field(default_factory=list)

    def auto_fix_hint(self) -> str:
        return (
            f"Rename files matching '{self.glob}' so they no longer match "
            f"pattern '{self.pattern}'"
        )


class ManifestKeyExists(_Kind):
    type: Literal["manifest_key_exists"] = "manifest_key_exists"
    key: str

    def auto_fix_hint(self) -> str:
        return f"Add key '{self.key}' to pyproject.toml"


class ManifestKeyMatches(_PatternKind):
    type: Literal["manifest_key_matches"] = "manifest_key_matches"
    key: str

    def auto_fix_hint(self) -> str:
        return f"Update key '{self.key}' in pyproject.toml to match pattern '{self.pattern}'"


class Builtin(_Kind):
    type: Literal["builtin"] = "builtin"
    handler: str = Field(..., min_length=1)

    @property
    def tag(self) -> str:
        return f"builtin:{self.handler}"

    def auto_fix_hint(self) -> str:
        return f"Fix the issue detected by builtin check '{self.handler}'"


RuleKind = Annotated[
    Union[
        FileExists,
        DirExists,
        DirNotExists,
        FileContentMatches,
        FileContentNotMatches,
        GlobContentMatches,
        GlobContentNotMatches,
        GlobNamingMatches,
        GlobNamingNotMatches,
        ManifestKeyExists,
        ManifestKeyMatches,
        Builtin,
    ],
    Field(discriminator="type"),
]

# Every value accepted in a rule document's ``type`` field besides handler names
KIND_TAGS: frozenset[str] = frozenset(
    {
        "file_exists",
        "dir_exists",
        "dir_not_exists",
        "file_content_matches",
        "file_content_not_matches",
        "glob_content_matches",
        "glob_content_not_matches",
        "glob_naming_matches",
        "glob_naming_not_matches",
        "manifest_key_exists",
        "manifest_key_matches",
        "builtin",
    }
)


class RuleDefinition(BaseModel):
    """
    A single rule from a catalogue.

    Immutable once loaded. ``project_type``/``project_kind`` restrict the
    rule to one classification; ``scope`` is the minimum project scope the
    rule applies to.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1, le=255, description="Rule number, unique within a catalogue")
    category: str = Field(..., min_length=1, description="Grouping label, e.g. 'structure'")
    description: str = Field(..., description="What the rule asserts")
    severity: Severity = Field(..., description="Severity given to every violation")
    kind: RuleKind = Field(..., description="Matcher evaluated for this rule")
    project_type: ProjectType | None = Field(default=None, description="Only for this project type")
    project_kind: ProjectKind | None = Field(default=None, description="Only for this project kind")
    scope: ProjectScope | None = Field(default=None, description="Minimum project scope")
    fix_hint: str | None = Field(default=None, description="Overrides the generated fix hint")

    @property
    def handler(self) -> str | None:
        """Procedural handler name, or None for declarative rules."""
        return self.kind.handler if isinstance(self.kind, Builtin) else None

    @property
    def hint(self) -> str:
        return self.fix_hint or self.kind.auto_fix_hint()
