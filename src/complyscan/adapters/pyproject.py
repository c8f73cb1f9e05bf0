"""
pyproject.toml parsing for the structure scanner.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

MANIFEST_NAME = "pyproject.toml"

_MISSING = object()


class PyProjectManifest(BaseModel):
    """The parsed subset of a pyproject.toml the structure checks inspect."""

    model_config = ConfigDict(frozen=True)

    data: dict[str, Any] = Field(default_factory=dict, description="Full parsed document")

    @property
    def name(self) -> str | None:
        value = self.get("project.name")
        return value if isinstance(value, str) else None

    @property
    def version(self) -> str | None:
        value = self.get("project.version")
        return value if isinstance(value, str) else None

    @property
    def scripts(self) -> dict[str, str]:
        value = self.get("project.scripts")
        return dict(value) if isinstance(value, dict) else {}

    @property
    def workspace_members(self) -> list[str]:
        value = self.get("tool.uv.workspace.members")
        return [str(m) for m in value] if isinstance(value, list) else []

    @property
    def is_workspace(self) -> bool:
        return self.has("tool.uv.workspace")

    def get(self, dotted_key: str, default: Any = None) -> Any:
        """
        Look up a dotted key path such as ``project.name``.

        Returns ``default`` when any segment is absent or not a table.
        """
        value = self._lookup(dotted_key)
        return default if value is _MISSING else value

    def has(self, dotted_key: str) -> bool:
        return self._lookup(dotted_key) is not _MISSING

    def _lookup(self, dotted_key: str) -> Any:
        node: Any = self.data
        for part in dotted_key.split("."):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node


def parse_pyproject(content: str) -> PyProjectManifest:
    """
    Parse pyproject.toml content.

    Raises:
        tomllib.TOMLDecodeError: If the content is not valid TOML.
    """
    return PyProjectManifest(data=tomllib.loads(content))


def load_manifest(root: Path | str) -> PyProjectManifest | None:
    """
    Load ``pyproject.toml`` from the root, or None when absent or invalid.

    An invalid manifest is logged and treated as absent, so manifest rules
    skip rather than abort the scan.
    """
    path = Path(root) / MANIFEST_NAME
    if not path.is_file():
        return None
    try:
        return parse_pyproject(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring unreadable manifest %s: %s", path, e)
        return None
