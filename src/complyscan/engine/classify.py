"""
Project classification.

Detects the project type (from the licence file) for the docs scanner and
the project kind (from pyproject.toml and the package layout) for the
structure scanner.
"""

from __future__ import annotations

import logging
from pathlib import Path

from complyscan.adapters.pyproject import PyProjectManifest
from complyscan.domain.models import ProjectKind, ProjectType

logger = logging.getLogger(__name__)

LICENSE_FILES = ("LICENSE", "LICENSE.md", "LICENSE.txt")

# Upper-cased substrings identifying an OSI/open licence text
OSS_LICENSE_MARKERS = (
    "MIT LICENSE",
    "APACHE LICENSE",
    "GNU GENERAL PUBLIC LICENSE",
    "GNU LESSER GENERAL PUBLIC",
    "BSD ",
    "MOZILLA PUBLIC LICENSE",
    "ISC LICENSE",
    "BOOST SOFTWARE LICENSE",
    "THE UNLICENSE",
    "CREATIVE COMMONS",
    "EUROPEAN UNION PUBLIC",
    "OPEN SOFTWARE LICENSE",
    "ARTISTIC LICENSE",
    "ZLIB LICENSE",
)


def detect_project_type(root: Path | str) -> ProjectType:
    """Open source when a licence file at the root names a known open licence."""
    root = Path(root)
    for name in LICENSE_FILES:
        path = root / name
        if not path.is_file():
            continue
        try:
            text = path.read_text(encoding="utf-8", errors="replace").upper()
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e)
            continue
        if any(marker in text for marker in OSS_LICENSE_MARKERS):
            logger.debug("Detected open source licence in %s", name)
            return ProjectType.OPEN_SOURCE
    return ProjectType.INTERNAL


def _has_package(root: Path) -> bool:
    for base in (root / "src", root):
        if not base.is_dir():
            continue
        for child in base.iterdir():
            if child.is_dir() and not child.name.startswith(".") and (child / "__init__.py").is_file():
                return True
    return False


def _has_main_module(root: Path) -> bool:
    for base in (root / "src", root):
        if (base / "__main__.py").is_file():
            return True
        if base.is_dir():
            for child in base.iterdir():
                if child.is_dir() and (child / "__main__.py").is_file():
                    return True
    return False


def detect_project_kind(
    root: Path | str, manifest: PyProjectManifest | None = None
) -> ProjectKind:
    """
    Classify the package layout.

    A ``[tool.uv.workspace]`` table makes a workspace. Console scripts or a
    ``__main__.py`` make an application, an importable package makes a
    library, and a project with both is ``both``. Defaults to library.
    """
    root = Path(root)
    if manifest is not None and manifest.is_workspace:
        return ProjectKind.WORKSPACE

    is_app = bool(manifest and manifest.scripts) or _has_main_module(root)
    is_lib = _has_package(root)

    if is_app and is_lib:
        kind = ProjectKind.BOTH
    elif is_app:
        kind = ProjectKind.APPLICATION
    else:
        kind = ProjectKind.LIBRARY
    logger.debug("Detected project kind %s", kind.value)
    return kind
