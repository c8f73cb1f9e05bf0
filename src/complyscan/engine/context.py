"""
Scan context.

The context is the read-only snapshot every check receives: the file list,
the resolved classification and a lazily filled content cache.
"""

from __future__ import annotations

import logging
from pathlib import Path

from complyscan.adapters.fs import FileSystemScanner, glob_to_regex
from complyscan.adapters.pyproject import MANIFEST_NAME, PyProjectManifest
from complyscan.domain.models import ProjectKind, ProjectScope, ProjectType

logger = logging.getLogger(__name__)

# Directories whose children are treated as modules when they hold a manifest
MODULE_PARENTS = ("modules", "packages", "crates")
MODULE_MANIFESTS = (
    "pyproject.toml",
    "setup.py",
    "setup.cfg",
    "package.json",
    "Cargo.toml",
    "go.mod",
    "pom.xml",
    "build.gradle",
)
# Root children never treated as modules
NON_MODULE_DIRS = frozenset({"docs", "tests", "src", "target", "node_modules"})


class ContentCache:
    """
    Reads file content on first request and keeps it for the rest of the scan.

    Failed reads are not cached: every request for an unreadable file raises
    ScanIoError again.
    """

    def __init__(self, root: Path, scanner: FileSystemScanner) -> None:
        self._root = root
        self._scanner = scanner
        self._content: dict[str, str] = {}

    def read(self, relative: str) -> str:
        if relative not in self._content:
            self._content[relative] = self._scanner.read(self._root / relative)
        return self._content[relative]

    def __contains__(self, relative: object) -> bool:
        return relative in self._content

    def __len__(self) -> int:
        return len(self._content)


class ScanContext:
    """Snapshot of the project under scan."""

    def __init__(
        self,
        root: Path,
        files: tuple[str, ...],
        scanner: FileSystemScanner | None = None,
        project_type: ProjectType = ProjectType.INTERNAL,
        project_kind: ProjectKind | None = None,
        scope: ProjectScope = ProjectScope.LARGE,
        manifest: PyProjectManifest | None = None,
        modules: list[str] | None = None,
    ) -> None:
        self.root = root
        self.files = files
        self.scanner = scanner or FileSystemScanner()
        self.cache = ContentCache(root, self.scanner)
        self.project_type = project_type
        self.project_kind = project_kind
        self.scope = scope
        self.manifest = manifest
        self.modules = modules

    @classmethod
    def build(
        cls,
        root: Path,
        scanner: FileSystemScanner | None = None,
        **classification,
    ) -> ScanContext:
        """Walk ``root`` and build a context around the resulting file list."""
        scanner = scanner or FileSystemScanner()
        files = tuple(scanner.list_files(root))
        logger.debug("Indexed %d files under %s", len(files), root)
        return cls(root, files, scanner=scanner, **classification)

    def read(self, relative: str) -> str:
        """Read a root-relative file through the cache."""
        return self.cache.read(relative)

    def exists(self, relative: str) -> bool:
        return self.scanner.exists(self.root, relative)

    def is_file(self, relative: str) -> bool:
        return self.scanner.is_file(self.root, relative)

    def is_dir(self, relative: str) -> bool:
        return self.scanner.is_dir(self.root, relative)

    def glob(self, pattern: str) -> list[str]:
        """Files in the snapshot matching a glob, in snapshot order."""
        regex = glob_to_regex(pattern)
        return [f for f in self.files if regex.match(f)]

    def files_under(self, prefix: str) -> list[str]:
        """Files in the snapshot below a directory prefix."""
        prefix = prefix.rstrip("/") + "/"
        return [f for f in self.files if f.startswith(prefix)]

    def discover_modules(self) -> list[str]:
        """
        Root-relative paths of the project's modules.

        A module is a direct child of ``modules/``, ``packages/``, ``crates/``
        or of the root itself that contains its own manifest. When a modules
        filter is configured only modules with those names are returned.
        """
        candidates: list[Path] = []
        for parent in MODULE_PARENTS:
            base = self.root / parent
            if base.is_dir():
                candidates.extend(p for p in base.iterdir() if p.is_dir())
        candidates.extend(
            p
            for p in self.root.iterdir()
            if p.is_dir()
            and not p.name.startswith(".")
            and p.name not in MODULE_PARENTS
            and p.name not in NON_MODULE_DIRS
        )

        found: list[str] = []
        for path in candidates:
            if not any((path / m).is_file() for m in MODULE_MANIFESTS):
                continue
            if self.modules and path.name not in self.modules:
                continue
            found.append(path.relative_to(self.root).as_posix())
        return sorted(found)

    @property
    def has_manifest(self) -> bool:
        return self.manifest is not None or MANIFEST_NAME in self.files
