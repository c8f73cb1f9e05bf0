"""
Filesystem adapter for complyscan.

All reads of the scanned project go through FileSystemScanner. Paths handed
to checks are root-relative POSIX strings so results are identical on every
platform.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from complyscan.domain.exceptions import ScanIoError

# Directory names never descended into, at any depth
PRUNED_DIRS = frozenset({"target", "node_modules", "__pycache__"})
# Build and environment directories, pruned only directly under the root
ROOT_PRUNED_DIRS = frozenset({"venv", "build", "dist"})


def glob_to_regex(glob: str) -> re.Pattern[str]:
    """
    Translate a glob into an anchored regular expression.

    ``**/`` matches any number of directories (including none), ``**``
    matches anything, ``*`` matches within one path segment and ``?``
    matches one non-separator character.
    """
    out = ["^"]
    i = 0
    while i < len(glob):
        c = glob[i]
        if c == "*":
            if glob.startswith("**", i):
                if glob.startswith("**/", i):
                    out.append("(?:.*/)?")
                    i += 3
                else:
                    out.append(".*")
                    i += 2
                continue
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        else:
            out.append(re.escape(c))
        i += 1
    out.append("$")
    return re.compile("".join(out))


class FileSystemScanner:
    """
    Adapter for filesystem operations.

    The scanner is read-only: it lists, stats and reads, nothing else.
    """

    def list_files(self, root: Path | str) -> list[str]:
        """
        List every regular file under ``root``.

        Hidden directories and dependency directories are pruned at any depth;
        build output and virtualenv directories only at the root.
        Order is deterministic (directories and files sorted by name).

        Args:
            root: Directory to walk.

        Returns:
            Root-relative POSIX paths.
        """
        root = Path(root)
        files: list[str] = []
        for dirpath, dirnames, filenames in os.walk(root):
            rel_dir = Path(dirpath).relative_to(root)
            at_root = rel_dir == Path(".")
            dirnames[:] = sorted(
                d
                for d in dirnames
                if not d.startswith(".")
                and d not in PRUNED_DIRS
                and not (at_root and d in ROOT_PRUNED_DIRS)
            )
            for name in sorted(filenames):
                files.append((rel_dir / name).as_posix())
        return files

    def exists(self, root: Path | str, relative: str) -> bool:
        """Check if a root-relative path exists."""
        return (Path(root) / relative).exists()

    def is_file(self, root: Path | str, relative: str) -> bool:
        """Check if a root-relative path is a file."""
        return (Path(root) / relative).is_file()

    def is_dir(self, root: Path | str, relative: str) -> bool:
        """Check if a root-relative path is a directory."""
        return (Path(root) / relative).is_dir()

    def read(self, path: Path | str) -> str:
        """
        Read a text file as UTF-8.

        Raises:
            ScanIoError: If the file cannot be read or decoded.
        """
        path = Path(path)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ScanIoError(f"Cannot read {path}: {e}", path=str(path), cause=e) from e
