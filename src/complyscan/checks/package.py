"""
Python package structure checks.

These handlers back the structure scanner. Most of them need the parsed
pyproject.toml and skip when the project has none.
"""

from __future__ import annotations

import ast
import logging
import re
from abc import abstractmethod
from typing import TYPE_CHECKING

from complyscan.checks.base import BaseCheck
from complyscan.domain.exceptions import ScanIoError
from complyscan.domain.models import CheckResult, Violation

if TYPE_CHECKING:
    from complyscan.engine.context import ScanContext

logger = logging.getLogger(__name__)

MANIFEST = "pyproject.toml"
TEST_FILE_RE = re.compile(r"^(test_.+|.+_test)\.py$")
SCRIPT_NAME_RE = re.compile(r"^[a-z][a-z0-9_-]*$")
TEST_SUPPORT_FILES = frozenset({"conftest.py", "__init__.py"})


def import_name(project_name: str) -> str:
    """The import package name conventionally derived from a distribution name."""
    return re.sub(r"[-.]+", "_", project_name).lower()


def package_dir(context: ScanContext) -> str | None:
    """Root-relative directory of the project's import package, if present."""
    if context.manifest is None or context.manifest.name is None:
        return None
    name = import_name(context.manifest.name)
    for candidate in (f"src/{name}", name):
        if context.is_file(f"{candidate}/__init__.py"):
            return candidate
    return None


def _module_file(context: ScanContext, module: str) -> str | None:
    relative = module.replace(".", "/")
    for base in ("src/", ""):
        for candidate in (f"{base}{relative}.py", f"{base}{relative}/__init__.py"):
            if context.is_file(candidate):
                return candidate
    return None


class _ManifestCheck(BaseCheck):
    """Skips when the project has no parsed pyproject.toml."""

    def run(self, context: ScanContext) -> CheckResult:
        if context.manifest is None:
            return self._skip(f"No {MANIFEST} found")
        return self._inspect(context)

    @abstractmethod
    def _inspect(self, context: ScanContext) -> CheckResult:
        raise NotImplementedError


class PackageRootExists(_ManifestCheck):
    """The import package named after the project exists in src/ or at the root."""

    def _inspect(self, context):
        name = context.manifest.name
        if name is None:
            return self._outcome([self._violation("project.name is not declared", MANIFEST)])
        if package_dir(context) is not None:
            return self._outcome([])
        expected = import_name(name)
        return self._outcome(
            [
                self._violation(
                    f"Neither src/{expected}/__init__.py nor {expected}/__init__.py exists",
                    f"src/{expected}",
                )
            ]
        )


class LicenseDeclared(_ManifestCheck):
    """The project declares a licence in metadata or ships a licence file."""

    def _inspect(self, context):
        manifest = context.manifest
        if manifest.has("project.license") or manifest.has("project.license-files"):
            return self._outcome([])
        if any(context.is_file(name) for name in ("LICENSE", "LICENSE.md", "LICENSE.txt")):
            return self._outcome([])
        return self._outcome(
            [self._violation("No project.license field and no LICENSE file", MANIFEST)]
        )


class ScriptTargetsResolve(_ManifestCheck):
    """Every console script points at a module that exists."""

    def _inspect(self, context):
        violations: list[Violation] = []
        for script, target in context.manifest.scripts.items():
            module = target.split(":", 1)[0].strip()
            if _module_file(context, module) is None:
                violations.append(
                    self._violation(
                        f"Script '{script}' target module '{module}' does not resolve to a file",
                        MANIFEST,
                    )
                )
        return self._outcome(violations)


class ScriptNamesValid(_ManifestCheck):
    """Console script names are lowercase with hyphens or underscores."""

    def _inspect(self, context):
        return self._outcome(
            [
                self._violation(
                    f"Script name '{script}' should be lowercase with hyphens or underscores",
                    MANIFEST,
                )
                for script in context.manifest.scripts
                if not SCRIPT_NAME_RE.match(script)
            ]
        )


class WorkspaceMembersExist(_ManifestCheck):
    """Every workspace member pattern resolves to at least one project."""

    def _inspect(self, context):
        violations: list[Violation] = []
        for member in context.manifest.workspace_members:
            matches = [p for p in context.root.glob(member) if (p / MANIFEST).is_file()]
            if not matches:
                violations.append(
                    self._violation(
                        f"Workspace member '{member}' matches no directory with a {MANIFEST}",
                        MANIFEST,
                    )
                )
        return self._outcome(violations)


class TestFilesNaming(BaseCheck):
    """Test modules are named test_*.py or *_test.py."""

    __test__ = False

    def run(self, context: ScanContext) -> CheckResult:
        test_files = [f for f in context.files_under("tests") if f.endswith(".py")]
        if not test_files:
            return self._skip("No Python files in tests/")

        return self._outcome(
            [
                self._violation(
                    f"Test file '{path.rsplit('/', 1)[-1]}' should be named test_*.py or *_test.py",
                    path,
                )
                for path in test_files
                if path.rsplit("/", 1)[-1] not in TEST_SUPPORT_FILES
                and not TEST_FILE_RE.match(path.rsplit("/", 1)[-1])
            ]
        )


class TestFunctionsNamed(BaseCheck):
    """Functions in test modules that assert something are collected by pytest."""

    __test__ = False

    def run(self, context: ScanContext) -> CheckResult:
        test_files = [
            f
            for f in context.files_under("tests")
            if TEST_FILE_RE.match(f.rsplit("/", 1)[-1])
        ]
        if not test_files:
            return self._skip("No test modules in tests/")

        violations: list[Violation] = []
        for path in test_files:
            try:
                tree = ast.parse(context.read(path), filename=path)
            except ScanIoError as e:
                logger.warning("Rule %d: skipping unreadable %s: %s", self.id, path, e.message)
                continue
            except SyntaxError as e:
                violations.append(self._violation(f"Cannot parse test module: {e.msg}", path))
                continue
            for node in tree.body:
                if (
                    isinstance(node, ast.FunctionDef)
                    and not node.name.startswith(("test", "_"))
                    and not node.decorator_list
                    and any(isinstance(n, ast.Assert) for n in ast.walk(node))
                ):
                    violations.append(
                        self._violation(
                            f"Function '{node.name}' asserts but is not named test_*", path
                        )
                    )
        return self._outcome(violations)


class NoTestsInPackage(BaseCheck):
    """Test modules live under tests/, not inside the import package."""

    def run(self, context: ScanContext) -> CheckResult:
        package = package_dir(context)
        if package is None:
            return self._skip("Import package not found")
        return self._outcome(
            [
                self._violation(f"Test module '{path}' found inside the package", path)
                for path in context.files_under(package)
                if TEST_FILE_RE.match(path.rsplit("/", 1)[-1])
            ]
        )


class InitFilesPresent(BaseCheck):
    """Every sub-directory of the package holding Python modules has an __init__.py."""

    def run(self, context: ScanContext) -> CheckResult:
        package = package_dir(context)
        if package is None:
            return self._skip("Import package not found")

        dirs = sorted(
            {path.rsplit("/", 1)[0] for path in context.files_under(package) if path.endswith(".py")}
        )
        return self._outcome(
            [
                self._violation(f"Directory '{d}' has Python modules but no __init__.py", d)
                for d in dirs
                if not context.is_file(f"{d}/__init__.py")
            ]
        )


class PyTypedMarker(BaseCheck):
    """Libraries ship a py.typed marker."""

    def run(self, context: ScanContext) -> CheckResult:
        package = package_dir(context)
        if package is None:
            return self._skip("Import package not found")
        if context.is_file(f"{package}/py.typed"):
            return self._outcome([])
        return self._outcome(
            [self._violation(f"{package}/py.typed does not exist", f"{package}/py.typed")]
        )


class DocsDirExists(BaseCheck):
    def run(self, context: ScanContext) -> CheckResult:
        if context.is_dir("docs") or context.is_dir("doc"):
            return self._outcome([])
        return self._outcome([self._violation("Neither docs/ nor doc/ exists", "docs")])
