"""
Per-module documentation checks.

Modules are discovered through the scan context (direct children of
modules/, packages/, crates/ or the root that carry their own manifest).
A project without modules passes every check here vacuously.
"""

from __future__ import annotations

import logging
import posixpath
from typing import TYPE_CHECKING

from complyscan.checks.base import BaseCheck
from complyscan.checks.docs_navigation import heading_mentions
from complyscan.domain.exceptions import ScanIoError
from complyscan.domain.models import CheckResult, Violation

if TYPE_CHECKING:
    from complyscan.engine.context import ScanContext

logger = logging.getLogger(__name__)

MODULE_W3H_KEYWORDS = ("what", "why", "how")
TOOLCHAIN_DOC = "docs/3-design/toolchain.md"
DEPLOYMENT_DIR = "docs/6-deployment"
DEPLOYMENT_FILES = ("README.md", "prerequisites.md", "installation.md")


def module_name(module: str) -> str:
    return module.rsplit("/", 1)[-1]


def has_direct_files(context: ScanContext, directory: str) -> bool:
    """Whether the snapshot holds a file directly inside ``directory``."""
    return any(posixpath.dirname(f) == directory for f in context.files)


class ModuleReadmeW3h(BaseCheck):
    """
    Module READMEs explain what, why and how.

    Only modules with a docs/README.md are inspected; the configured module
    filter narrows the set further.
    """

    def run(self, context: ScanContext) -> CheckResult:
        violations: list[Violation] = []
        for module in context.discover_modules():
            readme = f"{module}/docs/README.md"
            if not context.is_file(readme):
                continue
            try:
                content = context.read(readme)
            except ScanIoError as e:
                logger.warning("Rule %d: skipping unreadable %s: %s", self.id, readme, e.message)
                continue
            missing = [k for k in MODULE_W3H_KEYWORDS if not heading_mentions(content, k)]
            if missing:
                violations.append(
                    self._violation(
                        f"Module '{module_name(module)}' README missing W3H sections: "
                        f"{', '.join(missing)}",
                        readme,
                    )
                )
        return self._outcome(violations)


class _ModuleFolderCheck(BaseCheck):
    """Every module has a non-empty folder of the given name."""

    folder = ""

    def run(self, context: ScanContext) -> CheckResult:
        return self._outcome(
            [
                self._violation(
                    f"Module '{module_name(module)}' missing {self.folder}/ directory with files",
                    f"{module}/{self.folder}",
                )
                for module in context.discover_modules()
                if not has_direct_files(context, f"{module}/{self.folder}")
            ]
        )


class ModuleExamplesExist(_ModuleFolderCheck):
    folder = "examples"


class ModuleTestsExist(_ModuleFolderCheck):
    folder = "tests"


class ModuleToolchainDocs(BaseCheck):
    """Every module documents its toolchain in docs/3-design/toolchain.md."""

    def run(self, context: ScanContext) -> CheckResult:
        return self._outcome(
            [
                self._violation(
                    f"Module '{module_name(module)}' missing {TOOLCHAIN_DOC}",
                    f"{module}/{TOOLCHAIN_DOC}",
                )
                for module in context.discover_modules()
                if not context.exists(f"{module}/{TOOLCHAIN_DOC}")
            ]
        )


class ModuleDeploymentDocs(BaseCheck):
    """
    Module deployment folders are complete.

    Modules without docs/6-deployment/ are not inspected.
    """

    def run(self, context: ScanContext) -> CheckResult:
        violations: list[Violation] = []
        for module in context.discover_modules():
            deploy = f"{module}/{DEPLOYMENT_DIR}"
            if not context.is_dir(deploy):
                continue
            violations.extend(
                self._violation(
                    f"Module '{module_name(module)}' deployment directory missing {name}",
                    f"{deploy}/{name}",
                )
                for name in DEPLOYMENT_FILES
                if not context.exists(f"{deploy}/{name}")
            )
        return self._outcome(violations)
