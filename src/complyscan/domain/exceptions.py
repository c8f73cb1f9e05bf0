"""
Exception hierarchy for complyscan.

All exceptions inherit from ScanError for easy catching. Path and config
errors abort a scan before any check runs; I/O errors raised while a single
check reads a file are turned into a skipped outcome by the engine.
"""

from __future__ import annotations


class ScanError(Exception):
    """Base exception for all complyscan errors."""

    kind = "scan"

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"{self.kind.capitalize()} error: {self.message}"


class ScanIoError(ScanError):
    """Raised when a file under the scan root cannot be read."""

    kind = "io"

    def __init__(self, message: str, path: str | None = None, cause: BaseException | None = None) -> None:
        super().__init__(message, {"path": path})
        self.path = path
        self.cause = cause


class ScanPathError(ScanError):
    """Raised when the scan root does not exist or cannot be resolved."""

    kind = "path"

    def __init__(self, message: str, root: str | None = None) -> None:
        super().__init__(message, {"root": root})
        self.root = root


class ScanConfigError(ScanError):
    """Raised when a rule document or scan configuration is invalid."""

    kind = "config"

    def __init__(
        self,
        message: str,
        source: str | None = None,
        rule_id: int | None = None,
    ) -> None:
        super().__init__(message, {"source": source, "rule_id": rule_id})
        self.source = source
        self.rule_id = rule_id
