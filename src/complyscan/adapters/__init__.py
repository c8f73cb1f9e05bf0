"""
Adapters layer for complyscan.

Contains the infrastructure pieces: filesystem access, manifest parsing
and report sinks.
"""

from complyscan.adapters.fs import FileSystemScanner, glob_to_regex
from complyscan.adapters.pyproject import PyProjectManifest, load_manifest, parse_pyproject
from complyscan.adapters.sinks import FileSink, ReportSink, StdoutSink

__all__ = [
    "FileSystemScanner",
    "glob_to_regex",
    "PyProjectManifest",
    "load_manifest",
    "parse_pyproject",
    "FileSink",
    "ReportSink",
    "StdoutSink",
]
