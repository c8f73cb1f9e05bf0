"""
Default rule catalogues shipped with complyscan.

One YAML document per scanner, read as package data.
"""

from __future__ import annotations

from importlib import resources


def catalogue_name(scanner: str) -> str:
    return f"{scanner}.yaml"


def read_catalogue(scanner: str) -> str:
    """Return the text of the embedded catalogue for ``scanner``."""
    return resources.files(__name__).joinpath(catalogue_name(scanner)).read_text(encoding="utf-8")
