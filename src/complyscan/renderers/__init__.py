"""
Renderers for complyscan.

Output formatters for scan reports: plain text, Rich terminal and JSON.
"""

from complyscan.renderers.json_renderer import JsonRenderer, format_report_json
from complyscan.renderers.terminal import TerminalRenderer
from complyscan.renderers.text import TextRenderer, format_report_text

__all__ = [
    "JsonRenderer",
    "TerminalRenderer",
    "TextRenderer",
    "format_report_json",
    "format_report_text",
]
