"""Presentation layer: markdown/text report rows built from core results."""

from __future__ import annotations

from .format import display_text, format_modified, format_size, highlight_spans
from .language import guess_language
from .report import (
    DEFAULT_MAX_FILE_SIZE,
    MARKDOWN,
    OUTPUT_FORMATS,
    TEXT,
    ReportOptions,
    iter_report,
)

__all__ = [
    "DEFAULT_MAX_FILE_SIZE",
    "MARKDOWN",
    "OUTPUT_FORMATS",
    "ReportOptions",
    "TEXT",
    "display_text",
    "format_modified",
    "format_size",
    "guess_language",
    "highlight_spans",
    "iter_report",
]
