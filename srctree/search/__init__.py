"""Content search exports: windowed excerpts and highlight spans."""

from __future__ import annotations

from .content import (
    ContentExtract,
    ContentItem,
    ContentLine,
    Elision,
    ExtractStatus,
    extract_content,
    match_spans,
    merge_windows,
    read_text,
)

__all__ = [
    "ContentExtract",
    "ContentItem",
    "ContentLine",
    "Elision",
    "ExtractStatus",
    "extract_content",
    "match_spans",
    "merge_windows",
    "read_text",
]
