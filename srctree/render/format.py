"""Size, timestamp and highlight formatting helpers for report rows."""

from __future__ import annotations

import os
from datetime import datetime, timezone

from ..search.content import ContentLine

HIGHLIGHT_START = "\033[1;33m"
HIGHLIGHT_END = "\033[0m"

_SIZE_UNITS = ((1_073_741_824, "G"), (1_048_576, "M"), (1024, "K"))


def display_text(text: str) -> str:
    """Replace undecodable filename bytes (surrogate escapes) with U+FFFD."""
    return os.fsencode(text).decode("utf-8", "replace")


def format_size(size: int) -> str:
    """Render a byte count with one integer-divided unit (``G``/``M``/``K``/``B``)."""
    for threshold, unit in _SIZE_UNITS:
        if size >= threshold:
            return f"{size // threshold}{unit}"
    return f"{size}B"


def format_timestamp_ns(mtime_ns: int) -> str:
    return datetime.fromtimestamp(mtime_ns / 1_000_000_000, tz=timezone.utc).isoformat()


def format_modified(mtime_ns: int | None) -> str:
    if mtime_ns is None:
        return "unknown"
    return format_timestamp_ns(mtime_ns)


def highlight_spans(line: ContentLine) -> str:
    """Wrap each recorded match span of ``line`` in bold-yellow ANSI codes."""
    if not line.spans:
        return line.text
    out: list[str] = []
    cursor = 0
    for start, end in line.spans:
        out.append(line.text[cursor:start])
        out.append(f"{HIGHLIGHT_START}{line.text[start:end]}{HIGHLIGHT_END}")
        cursor = end
    out.append(line.text[cursor:])
    return "".join(out)


__all__ = [
    "HIGHLIGHT_END",
    "HIGHLIGHT_START",
    "display_text",
    "format_modified",
    "format_size",
    "format_timestamp_ns",
    "highlight_spans",
]
