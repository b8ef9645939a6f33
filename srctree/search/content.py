"""Pattern-driven content excerpts with context windows and match spans.

``extract_content`` reads a whole file into numbered lines and selects what
to show:

- no pattern: every line
- pattern with ``whole_file``: every line, matches flagged
- pattern otherwise: merged ``[match - context, match + context]`` windows,
  with an :class:`Elision` marker wherever lines are skipped between windows
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ExtractStatus(Enum):
    OK = "ok"
    NO_MATCHES = "no-matches"
    READ_ERROR = "read-error"


@dataclass(frozen=True)
class ContentLine:
    number: int  # 1-based
    text: str
    is_match: bool = False
    spans: tuple[tuple[int, int], ...] = ()


@dataclass(frozen=True)
class Elision:
    """Skipped lines between two windows: ``after_line`` < gap < ``before_line``."""

    after_line: int
    before_line: int


ContentItem = ContentLine | Elision


@dataclass(frozen=True)
class ContentExtract:
    status: ExtractStatus
    items: tuple[ContentItem, ...] = ()
    total_lines: int = 0
    match_count: int = 0
    error: Exception | None = None

    @property
    def lines(self) -> list[ContentLine]:
        return [item for item in self.items if isinstance(item, ContentLine)]


def read_text(path: Path) -> str:
    """Decode as UTF-8 (dropping a leading BOM), falling back to Latin-1."""
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError:
        return path.read_text(encoding="latin-1")


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` and drop one trailing ``\\r`` per line; no phantom last line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def match_spans(pattern: re.Pattern[str], text: str) -> tuple[tuple[int, int], ...]:
    """Return non-overlapping, non-empty ``(start, end)`` occurrences of ``pattern``."""
    return tuple(match.span() for match in pattern.finditer(text) if match.end() > match.start())


def merge_windows(matches: list[int], context: int, total_lines: int) -> list[tuple[int, int]]:
    """Merge ``match ± context`` windows that overlap or touch, clamped to the file."""
    windows: list[tuple[int, int]] = []
    for number in matches:
        start = max(1, number - context)
        end = min(total_lines, number + context)
        if windows and start <= windows[-1][1] + 1:
            windows[-1] = (windows[-1][0], max(windows[-1][1], end))
        else:
            windows.append((start, end))
    return windows


def _compile(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


def extract_content(
    path: Path,
    pattern: str | re.Pattern[str] | None = None,
    context: int = 0,
    whole_file: bool = False,
    highlight: bool = False,
) -> ContentExtract:
    """Read ``path`` and select numbered lines to display.

    Never raises for I/O problems: a read failure is reported as
    ``READ_ERROR`` and a windowed search without hits as ``NO_MATCHES``.
    """
    try:
        lines = split_lines(read_text(path))
    except OSError as exc:
        return ContentExtract(status=ExtractStatus.READ_ERROR, error=exc)
    total = len(lines)

    if pattern is None:
        items = tuple(ContentLine(number=idx, text=text) for idx, text in enumerate(lines, start=1))
        return ContentExtract(status=ExtractStatus.OK, items=items, total_lines=total)

    regex = _compile(pattern)
    matched = {idx for idx, text in enumerate(lines, start=1) if regex.search(text) is not None}

    def make_line(number: int) -> ContentLine:
        text = lines[number - 1]
        is_match = number in matched
        spans = match_spans(regex, text) if highlight and is_match else ()
        return ContentLine(number=number, text=text, is_match=is_match, spans=spans)

    if whole_file:
        items = tuple(make_line(number) for number in range(1, total + 1))
        return ContentExtract(status=ExtractStatus.OK, items=items, total_lines=total, match_count=len(matched))

    if not matched:
        return ContentExtract(status=ExtractStatus.NO_MATCHES, total_lines=total)

    selected: list[ContentItem] = []
    previous_end = 0
    for start, end in merge_windows(sorted(matched), max(0, context), total):
        if previous_end:
            selected.append(Elision(after_line=previous_end, before_line=start))
        selected.extend(make_line(number) for number in range(start, end + 1))
        previous_end = end
    return ContentExtract(
        status=ExtractStatus.OK,
        items=tuple(selected),
        total_lines=total,
        match_count=len(matched),
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
    "split_lines",
]
