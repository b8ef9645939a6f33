"""Render walker events and content excerpts as a markdown or text report.

Rows are produced lazily so the CLI can stream large trees. Nesting is shown
by indentation only: two spaces per depth level below the root.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from ..search.content import ContentExtract, ContentLine, Elision, ExtractStatus, extract_content
from ..tree_model import Entry, EntryVisit, SortDirection, SortKey, WalkOptions, iter_tree
from .format import display_text, format_modified, format_size, highlight_spans
from .language import guess_language

MARKDOWN = "markdown"
TEXT = "text"
OUTPUT_FORMATS = (MARKDOWN, TEXT)
DEFAULT_MAX_FILE_SIZE = 100_000
INDENT = "  "
GUTTER = "     │"


@dataclass(frozen=True)
class ReportOptions:
    """Presentation settings; traversal settings live in ``WalkOptions``."""

    output_format: str = MARKDOWN
    show_content: bool = False
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    pattern: re.Pattern[str] | None = None
    context: int = 0
    whole_file: bool = False
    highlight: bool = False

    @property
    def markdown(self) -> bool:
        return self.output_format == MARKDOWN


def root_label(root: Path) -> str:
    return display_text(root.name) or "."


def header_lines(
    root: Path,
    walk_options: WalkOptions,
    options: ReportOptions,
    generated_at: datetime | None = None,
) -> list[str]:
    """Banner rows: title, timestamp and any non-default filter/pattern/sort."""
    if generated_at is None:
        generated_at = datetime.now(timezone.utc)
    title = "# 📁 Project Source Tree" if options.markdown else "Project Source Tree"
    lines = [f"{title}: {root_label(root)}", f"Generated on {generated_at.isoformat()}"]
    if walk_options.filters:
        lines.append(f"Filters: {list(walk_options.filters)}")
    if options.pattern is not None:
        lines.append(f"Content Pattern: {display_text(options.pattern.pattern)}")
    if walk_options.sort_key is not SortKey.NAME or walk_options.sort_direction is not SortDirection.ASC:
        key = walk_options.sort_key.value.capitalize()
        direction = walk_options.sort_direction.value.capitalize()
        lines.append(f"Sorting: {key} ({direction})")
    lines.append("")
    return lines


def footer_lines(options: ReportOptions) -> list[str]:
    return ["", "_End of source tree_" if options.markdown else "End of source tree"]


def directory_row(entry: Entry, prefix: str, options: ReportOptions) -> str:
    if options.markdown:
        return f"{prefix}📁 **{display_text(entry.name)}/**"
    return f"{prefix}[DIR] {display_text(entry.name)}/"


def file_row(entry: Entry, prefix: str, options: ReportOptions) -> str:
    icon = "📄 " if options.markdown else "[FILE] "
    ext_info = f".{entry.extension}" if entry.extension is not None else ""
    return (
        f"{prefix}{icon}{display_text(entry.name)} ({format_size(entry.size)}, {format_modified(entry.mtime_ns)})"
        f" [{entry.media_type}]{ext_info}"
    )


def numbered_line(line: ContentLine, prefix: str, highlight: bool) -> str:
    marker = "> " if line.is_match else "  "
    text = highlight_spans(line) if highlight and line.is_match else line.text
    return f"{prefix}{line.number:4} │{marker}{text}"


def elision_lines(prefix: str) -> list[str]:
    return [f"{prefix}{GUTTER}", f"{prefix}   ⋯ │ ...", f"{prefix}{GUTTER}"]


def excerpt_lines(extract: ContentExtract, prefix: str, highlight: bool) -> list[str]:
    """Rows between the content fences for one extraction result."""
    if extract.status is ExtractStatus.READ_ERROR:
        return [f"{prefix}    ! Cannot read file"]

    lines = [f"{prefix}     ┌ Total lines: {extract.total_lines}", f"{prefix}{GUTTER}"]
    if extract.status is ExtractStatus.NO_MATCHES:
        lines.append(f"{prefix}    ! No matches found")
        lines.append(f"{prefix}{GUTTER}")
        return lines

    for item in extract.items:
        if isinstance(item, Elision):
            lines.extend(elision_lines(prefix))
        else:
            lines.append(numbered_line(item, prefix, highlight))
    lines.append(f"{prefix}{GUTTER}")
    return lines


def content_block(entry: Entry, prefix: str, options: ReportOptions) -> list[str]:
    """Content section under a file row, or an oversize notice; empty for binaries."""
    if entry.size > options.max_file_size:
        return [f"{prefix}  (File not displayed - {format_size(entry.size)})"]
    if not entry.is_text:
        return []

    extract = extract_content(
        entry.path,
        options.pattern,
        context=options.context,
        whole_file=options.whole_file,
        highlight=options.highlight,
    )
    if options.markdown:
        opening = [f"{prefix}  Content:", f"{prefix}  ```{guess_language(entry.name)}"]
        closing = [f"{prefix}  ```"]
    else:
        opening = [f"{prefix}  --- Content Start ---"]
        closing = [f"{prefix}  --- Content End ---"]
    return ["", *opening, *excerpt_lines(extract, prefix, options.highlight), *closing, ""]


def tree_lines(root: Path, walk_options: WalkOptions, options: ReportOptions) -> Iterator[str]:
    """Yield tree rows (and content blocks) for every walker event."""
    for event in iter_tree(root, walk_options):
        prefix = INDENT * (event.depth - 1)
        if not isinstance(event, EntryVisit):
            directory = display_text(str(event.directory))
            yield f"{prefix}! Error reading directory '{directory}': {display_text(str(event.error))}"
            continue
        entry = event.entry
        if entry.is_dir:
            yield directory_row(entry, prefix, options)
            continue
        yield file_row(entry, prefix, options)
        if options.show_content:
            yield from content_block(entry, prefix, options)


def iter_report(
    root: Path,
    walk_options: WalkOptions,
    options: ReportOptions,
    generated_at: datetime | None = None,
) -> Iterator[str]:
    """Yield every report row: header, tree and footer."""
    yield from header_lines(root, walk_options, options, generated_at)
    yield from tree_lines(root, walk_options, options)
    yield from footer_lines(options)


__all__ = [
    "DEFAULT_MAX_FILE_SIZE",
    "MARKDOWN",
    "OUTPUT_FORMATS",
    "ReportOptions",
    "TEXT",
    "content_block",
    "excerpt_lines",
    "file_row",
    "footer_lines",
    "header_lines",
    "iter_report",
    "tree_lines",
]
