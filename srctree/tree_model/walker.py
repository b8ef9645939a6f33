"""Depth-bounded recursive directory walking.

Each directory level is scanned, classified, filtered and sorted
independently. Events are produced depth-first in display order: a directory
entry is followed immediately by its own subtree.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .classifier import classify
from .filtering import GROUP_TABLE, matches_filter
from .sorting import sort_entries
from .types import Entry, SortDirection, SortKey

logger = logging.getLogger(__name__)


class SymlinkCycleError(OSError):
    """Raised (as a scan failure) when a directory is already on the descent path."""


@dataclass(frozen=True)
class WalkOptions:
    """Run-level traversal settings shared read-only by every directory scan."""

    max_depth: int = 1
    exclude: frozenset[str] = frozenset()
    filters: tuple[str, ...] = ()
    sort_key: SortKey = SortKey.NAME
    sort_direction: SortDirection = SortDirection.ASC
    dirs_first: bool = True
    groups: Mapping[str, frozenset[str]] = field(default_factory=lambda: GROUP_TABLE)

    def allows_depth(self, depth: int) -> bool:
        return self.max_depth == 0 or depth <= self.max_depth


@dataclass(frozen=True)
class EntryVisit:
    entry: Entry
    depth: int


@dataclass(frozen=True)
class ScanFailure:
    directory: Path
    error: OSError
    depth: int


WalkEvent = EntryVisit | ScanFailure


def list_directory(directory: Path, options: WalkOptions) -> tuple[list[Entry], OSError | None]:
    """Return the filtered, sorted children of one directory.

    Returns ``(entries, scan_error)``. Entries whose metadata cannot be read
    are dropped; only a failure to open the directory is reported.
    """
    entries: list[Entry] = []
    try:
        with os.scandir(directory) as scanner:
            for child in scanner:
                if child.name in options.exclude:
                    continue
                child_path = Path(child.path)
                try:
                    entry = classify(child_path, child.stat(follow_symlinks=False))
                except OSError as exc:
                    logger.debug("dropping unreadable entry %s: %s", child_path, exc)
                    continue
                if matches_filter(entry, options.filters, options.groups):
                    entries.append(entry)
    except OSError as exc:
        logger.debug("cannot scan directory %s: %s", directory, exc)
        return [], exc

    return sort_entries(entries, options.sort_key, options.sort_direction, options.dirs_first), None


def _directory_identity(path: Path) -> tuple[int, int] | None:
    try:
        info = path.stat()
    except OSError:
        return None
    return info.st_dev, info.st_ino


def iter_tree(root: Path, options: WalkOptions) -> Iterator[WalkEvent]:
    """Yield visit and scan-failure events for the subtree under ``root``.

    Raises ``NotADirectoryError`` when ``root`` is not a directory.
    """
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    root_identity = _directory_identity(root)
    ancestors: list[tuple[int, int]] = [root_identity] if root_identity is not None else []

    def walk_level(directory: Path, depth: int) -> Iterator[WalkEvent]:
        if not options.allows_depth(depth):
            return
        entries, scan_error = list_directory(directory, options)
        if scan_error is not None:
            yield ScanFailure(directory=directory, error=scan_error, depth=depth)
            return

        for entry in entries:
            yield EntryVisit(entry=entry, depth=depth)
            if not entry.is_dir or not options.allows_depth(depth + 1):
                continue
            identity = _directory_identity(entry.path)
            if identity is not None and identity in ancestors:
                yield ScanFailure(
                    directory=entry.path,
                    error=SymlinkCycleError(f"symlink cycle back to an ancestor: {entry.path}"),
                    depth=depth + 1,
                )
                continue
            if identity is not None:
                ancestors.append(identity)
            try:
                yield from walk_level(entry.path, depth + 1)
            finally:
                if identity is not None:
                    ancestors.pop()

    yield from walk_level(root, 1)


def walk(
    root: Path,
    options: WalkOptions,
    on_entry: Callable[[Entry, int], None],
    on_error: Callable[[Path, OSError, int], None] | None = None,
) -> None:
    """Callback form of :func:`iter_tree`; scan failures go to ``on_error`` when given."""
    for event in iter_tree(root, options):
        if isinstance(event, EntryVisit):
            on_entry(event.entry, event.depth)
        elif on_error is not None:
            on_error(event.directory, event.error, event.depth)


__all__ = [
    "EntryVisit",
    "ScanFailure",
    "SymlinkCycleError",
    "WalkEvent",
    "WalkOptions",
    "iter_tree",
    "list_directory",
    "walk",
]
