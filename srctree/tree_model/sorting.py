"""Deterministic ordering of sibling entries."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .types import Entry, SortDirection, SortKey

_EPOCH_NS = 0

_KEY_FUNCTIONS: dict[SortKey, Callable[[Entry], object]] = {
    SortKey.NAME: lambda entry: entry.name,
    SortKey.DATE: lambda entry: entry.mtime_ns if entry.mtime_ns is not None else _EPOCH_NS,
    SortKey.SIZE: lambda entry: entry.size,
    SortKey.TYPE: lambda entry: entry.media_type,
    SortKey.EXTENSION: lambda entry: entry.extension or "",
}


def sort_entries(
    entries: Iterable[Entry],
    key: SortKey = SortKey.NAME,
    direction: SortDirection = SortDirection.ASC,
    dirs_first: bool = True,
) -> list[Entry]:
    """Return ``entries`` ordered by ``key`` with an optional directory partition.

    The sort is stable, so ties keep encounter order. ``DESC`` reverses the
    finished sequence, which also moves the directory partition to the end.
    """
    key_fn = _KEY_FUNCTIONS[key]
    if dirs_first:
        ordered = sorted(entries, key=lambda entry: (not entry.is_dir, key_fn(entry)))
    else:
        ordered = sorted(entries, key=key_fn)
    if direction is SortDirection.DESC:
        ordered.reverse()
    return ordered


__all__ = ["sort_entries"]
