"""Core traversal pipeline: classify, filter, sort and walk directory trees.

This package contains no presentation code:
- entry datatypes and sort selections
- content sniffing and per-entry classification
- OR-combined type filters over a static group table
- sibling ordering and the depth-bounded walker
"""

from __future__ import annotations

from .classifier import classify
from .filtering import GROUP_TABLE, matches_filter, matches_predicate, unknown_filters
from .sniff import sniff_media_type
from .sorting import sort_entries
from .types import Entry, EntryKind, SortDirection, SortKey
from .walker import EntryVisit, ScanFailure, SymlinkCycleError, WalkOptions, iter_tree, list_directory, walk

__all__ = [
    "Entry",
    "EntryKind",
    "EntryVisit",
    "GROUP_TABLE",
    "ScanFailure",
    "SortDirection",
    "SortKey",
    "SymlinkCycleError",
    "WalkOptions",
    "classify",
    "iter_tree",
    "list_directory",
    "matches_filter",
    "matches_predicate",
    "sniff_media_type",
    "sort_entries",
    "unknown_filters",
    "walk",
]
