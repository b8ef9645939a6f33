"""Domain datatypes for classified filesystem entries and sort selection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

ARCHIVE_MEDIA_MARKERS = ("zip", "x-tar", "x-gzip")


class EntryKind(Enum):
    """Filesystem node kind, describing the link target for resolvable symlinks."""

    DIRECTORY = "directory"
    REGULAR = "regular"
    SYMLINK = "symlink"
    SOCKET = "socket"
    PIPE = "pipe"
    BLOCK_DEVICE = "block-device"
    CHAR_DEVICE = "char-device"
    OTHER = "other"


@dataclass(frozen=True)
class Entry:
    """One classified directory child.

    ``media_type`` is sniffed once at classification time and every derived
    predicate reads it from here.
    """

    path: Path
    name: str
    is_dir: bool
    size: int
    mtime_ns: int | None
    extension: str | None
    media_type: str
    kind: EntryKind
    is_symlink: bool = False
    is_executable: bool = False

    @property
    def is_text(self) -> bool:
        return not self.is_dir and self.media_type.startswith("text/")

    @property
    def is_socket(self) -> bool:
        return self.kind is EntryKind.SOCKET

    @property
    def is_pipe(self) -> bool:
        return self.kind is EntryKind.PIPE

    @property
    def is_device(self) -> bool:
        return self.kind in (EntryKind.BLOCK_DEVICE, EntryKind.CHAR_DEVICE)

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith(".")

    @property
    def is_archive(self) -> bool:
        return any(marker in self.media_type for marker in ARCHIVE_MEDIA_MARKERS)


class SortKey(Enum):
    NAME = "name"
    DATE = "date"
    SIZE = "size"
    TYPE = "type"
    EXTENSION = "ext"

    @classmethod
    def parse(cls, text: str) -> SortKey | None:
        """Return the key named by ``text`` or ``None`` when unrecognized."""
        for key in cls:
            if key.value == text:
                return key
        return None


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, text: str) -> SortDirection | None:
        """Return the direction named by ``text`` or ``None`` when unrecognized."""
        for direction in cls:
            if direction.value == text:
                return direction
        return None


def entry_extension(name: str) -> str | None:
    """Return text after the last dot, ``None`` for dotless or dot-leading-only names."""
    stem, dot, suffix = name.rpartition(".")
    if not dot or not stem:
        return None
    return suffix


__all__ = [
    "ARCHIVE_MEDIA_MARKERS",
    "Entry",
    "EntryKind",
    "SortDirection",
    "SortKey",
    "entry_extension",
]
