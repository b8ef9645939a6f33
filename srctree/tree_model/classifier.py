"""Classify one filesystem path into an immutable :class:`Entry`."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from .sniff import sniff_media_type
from .types import Entry, EntryKind, entry_extension

EXECUTABLE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH

_INODE_MEDIA_TYPES = {
    EntryKind.DIRECTORY: "inode/directory",
    EntryKind.SYMLINK: "inode/symlink",
    EntryKind.SOCKET: "inode/socket",
    EntryKind.PIPE: "inode/fifo",
    EntryKind.BLOCK_DEVICE: "inode/blockdevice",
    EntryKind.CHAR_DEVICE: "inode/chardevice",
}


def entry_kind(mode: int) -> EntryKind:
    """Map ``st_mode`` file-type bits to an :class:`EntryKind`."""
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryKind.REGULAR
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISSOCK(mode):
        return EntryKind.SOCKET
    if stat.S_ISFIFO(mode):
        return EntryKind.PIPE
    if stat.S_ISBLK(mode):
        return EntryKind.BLOCK_DEVICE
    if stat.S_ISCHR(mode):
        return EntryKind.CHAR_DEVICE
    return EntryKind.OTHER


def classify(path: Path, link_stat: os.stat_result | None = None) -> Entry:
    """Build an :class:`Entry` for ``path``.

    ``link_stat`` may carry an already-read ``lstat`` result (``os.scandir``
    caches one). Symlinks are described by their target when it can be
    stat'ed, otherwise by the link itself. Raises ``OSError`` when the entry's
    own metadata cannot be read.
    """
    if link_stat is None:
        link_stat = os.lstat(path)
    is_symlink = stat.S_ISLNK(link_stat.st_mode)

    info = link_stat
    if is_symlink:
        try:
            info = os.stat(path)
        except OSError:
            info = link_stat

    kind = entry_kind(info.st_mode)
    is_dir = kind is EntryKind.DIRECTORY
    if kind is EntryKind.REGULAR:
        media_type = sniff_media_type(path)
    else:
        media_type = _INODE_MEDIA_TYPES.get(kind, "application/octet-stream")

    return Entry(
        path=path,
        name=path.name,
        is_dir=is_dir,
        size=0 if is_dir else int(info.st_size),
        mtime_ns=int(info.st_mtime_ns),
        extension=entry_extension(path.name),
        media_type=media_type,
        kind=kind,
        is_symlink=is_symlink,
        is_executable=not is_dir and bool(info.st_mode & EXECUTABLE_BITS),
    )


__all__ = ["EXECUTABLE_BITS", "classify", "entry_kind"]
