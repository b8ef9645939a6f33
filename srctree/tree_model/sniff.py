"""Content-based media-type sniffing for regular files.

Binary formats are recognized from leading magic bytes. Anything else is
probed for text: a NUL byte means binary, otherwise the sample must decode as
UTF-8 or contain few control bytes. Text subtypes come from the shebang line
or the ``mimetypes`` table and fall back to ``text/plain``.
"""

from __future__ import annotations

import mimetypes
from pathlib import Path

SNIFF_PROBE_BYTES = 8_192
DEFAULT_MEDIA_TYPE = "application/octet-stream"
EMPTY_MEDIA_TYPE = "application/x-zerosize"
TEXT_MEDIA_TYPE = "text/plain"
TAR_MAGIC_OFFSET = 257
NON_TEXT_RATIO_LIMIT = 0.30

_MAGIC_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"PK\x03\x04", "application/zip"),
    (b"PK\x05\x06", "application/zip"),
    (b"PK\x07\x08", "application/zip"),
    (b"\x1f\x8b", "application/x-gzip"),
    (b"BZh", "application/x-bzip2"),
    (b"\xfd7zXZ\x00", "application/x-xz"),
    (b"7z\xbc\xaf\x27\x1c", "application/x-7z-compressed"),
    (b"%PDF-", "application/pdf"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"\x7fELF", "application/x-executable"),
    (b"\xcf\xfa\xed\xfe", "application/x-mach-binary"),
    (b"\xfe\xed\xfa\xcf", "application/x-mach-binary"),
    (b"SQLite format 3\x00", "application/vnd.sqlite3"),
)

_SHEBANG_MEDIA_TYPES: tuple[tuple[str, str], ...] = (
    ("python", "text/x-python"),
    ("node", "text/javascript"),
    ("perl", "text/x-perl"),
    ("ruby", "text/x-ruby"),
    ("sh", "text/x-shellscript"),
)

# Printable ASCII plus BEL, BS, TAB, LF, FF, CR and ESC.
_TEXT_BYTES = bytes({7, 8, 9, 10, 12, 13, 27} | set(range(32, 127)))


def _magic_media_type(sample: bytes) -> str | None:
    for signature, media_type in _MAGIC_SIGNATURES:
        if sample.startswith(signature):
            return media_type
    if sample.startswith(b"RIFF") and sample[8:12] == b"WEBP":
        return "image/webp"
    if sample[TAR_MAGIC_OFFSET : TAR_MAGIC_OFFSET + 5] == b"ustar":
        return "application/x-tar"
    return None


def looks_like_text(sample: bytes) -> bool:
    """Return whether a byte sample reads as text rather than binary data."""
    if b"\x00" in sample:
        return False
    try:
        sample.decode("utf-8")
        return True
    except UnicodeDecodeError as exc:
        # The probe may cut a multi-byte sequence at the end of the sample.
        if exc.reason == "unexpected end of data":
            return True
    non_text = len(sample.translate(None, _TEXT_BYTES))
    return non_text / max(len(sample), 1) <= NON_TEXT_RATIO_LIMIT


def _text_media_type(path: Path, sample: bytes) -> str:
    if sample.startswith(b"#!"):
        first_line = sample.split(b"\n", 1)[0].decode("utf-8", errors="replace")
        interpreter = first_line.rsplit("/", 1)[-1]
        for marker, media_type in _SHEBANG_MEDIA_TYPES:
            if marker in interpreter:
                return media_type
    guessed, _encoding = mimetypes.guess_type(path.name, strict=False)
    if guessed and guessed.startswith("text/"):
        return guessed
    return TEXT_MEDIA_TYPE


def sniff_media_type(path: Path) -> str:
    """Return the media type of a regular file from its leading bytes.

    Never raises: unreadable files report ``application/octet-stream``.
    """
    try:
        with path.open("rb") as handle:
            sample = handle.read(SNIFF_PROBE_BYTES)
    except OSError:
        return DEFAULT_MEDIA_TYPE
    if not sample:
        return EMPTY_MEDIA_TYPE

    media_type = _magic_media_type(sample)
    if media_type is not None:
        return media_type
    if looks_like_text(sample):
        return _text_media_type(path, sample)
    return DEFAULT_MEDIA_TYPE


__all__ = [
    "DEFAULT_MEDIA_TYPE",
    "EMPTY_MEDIA_TYPE",
    "SNIFF_PROBE_BYTES",
    "TEXT_MEDIA_TYPE",
    "looks_like_text",
    "sniff_media_type",
]
