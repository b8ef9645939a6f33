"""Type-filter predicates evaluated against classified entries.

Filters are combined with OR: an entry is kept when ANY predicate matches.
Passing ``-t ext:py -t group:web`` therefore shows Python files *and* web
files, unlike most multi-flag CLIs where repeated filters narrow the result.
An empty filter list keeps everything.

Predicate grammar:

- ``ext:<X>``   extension equals ``X`` exactly (case-sensitive, no dot)
- ``group:<G>`` extension belongs to group ``G`` of the group table
- keywords: ``binary``, ``text``, ``dir``, ``hidden``, ``empty``, ``all``,
  ``socket``, ``pipe``, ``symlink``, ``device``, ``executable``, ``archive``

Unknown keywords and unknown groups match nothing; they are not errors.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from types import MappingProxyType

from .types import Entry

EXT_PREFIX = "ext:"
GROUP_PREFIX = "group:"

GROUP_TABLE: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "web": frozenset({"html", "htm", "css", "scss", "less", "js", "jsx", "ts", "tsx"}),
        "docs": frozenset({"md", "txt", "pdf", "doc", "docx", "odt", "rtf"}),
        "images": frozenset({"jpg", "jpeg", "png", "gif", "svg", "webp", "bmp"}),
        "code": frozenset(
            {"py", "java", "cpp", "c", "h", "hpp", "cs", "go", "rs", "php", "rb", "pl", "scala", "kt", "swift"}
        ),
        "config": frozenset({"json", "yaml", "yml", "toml", "ini", "conf", "xml"}),
        "data": frozenset({"csv", "sql", "db", "sqlite"}),
        "script": frozenset({"sh", "bash", "zsh", "fish", "ps1", "bat", "cmd"}),
    }
)

KEYWORD_PREDICATES: Mapping[str, Callable[[Entry], bool]] = MappingProxyType(
    {
        "binary": lambda entry: not entry.is_dir and not entry.is_text,
        "text": lambda entry: entry.is_text,
        "dir": lambda entry: entry.is_dir,
        "hidden": lambda entry: entry.is_hidden,
        "empty": lambda entry: not entry.is_dir and entry.size == 0,
        "all": lambda entry: True,
        "socket": lambda entry: entry.is_socket,
        "pipe": lambda entry: entry.is_pipe,
        "symlink": lambda entry: entry.is_symlink,
        "device": lambda entry: entry.is_device,
        "executable": lambda entry: entry.is_executable,
        "archive": lambda entry: entry.is_archive,
    }
)


def matches_predicate(
    entry: Entry,
    predicate: str,
    groups: Mapping[str, frozenset[str]] = GROUP_TABLE,
) -> bool:
    """Evaluate one filter predicate string against ``entry``."""
    if predicate.startswith(EXT_PREFIX):
        return (entry.extension or "") == predicate[len(EXT_PREFIX) :]
    if predicate.startswith(GROUP_PREFIX):
        members = groups.get(predicate[len(GROUP_PREFIX) :])
        if members is None:
            return False
        return (entry.extension or "") in members
    keyword = KEYWORD_PREDICATES.get(predicate)
    if keyword is None:
        return False
    return keyword(entry)


def matches_filter(
    entry: Entry,
    filters: Sequence[str],
    groups: Mapping[str, frozenset[str]] = GROUP_TABLE,
) -> bool:
    """Return whether ``entry`` passes the filter list (OR semantics)."""
    if not filters:
        return True
    return any(matches_predicate(entry, predicate, groups) for predicate in filters)


def unknown_filters(
    filters: Iterable[str],
    groups: Mapping[str, frozenset[str]] = GROUP_TABLE,
) -> list[str]:
    """List predicates that can never match anything."""
    unknown: list[str] = []
    for predicate in filters:
        if predicate.startswith(EXT_PREFIX):
            continue
        if predicate.startswith(GROUP_PREFIX):
            if predicate[len(GROUP_PREFIX) :] not in groups:
                unknown.append(predicate)
            continue
        if predicate not in KEYWORD_PREDICATES:
            unknown.append(predicate)
    return unknown


__all__ = [
    "EXT_PREFIX",
    "GROUP_PREFIX",
    "GROUP_TABLE",
    "KEYWORD_PREDICATES",
    "matches_filter",
    "matches_predicate",
    "unknown_filters",
]
