"""Code-fence language names resolved through Pygments lexers."""

from __future__ import annotations

from functools import lru_cache

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

DEFAULT_LANGUAGE = "text"


@lru_cache(maxsize=256)
def guess_language(filename: str) -> str:
    """Return the first Pygments alias for ``filename``, or ``text``."""
    try:
        lexer = get_lexer_for_filename(filename)
    except ClassNotFound:
        return DEFAULT_LANGUAGE
    if not lexer.aliases:
        return DEFAULT_LANGUAGE
    return lexer.aliases[0]


__all__ = ["DEFAULT_LANGUAGE", "guess_language"]
