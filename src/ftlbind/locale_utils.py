"""Locale utilities for language tag handling.

Centralizes the conversion between directory-style language tags
(``en_US``, ``pt-BR``) and Babel Locale objects, and the syntactic check
used to decide whether a directory name is a language at all.

Python 3.13+.
"""

from __future__ import annotations

import functools
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "is_language_tag",
    "normalize_locale",
]

# Language subtag, then any number of region/script/variant subtags.
_LANGUAGE_TAG_PATTERN = re.compile(r"[A-Za-z]{2,8}(?:[_-][A-Za-z0-9]{1,8})*")


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


def is_language_tag(name: str) -> bool:
    """Check whether ``name`` is shaped like a language tag.

    Only the syntax is checked; whether CLDR knows the locale is irrelevant
    for loading (plural rules degrade gracefully for unknown locales).

    Example:
        >>> is_language_tag("en_US")
        True
        >>> is_language_tag("zh-Hant-TW")
        True
        >>> is_language_tag("__pycache__")
        False
    """
    return _LANGUAGE_TAG_PATTERN.fullmatch(name) is not None


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid

    Example:
        >>> locale = get_babel_locale("en-US")
        >>> locale.territory
        'US'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))
