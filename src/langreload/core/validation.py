"""Locale code validation.

Single source of truth for the locale code shape used as store keys and
language file stems:

    [a-z]{2} "_" [A-Z]{2}        e.g. en_UK, de_DE, fr_FR

Thread Safety:
    All functions in this module are pure functions with no shared state.
    Safe for concurrent use across multiple threads.

Python 3.13+.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, TypeIs

from langreload.constants import LOCALE_CODE_PATTERN
from langreload.diagnostics.errors import InvalidLocaleCodeError
from langreload.diagnostics.templates import ErrorTemplate

if TYPE_CHECKING:
    from collections.abc import Collection

    from langreload.localization.types import LocaleCode

__all__ = [
    "is_valid_locale_code",
    "locale_code_from_path",
    "require_locale_code",
]

_LOCALE_CODE_RE: re.Pattern[str] = re.compile(LOCALE_CODE_PATTERN)


def is_valid_locale_code(value: object) -> TypeIs[str]:
    """Check whether a value is a two-part locale code.

    Args:
        value: Candidate value (non-strings are never valid)

    Returns:
        True if value matches ``^[a-z]{2}_[A-Z]{2}$``

    Example:
        >>> is_valid_locale_code("en_UK")
        True
        >>> is_valid_locale_code("en-UK")
        False
        >>> is_valid_locale_code("EN_uk")
        False
    """
    return isinstance(value, str) and _LOCALE_CODE_RE.match(value) is not None


def require_locale_code(value: object, *, role: str = "language") -> LocaleCode:
    """Return value unchanged if it is a valid locale code.

    Args:
        value: Candidate value
        role: Name used in the error message ("language", "default language")

    Returns:
        The validated locale code

    Raises:
        InvalidLocaleCodeError: If value is not a valid locale code
    """
    if not is_valid_locale_code(value):
        raise InvalidLocaleCodeError(ErrorTemplate.invalid_locale_code(value, role=role))
    return value


def locale_code_from_path(path: Path | str, extensions: Collection[str]) -> LocaleCode | None:
    """Derive the locale code candidate from a language file name.

    The candidate is the file name with its extension stripped. It is NOT
    validated here: callers report invalid stems separately so that a badly
    named file is logged instead of silently ignored.

    Args:
        path: Language file path
        extensions: Recognized extensions, lowercase with leading dot

    Returns:
        File stem if the (case-insensitive) suffix is recognized, else None

    Example:
        >>> locale_code_from_path("locales/en_UK.yml", {".yml"})
        'en_UK'
        >>> locale_code_from_path("locales/notes.txt", {".yml"}) is None
        True
    """
    file_path = Path(path)
    if file_path.suffix.lower() not in extensions:
        return None
    return file_path.stem
