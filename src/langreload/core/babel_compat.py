"""Babel integration for locale negotiation and display names.

Babel is an optional dependency. Loading, watching and serving language
files never touch it; only the helpers below need CLDR data:

- negotiate_locale_code: map client locales ("en-GB", "de") to a loaded code
- locale_display_name: human-readable language name for a locale code

Usage Pattern:
    # At function call site (for runtime use):
    from langreload.core.babel_compat import require_babel

    def my_function(locale_code: str) -> None:
        require_babel("my_function")  # Raises BabelImportError if Babel missing
        from babel import Locale  # Safe to import Babel now
        ...

Install with: pip install langreload[babel]

Python 3.13+.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "BabelImportError",
    "is_babel_available",
    "locale_display_name",
    "negotiate_locale_code",
    "require_babel",
]


@lru_cache(maxsize=1)
def _check_babel_available() -> bool:
    """Check if Babel is installed (computed once, cached via lru_cache)."""
    try:
        import babel  # noqa: F401, PLC0415  # pylint: disable=unused-import

        return True
    except ImportError:
        return False


class BabelImportError(ImportError):
    """Raised when Babel is required but not installed."""

    def __init__(self, feature: str) -> None:
        """Create error with feature-specific message.

        Args:
            feature: Name of the feature/function requiring Babel
        """
        message = (
            f"{feature} requires Babel for CLDR locale data. "
            "Install with: pip install langreload[babel]"
        )
        super().__init__(message)
        self.feature = feature


def is_babel_available() -> bool:
    """Check if Babel is installed.

    Returns:
        True if Babel is installed and importable, False otherwise.
    """
    return _check_babel_available()


def require_babel(feature: str) -> None:
    """Assert that Babel is available, raising BabelImportError if not.

    Args:
        feature: Name of the feature requiring Babel (for error message)

    Raises:
        BabelImportError: If Babel is not installed
    """
    if not _check_babel_available():
        raise BabelImportError(feature)


def negotiate_locale_code(preferred: Iterable[str], available: Iterable[str]) -> str | None:
    """Pick the best available locale code for a list of client preferences.

    Client locales commonly use hyphens (Discord's "en-GB", HTTP
    Accept-Language "de-DE") or a bare language ("fr"); both are normalized
    to underscores before Babel's negotiation, which also matches on the
    language part alone and on CLDR aliases.

    Args:
        preferred: Client locales in order of preference
        available: Locale codes that are actually loaded

    Returns:
        Matching available code, or None if nothing matches

    Raises:
        BabelImportError: If Babel is not installed

    Example:
        >>> negotiate_locale_code(["en-UK", "de"], ["de_DE", "en_UK"])
        'en_UK'
    """
    require_babel("negotiate_locale_code")
    from babel.core import negotiate_locale  # noqa: PLC0415

    normalized = [code.strip().replace("-", "_") for code in preferred if code and code.strip()]
    candidates = sorted(available)
    by_lower = {candidate.lower(): candidate for candidate in candidates}

    for code in normalized:
        # negotiate_locale returns the preferred spelling, not the available one
        match = negotiate_locale([code], candidates, sep="_")
        if match is not None and match.lower() in by_lower:
            return by_lower[match.lower()]
        # Babel only matches a bare language against bare available codes, so
        # "en_GB" never reaches "en_UK"; retry on the language part alone.
        language = code.split("_", 1)[0].lower()
        for candidate in candidates:
            if candidate.split("_", 1)[0].lower() == language:
                return candidate
    return None


def locale_display_name(code: str, in_locale: str | None = None) -> str | None:
    """Return the CLDR display name of a locale code.

    Args:
        code: Locale code (e.g. "de_DE")
        in_locale: Locale to render the name in; defaults to ``code`` itself

    Returns:
        Display name (e.g. "Deutsch (Deutschland)"), or None if Babel does
        not know the locale

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("locale_display_name")
    from babel import Locale, UnknownLocaleError  # noqa: PLC0415

    def parse(value: str) -> Locale | None:
        # Regions outside CLDR (en_UK) fall back to the bare language
        for candidate in (value, value.split("_", 1)[0]):
            try:
                return Locale.parse(candidate)
            except (UnknownLocaleError, ValueError):
                continue
        return None

    locale = parse(code)
    if locale is None:
        return None
    display_locale = parse(in_locale) if in_locale else locale
    return locale.get_display_name(display_locale or locale)
