"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the package and by user code
when annotating LanguageLoader call sites.

Python 3.13+.
"""

__all__ = [
    "LocaleCode",
    "MessagePath",
    "RawText",
]

type LocaleCode = str
"""Two-part locale code (e.g., 'en_UK', 'de_DE')."""

type MessagePath = str
"""Dot-separated path into a language tree (e.g., 'welcome.message')."""

type RawText = str
"""Raw language file content as a Python string."""
