"""langreload exception hierarchy with structured diagnostics.

Hierarchy:
    LangReloadError (base)
    ├─ ConfigurationError (default/fallback code invalid, loader not usable)
    ├─ DirectoryUnreadableError (scan or watch subscription failed)
    ├─ FileUnreadableError (transient read failure on one file)
    ├─ InvalidLocaleCodeError (value does not match the locale code shape)
    └─ LanguageDecodeError (decoder rejected file content)

File and parse level errors are caught by the loader and turned into
FileLoadResult records; they only reach callers that use the lower-level
helpers directly.

Python 3.13+.
"""

from __future__ import annotations

from .codes import Diagnostic

__all__ = [
    "ConfigurationError",
    "DirectoryUnreadableError",
    "FileUnreadableError",
    "InvalidLocaleCodeError",
    "LangReloadError",
    "LanguageDecodeError",
]


class LangReloadError(Exception):
    """Base exception for all langreload errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LangReloadError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class ConfigurationError(LangReloadError):
    """Loader configuration is invalid.

    Raised by LanguageLoader.require_ready() when construction put the loader
    in the INVALID_CONFIG state. Construction itself never raises it.

    Attributes:
        diagnostics: Every configuration problem that was found
    """

    def __init__(self, message: str | Diagnostic, diagnostics: tuple[Diagnostic, ...] = ()) -> None:
        super().__init__(message)
        self.diagnostics = diagnostics


class DirectoryUnreadableError(LangReloadError):
    """Language directory cannot be listed or watched."""


class FileUnreadableError(LangReloadError):
    """A single language file cannot be read."""


class InvalidLocaleCodeError(LangReloadError, ValueError):
    """Value does not match the two-part locale code shape (e.g. en_UK)."""


class LanguageDecodeError(LangReloadError):
    """Language file content could not be decoded into a tree."""
