"""Diagnostic codes and data structures.

Defines error codes and the structured Diagnostic record carried by every
langreload exception and load result.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Configuration errors (loader construction)
        2000-2999: Filesystem errors (directory and file access)
        3000-3999: Content errors (locale codes, decoding)
        4000-4999: Lookup outcomes (rendered, never raised)
    """

    # Configuration errors (1000-1999)
    CONFIG_INVALID_LOCALE = 1001
    LOADER_NOT_READY = 1002

    # Filesystem errors (2000-2999)
    DIRECTORY_UNREADABLE = 2001
    FILE_UNREADABLE = 2002
    FILE_NOT_FOUND = 2003
    WATCH_FAILED = 2004

    # Content errors (3000-3999)
    INVALID_LOCALE_CODE = 3001
    UNSUPPORTED_FORMAT = 3002
    PARSE_FAILED = 3003
    ROOT_NOT_MAPPING = 3004

    # Lookup outcomes (4000-4999)
    MESSAGE_NOT_FOUND = 4001
    LANGUAGE_UNAVAILABLE = 4002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        path: File or directory involved (if any)
        locale_code: Locale code involved (if any)
        hint: Suggestion for fixing the problem
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    path: str | None = None
    locale_code: str | None = None
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic as a compact multi-line report.

        Example output:
            error[PARSE_FAILED]: Failed to parse language file: mapping values are not allowed
              --> locales/en_UK.yml
              = help: Fix the syntax error; the previous translation stays active

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.path is not None:
            lines.append(f"  --> {self.path}")
        if self.hint is not None:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
