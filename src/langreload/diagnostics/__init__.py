"""Diagnostic system for langreload errors.

Provides structured error diagnostics with codes, paths and hints, the
exception hierarchy, and the optional line diff reporter used in debug mode.

Python 3.13+.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ConfigurationError,
    DirectoryUnreadableError,
    FileUnreadableError,
    InvalidLocaleCodeError,
    LangReloadError,
    LanguageDecodeError,
)
from .reporting import ChangeReport, ChangeReporter, DiffLine, LineDiffReporter, diff_lines
from .templates import ErrorTemplate

__all__ = [
    "ChangeReport",
    "ChangeReporter",
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "DiffLine",
    "DirectoryUnreadableError",
    "ErrorTemplate",
    "FileUnreadableError",
    "InvalidLocaleCodeError",
    "LangReloadError",
    "LanguageDecodeError",
    "LineDiffReporter",
    "diff_lines",
]
