"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+.
"""

from __future__ import annotations

from langreload.constants import LOCALE_CODE_EXAMPLE

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All diagnostics are created here so that log lines, exceptions and load
    results describe the same failure with the same words.
    """

    @staticmethod
    def invalid_locale_code(value: object, *, role: str = "language", path: str | None = None) -> Diagnostic:
        """Value does not look like a locale code.

        Args:
            value: The rejected value
            role: What the value was used as (language, default language, ...)
            path: File the value was derived from, if any

        Returns:
            Diagnostic for INVALID_LOCALE_CODE
        """
        msg = f'Invalid {role} code "{value}". Expected a format like "{LOCALE_CODE_EXAMPLE}".'
        return Diagnostic(
            code=DiagnosticCode.INVALID_LOCALE_CODE,
            message=msg,
            path=path,
            locale_code=value if isinstance(value, str) else None,
            hint="Name language files <language>_<REGION>.<ext>, e.g. en_UK.yml",
        )

    @staticmethod
    def config_invalid_locale(value: object, *, role: str) -> Diagnostic:
        """Default or fallback language code is invalid.

        Args:
            value: The rejected value
            role: "default language" or "fallback language"

        Returns:
            Diagnostic for CONFIG_INVALID_LOCALE
        """
        msg = f'{role.capitalize()} code "{value}" is invalid. Expected a format like "{LOCALE_CODE_EXAMPLE}".'
        return Diagnostic(
            code=DiagnosticCode.CONFIG_INVALID_LOCALE,
            message=msg,
            locale_code=value if isinstance(value, str) else None,
            hint="The loader will not load or watch any files until this is fixed",
        )

    @staticmethod
    def loader_not_ready(status: str) -> Diagnostic:
        """Loader used while unusable."""
        return Diagnostic(
            code=DiagnosticCode.LOADER_NOT_READY,
            message=f"Language loader is not usable (status: {status})",
        )

    @staticmethod
    def directory_unreadable(directory: str, reason: str) -> Diagnostic:
        """Language directory cannot be listed or watched.

        Args:
            directory: Directory path
            reason: Underlying OS error text

        Returns:
            Diagnostic for DIRECTORY_UNREADABLE
        """
        return Diagnostic(
            code=DiagnosticCode.DIRECTORY_UNREADABLE,
            message=f"Failed to read language directory: {reason}",
            path=directory,
            hint="Already loaded languages remain available",
        )

    @staticmethod
    def watch_failed(directory: str, reason: str) -> Diagnostic:
        """Watch subscription could not be established or broke down."""
        return Diagnostic(
            code=DiagnosticCode.WATCH_FAILED,
            message=f"Failed to watch language directory: {reason}",
            path=directory,
            hint="Languages will not reload until the loader is restarted",
        )

    @staticmethod
    def file_unreadable(path: str, reason: str) -> Diagnostic:
        """Single language file cannot be read."""
        return Diagnostic(
            code=DiagnosticCode.FILE_UNREADABLE,
            message=f"Failed to read file {path}: {reason}",
            path=path,
        )

    @staticmethod
    def file_not_found(code: str, directory: str) -> Diagnostic:
        """No language file exists for a locale code."""
        return Diagnostic(
            code=DiagnosticCode.FILE_NOT_FOUND,
            message=f'No language file found for "{code}"',
            path=directory,
            locale_code=code,
        )

    @staticmethod
    def unsupported_format(path: str, suffix: str) -> Diagnostic:
        """File extension is not a recognized language format."""
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_FORMAT,
            message=f'Unsupported language file format "{suffix}"',
            path=path,
        )

    @staticmethod
    def parse_failed(path: str, reason: str) -> Diagnostic:
        """Decoder rejected the file content.

        Args:
            path: File path
            reason: Decoder error text

        Returns:
            Diagnostic for PARSE_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.PARSE_FAILED,
            message=f"Failed to parse language file: {reason}",
            path=path,
            hint="Fix the syntax error; the previous translation stays active",
        )

    @staticmethod
    def root_not_mapping(path: str, type_name: str) -> Diagnostic:
        """Decoded document is not a key-value mapping."""
        return Diagnostic(
            code=DiagnosticCode.ROOT_NOT_MAPPING,
            message=f"Language file must contain a mapping at the top level, got {type_name}",
            path=path,
        )

    @staticmethod
    def message_not_found(path: str, code: str) -> Diagnostic:
        """Dotted message path is missing from a language tree."""
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NOT_FOUND,
            message=f'Message key "{path}" not found in language "{code}"',
            locale_code=code,
            severity="warning",
        )
