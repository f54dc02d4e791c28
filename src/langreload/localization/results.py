"""Load result tracking for LanguageLoader.

Every attempt to load a language file, whether from the initial scan, a
watch event or a forced reload, produces a FileLoadResult. The initial scan
aggregates its results into a LoadSummary.

Components:
    FileLoadResult - Immutable result of a single file load attempt
    LoadSummary - Immutable aggregate of the initial scan
    LanguageEvent - Lifecycle notification delivered to subscribers

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, final

from langreload.enums import LanguageEventKind, LoadStatus

if TYPE_CHECKING:
    from pathlib import Path

    from langreload.core.tree import Branch
    from langreload.diagnostics.codes import Diagnostic
    from langreload.diagnostics.errors import LangReloadError
    from langreload.localization.types import LocaleCode

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "FileLoadResult",
    "LoadSummary",
    "LanguageEvent",
    "UNAVAILABLE",
    "Unavailable",
]

_ERROR_STATUSES: frozenset[LoadStatus] = frozenset({
    LoadStatus.NOT_FOUND,
    LoadStatus.INVALID_CODE,
    LoadStatus.UNSUPPORTED,
    LoadStatus.READ_ERROR,
    LoadStatus.PARSE_ERROR,
    LoadStatus.SKIPPED,
})


@final
class Unavailable:
    """Type of the UNAVAILABLE sentinel.

    Returned by LanguageLoader.resolve_language() when neither the requested
    nor the fallback language is loaded. Falsy, so callers can write
    ``tree = loader.resolve_language(code) or placeholder``.
    """

    __slots__ = ()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNAVAILABLE"


UNAVAILABLE: Final = Unavailable()


@dataclass(frozen=True, slots=True)
class FileLoadResult:
    """Result of loading a single language file.

    Attributes:
        path: File involved (None when no file could be located)
        status: Load status
        code: Locale code derived from the file name (None if not derivable)
        error: Exception describing the failure, None on success/unchanged
        event: Lifecycle event emitted as a consequence, if any
    """

    path: Path | None
    status: LoadStatus
    code: LocaleCode | None = None
    error: LangReloadError | None = None
    event: LanguageEventKind | None = None

    @property
    def is_success(self) -> bool:
        """Check if the file was parsed and stored."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_unchanged(self) -> bool:
        """Check if the event was a no-op because content was identical."""
        return self.status == LoadStatus.UNCHANGED

    @property
    def is_error(self) -> bool:
        """Check if the attempt failed."""
        return self.status in _ERROR_STATUSES

    @property
    def diagnostic(self) -> Diagnostic | None:
        """Structured diagnostic of the error, if any."""
        return self.error.diagnostic if self.error is not None else None


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of the initial directory scan.

    Attributes:
        results: All individual load results (immutable tuple)
        directory_error: Set if the directory itself could not be listed
        default_language_loaded: Whether the default language is present
            after the scan

    Example:
        >>> summary = loader.get_load_summary()
        >>> if summary.has_errors:
        ...     for result in summary.get_errors():
        ...         print(f"Failed: {result.path}: {result.error}")
    """

    results: tuple[FileLoadResult, ...]
    directory_error: LangReloadError | None = None
    default_language_loaded: bool = False

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"errors={self.errors}, "
            f"directory_error={self.directory_error is not None})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of files considered."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of files loaded into the store."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def errors(self) -> int:
        """Number of files that failed to load."""
        return sum(1 for r in self.results if r.is_error)

    @property
    def loaded_codes(self) -> tuple[LocaleCode, ...]:
        """Locale codes loaded by the scan, in scan order."""
        return tuple(r.code for r in self.results if r.is_success and r.code is not None)

    def get_errors(self) -> tuple[FileLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_successful(self) -> tuple[FileLoadResult, ...]:
        """Get all successful load results."""
        return tuple(r for r in self.results if r.is_success)

    def get_by_status(self, status: LoadStatus) -> tuple[FileLoadResult, ...]:
        """Get all results with a given status."""
        return tuple(r for r in self.results if r.status == status)

    @property
    def has_errors(self) -> bool:
        """Check if any file or the directory itself failed."""
        return self.errors > 0 or self.directory_error is not None

    @property
    def all_successful(self) -> bool:
        """Check if the directory was readable and every file loaded."""
        return not self.has_errors


@dataclass(frozen=True, slots=True)
class LanguageEvent:
    """Lifecycle notification delivered to LanguageLoader subscribers.

    Attributes:
        kind: ADDED, UPDATED or REMOVED
        code: Locale code concerned
        tree: New language tree (the evicted tree for REMOVED)
        source_path: File the change came from
    """

    kind: LanguageEventKind
    code: LocaleCode
    tree: Branch
    source_path: Path | None = None
