"""Enumerations for langreload type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so they log and serialize cleanly.

Python 3.13+.
"""

from enum import StrEnum


class LoadStatus(StrEnum):
    """Outcome of a single language file load attempt.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """File was read, parsed and stored."""

    UNCHANGED = "unchanged"
    """File content is byte-identical to the stored raw text; nothing to do."""

    NOT_FOUND = "not_found"
    """No file exists for the requested locale code."""

    INVALID_CODE = "invalid_code"
    """File stem is not a valid locale code; skipped permanently."""

    UNSUPPORTED = "unsupported"
    """File extension is not a recognized language format."""

    READ_ERROR = "read_error"
    """File could not be read (permissions, deletion race, bad encoding)."""

    PARSE_ERROR = "parse_error"
    """Decoder rejected the content; any previous entry is retained."""

    REMOVED = "removed"
    """Source file was deleted and the entry was evicted."""

    RETAINED = "retained"
    """Source file was deleted but the entry is kept (RETAIN policy)."""

    SKIPPED = "skipped"
    """Loader is unusable (invalid configuration); nothing was attempted."""


class LanguageEventKind(StrEnum):
    """Kind of lifecycle notification emitted to subscribers."""

    ADDED = "added"
    """A locale code appeared for the first time after the initial scan."""

    UPDATED = "updated"
    """A loaded locale was replaced with newly parsed content."""

    REMOVED = "removed"
    """A locale was evicted after its file was deleted (EVICT policy only)."""


class ChangeKind(StrEnum):
    """Filesystem change kind delivered by the directory watcher."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


class RemovalPolicy(StrEnum):
    """What happens to a store entry when its source file is deleted."""

    RETAIN = "retain"
    """Keep serving the last good tree (default)."""

    EVICT = "evict"
    """Drop the entry and emit a REMOVED event."""


class LoaderStatus(StrEnum):
    """Lifecycle state of a LanguageLoader."""

    CREATED = "created"
    READY = "ready"
    WATCHING = "watching"
    STOPPED = "stopped"
    INVALID_CONFIG = "invalid_config"


__all__ = [
    "ChangeKind",
    "LanguageEventKind",
    "LoadStatus",
    "LoaderStatus",
    "RemovalPolicy",
]
