"""Thread-safe language store.

LanguageStore maps locale codes to LanguageEntry records. It is the single
shared mutable resource of a loader: written by the bulk load, watch and
forced-reload paths, read by arbitrary caller threads.

Consistency model:
    Entries and trees are immutable. set() replaces a whole entry under the
    write side of an RWLock, so a reader sees either the old entry or the
    new one, never a mixture. Fallback logic lives in the loader, not here.

Python 3.13+.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from langreload.core.validation import require_locale_code

from .rwlock import RWLock

if TYPE_CHECKING:
    from langreload.core.tree import Branch
    from langreload.localization.types import LocaleCode, RawText

__all__ = ["LanguageEntry", "LanguageStore"]


@dataclass(frozen=True, slots=True)
class LanguageEntry:
    """One loaded language.

    Attributes:
        code: Locale code (store key)
        tree: Parsed language tree
        raw_text: File content the tree was parsed from. Kept only to decide
            whether a later filesystem event is a real content change.
        source_path: File the entry was loaded from (None if set directly)
        loaded_at: time.time() when the entry was stored
    """

    code: LocaleCode
    tree: Branch
    raw_text: RawText
    source_path: Path | None = None
    loaded_at: float = field(default_factory=time.time)


class LanguageStore:
    """Mapping from locale code to loaded language, safe for concurrent use.

    Example:
        >>> from langreload.core.tree import build_tree
        >>> store = LanguageStore()
        >>> _ = store.set("en_UK", build_tree({"hello": "Hello"}), "hello: Hello")
        >>> store.has("en_UK")
        True
        >>> store.get("de_DE") is None
        True
    """

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._entries: dict[LocaleCode, LanguageEntry] = {}
        self._lock = RWLock()

    def get(self, code: LocaleCode) -> Branch | None:
        """Exact lookup of a language tree (no fallback)."""
        entry = self.get_entry(code)
        return entry.tree if entry is not None else None

    def get_entry(self, code: LocaleCode) -> LanguageEntry | None:
        """Exact lookup of the full entry (no fallback)."""
        with self._lock.read():
            return self._entries.get(code)

    def get_raw_text(self, code: LocaleCode) -> RawText | None:
        """Last raw file text stored for code, if any."""
        entry = self.get_entry(code)
        return entry.raw_text if entry is not None else None

    def has(self, code: LocaleCode) -> bool:
        """Check whether code has an entry."""
        with self._lock.read():
            return code in self._entries

    def set(
        self,
        code: LocaleCode,
        tree: Branch,
        raw_text: RawText,
        source_path: Path | None = None,
    ) -> LanguageEntry:
        """Insert or replace the entry for code.

        Args:
            code: Locale code; must be valid
            tree: Parsed language tree
            raw_text: Raw file content the tree came from
            source_path: File the content was read from

        Returns:
            The stored entry

        Raises:
            InvalidLocaleCodeError: If code is not a valid locale code
        """
        require_locale_code(code)
        entry = LanguageEntry(code=code, tree=tree, raw_text=raw_text, source_path=source_path)
        with self._lock.write():
            self._entries[code] = entry
        return entry

    def remove(self, code: LocaleCode) -> LanguageEntry | None:
        """Remove and return the entry for code, if present."""
        with self._lock.write():
            return self._entries.pop(code, None)

    def codes(self) -> tuple[LocaleCode, ...]:
        """Sorted tuple of stored locale codes."""
        with self._lock.read():
            return tuple(sorted(self._entries))

    def snapshot(self) -> dict[LocaleCode, LanguageEntry]:
        """Point-in-time copy of all entries."""
        with self._lock.read():
            return dict(self._entries)

    def __contains__(self, code: object) -> bool:
        with self._lock.read():
            return code in self._entries

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)

    def __repr__(self) -> str:
        return f"LanguageStore(codes={list(self.codes())!r})"
