"""Write stabilization for filesystem change notifications.

Editors save files in several steps (truncate, write, rename, touch), and
each step produces its own notification. WriteStabilizer coalesces raw
notifications per path and releases a change only once the file's
signature (size and modification time) has stayed the same for the
stability threshold. A file that disappears while pending is released as a
deletion.

The stabilizer is pure bookkeeping: it never sleeps and never touches
threads. DirectoryWatcher calls observe() for every raw notification and
collect() on every poll tick. Clock and stat are injectable so tests can
drive time explicitly.

Python 3.13+.
"""

from __future__ import annotations

import os
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from langreload.constants import DEFAULT_STABILITY_THRESHOLD
from langreload.enums import ChangeKind

__all__ = ["FileChange", "FileSignature", "WriteStabilizer"]

type FileSignature = tuple[int, int]
"""(size in bytes, mtime in nanoseconds)."""

type StatFunction = Callable[[Path], FileSignature | None]


@dataclass(frozen=True, slots=True)
class FileChange:
    """Stabilized change of one file.

    Attributes:
        kind: ADDED, MODIFIED or DELETED
        path: Changed file
    """

    kind: ChangeKind
    path: Path


@dataclass(slots=True)
class _Pending:
    kind: ChangeKind
    signature: FileSignature | None
    stable_since: float


def file_signature(path: Path) -> FileSignature | None:
    """Return (size, mtime_ns) of path, or None if it cannot be stat'ed."""
    try:
        stat = os.stat(path)
    except OSError:
        return None
    return stat.st_size, stat.st_mtime_ns


class WriteStabilizer:
    """Coalesce raw change notifications until writes settle.

    Example:
        >>> clock = iter([0.0, 0.0, 0.6]).__next__
        >>> stabilizer = WriteStabilizer(0.5, clock=clock, stat=lambda p: (1, 1))
        >>> stabilizer.observe(ChangeKind.MODIFIED, Path("en_UK.yml"))
        >>> stabilizer.collect()
        []
        >>> stabilizer.collect()
        [FileChange(kind=<ChangeKind.MODIFIED: 'modified'>, path=PosixPath('en_UK.yml'))]
    """

    __slots__ = ("_clock", "_pending", "_stat", "_threshold")

    def __init__(
        self,
        threshold: float = DEFAULT_STABILITY_THRESHOLD,
        *,
        clock: Callable[[], float] = time.monotonic,
        stat: StatFunction = file_signature,
    ) -> None:
        if threshold < 0:
            msg = f"threshold must be non-negative, got {threshold}"
            raise ValueError(msg)
        self._threshold = threshold
        self._clock = clock
        self._stat = stat
        self._pending: dict[Path, _Pending] = {}

    @property
    def pending(self) -> tuple[Path, ...]:
        """Paths currently waiting to settle."""
        return tuple(self._pending)

    def observe(self, kind: ChangeKind, path: Path) -> None:
        """Record a raw notification and restart the path's quiet period.

        An ADDED notification is remembered even if MODIFIED notifications
        follow, so a freshly created file is reported as ADDED once.
        """
        now = self._clock()
        previous = self._pending.get(path)
        if previous is not None and previous.kind is ChangeKind.ADDED and kind is ChangeKind.MODIFIED:
            kind = ChangeKind.ADDED
        self._pending[path] = _Pending(kind=kind, signature=self._stat(path), stable_since=now)

    def collect(self) -> list[FileChange]:
        """Release every pending change whose file has settled.

        For each pending path the current signature is compared with the
        last one seen; any difference restarts the quiet period. Paths that
        have been quiet for at least the threshold are removed and returned
        in observation order.
        """
        now = self._clock()
        ready: list[FileChange] = []
        for path, pending in list(self._pending.items()):
            signature = self._stat(path)
            if signature != pending.signature:
                pending.signature = signature
                pending.stable_since = now
                continue
            if now - pending.stable_since < self._threshold:
                continue
            del self._pending[path]
            kind = pending.kind
            if signature is None:
                kind = ChangeKind.DELETED
            elif kind is ChangeKind.DELETED:
                # Deleted then recreated within the window
                kind = ChangeKind.MODIFIED
            ready.append(FileChange(kind=kind, path=path))
        return ready

    def clear(self) -> None:
        """Forget all pending changes."""
        self._pending.clear()
