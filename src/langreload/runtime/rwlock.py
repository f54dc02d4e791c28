"""Readers-writer lock for the language store.

Lookups vastly outnumber reloads: request handlers and bot commands read
language trees constantly, while the watcher thread swaps one entry every
now and then. RWLock lets lookups share the store and gives each swap
exclusive access. Waiting writers block new readers, so a reload cannot be
starved by a steady stream of lookups.

A thread may nest read() inside read(). Every other combination on the same
thread (write inside read, read inside write, write inside write) raises
RuntimeError: store operations never need it, and allowing it would hide
deadlocks.

Python 3.13+.
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference.

    Both context managers accept an optional timeout in seconds: None waits
    forever, 0.0 tries once, and expiry raises TimeoutError.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     pass  # shared with other readers
        >>> with lock.write(timeout=1.0):
        ...     pass  # exclusive
    """

    __slots__ = ("_cond", "_owner", "_queued_writers", "_read_depth")

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        # thread ident -> nesting depth of read() for that thread
        self._read_depth: dict[int, int] = {}
        self._owner: int | None = None
        self._queued_writers = 0

    @property
    def reader_count(self) -> int:
        """Number of distinct threads currently holding the read side."""
        with self._cond:
            return len(self._read_depth)

    @property
    def writer_active(self) -> bool:
        """True while some thread holds the write side."""
        with self._cond:
            return self._owner is not None

    @property
    def writers_waiting(self) -> int:
        """Number of threads blocked in write()."""
        with self._cond:
            return self._queued_writers

    @contextmanager
    def read(self, timeout: float | None = None) -> Generator[None]:
        """Hold the lock in shared mode for the duration of the block.

        Raises:
            RuntimeError: If this thread holds the write side
            TimeoutError: If the lock was not obtained in time
            ValueError: If timeout is negative
        """
        self._acquire_read(timeout)
        try:
            yield
        finally:
            self._release_read()

    @contextmanager
    def write(self, timeout: float | None = None) -> Generator[None]:
        """Hold the lock in exclusive mode for the duration of the block.

        Raises:
            RuntimeError: If this thread already holds either side
            TimeoutError: If the lock was not obtained in time
            ValueError: If timeout is negative
        """
        self._acquire_write(timeout)
        try:
            yield
        finally:
            self._release_write()

    def _acquire_read(self, timeout: float | None) -> None:
        deadline = _deadline(timeout)
        me = threading.get_ident()
        with self._cond:
            depth = self._read_depth.get(me)
            if depth is not None:
                self._read_depth[me] = depth + 1
                return
            if self._owner == me:
                msg = "Cannot acquire read lock while holding write lock (downgrade not supported)"
                raise RuntimeError(msg)
            self._await(
                lambda: self._owner is None and self._queued_writers == 0, deadline, "read"
            )
            self._read_depth[me] = 1

    def _release_read(self) -> None:
        me = threading.get_ident()
        with self._cond:
            depth = self._read_depth.get(me)
            if depth is None:
                msg = "Thread does not hold read lock"
                raise RuntimeError(msg)
            if depth > 1:
                self._read_depth[me] = depth - 1
                return
            del self._read_depth[me]
            if not self._read_depth:
                self._cond.notify_all()

    def _acquire_write(self, timeout: float | None) -> None:
        deadline = _deadline(timeout)
        me = threading.get_ident()
        with self._cond:
            if me in self._read_depth:
                msg = "Cannot upgrade read lock to write lock; release the read lock first"
                raise RuntimeError(msg)
            if self._owner == me:
                msg = "Cannot acquire write lock: already holding write lock"
                raise RuntimeError(msg)
            self._queued_writers += 1
            try:
                self._await(
                    lambda: self._owner is None and not self._read_depth, deadline, "write"
                )
                self._owner = me
            finally:
                self._queued_writers -= 1
                # Readers held back by the queued writer must re-check, also on timeout
                self._cond.notify_all()

    def _release_write(self) -> None:
        with self._cond:
            if self._owner != threading.get_ident():
                msg = "Thread does not hold write lock"
                raise RuntimeError(msg)
            self._owner = None
            self._cond.notify_all()

    def _await(self, ready: Callable[[], bool], deadline: float | None, side: str) -> None:
        """Wait on the condition until ready() holds. Caller holds the condition."""
        while not ready():
            if deadline is None:
                self._cond.wait()
                continue
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                msg = f"Timed out waiting for {side} lock"
                raise TimeoutError(msg)
            self._cond.wait(remaining)


def _deadline(timeout: float | None) -> float | None:
    if timeout is None:
        return None
    if timeout < 0:
        msg = f"Timeout must be non-negative, got {timeout}"
        raise ValueError(msg)
    return time.monotonic() + timeout
