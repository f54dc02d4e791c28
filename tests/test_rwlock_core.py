"""Tests for RWLock readers-writer lock implementation.

Tests verify:
- Multiple concurrent readers
- Exclusive writer access
- Writer preference (prevents starvation)
- Reentrant read locks
- Upgrade, downgrade and write reentry rejection
- Timeouts
- Error handling
"""

import threading
import time
from collections.abc import Callable

import pytest

from langreload.runtime.rwlock import RWLock


def _wait_for(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


class TestRWLockBasics:
    """Test basic RWLock functionality."""

    def test_single_reader(self) -> None:
        lock = RWLock()
        with lock.read():
            assert lock.reader_count == 1
        assert lock.reader_count == 0

    def test_single_writer(self) -> None:
        lock = RWLock()
        with lock.write():
            assert lock.writer_active
        assert not lock.writer_active

    def test_multiple_readers_hold_lock_together(self) -> None:
        """Readers do not exclude each other."""
        lock = RWLock()
        inside = threading.Barrier(3, timeout=2)

        def reader() -> None:
            with lock.read():
                inside.wait()  # all three readers inside at once

        threads = [threading.Thread(target=reader) for _ in range(3)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert lock.reader_count == 0

    def test_writer_blocks_readers(self) -> None:
        lock = RWLock()
        writer_inside = threading.Event()
        release_writer = threading.Event()
        reader_done = threading.Event()

        def writer() -> None:
            with lock.write():
                writer_inside.set()
                release_writer.wait(2)

        def reader() -> None:
            with lock.read():
                reader_done.set()

        writer_thread = threading.Thread(target=writer)
        writer_thread.start()
        writer_inside.wait(2)
        reader_thread = threading.Thread(target=reader)
        reader_thread.start()

        time.sleep(0.05)
        assert not reader_done.is_set()

        release_writer.set()
        writer_thread.join()
        reader_thread.join()
        assert reader_done.is_set()


class TestRWLockReentrancy:
    """Test reentrant reads and rejected lock transitions."""

    def test_same_thread_multiple_read_locks(self) -> None:
        lock = RWLock()
        with lock.read(), lock.read(), lock.read():
            assert lock.reader_count == 1
        assert lock.reader_count == 0

    def test_read_to_write_upgrade_rejected(self) -> None:
        lock = RWLock()
        with lock.read(), pytest.raises(RuntimeError, match="upgrade"):
            with lock.write():
                pass

    def test_write_to_write_reentry_rejected(self) -> None:
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError, match="already holding write lock"):
            with lock.write():
                pass

    def test_write_to_read_downgrade_rejected(self) -> None:
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError, match="while holding write lock"):
            with lock.read():
                pass


class TestRWLockWriterPreference:
    """Test that waiting writers are not starved by new readers."""

    def test_waiting_writer_blocks_new_readers(self) -> None:
        lock = RWLock()
        first_reader_inside = threading.Event()
        release_first_reader = threading.Event()
        order: list[str] = []

        def first_reader() -> None:
            with lock.read():
                first_reader_inside.set()
                release_first_reader.wait(2)

        def writer() -> None:
            with lock.write():
                order.append("writer")

        def late_reader() -> None:
            with lock.read():
                order.append("reader")

        threads = [threading.Thread(target=first_reader)]
        threads[0].start()
        first_reader_inside.wait(2)

        threads.append(threading.Thread(target=writer))
        threads[1].start()
        assert _wait_for(lambda: lock.writers_waiting == 1)

        threads.append(threading.Thread(target=late_reader))
        threads[2].start()
        time.sleep(0.05)
        assert order == []

        release_first_reader.set()
        for thread in threads:
            thread.join()

        assert order == ["writer", "reader"]


class TestRWLockTimeout:
    """Test lock acquisition timeouts."""

    def test_read_times_out_while_writer_holds(self) -> None:
        lock = RWLock()
        writer_inside = threading.Event()
        release_writer = threading.Event()

        def writer() -> None:
            with lock.write():
                writer_inside.set()
                release_writer.wait(2)

        thread = threading.Thread(target=writer)
        thread.start()
        writer_inside.wait(2)
        try:
            with pytest.raises(TimeoutError), lock.read(timeout=0.05):
                pass
        finally:
            release_writer.set()
            thread.join()

    def test_write_timeout_clears_waiting_writer(self) -> None:
        """A timed-out writer no longer blocks readers."""
        lock = RWLock()
        reader_inside = threading.Event()
        release_reader = threading.Event()

        def reader() -> None:
            with lock.read():
                reader_inside.set()
                release_reader.wait(2)

        thread = threading.Thread(target=reader)
        thread.start()
        reader_inside.wait(2)
        try:
            with pytest.raises(TimeoutError), lock.write(timeout=0.05):
                pass
            assert lock.writers_waiting == 0
        finally:
            release_reader.set()
            thread.join()

    def test_zero_timeout_succeeds_when_free(self) -> None:
        lock = RWLock()
        with lock.write(timeout=0.0):
            pass

    def test_negative_timeout_rejected(self) -> None:
        lock = RWLock()
        with pytest.raises(ValueError, match="non-negative"), lock.read(timeout=-1):
            pass


class TestRWLockErrors:
    """Test releasing locks that are not held."""

    def test_release_read_without_acquire_raises(self) -> None:
        with pytest.raises(RuntimeError, match="does not hold read lock"):
            RWLock()._release_read()

    def test_release_write_without_acquire_raises(self) -> None:
        with pytest.raises(RuntimeError, match="does not hold write lock"):
            RWLock()._release_write()
