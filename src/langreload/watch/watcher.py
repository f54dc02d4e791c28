"""Directory watcher delivering stabilized language file changes.

DirectoryWatcher runs ``watchfiles.watch`` on a background thread. The
native watcher is asked to wake up at least every poll interval
(``yield_on_timeout``), so each wakeup doubles as a stabilization tick:
raw notifications are fed into a WriteStabilizer and settled changes are
delivered, one at a time and in order, to a single callback.

Only changes that happen after start() are delivered. The initial state of
the directory is the loader's bulk load, not a stream of watch events.

Failure semantics:
    If the directory cannot be watched (missing, permissions, OS watch
    limits) the failure is logged once, handed to ``on_error`` as a
    DirectoryUnreadableError, and the thread ends. Languages that were
    already loaded stay servable.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Self

from watchfiles import Change, DefaultFilter, watch

from langreload.constants import (
    DEFAULT_EXTENSIONS,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_STABILITY_THRESHOLD,
    DEFAULT_STARTUP_TIMEOUT,
)
from langreload.diagnostics.errors import DirectoryUnreadableError
from langreload.diagnostics.templates import ErrorTemplate
from langreload.enums import ChangeKind

from .stabilizer import FileChange, WriteStabilizer

if TYPE_CHECKING:
    from collections.abc import Callable, Collection
    from types import TracebackType

__all__ = ["DirectoryWatcher", "LanguageFileFilter"]

logger = logging.getLogger(__name__)

_CHANGE_KINDS: dict[Change, ChangeKind] = {
    Change.added: ChangeKind.ADDED,
    Change.modified: ChangeKind.MODIFIED,
    Change.deleted: ChangeKind.DELETED,
}

# watchfiles never waits for changes longer than this per step, in ms
_MAX_STEP_MS = 50


class LanguageFileFilter(DefaultFilter):
    """watchfiles filter accepting only recognized language file extensions.

    Inherits DefaultFilter so editor swap files, ``.git`` and similar noise
    are dropped before extension matching.
    """

    def __init__(self, extensions: Collection[str] = DEFAULT_EXTENSIONS) -> None:
        self.extensions = tuple(ext.lower() for ext in extensions)
        super().__init__()

    def __call__(self, change: Change, path: str) -> bool:
        return path.lower().endswith(self.extensions) and super().__call__(change, path)


class DirectoryWatcher:
    """Watch one directory and deliver stabilized file changes.

    Thread Safety:
        start() and stop() may be called from any thread. The callback runs
        on the watcher thread; changes are delivered serially.

    Example:
        >>> def on_change(change: FileChange) -> None:
        ...     print(change.kind, change.path.name)
        >>> with DirectoryWatcher("locales", on_change):
        ...     ...  # edit locales/en_UK.yml; prints "modified en_UK.yml"
    """

    def __init__(
        self,
        directory: Path | str,
        callback: Callable[[FileChange], None],
        *,
        extensions: Collection[str] = DEFAULT_EXTENSIONS,
        stability_threshold: float = DEFAULT_STABILITY_THRESHOLD,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        force_polling: bool | None = None,
        on_error: Callable[[DirectoryUnreadableError], None] | None = None,
    ) -> None:
        """Initialize the watcher (does not start it).

        Args:
            directory: Directory to watch (non-recursive)
            callback: Receives each stabilized FileChange
            extensions: Recognized file extensions
            stability_threshold: Seconds of quiescence before delivery
            poll_interval: Seconds between stabilization checks
            force_polling: Use polling instead of native notifications
                (None lets watchfiles decide)
            on_error: Receives the failure if watching is impossible

        Raises:
            ValueError: If poll_interval is not positive
        """
        if poll_interval <= 0:
            msg = "poll_interval must be positive"
            raise ValueError(msg)
        self._directory = Path(directory)
        self._callback = callback
        self._filter = LanguageFileFilter(extensions)
        self._stabilizer = WriteStabilizer(stability_threshold)
        self._poll_ms = max(1, round(poll_interval * 1000))
        self._force_polling = force_polling
        self._on_error = on_error

        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self._running_event = threading.Event()
        self._failure: DirectoryUnreadableError | None = None
        self._lifecycle_lock = threading.Lock()

    @property
    def directory(self) -> Path:
        """Watched directory."""
        return self._directory

    @property
    def is_running(self) -> bool:
        """True while the native watcher is active."""
        return self._running_event.is_set() and not self._stop_event.is_set()

    @property
    def failure(self) -> DirectoryUnreadableError | None:
        """Error that ended the watcher, if any."""
        return self._failure

    def start(self, *, wait: bool = True, timeout: float = DEFAULT_STARTUP_TIMEOUT) -> bool:
        """Start watching in a daemon thread.

        Args:
            wait: Block until the native watcher is running (or failed)
            timeout: Maximum seconds to wait when ``wait`` is True

        Returns:
            True if the watcher is running when start() returns. Always
            False when ``wait`` is False and startup has not completed.
        """
        with self._lifecycle_lock:
            if self._thread is not None and self._thread.is_alive():
                return self.is_running
            self._stop_event.clear()
            self._running_event.clear()
            self._failure = None
            self._stabilizer.clear()
            self._thread = threading.Thread(
                target=self._run,
                name=f"langreload-watcher[{self._directory.name}]",
                daemon=True,
            )
            self._thread.start()
        if wait:
            return self.wait_until_running(timeout)
        return self.is_running

    def wait_until_running(self, timeout: float | None = None) -> bool:
        """Block until the watcher runs, fails, or the timeout passes."""
        thread = self._thread
        if thread is None:
            return False
        # The running event is set on the first wakeup; a failing thread
        # simply ends, so poll both conditions.
        step = self._poll_ms / 1000
        waited = 0.0
        while not self._running_event.wait(step):
            if not thread.is_alive():
                return False
            waited += step
            if timeout is not None and waited >= timeout:
                return False
        return self.is_running

    def stop(self, timeout: float | None = DEFAULT_STARTUP_TIMEOUT) -> None:
        """Stop watching and wait for the thread to end.

        Pending (not yet stabilized) changes are discarded.
        """
        with self._lifecycle_lock:
            self._stop_event.set()
            thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._running_event.clear()

    def __enter__(self) -> Self:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.stop()

    def _run(self) -> None:
        logger.debug("Watching %s for language file changes", self._directory)
        try:
            for raw_changes in watch(
                self._directory,
                watch_filter=self._filter,
                debounce=self._poll_ms,
                step=min(_MAX_STEP_MS, self._poll_ms),
                stop_event=self._stop_event,
                rust_timeout=self._poll_ms,
                yield_on_timeout=True,
                force_polling=self._force_polling,
                poll_delay_ms=self._poll_ms,
                recursive=False,
            ):
                self._running_event.set()
                for change, raw_path in raw_changes:
                    self._stabilizer.observe(_CHANGE_KINDS[change], Path(raw_path))
                for stabilized in self._stabilizer.collect():
                    self._deliver(stabilized)
        except (OSError, RuntimeError) as e:
            self._fail(e)
        finally:
            self._running_event.clear()
            logger.debug("Stopped watching %s", self._directory)

    def _deliver(self, change: FileChange) -> None:
        if self._stop_event.is_set():
            return
        try:
            self._callback(change)
        except Exception:  # pylint: disable=broad-exception-caught
            # A failing handler must not end the watch for every other file
            logger.exception("Language change handler failed for %s", change.path)

    def _fail(self, error: Exception) -> None:
        diagnostic = ErrorTemplate.watch_failed(str(self._directory), str(error))
        self._failure = DirectoryUnreadableError(diagnostic)
        logger.error("%s", diagnostic.message)
        if self._on_error is not None:
            try:
                self._on_error(self._failure)
            except Exception:  # pylint: disable=broad-exception-caught
                logger.exception("Watch error handler failed")
