"""Hot-reloading language loader.

Implements LanguageLoader, which wires DirectoryWatcher, the file decoder
and LanguageStore together:

    scan directory ──► decode ──► store           (initial bulk load)
    watch event ──► validate code ──► read ──► compare raw text
        ──► decode ──► store + LanguageEvent      (live reload)

Key architectural decisions:
- Eager bulk load: start() loads every file before the watcher starts, then
  replays files whose size or mtime changed in between, so nothing written
  during startup is lost
- Content-based change detection: an event whose file text is identical to
  the stored raw text is a no-op (editors often save twice, touch() changes
  nothing)
- Availability over strictness: file, decode and lookup failures are logged
  and recorded as FileLoadResult objects, never raised to callers
- Explicit invalid state: a bad default or fallback language code puts the
  loader into LoaderStatus.INVALID_CONFIG instead of failing construction

Thread Safety:
    Reads (resolve_language, resolve_message, has_language) go straight to
    the LanguageStore and are never blocked by file I/O. Writes (bulk load,
    watch events, force_reload) are serialized by one reentrant lock, so a
    listener may call force_reload() from inside a notification.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Self

from langreload.constants import (
    DEFAULT_EXTENSIONS,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_STABILITY_THRESHOLD,
    DEFAULT_STARTUP_TIMEOUT,
    FALLBACK_LANGUAGE_UNAVAILABLE,
    FALLBACK_MISSING_MESSAGE,
)
from langreload.core.babel_compat import locale_display_name, negotiate_locale_code
from langreload.core.tree import Branch, Leaf, lookup
from langreload.core.validation import is_valid_locale_code, locale_code_from_path
from langreload.diagnostics.codes import Diagnostic, DiagnosticCode
from langreload.diagnostics.errors import (
    ConfigurationError,
    DirectoryUnreadableError,
    FileUnreadableError,
    InvalidLocaleCodeError,
    LanguageDecodeError,
)
from langreload.diagnostics.reporting import ChangeReporter, LineDiffReporter
from langreload.diagnostics.templates import ErrorTemplate
from langreload.enums import ChangeKind, LanguageEventKind, LoaderStatus, LoadStatus, RemovalPolicy
from langreload.localization.config import LoaderConfig
from langreload.localization.decoding import (
    FileFormatDecoder,
    LanguageDecoder,
    read_language_file,
)
from langreload.localization.results import (
    UNAVAILABLE,
    FileLoadResult,
    LanguageEvent,
    LoadSummary,
    Unavailable,
)
from langreload.runtime.store import LanguageEntry, LanguageStore
from langreload.watch.stabilizer import FileChange, file_signature
from langreload.watch.watcher import DirectoryWatcher

if TYPE_CHECKING:
    from types import TracebackType

    from langreload.localization.types import LocaleCode, MessagePath
    from langreload.watch.stabilizer import FileSignature

__all__ = ["LanguageListener", "LanguageLoader"]

logger = logging.getLogger(__name__)

type LanguageListener = Callable[[LanguageEvent], None]


class _LoadMode(StrEnum):
    SCAN = "scan"
    WATCH = "watch"
    FORCE = "force"


@dataclass(frozen=True, slots=True, eq=False)
class _Subscription:
    listener: LanguageListener
    kinds: frozenset[LanguageEventKind]


class LanguageLoader:
    """Directory-backed store of language trees with live reload.

    Example:
        >>> loader = LanguageLoader("locales", "en_UK", fallback_language="en_UK")
        >>> loader.resolve_message("de_DE", "welcome.message")
        'Welcome!'
        >>> unsubscribe = loader.subscribe(lambda event: print(event.kind, event.code))
        >>> # edit locales/de_DE.yml ... prints "updated de_DE"
        >>> loader.stop()

    Example - Explicit lifecycle:
        >>> with LanguageLoader("locales", "en_UK", autostart=False) as loader:
        ...     summary = loader.get_load_summary()
        ...     print(summary)
        LoadSummary(total=2, ok=2, errors=0, directory_error=False)

    Attributes:
        config: Immutable configuration the loader was built from
        status: Current LoaderStatus
    """

    __slots__ = (
        "_config",
        "_config_errors",
        "_decoder",
        "_initial_load_done",
        "_listeners",
        "_listeners_lock",
        "_load_summary",
        "_reporter",
        "_scan_signatures",
        "_status",
        "_store",
        "_watcher",
        "_write_lock",
    )

    def __init__(
        self,
        directory: Path | str,
        default_language: LocaleCode,
        fallback_language: LocaleCode | None = None,
        *,
        extensions: Iterable[str] | None = None,
        debug: bool = False,
        removal_policy: RemovalPolicy = RemovalPolicy.RETAIN,
        decoder: LanguageDecoder | None = None,
        reporter: ChangeReporter | None = None,
        stability_threshold: float = DEFAULT_STABILITY_THRESHOLD,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        force_polling: bool | None = None,
        autostart: bool = True,
    ) -> None:
        """Initialize the loader and, by default, load and start watching.

        Args:
            directory: Directory holding ``<code>.<ext>`` language files
            default_language: Locale code expected to always be present
            fallback_language: Locale code served when a requested language
                is missing (defaults to default_language)
            extensions: Recognized file extensions (default: .yaml, .yml,
                .json, .toml)
            debug: Log per-file detail at INFO and line diffs on change
            removal_policy: What to do when a loaded file is deleted
            decoder: Decoder for file content (default: FileFormatDecoder)
            reporter: Receives old/new text of changed files. Defaults to
                LineDiffReporter when debug is True, otherwise None.
            stability_threshold: Seconds a file must be quiet before reload
            poll_interval: Seconds between stability checks
            force_polling: Passed to watchfiles (None lets it decide)
            autostart: Call start() before returning

        Raises:
            ValueError: If timings are not positive or no extension is given.
                Invalid locale codes never raise here; they set the
                INVALID_CONFIG status.
        """
        config = LoaderConfig(
            directory=Path(directory),
            default_language=default_language,
            fallback_language=fallback_language,
            extensions=DEFAULT_EXTENSIONS if extensions is None else frozenset(extensions),
            debug=debug,
            removal_policy=removal_policy,
            stability_threshold=stability_threshold,
            poll_interval=poll_interval,
            force_polling=force_polling,
        )

        self._config = config
        self._decoder: LanguageDecoder = decoder if decoder is not None else FileFormatDecoder()
        if reporter is None and config.debug:
            reporter = LineDiffReporter()
        self._reporter = reporter

        self._store = LanguageStore()
        self._write_lock = threading.RLock()
        self._listeners: list[_Subscription] = []
        self._listeners_lock = threading.Lock()
        self._watcher: DirectoryWatcher | None = None
        self._load_summary = LoadSummary(results=())
        self._initial_load_done = False
        self._scan_signatures: dict[Path, FileSignature | None] = {}

        self._config_errors: tuple[Diagnostic, ...] = config.validate()
        if self._config_errors:
            for diagnostic in self._config_errors:
                logger.error("%s", diagnostic.message)
            self._status = LoaderStatus.INVALID_CONFIG
            return

        self._status = LoaderStatus.CREATED
        if autostart:
            self.start()

    @classmethod
    def from_config(
        cls,
        config: LoaderConfig,
        *,
        decoder: LanguageDecoder | None = None,
        reporter: ChangeReporter | None = None,
        autostart: bool = True,
    ) -> Self:
        """Create a loader from a LoaderConfig."""
        return cls(
            config.directory,
            config.default_language,
            config.fallback_language,
            extensions=config.extensions,
            debug=config.debug,
            removal_policy=config.removal_policy,
            decoder=decoder,
            reporter=reporter,
            stability_threshold=config.stability_threshold,
            poll_interval=config.poll_interval,
            force_polling=config.force_polling,
            autostart=autostart,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> LoaderConfig:
        """Immutable loader configuration."""
        return self._config

    @property
    def status(self) -> LoaderStatus:
        """Current lifecycle state."""
        return self._status

    @property
    def is_ready(self) -> bool:
        """True once the bulk load finished and until stop() is called."""
        return self._status in (LoaderStatus.READY, LoaderStatus.WATCHING)

    @property
    def is_watching(self) -> bool:
        """True while live reload is active."""
        return self._status is LoaderStatus.WATCHING

    @property
    def config_errors(self) -> tuple[Diagnostic, ...]:
        """Problems found in the configuration (empty if usable)."""
        return self._config_errors

    @property
    def directory(self) -> Path:
        return self._config.directory

    @property
    def default_language(self) -> str:
        return self._config.default_language

    @property
    def fallback_language(self) -> str:
        # LoaderConfig replaces a missing fallback with the default language
        return self._config.fallback_language or self._config.default_language

    @property
    def available_languages(self) -> tuple[LocaleCode, ...]:
        """Sorted codes of all loaded languages."""
        return self._store.codes()

    @property
    def store(self) -> LanguageStore:
        """Underlying store (read access for hosts and tests)."""
        return self._store

    def __repr__(self) -> str:
        return (
            f"LanguageLoader(directory={str(self._config.directory)!r}, "
            f"status={self._status}, "
            f"languages={list(self._store.codes())!r})"
        )

    def require_ready(self) -> None:
        """Raise if the loader is unusable because of its configuration.

        Raises:
            ConfigurationError: If the status is INVALID_CONFIG. The
                exception's ``diagnostics`` lists every problem found.
        """
        if self._status is LoaderStatus.INVALID_CONFIG:
            raise ConfigurationError(
                ErrorTemplate.loader_not_ready(self._status), self._config_errors
            )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> LoadSummary:
        """Load every language file, then start watching the directory.

        Idempotent: calling start() on a running loader returns the summary
        of the existing bulk load. A stopped loader rescans and watches again.

        Returns:
            Summary of the bulk load (empty if the configuration is invalid)
        """
        with self._write_lock:
            match self._status:
                case LoaderStatus.INVALID_CONFIG:
                    logger.error(
                        "Not loading languages from %s: invalid configuration",
                        self._config.directory,
                    )
                    return self._load_summary
                case LoaderStatus.READY | LoaderStatus.WATCHING:
                    return self._load_summary
                case _:
                    summary = self.load_all()
                    self._status = LoaderStatus.READY

        if summary.directory_error is None:
            self._start_watching()
        return summary

    def stop(self) -> None:
        """Stop watching. Loaded languages remain servable."""
        with self._write_lock:
            watcher, self._watcher = self._watcher, None
            if self._status is not LoaderStatus.INVALID_CONFIG:
                self._status = LoaderStatus.STOPPED
        # Joined outside the lock: the watcher thread may be waiting for it
        if watcher is not None:
            watcher.stop()

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

    def _start_watching(self) -> None:
        watcher = DirectoryWatcher(
            self._config.directory,
            self.handle_change,
            extensions=self._config.extensions,
            stability_threshold=self._config.stability_threshold,
            poll_interval=self._config.poll_interval,
            force_polling=self._config.force_polling,
            on_error=self._on_watch_error,
        )
        running = watcher.start(timeout=DEFAULT_STARTUP_TIMEOUT)
        with self._write_lock:
            if not running or self._status is not LoaderStatus.READY:
                watcher.stop(timeout=0)
                if not running and watcher.failure is None:
                    logger.warning(
                        "Watcher for %s did not start; languages will not reload",
                        self._config.directory,
                    )
                return
            self._watcher = watcher
            self._status = LoaderStatus.WATCHING
            self._catch_up()
        self._detail("Watching %s for language changes", self._config.directory)

    def _catch_up(self) -> None:
        """Apply changes made between the bulk load and the watcher baseline.

        The watcher only reports changes against the directory state it saw
        when it started. Files whose size or mtime differ from what load_all()
        recorded are replayed through handle_change(); replaying a file the
        watcher also reports is an UNCHANGED no-op. Must be called with the
        write lock held.
        """
        scanned = self._scan_signatures
        try:
            current = {
                path: file_signature(path)
                for path in self._config.directory.iterdir()
                if path.suffix.lower() in self._config.extensions and path.is_file()
            }
        except OSError as e:
            logger.warning(
                "Could not re-check %s after watcher start: %s", self._config.directory, e
            )
            return

        changes: list[FileChange] = []
        for path in sorted(current):
            if path not in scanned:
                changes.append(FileChange(ChangeKind.ADDED, path))
            elif current[path] != scanned[path]:
                changes.append(FileChange(ChangeKind.MODIFIED, path))
        changes.extend(
            FileChange(ChangeKind.DELETED, path) for path in sorted(scanned) if path not in current
        )
        for change in changes:
            self._detail("Applying %s of %s missed before watching", change.kind, change.path.name)
            self.handle_change(change)

    def _on_watch_error(self, error: DirectoryUnreadableError) -> None:
        with self._write_lock:
            if self._status is LoaderStatus.WATCHING:
                self._status = LoaderStatus.READY
            self._watcher = None
        logger.warning(
            "Live reload disabled (%s); %d loaded language(s) remain available",
            error,
            len(self._store),
        )

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_all(self) -> LoadSummary:
        """Scan the directory and load every recognized language file.

        Files are processed sequentially in sorted name order. When two
        files map to the same locale code (``en_UK.json`` and
        ``en_UK.yml``) the later one wins and a warning is logged. Files
        with unrecognized extensions are skipped without a result.

        Returns:
            LoadSummary of every attempted file
        """
        with self._write_lock:
            if self._status is LoaderStatus.INVALID_CONFIG:
                return self._load_summary

            directory = self._config.directory
            directory_error: DirectoryUnreadableError | None = None
            try:
                paths = sorted(path for path in directory.iterdir() if path.is_file())
            except OSError as e:
                diagnostic = ErrorTemplate.directory_unreadable(str(directory), str(e))
                directory_error = DirectoryUnreadableError(diagnostic)
                logger.error("%s", diagnostic.message)
                paths = []

            results: list[FileLoadResult] = []
            sources: dict[LocaleCode, Path] = {}
            self._scan_signatures = {}
            for path in paths:
                if path.suffix.lower() not in self._config.extensions:
                    logger.debug("Skipping %s: not a language file", path.name)
                    continue
                self._scan_signatures[path] = file_signature(path)
                result = self._load_file(path, mode=_LoadMode.SCAN)
                results.append(result)
                if result.code is None or result.is_error:
                    continue
                if result.code in sources:
                    logger.warning(
                        'Language "%s" is defined by both %s and %s; using %s',
                        result.code,
                        sources[result.code].name,
                        path.name,
                        path.name,
                    )
                sources[result.code] = path

            default_loaded = self._store.has(self._config.default_language)
            if directory_error is None:
                logger.info("Successfully loaded %d languages", len(self._store))
            if not default_loaded:
                logger.error(
                    'Default language "%s" is not available in %s',
                    self._config.default_language,
                    directory,
                )

            summary = LoadSummary(
                results=tuple(results),
                directory_error=directory_error,
                default_language_loaded=default_loaded,
            )
            self._load_summary = summary
            self._initial_load_done = True
            return summary

    def handle_change(self, change: FileChange) -> FileLoadResult | None:
        """Apply one stabilized filesystem change.

        Called by the built-in DirectoryWatcher; public so that hosts with
        their own file watching can feed changes directly.

        Args:
            change: Stabilized change of one file

        Returns:
            Result of the change, or None if it was ignored (unrecognized
            extension, stopped or unusable loader, deletion of a file that
            is not the source of a loaded language)
        """
        with self._write_lock:
            if self._status in (LoaderStatus.INVALID_CONFIG, LoaderStatus.STOPPED):
                return None
            if change.path.suffix.lower() not in self._config.extensions:
                return None
            match change.kind:
                case ChangeKind.DELETED:
                    return self._handle_deletion(change.path)
                case ChangeKind.ADDED | ChangeKind.MODIFIED:
                    return self._load_file(change.path, mode=_LoadMode.WATCH)

    def force_reload(
        self, code: LocaleCode, explicit_path: Path | str | None = None
    ) -> FileLoadResult:
        """Reload a language regardless of whether its file changed.

        Always reads and parses; on success the entry is replaced and an
        ADDED or UPDATED event is emitted even if the content is identical.

        Args:
            code: Locale code to reload (stored under this code)
            explicit_path: File to read. If omitted, the loaded entry's
                source file is used, or the directory is searched for
                ``<code>.<ext>`` with a recognized extension.

        Returns:
            FileLoadResult. NOT_FOUND if no file exists for the code,
            INVALID_CODE for a malformed code, SKIPPED if the configuration
            is invalid. Never raises for file or parse problems.
        """
        path = Path(explicit_path) if explicit_path is not None else None
        with self._write_lock:
            if self._status is LoaderStatus.INVALID_CONFIG:
                error = ConfigurationError(
                    ErrorTemplate.loader_not_ready(self._status), self._config_errors
                )
                logger.error("Cannot reload %s: %s", code, error)
                return FileLoadResult(path, LoadStatus.SKIPPED, error=error)

            if not is_valid_locale_code(code):
                invalid = InvalidLocaleCodeError(
                    ErrorTemplate.invalid_locale_code(code, path=str(path) if path else None)
                )
                logger.error("%s", invalid)
                return FileLoadResult(path, LoadStatus.INVALID_CODE, error=invalid)

            if path is None:
                path = self._find_language_file(code)
            if path is None:
                diagnostic = ErrorTemplate.file_not_found(code, str(self._config.directory))
                logger.error("%s in %s", diagnostic.message, self._config.directory)
                return FileLoadResult(
                    None, LoadStatus.NOT_FOUND, code=code, error=FileUnreadableError(diagnostic)
                )
            return self._load_file(path, code=code, mode=_LoadMode.FORCE)

    def _find_language_file(self, code: LocaleCode) -> Path | None:
        entry = self._store.get_entry(code)
        if entry is not None and entry.source_path is not None and entry.source_path.is_file():
            return entry.source_path
        try:
            candidates = sorted(self._config.directory.iterdir())
        except OSError as e:
            logger.error(
                "%s",
                ErrorTemplate.directory_unreadable(str(self._config.directory), str(e)).message,
            )
            return None
        for candidate in candidates:
            if (
                candidate.stem == code
                and candidate.suffix.lower() in self._config.extensions
                and candidate.is_file()
            ):
                return candidate
        return None

    def _load_file(
        self,
        path: Path,
        *,
        mode: _LoadMode,
        code: LocaleCode | None = None,
    ) -> FileLoadResult:
        """Run one file through validate, read, compare, decode and store.

        Must be called with the write lock held.
        """
        if code is None:
            code = locale_code_from_path(path, self._config.extensions)
        if code is None:
            unsupported = LanguageDecodeError(
                ErrorTemplate.unsupported_format(str(path), path.suffix.lower())
            )
            logger.error("%s: %s", path.name, unsupported)
            return FileLoadResult(path, LoadStatus.UNSUPPORTED, error=unsupported)

        if not is_valid_locale_code(code):
            invalid = InvalidLocaleCodeError(
                ErrorTemplate.invalid_locale_code(code, path=str(path))
            )
            logger.error("Skipping %s: %s", path.name, invalid)
            return FileLoadResult(path, LoadStatus.INVALID_CODE, error=invalid)

        try:
            raw_text = read_language_file(path)
        except FileUnreadableError as e:
            logger.error("%s", e)
            return FileLoadResult(path, LoadStatus.READ_ERROR, code=code, error=e)

        previous = self._store.get_entry(code)
        if mode is not _LoadMode.FORCE and previous is not None and previous.raw_text == raw_text:
            self._detail('No content change for "%s" in %s', code, path.name)
            return FileLoadResult(path, LoadStatus.UNCHANGED, code=code)

        try:
            tree = self._decoder.decode(path, raw_text)
        except LanguageDecodeError as e:
            status = LoadStatus.PARSE_ERROR
            if e.diagnostic is not None and e.diagnostic.code is DiagnosticCode.UNSUPPORTED_FORMAT:
                status = LoadStatus.UNSUPPORTED
            if previous is not None:
                logger.error(
                    'Failed to reload "%s" from %s, keeping previous version: %s',
                    code,
                    path.name,
                    e,
                )
            else:
                logger.error('Failed to load "%s" from %s: %s', code, path.name, e)
            return FileLoadResult(path, status, code=code, error=e)

        if previous is not None and previous.raw_text != raw_text:
            self._report_change(code, previous.raw_text, raw_text)

        self._store.set(code, tree, raw_text, source_path=path)

        kind = LanguageEventKind.ADDED if previous is None else LanguageEventKind.UPDATED
        if mode is _LoadMode.SCAN and not self._initial_load_done:
            self._detail('Loaded "%s" from %s', code, path.name)
            return FileLoadResult(path, LoadStatus.SUCCESS, code=code)

        if kind is LanguageEventKind.ADDED:
            logger.info('Added language "%s" from %s', code, path.name)
        else:
            logger.info('Updated language "%s" from %s', code, path.name)
        self._emit(LanguageEvent(kind=kind, code=code, tree=tree, source_path=path))
        return FileLoadResult(path, LoadStatus.SUCCESS, code=code, event=kind)

    def _handle_deletion(self, path: Path) -> FileLoadResult | None:
        code = locale_code_from_path(path, self._config.extensions)
        entry = self._store.get_entry(code) if is_valid_locale_code(code) else None
        if entry is None or not _same_file(entry.source_path, path):
            return None

        match self._config.removal_policy:
            case RemovalPolicy.EVICT:
                self._store.remove(entry.code)
                logger.info('Removed language "%s": %s was deleted', entry.code, path.name)
                self._emit(
                    LanguageEvent(
                        kind=LanguageEventKind.REMOVED,
                        code=entry.code,
                        tree=entry.tree,
                        source_path=path,
                    )
                )
                return FileLoadResult(
                    path, LoadStatus.REMOVED, code=entry.code, event=LanguageEventKind.REMOVED
                )
            case RemovalPolicy.RETAIN:
                logger.info(
                    '%s was deleted; keeping language "%s" loaded', path.name, entry.code
                )
                return FileLoadResult(path, LoadStatus.RETAINED, code=entry.code)

    def _report_change(self, code: LocaleCode, old_text: str, new_text: str) -> None:
        if self._reporter is None:
            return
        try:
            self._reporter.report(code, old_text, new_text)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception('Change reporter failed for "%s"', code)

    def _detail(self, msg: str, *args: object) -> None:
        logger.log(logging.INFO if self._config.debug else logging.DEBUG, msg, *args)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(
        self,
        listener: LanguageListener,
        kinds: Iterable[LanguageEventKind] | None = None,
    ) -> Callable[[], None]:
        """Register a listener for language lifecycle events.

        Listeners run synchronously on the thread that applied the change
        (the watcher thread for live reloads), after the store was updated.
        A listener that raises is logged and does not affect other
        listeners or the loader.

        Args:
            listener: Called with each LanguageEvent
            kinds: Event kinds to receive (default: all)

        Returns:
            Callable that removes the listener (safe to call twice)

        Example:
            >>> unsubscribe = loader.subscribe(
            ...     lambda event: cache.invalidate(event.code),
            ...     kinds=[LanguageEventKind.UPDATED],
            ... )
        """
        selected = frozenset(LanguageEventKind) if kinds is None else frozenset(kinds)
        subscription = _Subscription(listener=listener, kinds=selected)
        with self._listeners_lock:
            self._listeners.append(subscription)

        def unsubscribe() -> None:
            with self._listeners_lock:
                if subscription in self._listeners:
                    self._listeners.remove(subscription)

        return unsubscribe

    def _emit(self, event: LanguageEvent) -> None:
        with self._listeners_lock:
            subscriptions = tuple(self._listeners)
        for subscription in subscriptions:
            if event.kind not in subscription.kinds:
                continue
            try:
                subscription.listener(event)
            except Exception:  # pylint: disable=broad-exception-caught
                logger.exception('Language listener failed on %s "%s"', event.kind, event.code)

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    def resolve_language(self, code: LocaleCode) -> Branch | Unavailable:
        """Return the tree for code, or the fallback language's tree.

        The default language is never substituted here; only the configured
        fallback language is.

        Args:
            code: Requested locale code (invalid codes are treated as missing)

        Returns:
            Language tree, or UNAVAILABLE if neither code nor the fallback
            language is loaded
        """
        if is_valid_locale_code(code):
            tree = self._store.get(code)
            if tree is not None:
                return tree
        fallback = self._store.get(self.fallback_language)
        if fallback is not None:
            return fallback
        return UNAVAILABLE

    def resolve_message(self, code: LocaleCode, dotted_path: MessagePath) -> object:
        """Look up a message by dotted path, never raising.

        Args:
            code: Requested locale code (fallback applies as in
                resolve_language)
            dotted_path: Keys joined by "." (e.g. "welcome.message")

        Returns:
            The leaf value (usually a string), the Branch if the path names
            a nested group, or a descriptive string naming the path and the
            language when nothing is found

        Example:
            >>> loader.resolve_message("en_UK", "welcome.nonexistent")
            'Message key "welcome.nonexistent" not found in language "en_UK".'
        """
        tree = self.resolve_language(code)
        if isinstance(tree, Unavailable):
            logger.debug('Language "%s" unavailable for "%s"', code, dotted_path)
            return FALLBACK_LANGUAGE_UNAVAILABLE.format(code=code)

        match lookup(tree, dotted_path):
            case Leaf(value=value):
                return value
            case Branch() as branch:
                return branch
            case _:
                logger.debug('Message "%s" missing in "%s"', dotted_path, code)
                return FALLBACK_MISSING_MESSAGE.format(path=dotted_path, code=code)

    def has_language(self, code: LocaleCode) -> bool:
        """Check whether code itself is loaded (no fallback)."""
        return self._store.has(code)

    def get_entry(self, code: LocaleCode) -> LanguageEntry | None:
        """Full store entry for code (no fallback)."""
        return self._store.get_entry(code)

    def get_load_summary(self) -> LoadSummary:
        """Summary of the most recent bulk load.

        Example:
            >>> summary = loader.get_load_summary()
            >>> if not summary.default_language_loaded:
            ...     raise RuntimeError("default language missing")
        """
        return self._load_summary

    # ------------------------------------------------------------------
    # Babel helpers (optional dependency)
    # ------------------------------------------------------------------

    def negotiate_language(self, preferred: str | Iterable[str]) -> LocaleCode | None:
        """Map client locales to a loaded language code.

        Accepts hyphenated codes ("en-GB"), bare languages ("de") or a
        preference list (e.g. parsed Accept-Language). When nothing
        matches, the fallback language is returned if it is loaded.

        Raises:
            BabelImportError: If Babel is not installed
        """
        candidates = [preferred] if isinstance(preferred, str) else list(preferred)
        match = negotiate_locale_code(candidates, self._store.codes())
        if match is not None:
            return match
        fallback = self.fallback_language
        return fallback if self._store.has(fallback) else None

    def get_display_name(
        self, code: LocaleCode, in_language: LocaleCode | None = None
    ) -> str | None:
        """Human-readable name of a language, via Babel's CLDR data.

        Raises:
            BabelImportError: If Babel is not installed
        """
        return locale_display_name(code, in_language)


def _same_file(stored: Path | None, changed: Path) -> bool:
    if stored is None:
        return False
    return stored == changed or stored.resolve() == changed.resolve()
