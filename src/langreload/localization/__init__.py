"""Language loading package for LanguageLoader.

Provides the full loading stack: type aliases, configuration, file
decoding, load result tracking and the hot-reloading orchestrator.

Submodules:
    types        - PEP 695 type aliases (LocaleCode, MessagePath, RawText)
    config       - LoaderConfig (frozen construction parameters)
    decoding     - LanguageDecoder protocol, FileFormatDecoder
    results      - FileLoadResult, LoadSummary, LanguageEvent, UNAVAILABLE
    orchestrator - LanguageLoader (bulk load, live reload, fallback reads)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from langreload.enums import LanguageEventKind, LoaderStatus, LoadStatus, RemovalPolicy
from langreload.localization.config import LoaderConfig
from langreload.localization.decoding import FileFormatDecoder, LanguageDecoder, read_language_file
from langreload.localization.orchestrator import LanguageListener, LanguageLoader
from langreload.localization.results import (
    UNAVAILABLE,
    FileLoadResult,
    LanguageEvent,
    LoadSummary,
    Unavailable,
)
from langreload.localization.types import LocaleCode, MessagePath, RawText

__all__ = [
    # Main orchestrator
    "LanguageLoader",
    "LoaderConfig",
    "LoaderStatus",
    "RemovalPolicy",
    # Decoder protocol and implementation
    "LanguageDecoder",
    "FileFormatDecoder",
    "read_language_file",
    # Load tracking
    "LoadStatus",
    "LoadSummary",
    "FileLoadResult",
    # Notifications
    "LanguageEvent",
    "LanguageEventKind",
    "LanguageListener",
    # Read API sentinel
    "UNAVAILABLE",
    "Unavailable",
    # Type aliases for user code type annotations
    "LocaleCode",
    "MessagePath",
    "RawText",
]
