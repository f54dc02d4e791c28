"""langreload - hot-reloading localization loader.

Watches a directory of language files (YAML, JSON, TOML), keeps one parsed
tree per locale code in memory, serves dotted-path message lookups with a
fallback language, and notifies subscribers when files are added, changed
or removed. Designed to be embedded in long-running hosts (chat bots, web
services) that need localized strings without restarting.

Public API:
    LanguageLoader - Bulk load, live reload and fallback-aware reads
    LoaderConfig - Frozen construction parameters
    LanguageEvent - Notification delivered to subscribers
    UNAVAILABLE - Returned by resolve_language() when nothing is loaded

Exceptions:
    LangReloadError - Base exception class
    ConfigurationError - Loader configuration is unusable

Submodules:
    langreload.core - Language trees and locale code validation
    langreload.diagnostics - Error types, diagnostics, diff reporting
    langreload.localization - Loader, configuration, decoders, results
    langreload.runtime - Thread-safe LanguageStore and RWLock
    langreload.watch - DirectoryWatcher and write stabilization
"""

# Essential Public API - Minimal exports for clean namespace
from .core import Branch, Leaf
from .diagnostics import ConfigurationError, LangReloadError
from .enums import LanguageEventKind, LoaderStatus, LoadStatus, RemovalPolicy
from .localization import UNAVAILABLE, LanguageEvent, LanguageLoader, LoaderConfig

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("langreload")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "UNAVAILABLE",
    "Branch",
    "ConfigurationError",
    "LangReloadError",
    "LanguageEvent",
    "LanguageEventKind",
    "LanguageLoader",
    "Leaf",
    "LoadStatus",
    "LoaderConfig",
    "LoaderStatus",
    "RemovalPolicy",
    "__version__",
]
