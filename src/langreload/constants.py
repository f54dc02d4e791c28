"""Shared constants for langreload.

Centralizes configuration defaults and user-facing fallback strings so that
the watcher, decoder and orchestrator agree on a single source of truth.

Constants are grouped by domain:
- Locale codes: Shape of valid language file stems
- File formats: Recognized language file extensions
- Timing: Write-stabilization window for the directory watcher
- Fallback strings: Text returned instead of raising on missing data

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale codes
    "LOCALE_CODE_PATTERN",
    "LOCALE_CODE_EXAMPLE",
    # File formats
    "YAML_EXTENSIONS",
    "JSON_EXTENSIONS",
    "TOML_EXTENSIONS",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_ENCODING",
    # Timing
    "DEFAULT_STABILITY_THRESHOLD",
    "DEFAULT_POLL_INTERVAL",
    "DEFAULT_STARTUP_TIMEOUT",
    # Fallback strings
    "MESSAGE_PATH_SEPARATOR",
    "FALLBACK_MISSING_MESSAGE",
    "FALLBACK_LANGUAGE_UNAVAILABLE",
]

# ============================================================================
# LOCALE CODES
# ============================================================================

# Two lowercase letters, underscore, two uppercase letters (e.g. "en_UK").
# Anchored with \Z rather than $ so a trailing newline is not accepted.
LOCALE_CODE_PATTERN: str = r"^[a-z]{2}_[A-Z]{2}\Z"

LOCALE_CODE_EXAMPLE: str = "de_DE"

# ============================================================================
# FILE FORMATS
# ============================================================================

YAML_EXTENSIONS: frozenset[str] = frozenset({".yaml", ".yml"})
JSON_EXTENSIONS: frozenset[str] = frozenset({".json"})
TOML_EXTENSIONS: frozenset[str] = frozenset({".toml"})

DEFAULT_EXTENSIONS: frozenset[str] = YAML_EXTENSIONS | JSON_EXTENSIONS | TOML_EXTENSIONS

DEFAULT_ENCODING: str = "utf-8"

# ============================================================================
# TIMING
# ============================================================================
#
# Editors frequently save in several steps (truncate, write, rename, touch).
# A change is delivered only once the file has been quiet for
# DEFAULT_STABILITY_THRESHOLD seconds, checked every DEFAULT_POLL_INTERVAL.

DEFAULT_STABILITY_THRESHOLD: float = 0.5
DEFAULT_POLL_INTERVAL: float = 0.1

# Upper bound on how long DirectoryWatcher.start() waits for the native
# watcher thread to come up.
DEFAULT_STARTUP_TIMEOUT: float = 5.0

# ============================================================================
# FALLBACK STRINGS
# ============================================================================
#
# Missing messages are rendered to end users, so lookups return these
# descriptive strings instead of raising.

MESSAGE_PATH_SEPARATOR: str = "."

FALLBACK_MISSING_MESSAGE: str = 'Message key "{path}" not found in language "{code}".'
FALLBACK_LANGUAGE_UNAVAILABLE: str = 'Language "{code}" is not available.'
