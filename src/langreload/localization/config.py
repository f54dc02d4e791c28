"""Loader configuration.

Provides a single frozen dataclass that carries every LanguageLoader
construction parameter, so hosts can build the configuration once (from
their own settings layer) and hand it to the loader.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from langreload.constants import (
    DEFAULT_EXTENSIONS,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_STABILITY_THRESHOLD,
)
from langreload.core.validation import is_valid_locale_code
from langreload.diagnostics.codes import Diagnostic
from langreload.diagnostics.templates import ErrorTemplate
from langreload.enums import RemovalPolicy

__all__ = ["LoaderConfig", "normalize_extensions"]


def normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    """Lowercase extensions and ensure a leading dot.

    Example:
        >>> sorted(normalize_extensions(["YML", ".json"]))
        ['.json', '.yml']
    """
    normalized = set()
    for ext in extensions:
        cleaned = ext.strip().lower()
        if not cleaned:
            continue
        normalized.add(cleaned if cleaned.startswith(".") else f".{cleaned}")
    return frozenset(normalized)


@dataclass(frozen=True, slots=True)
class LoaderConfig:
    """Immutable configuration for LanguageLoader.

    Locale codes are deliberately NOT validated in __post_init__: an invalid
    default or fallback language puts the loader into an explicit
    INVALID_CONFIG state (see validate()) instead of failing construction.
    Structural problems (non-positive timings, no extensions) still raise.

    Attributes:
        directory: Directory holding the language files
        default_language: Locale code expected to always be present
        fallback_language: Locale code served when a requested language is
            missing (defaults to default_language)
        extensions: Recognized file extensions (default: yaml, yml, json, toml)
        debug: Log per-file detail at INFO and print line diffs on change
        removal_policy: RETAIN (default) keeps entries whose file was
            deleted; EVICT removes them
        stability_threshold: Seconds a file must stay unchanged before a
            watch event is delivered
        poll_interval: Seconds between stability checks
        force_polling: Passed to watchfiles (None lets watchfiles decide)

    Example:
        >>> config = LoaderConfig("locales", "en_UK", fallback_language="de_DE")
        >>> config.fallback_language
        'de_DE'
        >>> LoaderConfig("locales", "en_UK").fallback_language
        'en_UK'
    """

    directory: Path
    default_language: str
    fallback_language: str | None = None
    extensions: frozenset[str] = DEFAULT_EXTENSIONS
    debug: bool = False
    removal_policy: RemovalPolicy = RemovalPolicy.RETAIN
    stability_threshold: float = DEFAULT_STABILITY_THRESHOLD
    poll_interval: float = DEFAULT_POLL_INTERVAL
    force_polling: bool | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Normalize fields and validate structural settings.

        Raises:
            ValueError: If timings are not positive or no extension is given
        """
        object.__setattr__(self, "directory", Path(self.directory))
        object.__setattr__(self, "extensions", normalize_extensions(self.extensions))
        object.__setattr__(self, "removal_policy", RemovalPolicy(self.removal_policy))
        if self.fallback_language is None:
            object.__setattr__(self, "fallback_language", self.default_language)

        if not self.extensions:
            msg = "At least one file extension is required"
            raise ValueError(msg)
        if self.stability_threshold <= 0:
            msg = "stability_threshold must be positive"
            raise ValueError(msg)
        if self.poll_interval <= 0:
            msg = "poll_interval must be positive"
            raise ValueError(msg)

    def validate(self) -> tuple[Diagnostic, ...]:
        """Check default and fallback language codes.

        Returns:
            One diagnostic per invalid code; empty if the configuration is
            usable
        """
        problems: list[Diagnostic] = []
        if not is_valid_locale_code(self.default_language):
            problems.append(
                ErrorTemplate.config_invalid_locale(self.default_language, role="default language")
            )
        if not is_valid_locale_code(self.fallback_language):
            problems.append(
                ErrorTemplate.config_invalid_locale(self.fallback_language, role="fallback language")
            )
        return tuple(problems)

    @property
    def is_valid(self) -> bool:
        """True if validate() reports no problems."""
        return not self.validate()
