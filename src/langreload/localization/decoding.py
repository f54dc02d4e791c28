"""Language file decoding.

Provides the decoder protocol used by LanguageLoader and the default
implementation for YAML, JSON and TOML language files.

Components:
    LanguageDecoder - Protocol for turning file text into a language tree
    FileFormatDecoder - YAML (PyYAML), JSON and TOML (tomllib) decoder
    read_language_file - UTF-8 file read with FileUnreadableError

Every decoder failure raises LanguageDecodeError; the loader catches it and
keeps whatever entry it already had.

Python 3.13+.
"""

from __future__ import annotations

import json
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import yaml

from langreload.constants import (
    DEFAULT_ENCODING,
    JSON_EXTENSIONS,
    TOML_EXTENSIONS,
    YAML_EXTENSIONS,
)
from langreload.core.tree import build_tree
from langreload.diagnostics.errors import FileUnreadableError, LanguageDecodeError
from langreload.diagnostics.templates import ErrorTemplate

if TYPE_CHECKING:
    from langreload.core.tree import Branch
    from langreload.localization.types import RawText

__all__ = [
    "FileFormatDecoder",
    "LanguageDecoder",
    "read_language_file",
]

type _Parser = Callable[[str], object]


class LanguageDecoder(Protocol):
    """Protocol for language file decoders.

    This is a Protocol (structural typing) rather than ABC so that hosts can
    plug in decoders for other formats without subclassing.
    """

    @property
    def extensions(self) -> frozenset[str]:
        """Lowercase extensions (with leading dot) this decoder accepts."""
        ...

    def decode(self, path: Path, source: RawText) -> Branch:
        """Decode file text into a language tree.

        Args:
            path: File the text was read from (selects the format)
            source: Raw file content

        Returns:
            Root branch of the language tree

        Raises:
            LanguageDecodeError: If the format is unsupported, the content is
                malformed, or the top level is not a mapping
        """
        ...


def _parse_yaml(source: str) -> object:
    return yaml.safe_load(source)


def _parse_json(source: str) -> object:
    return json.loads(source)


def _parse_toml(source: str) -> object:
    return tomllib.loads(source)


def _default_parsers() -> dict[str, _Parser]:
    parsers: dict[str, _Parser] = {}
    parsers.update(dict.fromkeys(YAML_EXTENSIONS, _parse_yaml))
    parsers.update(dict.fromkeys(JSON_EXTENSIONS, _parse_json))
    parsers.update(dict.fromkeys(TOML_EXTENSIONS, _parse_toml))
    return parsers


@dataclass(frozen=True, slots=True)
class FileFormatDecoder:
    """Decoder dispatching on file extension.

    Supported formats:
        .yaml, .yml - PyYAML ``safe_load``
        .json - ``json.loads``
        .toml - ``tomllib.loads``

    An empty YAML document decodes to None and is rejected like any other
    non-mapping root.

    Example:
        >>> decoder = FileFormatDecoder()
        >>> tree = decoder.decode(Path("en_UK.json"), '{"hello": "Hello"}')
        >>> tree.to_dict()
        {'hello': 'Hello'}

    Attributes:
        parsers: Extension to parser function mapping. Pass a subset to
            restrict formats, or extra entries to add formats.
    """

    parsers: Mapping[str, _Parser] = field(default_factory=_default_parsers)

    @property
    def extensions(self) -> frozenset[str]:
        return frozenset(self.parsers)

    def supports(self, path: Path) -> bool:
        """Check whether path has a recognized extension."""
        return path.suffix.lower() in self.parsers

    def decode(self, path: Path, source: RawText) -> Branch:
        suffix = path.suffix.lower()
        parser = self.parsers.get(suffix)
        if parser is None:
            raise LanguageDecodeError(ErrorTemplate.unsupported_format(str(path), suffix))

        # JSONDecodeError and TOMLDecodeError are ValueErrors; PyYAML also raises
        # bare ValueError for impossible timestamps (2023-13-45)
        try:
            data = parser(source)
        except (yaml.YAMLError, ValueError, RecursionError) as e:
            raise LanguageDecodeError(ErrorTemplate.parse_failed(str(path), _first_line(e))) from e

        if not isinstance(data, Mapping):
            raise LanguageDecodeError(
                ErrorTemplate.root_not_mapping(str(path), type(data).__name__)
            )
        try:
            return build_tree(data)
        except RecursionError as e:
            raise LanguageDecodeError(
                ErrorTemplate.parse_failed(str(path), "nesting is too deep")
            ) from e


def read_language_file(path: Path) -> RawText:
    """Read a language file as UTF-8 text.

    Args:
        path: File to read

    Returns:
        File content

    Raises:
        FileUnreadableError: On any OS error (missing file, permissions,
            deletion race) or invalid UTF-8
    """
    try:
        return path.read_text(encoding=DEFAULT_ENCODING)
    except (OSError, UnicodeDecodeError) as e:
        raise FileUnreadableError(ErrorTemplate.file_unreadable(str(path), str(e))) from e


def _first_line(error: Exception) -> str:
    text = str(error).strip()
    return text.splitlines()[0] if text else type(error).__name__
