"""Immutable language trees.

A language tree is the decoded content of one language file: nested
mappings whose leaves are message strings (or other scalar values).
Decoders produce plain Python data; build_tree() converts it into a tagged
tree of Branch and Leaf nodes so traversal failure is a structural case
rather than a runtime type check.

Trees are immutable. The store swaps whole trees on reload, so a reader
holding a tree reference never observes a partial update.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

from langreload.constants import MESSAGE_PATH_SEPARATOR

__all__ = [
    "Branch",
    "LanguageNode",
    "Leaf",
    "MISSING",
    "build_tree",
    "lookup",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Leaf:
    """Terminal value in a language tree.

    Attributes:
        value: Message string, number, boolean, None, date/time (TOML) or a
            tuple for list values. Lists are frozen into tuples recursively;
            mappings nested inside lists are frozen into read-only mappings.
    """

    value: object


@dataclass(frozen=True, slots=True, eq=False)
class Branch:
    """Mapping node in a language tree.

    Behaves like a read-only mapping of child nodes. Equality is structural:
    two branches are equal if they have the same keys mapping to equal
    children, regardless of which file format produced them.
    """

    children: Mapping[str, LanguageNode] = field(default_factory=lambda: MappingProxyType({}))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Branch):
            return NotImplemented
        return dict(self.children) == dict(other.children)

    def __getitem__(self, key: str) -> LanguageNode:
        return self.children[key]

    def __contains__(self, key: object) -> bool:
        return key in self.children

    def __iter__(self) -> Iterator[str]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def __repr__(self) -> str:
        return f"Branch(keys={list(self.children)!r})"

    def get(self, key: str) -> LanguageNode | None:
        """Return child node for key, or None."""
        return self.children.get(key)

    def keys(self) -> tuple[str, ...]:
        """Child keys in document order."""
        return tuple(self.children)

    def to_dict(self) -> dict[str, object]:
        """Convert back to plain nested Python data (dicts and leaf values)."""
        result: dict[str, object] = {}
        for key, child in self.children.items():
            match child:
                case Branch():
                    result[key] = child.to_dict()
                case Leaf(value=value):
                    result[key] = _thaw(value)
        return result

    def iter_paths(self, prefix: str = "") -> Iterator[tuple[str, object]]:
        """Yield (dotted_path, leaf_value) pairs depth-first.

        Example:
            >>> tree = build_tree({"welcome": {"title": "Hi"}})
            >>> list(tree.iter_paths())
            [('welcome.title', 'Hi')]
        """
        for key, child in self.children.items():
            path = f"{prefix}{MESSAGE_PATH_SEPARATOR}{key}" if prefix else key
            match child:
                case Branch():
                    yield from child.iter_paths(path)
                case Leaf(value=value):
                    yield path, value


type LanguageNode = Branch | Leaf


class _Missing:
    """Sentinel type for a failed tree lookup."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def build_tree(data: Mapping[object, object]) -> Branch:
    """Convert decoded mapping data into an immutable Branch.

    Keys are converted to strings (YAML permits integer or boolean keys).
    Nested mappings become branches; everything else becomes a leaf. When
    two keys convert to the same string (``1`` and ``"1"``), the later one
    wins and a warning is logged.

    Args:
        data: Top-level mapping produced by a decoder

    Returns:
        Root branch of the language tree
    """
    children: dict[str, LanguageNode] = {}
    for key, value in data.items():
        name = str(key)
        if name in children:
            logger.warning(
                'Key %r duplicates key "%s" after conversion to text; keeping the later value',
                key,
                name,
            )
        if isinstance(value, Mapping):
            children[name] = build_tree(value)
        else:
            children[name] = Leaf(_freeze(value))
    return Branch(MappingProxyType(children))


def lookup(tree: Branch, path: str) -> LanguageNode | _Missing:
    """Walk a dotted path through a tree.

    Args:
        tree: Root branch
        path: Dot-separated keys (e.g. "welcome.message")

    Returns:
        Node at the path, or MISSING if any segment is absent or a leaf is
        reached before the path ends.

    Example:
        >>> tree = build_tree({"welcome": {"message": "Hello"}})
        >>> lookup(tree, "welcome.message")
        Leaf(value='Hello')
        >>> lookup(tree, "welcome.message.extra")
        MISSING
    """
    node: LanguageNode = tree
    for segment in path.split(MESSAGE_PATH_SEPARATOR):
        match node:
            case Branch() if segment in node.children:
                node = node.children[segment]
            case _:
                return MISSING
    return node


def _freeze(value: object) -> object:
    match value:
        case list() | tuple():
            return tuple(_freeze(item) for item in value)
        case Mapping():
            return MappingProxyType({str(k): _freeze(v) for k, v in value.items()})
        case _:
            return value


def _thaw(value: object) -> object:
    match value:
        case tuple():
            return [_thaw(item) for item in value]
        case Mapping():
            return {k: _thaw(v) for k, v in value.items()}
        case _:
            return value
