"""Core utilities shared across the store, watcher and orchestrator.

Exports:
    Branch, Leaf: Immutable language tree nodes
    build_tree: Convert decoded data into a language tree
    lookup: Dotted-path traversal returning MISSING on failure
    is_valid_locale_code, require_locale_code: Locale code validation

Python 3.13+.
"""

from .tree import MISSING, Branch, LanguageNode, Leaf, build_tree, lookup
from .validation import is_valid_locale_code, locale_code_from_path, require_locale_code

__all__ = [
    "MISSING",
    "Branch",
    "LanguageNode",
    "Leaf",
    "build_tree",
    "is_valid_locale_code",
    "locale_code_from_path",
    "lookup",
    "require_locale_code",
]
