"""Hypothesis strategies for langreload property-based testing.

Strategies are organized by domain:

- localization: locale codes (valid and malformed) and language file data

Usage:
    from tests.strategies import locale_codes, language_data

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - invalid_locale_codes, language_data
"""

from .localization import (
    invalid_locale_codes,
    language_data,
    leaf_values,
    locale_codes,
    message_keys,
)

__all__ = [
    "invalid_locale_codes",
    "language_data",
    "leaf_values",
    "locale_codes",
    "message_keys",
]
