"""Hypothesis strategies for language loader testing.

Provides reusable strategies for generating loader test data:
- Locale codes in the two-part shape and malformed variants of it
- Nested language data as produced by YAML/JSON decoders

Event-Emitting Strategies (HypoFuzz-Optimized):
- invalid_locale_codes: Emits locale_code_shape={variant}
- language_data: Emits language_data_depth=N

Python 3.13+.
"""

from __future__ import annotations

import re
import string
from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn, SearchStrategy

_VALID_SHAPE = re.compile(r"[a-z]{2}_[A-Z]{2}")

_KEY_ALPHABET = string.ascii_letters + string.digits + "_"

# Letters, digits, punctuation and plain spaces: survives YAML and JSON dumps
_TEXT_ALPHABET = st.characters(
    whitelist_categories=("L", "N", "P"),
    whitelist_characters=" ",
)


def locale_codes() -> SearchStrategy[str]:
    """Generate valid locale codes (e.g. "en_UK")."""
    return st.builds(
        lambda language, region: f"{language}_{region}",
        st.text(alphabet=string.ascii_lowercase, min_size=2, max_size=2),
        st.text(alphabet=string.ascii_uppercase, min_size=2, max_size=2),
    )


@st.composite
def invalid_locale_codes(draw: DrawFn) -> str:
    """Generate strings that look almost, or nothing, like locale codes.

    Events emitted:
    - locale_code_shape={variant}
    """
    variant = draw(
        st.sampled_from([
            "hyphen",
            "lower_region",
            "upper_language",
            "short_language",
            "long_region",
            "trailing_newline",
            "padded",
            "arbitrary",
        ])
    )
    event(f"locale_code_shape={variant}")
    code = draw(locale_codes())
    language, region = code.split("_")
    match variant:
        case "hyphen":
            return f"{language}-{region}"
        case "lower_region":
            return f"{language}_{region.lower()}"
        case "upper_language":
            return f"{language.upper()}_{region}"
        case "short_language":
            return f"{language[0]}_{region}"
        case "long_region":
            return f"{language}_{region}X"
        case "trailing_newline":
            return f"{code}\n"
        case "padded":
            return f" {code}"
        case _:
            return draw(st.text(max_size=12).filter(lambda s: _VALID_SHAPE.fullmatch(s) is None))


def message_keys() -> SearchStrategy[str]:
    """Generate message keys (never containing the path separator)."""
    return st.text(alphabet=_KEY_ALPHABET, min_size=1, max_size=12)


def leaf_values() -> SearchStrategy[object]:
    """Generate leaf values that compare reliably (no floats)."""
    return st.one_of(
        st.text(alphabet=_TEXT_ALPHABET, max_size=30),
        st.integers(min_value=-(2**31), max_value=2**31),
        st.booleans(),
    )


@st.composite
def language_data(draw: DrawFn, max_leaves: int = 20) -> dict[str, object]:
    """Generate nested language file data with a mapping at the top level.

    Events emitted:
    - language_data_depth=N
    """
    nested = st.recursive(
        leaf_values(),
        lambda children: st.dictionaries(message_keys(), children, min_size=1, max_size=4),
        max_leaves=max_leaves,
    )
    data = draw(st.dictionaries(message_keys(), nested, min_size=1, max_size=5))
    event(f"language_data_depth={_depth(data)}")
    return data


def _depth(value: object) -> int:
    if isinstance(value, dict):
        return 1 + max((_depth(child) for child in value.values()), default=0)
    return 0
