"""Tests for locale code validation.

Tests verify:
- The two-part shape (lowercase language, underscore, uppercase region)
- Rejection of non-strings and near misses
- require_locale_code error type and diagnostic
- Locale code derivation from file names
"""

from pathlib import Path

import pytest
from hypothesis import given

from langreload.core.validation import (
    is_valid_locale_code,
    locale_code_from_path,
    require_locale_code,
)
from langreload.diagnostics import DiagnosticCode, InvalidLocaleCodeError
from tests.strategies import invalid_locale_codes, locale_codes


class TestIsValidLocaleCode:
    """Test the locale code predicate."""

    @pytest.mark.parametrize("code", ["en_UK", "de_DE", "fr_FR", "zz_ZZ"])
    def test_accepts_two_part_codes(self, code: str) -> None:
        """Lowercase language, underscore, uppercase region is valid."""
        assert is_valid_locale_code(code)

    @pytest.mark.parametrize(
        "code",
        [
            "en-UK",
            "en_uk",
            "EN_UK",
            "en",
            "en_UKX",
            "eng_UK",
            "",
            " en_UK",
            "en_UK\n",
            "bad-name",
            "en_U1",
        ],
    )
    def test_rejects_near_misses(self, code: str) -> None:
        """Anything deviating from the shape is invalid."""
        assert not is_valid_locale_code(code)

    @pytest.mark.parametrize("value", [None, 42, b"en_UK", ["en_UK"]])
    def test_rejects_non_strings(self, value: object) -> None:
        """Non-string values are never valid."""
        assert not is_valid_locale_code(value)

    @given(code=locale_codes())
    def test_generated_codes_are_valid(self, code: str) -> None:
        """Every generated two-part code passes (universal property)."""
        assert is_valid_locale_code(code)

    @given(code=invalid_locale_codes())
    def test_generated_malformed_codes_are_invalid(self, code: str) -> None:
        """Every malformed variant fails (universal property)."""
        assert not is_valid_locale_code(code)


class TestRequireLocaleCode:
    """Test the raising validator."""

    def test_returns_valid_code_unchanged(self) -> None:
        """A valid code is returned as is."""
        assert require_locale_code("en_UK") == "en_UK"

    def test_raises_invalid_locale_code_error(self) -> None:
        """Invalid codes raise InvalidLocaleCodeError with a diagnostic."""
        with pytest.raises(InvalidLocaleCodeError) as exc_info:
            require_locale_code("en-UK")

        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code is DiagnosticCode.INVALID_LOCALE_CODE
        assert diagnostic.locale_code == "en-UK"
        assert "en-UK" in str(exc_info.value)

    def test_error_is_value_error(self) -> None:
        """InvalidLocaleCodeError can be caught as ValueError."""
        with pytest.raises(ValueError, match="Invalid language code"):
            require_locale_code("nope")

    def test_role_appears_in_message(self) -> None:
        """The role names what the code was used for."""
        with pytest.raises(InvalidLocaleCodeError, match="Invalid fallback language code"):
            require_locale_code("x", role="fallback language")


class TestLocaleCodeFromPath:
    """Test deriving the locale code candidate from file names."""

    def test_strips_recognized_extension(self) -> None:
        """The stem of a recognized file is returned."""
        assert locale_code_from_path(Path("locales/en_UK.yml"), {".yml"}) == "en_UK"

    def test_suffix_match_is_case_insensitive(self) -> None:
        """Upper-case suffixes are recognized."""
        assert locale_code_from_path("en_UK.JSON", {".json"}) == "en_UK"

    def test_unrecognized_extension_returns_none(self) -> None:
        """Files in other formats have no locale code."""
        assert locale_code_from_path("notes.txt", {".yml", ".json"}) is None

    def test_stem_is_not_validated(self) -> None:
        """Badly named files still yield their stem so they can be reported."""
        assert locale_code_from_path("bad-name.json", {".json"}) == "bad-name"
