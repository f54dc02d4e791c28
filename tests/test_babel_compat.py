"""Tests for babel_compat module - optional Babel dependency handling.

Tests the lazy import infrastructure, error handling, and the two CLDR
helpers (locale negotiation and display names).
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from langreload.core import babel_compat
from langreload.core.babel_compat import (
    BabelImportError,
    is_babel_available,
    locale_display_name,
    negotiate_locale_code,
    require_babel,
)
from tests.strategies import locale_codes

pytest.importorskip("babel")


class TestBabelAvailability:
    """Test Babel availability checking."""

    def test_is_babel_available_is_cached(self) -> None:
        """Repeated calls return consistent result (cached)."""
        assert is_babel_available() == is_babel_available()

    def test_babel_is_available_in_test_environment(self) -> None:
        assert is_babel_available() is True

    def test_require_babel_does_not_raise_when_available(self) -> None:
        require_babel("negotiate_locale_code")

    def test_require_babel_raises_when_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(babel_compat, "_check_babel_available", lambda: False)

        with pytest.raises(BabelImportError, match="locale_display_name"):
            require_babel("locale_display_name")

    def test_helpers_guarded_when_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(babel_compat, "_check_babel_available", lambda: False)

        with pytest.raises(BabelImportError):
            negotiate_locale_code(["en"], ["en_UK"])
        with pytest.raises(BabelImportError):
            locale_display_name("en_UK")


class TestBabelImportError:
    """Test BabelImportError exception class."""

    def test_message_includes_feature_and_install_instructions(self) -> None:
        error = BabelImportError("negotiate_language")
        assert "negotiate_language" in str(error)
        assert "pip install langreload[babel]" in str(error)

    def test_stores_feature_attribute(self) -> None:
        assert BabelImportError("my_feature").feature == "my_feature"

    def test_is_import_error(self) -> None:
        assert isinstance(BabelImportError("test"), ImportError)


class TestNegotiateLocaleCode:
    """Test mapping client locales onto loaded codes."""

    AVAILABLE = ("de_DE", "en_UK", "fr_FR")

    def test_hyphenated_exact_match(self) -> None:
        assert negotiate_locale_code(["en-UK"], self.AVAILABLE) == "en_UK"

    def test_case_insensitive_match_returns_available_spelling(self) -> None:
        assert negotiate_locale_code(["en-uk"], self.AVAILABLE) == "en_UK"

    def test_region_mismatch_falls_back_to_language(self) -> None:
        assert negotiate_locale_code(["en-GB"], self.AVAILABLE) == "en_UK"

    def test_bare_language(self) -> None:
        assert negotiate_locale_code(["fr"], self.AVAILABLE) == "fr_FR"

    def test_preference_order_wins(self) -> None:
        assert negotiate_locale_code(["ja-JP", "de-AT", "en-UK"], self.AVAILABLE) == "de_DE"

    def test_no_match(self) -> None:
        assert negotiate_locale_code(["ja-JP"], self.AVAILABLE) is None

    def test_blank_preferences_ignored(self) -> None:
        assert negotiate_locale_code(["", "  "], self.AVAILABLE) is None

    @given(code=locale_codes())
    def test_exact_code_always_negotiates_to_itself(self, code: str) -> None:
        available = sorted({code, "en_UK"})
        assert negotiate_locale_code([code], available) == code


class TestLocaleDisplayName:
    """Test CLDR display names."""

    def test_native_name(self) -> None:
        name = locale_display_name("de_DE")
        assert name is not None
        assert "Deutsch" in name

    def test_name_in_other_locale(self) -> None:
        assert locale_display_name("de_DE", in_locale="en_US") == "German (Germany)"

    def test_region_unknown_to_cldr_uses_language(self) -> None:
        assert locale_display_name("en_UK") == "English"

    def test_unknown_locale(self) -> None:
        assert locale_display_name("xx_XX") is None

    @given(in_locale=st.sampled_from(["en_US", "de_DE", "fr_FR"]))
    def test_display_name_never_empty(self, in_locale: str) -> None:
        name = locale_display_name("fr_FR", in_locale=in_locale)
        assert name
