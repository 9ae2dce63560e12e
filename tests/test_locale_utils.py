"""Tests for locale_utils.py.

Covers normalize_locale and get_babel_locale, with a property test for
locale normalization.

Python 3.13+.
"""

import pytest
from babel import Locale
from babel.core import UnknownLocaleError
from hypothesis import given
from hypothesis import strategies as st

from temploc.locale_utils import get_babel_locale, normalize_locale


class TestNormalizeLocale:
    """BCP-47 tags to POSIX identifiers."""

    def test_bcp47_to_posix(self) -> None:
        assert normalize_locale("en-US") == "en_US"

    def test_already_normalized(self) -> None:
        assert normalize_locale("en_US") == "en_US"

    def test_simple_locale(self) -> None:
        assert normalize_locale("en") == "en"

    def test_surrounding_whitespace(self) -> None:
        assert normalize_locale(" nl-BE ") == "nl_BE"

    def test_multiple_hyphens(self) -> None:
        assert normalize_locale("zh-Hans-CN") == "zh_Hans_CN"

    @given(parts=st.lists(st.from_regex(r"[A-Za-z]{2,4}", fullmatch=True), min_size=1, max_size=3))
    def test_hyphen_and_underscore_agree(self, parts: list[str]) -> None:
        """PROPERTY: Both spellings of a tag normalize identically."""
        assert normalize_locale("-".join(parts)) == normalize_locale("_".join(parts))
        assert "-" not in normalize_locale("-".join(parts))


class TestGetBabelLocale:
    def test_returns_locale(self) -> None:
        locale = get_babel_locale("pt-BR")
        assert isinstance(locale, Locale)
        assert (locale.language, locale.territory) == ("pt", "BR")

    def test_cached(self) -> None:
        assert get_babel_locale("nl") is get_babel_locale("nl")

    def test_unknown_locale(self) -> None:
        with pytest.raises(UnknownLocaleError):
            get_babel_locale("xx-QQ")

    def test_malformed_locale(self) -> None:
        with pytest.raises(ValueError):
            get_babel_locale("not a locale!")
