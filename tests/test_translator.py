"""Tests for the translator collaborators.

GettextTranslator is exercised against real catalogs compiled with Babel
(babel.messages.mofile.write_mo), in memory or on disk.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

import pytest
from babel.messages.catalog import Catalog
from babel.messages.mofile import write_mo
from babel.support import Translations

from temploc.runtime import (
    GettextTranslator,
    MessageFormatter,
    NullTranslator,
    context_key,
)

DUTCH = [
    ("Hello", "Hallo", None),
    (("one file", "{_count} files"), ("één bestand", "{_count} bestanden"), None),
    ("Open", "Openen", "menu"),
    ("Dear {name}", "Beste {name}", "formal=1;gender=f"),
    (("one guest", "{_count} guests"), ("één gast", "{_count} gasten"), "party"),
]


def dutch_catalog() -> Catalog:
    catalog = Catalog(locale="nl", domain="shop")
    for msgid, string, context in DUTCH:
        catalog.add(msgid, string, context=context)
    return catalog


def compiled(catalog: Catalog) -> Translations:
    buffer = BytesIO()
    write_mo(buffer, catalog)
    buffer.seek(0)
    return Translations(buffer, domain="shop")


@pytest.fixture
def translator() -> GettextTranslator:
    return GettextTranslator({"nl": compiled(dutch_catalog())})


# ============================================================================
# CONTEXT KEYS
# ============================================================================


class TestContextKey:
    def test_string_unchanged(self) -> None:
        assert context_key("menu") == "menu"

    def test_mapping_sorted(self) -> None:
        assert context_key({"gender": "f", "formal": 1}) == "formal=1;gender=f"

    @pytest.mark.parametrize("context", [None, "", {}])
    def test_empty_is_none(self, context: object) -> None:
        assert context_key(context) is None  # type: ignore[arg-type]


# ============================================================================
# NULL TRANSLATOR
# ============================================================================


class TestNullTranslator:
    def test_singular(self) -> None:
        assert NullTranslator().translate("Hello", None, None, "nl", None) == "Hello"

    @pytest.mark.parametrize(("count", "expected"), [(1, "one"), (0, "many"), (2, "many")])
    def test_plural_english_rule(self, count: int, expected: str) -> None:
        assert NullTranslator().translate("one", "many", count, None, None) == expected

    @pytest.mark.parametrize(
        ("count", "expected"), [("1", "one"), ("5", "many"), (1.0, "one"), (None, "many")]
    )
    def test_count_compared_numerically(self, count: object, expected: str) -> None:
        assert NullTranslator().translate("one", "many", count, None, None) == expected


# ============================================================================
# GETTEXT TRANSLATOR
# ============================================================================


class TestGettextTranslator:
    """Lookups in compiled catalogs."""

    def test_singular(self, translator: GettextTranslator) -> None:
        assert translator.translate("Hello", None, None, "nl", None) == "Hallo"

    @pytest.mark.parametrize(
        ("count", "expected"), [(1, "één bestand"), (2, "{_count} bestanden")]
    )
    def test_plural(self, translator: GettextTranslator, count: int, expected: str) -> None:
        result = translator.translate("one file", "{_count} files", count, "nl", None)
        assert result == expected

    @pytest.mark.parametrize(
        ("count", "expected"), [("1", "één bestand"), ("5", "{_count} bestanden")]
    )
    def test_string_count(self, translator: GettextTranslator, count: str, expected: str) -> None:
        result = translator.translate("one file", "{_count} files", count, "nl", None)
        assert result == expected

    def test_string_context(self, translator: GettextTranslator) -> None:
        assert translator.translate("Open", None, None, "nl", "menu") == "Openen"

    def test_mapping_context(self, translator: GettextTranslator) -> None:
        context = {"gender": "f", "formal": 1}
        assert translator.translate("Dear {name}", None, None, "nl", context) == "Beste {name}"

    def test_plural_with_context(self, translator: GettextTranslator) -> None:
        result = translator.translate("one guest", "{_count} guests", 4, "nl", "party")
        assert result == "{_count} gasten"

    def test_untranslated_msgid(self, translator: GettextTranslator) -> None:
        assert translator.translate("Goodbye", None, None, "nl", None) == "Goodbye"

    def test_untranslated_plural(self, translator: GettextTranslator) -> None:
        assert translator.translate("one", "many", 5, "nl", None) == "many"

    def test_region_falls_back_to_language(self, translator: GettextTranslator) -> None:
        assert translator.translate("Hello", None, None, "nl-BE", None) == "Hallo"

    def test_unknown_language_untranslated(self, translator: GettextTranslator) -> None:
        assert translator.translate("Hello", None, None, "de", None) == "Hello"

    def test_no_language_without_default(self, translator: GettextTranslator) -> None:
        assert translator.catalog(None) is None
        assert translator.translate("Hello", None, None, None, None) == "Hello"

    def test_default_language(self) -> None:
        translator = GettextTranslator({"nl": compiled(dutch_catalog())}, default_lang="nl")
        assert translator.translate("Hello", None, None, None, None) == "Hallo"

    def test_languages_normalized(self) -> None:
        translator = GettextTranslator({"nl-NL": compiled(dutch_catalog())})
        assert translator.languages == ("nl_NL",)
        assert translator.translate("Hello", None, None, "nl_NL", None) == "Hallo"


class TestFromDirectory:
    """Loading <dir>/<lang>/LC_MESSAGES/<domain>.mo."""

    def test_loads_existing_and_skips_missing(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        target = tmp_path / "nl" / "LC_MESSAGES"
        target.mkdir(parents=True)
        with (target / "shop.mo").open("wb") as stream:
            write_mo(stream, dutch_catalog())

        with caplog.at_level(logging.INFO, logger="temploc.runtime.translator"):
            translator = GettextTranslator.from_directory(str(tmp_path), ["nl", "de"], "shop")

        assert translator.languages == ("nl",)
        assert translator.translate("Hello", None, None, "nl", None) == "Hallo"
        assert "No catalog for domain 'shop' language 'de'" in caplog.text
        assert "Loaded 1 catalogs" in caplog.text


class TestFormatterIntegration:
    def test_plural_rendered_in_dutch(self, translator: GettextTranslator) -> None:
        formatter = MessageFormatter(translator=translator)
        call = formatter.build_call("one file|{_count} files", (3,), lang="nl")
        assert formatter.format(call) == "3 bestanden"

    def test_context_parameter(self, translator: GettextTranslator) -> None:
        formatter = MessageFormatter(translator=translator)
        call = formatter.build_call(
            "Dear {name}",
            named={"name": "Ann", "_context": {"formal": 1, "gender": "f"}},
            lang="nl",
        )
        assert formatter.format(call) == "Beste Ann"

    @pytest.mark.parametrize(
        ("count", "expected"), [("1", "één bestand"), ("5", "5 bestanden")]
    )
    def test_string_count_from_template(
        self, translator: GettextTranslator, count: str, expected: str
    ) -> None:
        formatter = MessageFormatter(translator=translator)
        call = formatter.build_call("one file|{_count} files", (count,), lang="nl")
        assert formatter.format(call) == expected
