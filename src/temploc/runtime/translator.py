"""Translator collaborators: msgid -> language-selected format string.

The formatter does not know how translations are stored. It asks a
Translator for the format string of (msgid, plural, count, lang, context)
and renders whatever comes back. Plural rules of the target language live
entirely behind this interface.

Implementations:
    NullTranslator: no translation, count == 1 selects the singular
    GettextTranslator: compiled gettext catalogs per language via Babel

Python 3.13+. Depends on Babel (support.Translations).
"""

import gettext
import logging
from collections.abc import Iterable, Mapping
from typing import Protocol

from babel.support import Translations

from temploc.locale_utils import normalize_locale
from temploc.runtime.modifiers import coerce_number

__all__ = ["GettextTranslator", "NullTranslator", "Translator", "context_key"]

logger = logging.getLogger(__name__)


class Translator(Protocol):
    """Selects the format string for one translation call."""

    def translate(
        self,
        msgid: str,
        plural: str | None,
        count: object,
        lang: str | None,
        context: str | Mapping[str, object] | None,
    ) -> str:
        """Return the format string to render.

        Args:
            msgid: Singular msgid
            plural: Plural msgid, None without plural form
            count: Count selecting the plural form (None without plural form)
            lang: Target language, None for the translator default
            context: Opaque context (msgctxt or mapping of context values)
        """
        ...  # pragma: no cover  # Protocol stub - not executable


def context_key(context: str | Mapping[str, object] | None) -> str | None:
    """Turn a call context into a gettext msgctxt.

    Example:
        >>> context_key({"gender": "female", "formal": 1})
        'formal=1;gender=female'
        >>> context_key("menu")
        'menu'
    """
    if context is None or isinstance(context, str):
        return context or None
    if not context:
        return None
    return ";".join(f"{key}={value}" for key, value in sorted(context.items()))


def _is_one(count: object) -> bool:
    if count is None:
        return False
    try:
        return coerce_number(count) == 1
    except ValueError:
        return False


class NullTranslator:
    """Returns msgids untranslated; count == 1 selects the singular."""

    __slots__ = ()

    def translate(
        self,
        msgid: str,
        plural: str | None,
        count: object,
        lang: str | None,
        context: str | Mapping[str, object] | None,
    ) -> str:
        if plural is None or _is_one(count):
            return msgid
        return plural

    def __repr__(self) -> str:
        return "NullTranslator()"


class GettextTranslator:
    """Translator over gettext catalogs, one per language.

    Language tags are normalized ("nl-NL" and "nl_NL" are the same catalog);
    "nl_BE" falls back to "nl" when only the latter is loaded. A language
    without catalog renders the msgid like NullTranslator.

    Example:
        >>> translator = GettextTranslator.from_directory("locale", ["nl", "de"], "shop")
        >>> translator.translate("Hello", None, None, "nl", None)  # doctest: +SKIP
        'Hallo'
    """

    __slots__ = ("_catalogs", "_default_lang", "_fallback")

    def __init__(
        self,
        catalogs: Mapping[str, gettext.NullTranslations],
        *,
        default_lang: str | None = None,
    ) -> None:
        """Initialize with loaded catalogs.

        Args:
            catalogs: Language tag -> gettext-compatible catalog
            default_lang: Language used when a call names none
        """
        self._catalogs = {normalize_locale(lang): catalog for lang, catalog in catalogs.items()}
        self._default_lang = normalize_locale(default_lang) if default_lang else None
        self._fallback = NullTranslator()

    @classmethod
    def from_directory(
        cls,
        dirname: str,
        languages: Iterable[str],
        domain: str,
        *,
        default_lang: str | None = None,
    ) -> "GettextTranslator":
        """Load <dirname>/<lang>/LC_MESSAGES/<domain>.mo for every language.

        Languages without a compiled catalog are logged and skipped.
        """
        catalogs: dict[str, gettext.NullTranslations] = {}
        for lang in languages:
            translations = Translations.load(dirname, [normalize_locale(lang)], domain)
            if isinstance(translations, Translations):
                catalogs[lang] = translations
            else:
                logger.warning(
                    "No catalog for domain '%s' language '%s' in %s", domain, lang, dirname
                )
        logger.info("Loaded %d catalogs for domain '%s' from %s", len(catalogs), domain, dirname)
        return cls(catalogs, default_lang=default_lang)

    @property
    def languages(self) -> tuple[str, ...]:
        return tuple(self._catalogs)

    def catalog(self, lang: str | None) -> gettext.NullTranslations | None:
        """Catalog for a language tag, trying the bare language as fallback."""
        tag = normalize_locale(lang) if lang else self._default_lang
        if tag is None:
            return None
        found = self._catalogs.get(tag)
        if found is None and "_" in tag:
            found = self._catalogs.get(tag.split("_", 1)[0])
        return found

    def translate(
        self,
        msgid: str,
        plural: str | None,
        count: object,
        lang: str | None,
        context: str | Mapping[str, object] | None,
    ) -> str:
        catalog = self.catalog(lang)
        if catalog is None:
            logger.debug("No catalog for language '%s', using msgid", lang)
            return self._fallback.translate(msgid, plural, count, lang, context)

        msgctxt = context_key(context)
        if plural is None:
            if msgctxt is not None:
                return catalog.pgettext(msgctxt, msgid)
            return catalog.gettext(msgid)

        n = int(coerce_number(count))
        if msgctxt is not None:
            return catalog.npgettext(msgctxt, msgid, plural, n)
        return catalog.ngettext(msgid, plural, n)

    def __repr__(self) -> str:
        return f"GettextTranslator(languages={list(self._catalogs)})"
