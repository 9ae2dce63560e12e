"""Textdomain: one set of messages bound to one translation function.

A site may use several textdomains side by side, each with its own
function name ("loc", "L") and its own translation tables. The Templater
exposes every domain to templates twice: as a function and as a filter.

    loc = domain.translation_function(formatter, scope)
    loc("Hi {name}", name="Ann")

    factory = domain.translation_filter(formatter, scope)
    factory(name="Ann").apply("Hi {name}")

A Textdomain never points back to the Templater that registered it; the
formatter and scope are handed in when the callables are built.

Python 3.13+.
"""

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from temploc.constants import DEFAULT_FUNCTION
from temploc.diagnostics import ErrorTemplate, TextdomainConfigError
from temploc.runtime.formatter import MessageFormatter
from temploc.runtime.scope import EMPTY_SCOPE, AmbientScope
from temploc.runtime.translator import Translator

__all__ = [
    "FilterCall",
    "FilterFactory",
    "Textdomain",
    "TextdomainLike",
    "TranslationFunction",
]

_FUNCTION_NAME = re.compile(r"[A-Za-z_]\w*")


@runtime_checkable
class TextdomainLike(Protocol):
    """What a Templater needs from a textdomain implementation."""

    @property
    def name(self) -> str: ...  # pragma: no cover

    @property
    def function(self) -> str: ...  # pragma: no cover

    @property
    def lexicon(self) -> str | None: ...  # pragma: no cover

    def expected_in(self, filename: str) -> bool: ...  # pragma: no cover

    def translation_function(
        self, formatter: MessageFormatter, scope: AmbientScope
    ) -> "TranslationFunction": ...  # pragma: no cover

    def translation_filter(
        self, formatter: MessageFormatter, scope: AmbientScope
    ) -> "FilterFactory": ...  # pragma: no cover


def _split_trailing_mapping(
    positionals: Sequence[object], named: Mapping[str, object]
) -> tuple[tuple[object, ...], dict[str, object]]:
    # Template engines hand named arguments over as a final mapping.
    if positionals and isinstance(positionals[-1], Mapping):
        return tuple(positionals[:-1]), {**positionals[-1], **named}
    return tuple(positionals), dict(named)


class Textdomain:
    """Default textdomain implementation.

    Example:
        >>> domain = Textdomain("shop", function="L", only_in_directory="shop")
        >>> domain.expected_in("shop/cart.tt"), domain.expected_in("admin/x.tt")
        (True, False)
    """

    __slots__ = (
        "_function",
        "_lang",
        "_lexicon",
        "_name",
        "_only_in",
        "_only_in_directory",
        "_translator",
    )

    def __init__(
        self,
        name: str,
        *,
        function: str = DEFAULT_FUNCTION,
        lexicon: str | None = None,
        only_in_directory: str | Iterable[str] | None = None,
        lang: str | None = None,
        translator: Translator | None = None,
    ) -> None:
        """Initialize textdomain.

        Args:
            name: Domain name, also the name of its catalog
            function: Function and filter name used in templates
            lexicon: Directory holding the translation tables
            only_in_directory: Directories the function may be used in
                (default: everywhere)
            lang: Default language of calls which do not pass _lang.
                Set once at startup; calls carry their own language.
            translator: Translator for this domain (default: the formatter's)

        Raises:
            TextdomainConfigError: If name or function is not usable
        """
        if not name:
            raise TextdomainConfigError(ErrorTemplate.invalid_option("name", name))
        if not _FUNCTION_NAME.fullmatch(function):
            raise TextdomainConfigError(ErrorTemplate.invalid_option("function", function))

        self._name = name
        self._function = function
        self._lexicon = lexicon
        self._lang = lang
        self._translator = translator

        if only_in_directory is None:
            dirs: tuple[str, ...] = ()
        elif isinstance(only_in_directory, str):
            dirs = (only_in_directory,)
        else:
            dirs = tuple(only_in_directory)
        self._only_in_directory = dirs
        self._only_in: re.Pattern[str] | None = None
        if dirs:
            alternatives = "|".join(re.escape(d.rstrip("/")) for d in dirs)
            self._only_in = re.compile(rf"^(?:{alternatives})(?:$|/)")

    @property
    def name(self) -> str:
        return self._name

    @property
    def function(self) -> str:
        """Name of the translation function in templates."""
        return self._function

    @property
    def lexicon(self) -> str | None:
        """Directory where the translation tables are kept."""
        return self._lexicon

    @property
    def only_in_directory(self) -> tuple[str, ...]:
        return self._only_in_directory

    @property
    def lang(self) -> str | None:
        return self._lang

    @property
    def translator(self) -> Translator | None:
        return self._translator

    def expected_in(self, filename: str) -> bool:
        """Check whether the function of this domain may be used in a file."""
        if self._only_in is None:
            return True
        return self._only_in.match(filename) is not None

    def translation_function(
        self, formatter: MessageFormatter, scope: AmbientScope = EMPTY_SCOPE
    ) -> "TranslationFunction":
        """Build the function-shape callable for one render."""
        return TranslationFunction(domain=self, formatter=formatter, scope=scope)

    def translation_filter(
        self, formatter: MessageFormatter, scope: AmbientScope = EMPTY_SCOPE
    ) -> "FilterFactory":
        """Build the filter factory for one render."""
        return FilterFactory(domain=self, formatter=formatter, scope=scope)

    def __repr__(self) -> str:
        return f"Textdomain(name={self._name!r}, function={self._function!r})"


@dataclass(frozen=True, slots=True)
class TranslationFunction:
    """Function shape: loc(msgid, *positionals, **named) -> str.

    With a plural msgid the first positional value is the count. A final
    mapping positional is merged into the named values.

    Raises:
        CallShapeError: On count or parameter mismatches
    """

    domain: Textdomain
    formatter: MessageFormatter
    scope: AmbientScope = EMPTY_SCOPE

    def __call__(self, msgid: str, *positionals: object, **named: object) -> str:
        args, params = _split_trailing_mapping(positionals, named)
        call = self.formatter.build_call(
            msgid,
            args,
            params,
            positional_count=True,
            scope=self.scope,
            lang=self.domain.lang,
        )
        return self.formatter.format(call, translator=self.domain.translator)


@dataclass(frozen=True, slots=True)
class FilterCall:
    """Filter shape with its parameters bound; apply() takes the msgid.

    Filters receive the msgid from the template content, so the count
    can only be passed as _count.
    """

    domain: Textdomain
    formatter: MessageFormatter
    scope: AmbientScope = EMPTY_SCOPE
    positionals: tuple[object, ...] = ()
    named: Mapping[str, object] = field(default_factory=dict)

    def apply(self, msgid: str) -> str:
        """Translate the filtered text.

        Raises:
            CallShapeError: On count or parameter mismatches
        """
        call = self.formatter.build_call(
            msgid,
            self.positionals,
            self.named,
            positional_count=False,
            scope=self.scope,
            lang=self.domain.lang,
        )
        return self.formatter.format(call, translator=self.domain.translator)

    def __call__(self, msgid: str) -> str:
        return self.apply(msgid)


@dataclass(frozen=True, slots=True)
class FilterFactory:
    """First stage of the filter shape: binds the parameters."""

    domain: Textdomain
    formatter: MessageFormatter
    scope: AmbientScope = EMPTY_SCOPE

    def __call__(self, *positionals: object, **named: object) -> FilterCall:
        args, params = _split_trailing_mapping(positionals, named)
        return FilterCall(
            domain=self.domain,
            formatter=self.formatter,
            scope=self.scope,
            positionals=args,
            named=params,
        )
