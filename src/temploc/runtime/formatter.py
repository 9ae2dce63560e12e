"""Message formatter: the render-time entry point of a translation call.

Templates call translations in two shapes:

    [% loc("one file|{_count} files", n) %]        function shape
    [% | loc(_count => n) %]one file|...[% END %]  filter shape

Both go through bind_arguments(), which enforces one set of rules:
    - a msgid with plural form needs a count (_count, or the first
      positional value in function shape)
    - a msgid without plural form takes no count
    - a count must be a number; numeric strings are accepted
    - positional values left over are an error

MessageFormatter then asks the translator for the format string, parses
it, resolves every placeholder and joins the result, escaping inserted
values in HTML mode.

Python 3.13+.
"""

import html
import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from temploc.constants import CONTEXT_PARAM, COUNT_PARAM, HTML_SAFE_SUFFIX, LANG_PARAM
from temploc.diagnostics import CallShapeError, ErrorTemplate, TemplocError
from temploc.runtime.call import Context, RuntimeCall
from temploc.runtime.modifiers import ModifierRegistry, coerce_number
from temploc.runtime.resolver import ValueResolver
from temploc.runtime.scope import EMPTY_SCOPE, AmbientScope
from temploc.runtime.translator import NullTranslator, Translator
from temploc.syntax import Literal, Placeholder, parse_template, split_plural

__all__ = ["CallArguments", "MessageFormatter", "bind_arguments"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CallArguments:
    """Parameters of a translation call after validation.

    Attributes:
        msgid: Singular msgid
        plural: Plural msgid or None
        count: Numeric count, None for msgids without plural form
        params: Named values, _count included as given when a count was given
        lang: Language requested with _lang, None when absent
        context: Context requested with _context, None when absent
    """

    msgid: str
    plural: str | None
    count: object
    params: Mapping[str, object]
    lang: str | None = None
    context: Context = None


def bind_arguments(
    raw_msgid: str,
    positionals: Sequence[object],
    named: Mapping[str, object],
    *,
    positional_count: bool,
) -> CallArguments:
    """Validate the parameters of a translation call.

    Args:
        raw_msgid: msgid as written in the template, plural after '|'
        positionals: Positional values of the call
        named: Named values of the call
        positional_count: Whether the first positional value may be the
            count (function shape) or not (filter shape)

    Returns:
        CallArguments

    Raises:
        CallShapeError: If the count is missing, unexpected or not a number,
            or positional values are left over
    """
    msgid, plural = split_plural(raw_msgid)
    params = dict(named)
    lang = params.pop(LANG_PARAM, None)
    context = params.pop(CONTEXT_PARAM, None)
    remaining = list(positionals)

    count = params.get(COUNT_PARAM)
    if plural is None:
        if count is not None:
            raise CallShapeError(ErrorTemplate.count_not_allowed(raw_msgid))
    else:
        if count is None and positional_count and remaining:
            count = remaining.pop(0)
        if count is None:
            raise CallShapeError(ErrorTemplate.count_required(raw_msgid))
        params[COUNT_PARAM] = count
        count = _numeric_count(raw_msgid, count)

    if remaining:
        raise CallShapeError(ErrorTemplate.superfluous_parameters(raw_msgid, len(remaining)))

    return CallArguments(
        msgid=msgid,
        plural=plural,
        count=count,
        params=params,
        lang=str(lang) if lang is not None else None,
        context=context,  # type: ignore[arg-type]
    )


def _numeric_count(raw_msgid: str, count: object) -> int | float:
    # Template variables often hold counts as strings ("1" selects the singular).
    try:
        number = coerce_number(count)
    except (TypeError, ValueError):
        raise CallShapeError(ErrorTemplate.count_not_numeric(raw_msgid, count)) from None
    if not math.isfinite(number):
        raise CallShapeError(ErrorTemplate.count_not_numeric(raw_msgid, count))
    return number


class MessageFormatter:
    """Renders translation calls.

    Holds only read-only collaborators (modifier registry, translator), so
    one instance serves concurrent renders once the registry is frozen.

    Example:
        >>> formatter = MessageFormatter()
        >>> formatter.format(RuntimeCall("Hi {name}", params={"name": "World"}))
        'Hi World'
    """

    __slots__ = ("_html", "_resolver", "_translator")

    def __init__(
        self,
        *,
        modifiers: ModifierRegistry | None = None,
        translator: Translator | None = None,
        html: bool = False,
    ) -> None:
        """Initialize formatter.

        Args:
            modifiers: Modifier registry (default: shared frozen built-ins)
            translator: Translator used when a call does not bring its own
            html: Escape inserted values in calls built by build_call()
        """
        self._resolver = ValueResolver(modifiers)
        self._translator: Translator = translator if translator is not None else NullTranslator()
        self._html = html

    @property
    def html(self) -> bool:
        return self._html

    @property
    def modifiers(self) -> ModifierRegistry:
        return self._resolver.modifiers

    def build_call(
        self,
        raw_msgid: str,
        positionals: Sequence[object] = (),
        named: Mapping[str, object] | None = None,
        *,
        positional_count: bool = True,
        scope: AmbientScope = EMPTY_SCOPE,
        lang: str | None = None,
        label: str | None = None,
    ) -> RuntimeCall:
        """Validate call parameters and build the RuntimeCall.

        A _lang parameter overrides lang.

        Raises:
            CallShapeError: See bind_arguments()
        """
        args = bind_arguments(
            raw_msgid, positionals, named or {}, positional_count=positional_count
        )
        return RuntimeCall(
            msgid=args.msgid,
            plural=args.plural,
            count=args.count,
            params=args.params,
            scope=scope,
            lang=args.lang if args.lang is not None else lang,
            html=self._html,
            label=label,
            context=args.context,
        )

    def format_call(
        self, call: RuntimeCall, *, translator: Translator | None = None
    ) -> tuple[str, tuple[TemplocError, ...]]:
        """Render a call, collecting resolution problems.

        Args:
            call: The translation call
            translator: Overrides the translator of the formatter

        Returns:
            Tuple of (text, errors). Missing values render as "" and unknown
            or failing modifiers leave the value unmodified.
        """
        selector = translator if translator is not None else self._translator
        format_string = selector.translate(
            call.msgid, call.plural, call.count, call.lang, call.context
        )

        parts: list[str] = []
        errors: list[TemplocError] = []
        for segment in parse_template(format_string).segments:
            match segment:
                case Literal(text=text):
                    parts.append(text)
                case Placeholder():
                    value, problems = self._resolver.resolve(segment, call, format_string)
                    errors.extend(problems)
                    parts.append(self._insert(segment, value, call.html))

        return "".join(parts), tuple(errors)

    def format(self, call: RuntimeCall, *, translator: Translator | None = None) -> str:
        """Render a call and log resolution problems as warnings."""
        result, errors = self.format_call(call, translator=translator)
        for error in errors:
            logger.warning("%s", error)
        if not errors:
            logger.debug("Formatted '%s' (lang=%s)", call.msgid, call.lang)
        return result

    @staticmethod
    def _insert(placeholder: Placeholder, value: object, escape: bool) -> str:
        text = "" if value is None else str(value)
        if escape and not placeholder.key.endswith(HTML_SAFE_SUFFIX):
            return html.escape(text)
        return text

    def __repr__(self) -> str:
        return f"MessageFormatter(html={self._html}, translator={self._translator!r})"
