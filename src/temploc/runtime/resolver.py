"""Placeholder value resolution.

Lookup order for a placeholder:
    1. Named parameters of the call (full dotted key, then path walk)
    2. Template variables (AmbientScope)
    3. The //default of the placeholder, when the value is missing or empty
    4. Nothing: a PlaceholderResolutionError is collected and "" inserted

The fallback to template variables lets templates write "Hi {name}"
instead of repeating name => name in every call.

Errors are collected, never raised: a typo in a translation must not break
page rendering. MessageFormatter decides how to report them.

Python 3.13+.
"""

import logging

from temploc.diagnostics import (
    ErrorTemplate,
    ModifierError,
    PlaceholderResolutionError,
    TemplocError,
)
from temploc.runtime.call import RuntimeCall
from temploc.runtime.modifiers import ModifierRegistry, get_shared_registry
from temploc.runtime.scope import lookup_path
from temploc.syntax import Placeholder

__all__ = ["ValueResolver"]

logger = logging.getLogger(__name__)

_MISSING = object()


class ValueResolver:
    """Finds and transforms the value of a placeholder.

    Stateless apart from the modifier registry; one instance serves
    concurrent calls when the registry is frozen.
    """

    __slots__ = ("_modifiers",)

    def __init__(self, modifiers: ModifierRegistry | None = None) -> None:
        self._modifiers = modifiers if modifiers is not None else get_shared_registry()

    @property
    def modifiers(self) -> ModifierRegistry:
        return self._modifiers

    def resolve(
        self, placeholder: Placeholder, call: RuntimeCall, format_string: str
    ) -> tuple[object, tuple[TemplocError, ...]]:
        """Resolve one placeholder.

        Args:
            placeholder: Parsed placeholder
            call: The translation call, supplying params, scope and language
            format_string: Format string containing the placeholder, for diagnostics

        Returns:
            Tuple of (value, errors). The value is "" when nothing was found.
        """
        errors: list[TemplocError] = []
        value = self.lookup(placeholder, call)

        if (value is None or value == "") and placeholder.default is not None:
            value = placeholder.default
        elif value is None:
            diagnostic = ErrorTemplate.missing_key(placeholder.key, format_string, call.target)
            errors.append(PlaceholderResolutionError(diagnostic))
            return "", tuple(errors)

        for spec in placeholder.modifiers:
            try:
                value = self._modifiers.apply(spec, value, key=placeholder.key, lang=call.lang)
            except ModifierError as e:
                errors.append(e)

        return value, tuple(errors)

    @staticmethod
    def lookup(placeholder: Placeholder, call: RuntimeCall) -> object | None:
        """Raw value for a placeholder path, before default and modifiers.

        Returns:
            The value, or None when neither params nor scope hold one
        """
        params = call.params
        value = params.get(placeholder.key, _MISSING)
        if value is _MISSING:
            head = params.get(placeholder.path[0], _MISSING)
            if head is not _MISSING:
                value = lookup_path(head, placeholder.path[1:])
        if value is not _MISSING and value is not None:
            return value

        found = call.scope.get(placeholder.path)
        if found is not None and found != "":
            logger.debug("Placeholder '%s' taken from template variables", placeholder.key)
            return found
        return None
