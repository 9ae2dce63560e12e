"""Enumerations for temploc type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class CallShape(StrEnum):
    """Syntactic form of a translation call inside template text.

    StrEnum provides automatic string conversion: str(CallShape.FUNCTION) == "function"
    """

    FUNCTION = "function"
    """Function call: [% loc("msgid", name => value) %]"""

    INLINE_FILTER = "inline-filter"
    """Quoted literal piped into the function: [% 'msgid' | loc(n => 1) %]"""

    BLOCK_FILTER = "block-filter"
    """Filter block: [% | loc %]msgid[% END %] or [% FILTER loc %]...[% END %]"""


class TemplateSyntax(StrEnum):
    """Output syntax of the rendered templates.

    HTML switches on escaping of inserted values.
    """

    HTML = "HTML"
    UNKNOWN = "UNKNOWN"


__all__ = [
    "CallShape",
    "TemplateSyntax",
]
