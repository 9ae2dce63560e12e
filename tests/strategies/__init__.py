"""Hypothesis strategies for temploc property-based testing.

Usage:
    from tests.strategies import msgids, template_texts
    from tests.strategies.templates import call_sites, format_strings

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - placeholders, raw_msgids, call_sites, fillers
"""

from .templates import (
    MSGID_CHARS,
    ExpectedSite,
    call_sites,
    fillers,
    format_strings,
    msgid_words,
    msgids,
    placeholder_names,
    placeholders,
    raw_msgids,
    template_texts,
)

__all__ = [
    "MSGID_CHARS",
    "ExpectedSite",
    "call_sites",
    "fillers",
    "format_strings",
    "msgid_words",
    "msgids",
    "placeholder_names",
    "placeholders",
    "raw_msgids",
    "template_texts",
]
