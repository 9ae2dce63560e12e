"""msgid helpers shared by the scanner and the formatter.

A msgid carries its plural alternative after the first unescaped pipe:

    "one file|{_count} files"

Both extraction and rendering must agree on where that split happens,
so the rule lives here.

Python 3.13+. Zero external dependencies.
"""

import re

from temploc.constants import PLURAL_SEPARATOR

__all__ = ["has_plural", "split_plural"]

# First pipe not preceded by a backslash.
_PLURAL_SPLIT = re.compile(r"(?<!\\)" + re.escape(PLURAL_SEPARATOR))
_ESCAPED_PIPE = "\\" + PLURAL_SEPARATOR


def split_plural(msgid: str) -> tuple[str, str | None]:
    """Split a raw msgid into singular and plural text.

    Args:
        msgid: Raw msgid as written in the template

    Returns:
        Tuple (singular, plural). plural is None when the msgid has no
        unescaped pipe. Escaped pipes become literal pipes in both halves.

    Example:
        >>> split_plural("one item|{_count} items")
        ('one item', '{_count} items')
        >>> split_plural("a \\\\| b")
        ('a | b', None)
    """
    parts = _PLURAL_SPLIT.split(msgid, maxsplit=1)
    singular = parts[0].replace(_ESCAPED_PIPE, PLURAL_SEPARATOR)
    if len(parts) == 1:
        return singular, None
    return singular, parts[1].replace(_ESCAPED_PIPE, PLURAL_SEPARATOR)


def has_plural(msgid: str) -> bool:
    """Check whether a raw msgid carries a plural alternative."""
    return _PLURAL_SPLIT.search(msgid) is not None
