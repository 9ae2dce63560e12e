"""Text filters for translated template output.

Translations often produce text which still needs a bit of markup:

    cols    split tab-separated fields into table cells
    br      put <br> at the end of every line

Both are filter factories, like the translation filters: calling them
with parameters returns the function applied to the text.

    cols("th", "td")("Price:\\t20 EUR")  ->  "<th>Price:</th><td>20 EUR</td>"
    br()("one\\ntwo")                    ->  "one<br>\\ntwo"

Python 3.13+. Zero external dependencies.
"""

import re
from collections.abc import Callable
from typing import TypeAlias

__all__ = ["br", "cols"]

TextFilter: TypeAlias = Callable[[str], str]

_POSITION = re.compile(r"\$([0-9]+)")
_HAS_POSITION = re.compile(r"\$[1-9]")

_LEADING_BLANK_LINES = re.compile(r"\A\s*\n")
_BLANK_LINES = re.compile(r"\n\s*\n")
_TRAILING_BLANK_LINES = re.compile(r"\n\s*\Z")
_LINE_END = re.compile(r"[ \t\r\f\v]*\n")


def cols(*containers: str) -> TextFilter:
    """Build a filter wrapping tab-separated fields.

    Two forms:
        Container names: every field is wrapped in the next container, the
        last one repeating for all remaining fields (default "td").

        One pattern with $N positions: each $N becomes field N, or "" when
        the text has fewer fields.

    Examples:
        >>> cols()("a\\tb\\tc")
        '<td>a</td><td>b</td><td>c</td>'
        >>> cols("th", "td")("a\\tb\\tc")
        '<th>a</th><td>b</td><td>c</td>'
        >>> cols("#$3#$1#")("a")
        '##a#'
    """
    if len(containers) == 1 and _HAS_POSITION.search(containers[0]):
        pattern = containers[0]

        def positional(text: str) -> str:
            fields = text.split("\t")

            def field(match: re.Match[str]) -> str:
                index = int(match.group(1))
                return fields[index - 1] if 0 < index <= len(fields) else ""

            return _POSITION.sub(field, pattern)

        return positional

    wrappers = containers or ("td",)

    def containerize(text: str) -> str:
        out = []
        for index, value in enumerate(text.split("\t")):
            tag = wrappers[min(index, len(wrappers) - 1)]
            out.append(f"<{tag}>{value}</{tag}>")
        return "".join(out)

    return containerize


def br() -> TextFilter:
    """Build a filter which ends every line with <br>.

    Blank lines at the start and end are dropped, runs of blank lines
    collapse into one line break, and trailing blanks of each line are
    removed.

    Example:
        >>> br()("\\n\\nfirst  \\n\\n\\nsecond\\n\\n")
        'first<br>\\nsecond<br>\\n'
    """

    def breaks(text: str) -> str:
        if not text:
            return ""
        text = _LEADING_BLANK_LINES.sub("", text)
        text = _BLANK_LINES.sub("\n", text)
        text = _TRAILING_BLANK_LINES.sub("\n", text)
        return _LINE_END.sub("<br>\n", text)

    return breaks
