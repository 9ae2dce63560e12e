"""Placeholder template parser.

Parses a resolved (already language-selected) format string into literal
and placeholder segments:

    "Sold {n %d} items on {sold_on DATE //'unknown'}"

Grammar inside braces:
    placeholder := path modifier* ("//" default modifier*)?
    path        := identifier ("." identifier)*
    modifier    := printf-spec | NAME | NAME "(" args ")"
    default     := quoted-literal | bare-word

Parsing is total: anything which does not fit the grammar stays literal
text. Rendering must never fail on a typo made by a translator.

Thread Safety:
    parse_template() is pure and cached with functools.lru_cache, which
    is safe for concurrent callers.

Python 3.13+. Zero external dependencies.
"""

import functools
import re
from dataclasses import dataclass
from typing import TypeAlias

from temploc.constants import DEFAULT_SEPARATOR, MAX_TEMPLATE_CACHE_SIZE

__all__ = [
    "Literal",
    "ModifierSpec",
    "Placeholder",
    "PlaceholderTemplate",
    "Segment",
    "parse_template",
    "placeholder_names",
]

_PATH = re.compile(r"[A-Za-z_]\w*(?:\.\w+)*")
_MODIFIER = re.compile(r"(?P<name>[^\s()\"'%][^\s()\"']*?)(?:\((?P<args>[^)]*)\))?")
_PRINTF = re.compile(r"%[-+ #0]*\d*(?:\.\d+)?[diouxXeEfFgGcrsa]")

# One token of placeholder content, after optional whitespace.
_TOKEN = re.compile(
    r"""\s*(?:
        (?P<sep>""" + re.escape(DEFAULT_SEPARATOR) + r""")
      | (?P<quoted>"[^"]*"|'[^']*')
      | (?P<word>(?:[^\s/"'(]|/(?!/))+(?:\([^)]*\))?)
    )""",
    re.VERBOSE,
)


@dataclass(frozen=True, slots=True)
class Literal:
    """Text copied to the output unchanged (and never escaped)."""

    text: str


@dataclass(frozen=True, slots=True)
class ModifierSpec:
    """One value transformation inside a placeholder.

    Attributes:
        name: Modifier name ("BYTES", "DT") or the complete printf spec ("%.2f")
        args: Parenthesized arguments, quotes removed
        printf: True when name is a printf spec
    """

    name: str
    args: tuple[str, ...] = ()
    printf: bool = False

    def __str__(self) -> str:
        if self.args:
            return f"{self.name}({','.join(self.args)})"
        return self.name


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Substitution site inside a format string.

    Attributes:
        path: Dotted lookup path, split on dots ("product.price" -> ("product", "price"))
        modifiers: Modifier chain applied left to right
        default: Replacement for a missing or empty value (None when absent)
        raw: Placeholder text including braces
    """

    path: tuple[str, ...]
    modifiers: tuple[ModifierSpec, ...] = ()
    default: str | None = None
    raw: str = ""

    @property
    def key(self) -> str:
        """Dotted path as written in the format string."""
        return ".".join(self.path)


Segment: TypeAlias = Literal | Placeholder


@dataclass(frozen=True, slots=True)
class PlaceholderTemplate:
    """Parsed format string.

    Attributes:
        source: The format string
        segments: Literal and placeholder segments in source order
    """

    source: str
    segments: tuple[Segment, ...]

    @property
    def placeholders(self) -> tuple[Placeholder, ...]:
        """Placeholder segments in source order."""
        return tuple(seg for seg in self.segments if isinstance(seg, Placeholder))


@functools.lru_cache(maxsize=MAX_TEMPLATE_CACHE_SIZE)
def parse_template(source: str) -> PlaceholderTemplate:
    """Parse a format string into segments.

    Args:
        source: Format string, for instance "Hi {name}"

    Returns:
        PlaceholderTemplate. Never raises for string input.

    Examples:
        >>> [type(s).__name__ for s in parse_template("Hi {name}!").segments]
        ['Literal', 'Placeholder', 'Literal']
        >>> parse_template("{count //0}").segments[0].default
        '0'
        >>> parse_template("a { b").segments
        (Literal(text='a { b'),)
    """
    segments: list[Segment] = []
    text: list[str] = []
    pos = 0
    end = len(source)

    while pos < end:
        open_at = source.find("{", pos)
        if open_at < 0:
            text.append(source[pos:])
            break

        text.append(source[pos:open_at])
        close_at = source.find("}", open_at + 1)
        if close_at < 0:
            text.append(source[open_at:])
            break

        # "{ {name}": the outer brace is text, parsing restarts at the inner one
        nested = source.find("{", open_at + 1, close_at)
        if nested >= 0:
            text.append(source[open_at:nested])
            pos = nested
            continue

        raw = source[open_at : close_at + 1]
        placeholder = _parse_placeholder(raw[1:-1], raw)
        if placeholder is None:
            text.append(raw)
        else:
            if text:
                _flush(segments, text)
            segments.append(placeholder)
        pos = close_at + 1

    _flush(segments, text)
    return PlaceholderTemplate(source=source, segments=tuple(segments))


def placeholder_names(source: str) -> tuple[str, ...]:
    """List the top-level value names a format string uses.

    Args:
        source: Format string

    Returns:
        Unique first path segments, in order of first appearance

    Example:
        >>> placeholder_names("{p.price} for {p.name}, {n %d}")
        ('p', 'n')
    """
    names: dict[str, None] = {}
    for placeholder in parse_template(source).placeholders:
        names.setdefault(placeholder.path[0], None)
    return tuple(names)


def _flush(segments: list[Segment], text: list[str]) -> None:
    literal = "".join(text)
    text.clear()
    if literal:
        segments.append(Literal(literal))


def _tokenize(body: str) -> list[tuple[str, str]] | None:
    """Split placeholder content into (kind, text) tokens, None when invalid."""
    tokens: list[tuple[str, str]] = []
    pos = 0
    end = len(body)
    while pos < end:
        if body[pos:].isspace():
            break
        match = _TOKEN.match(body, pos)
        if match is None:
            return None
        kind = match.lastgroup or "word"
        tokens.append((kind, match.group(kind)))
        pos = match.end()
    return tokens


def _parse_placeholder(body: str, raw: str) -> Placeholder | None:
    tokens = _tokenize(body)
    if not tokens:
        return None

    kind, path = tokens[0]
    if kind != "word" or not _PATH.fullmatch(path):
        return None

    modifiers: list[ModifierSpec] = []
    default: str | None = None
    rest = iter(tokens[1:])

    for kind, token in rest:
        if kind == "sep":
            if default is not None:
                return None
            value = next(rest, None)
            if value is None or value[0] == "sep":
                return None
            default = value[1][1:-1] if value[0] == "quoted" else value[1]
        elif kind == "quoted":
            return None
        else:
            spec = _parse_modifier(token)
            if spec is None:
                return None
            modifiers.append(spec)

    return Placeholder(
        path=tuple(path.split(".")),
        modifiers=tuple(modifiers),
        default=default,
        raw=raw,
    )


def _parse_modifier(token: str) -> ModifierSpec | None:
    if token.startswith("%"):
        if not _PRINTF.fullmatch(token):
            return None
        return ModifierSpec(name=token, printf=True)

    match = _MODIFIER.fullmatch(token)
    if match is None:
        return None

    args_text = match.group("args")
    args: tuple[str, ...] = ()
    if args_text is not None and args_text.strip():
        args = tuple(_unquote(arg.strip()) for arg in args_text.split(","))
    return ModifierSpec(name=match.group("name"), args=args)


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    return text

