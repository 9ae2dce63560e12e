"""Call-site scanner for Template-Toolkit style templates.

Finds the msgids passed to a translation function, in any of the three
call shapes a template may use:

    [% loc("Greetings {name}", name => client.name) %]      function
    [% 'Greetings {name}' | loc(name => client.name) %]     inline filter
    [% | loc(name => client.name) %]Greetings {name}[% END %]
    [% FILTER loc %]Greetings {name}[% END %]               block filter

Dialect 2 ("TT2-<function>") recognizes [% ... %] tags, dialect 1
("TT1-<function>") also %% ... %%.

Line numbers are 1-indexed and point at the line holding the first
character of the msgid.

Scanning is file-atomic: a file with a block filter lacking END raises
ScanSyntaxError and yields no call sites at all.

Python 3.13+. Zero external dependencies.
"""

import functools
import logging
import re
from dataclasses import dataclass

from temploc.constants import END_TAG_PATTERN, TT1_TAG_PATTERN, TT2_TAG_PATTERN
from temploc.diagnostics import (
    Diagnostic,
    ErrorTemplate,
    PatternConfigError,
    ScanSyntaxError,
)
from temploc.enums import CallShape
from temploc.syntax import split_plural

__all__ = ["CallSite", "ScanPattern", "ScanResult", "scan_template"]

logger = logging.getLogger(__name__)

_PATTERN_SPEC = re.compile(r"TT([12])-(\w+)")
_END_TAG = re.compile(END_TAG_PATTERN)

# Named character entities only; numeric references pass unflagged.
_HTML_ENTITY = re.compile(r"&\w+;")

_TAG_SPLITTERS: dict[int, re.Pattern[str]] = {
    1: re.compile(TT1_TAG_PATTERN, re.DOTALL),
    2: re.compile(TT2_TAG_PATTERN, re.DOTALL),
}


@dataclass(frozen=True, slots=True)
class ScanPattern:
    """Template dialect and translation function to scan for.

    Attributes:
        version: Template-Toolkit dialect, 1 or 2
        function: Translation function name, case-sensitive
    """

    version: int
    function: str

    def __post_init__(self) -> None:
        if self.version not in _TAG_SPLITTERS or not re.fullmatch(r"\w+", self.function):
            raise PatternConfigError(ErrorTemplate.unknown_pattern(self))

    @classmethod
    def parse(cls, spec: str) -> "ScanPattern":
        """Parse a pattern specification like "TT2-loc".

        Raises:
            PatternConfigError: If spec is not TT1-<function> or TT2-<function>

        Example:
            >>> ScanPattern.parse("TT2-loc")
            ScanPattern(version=2, function='loc')
        """
        match = _PATTERN_SPEC.fullmatch(spec) if isinstance(spec, str) else None
        if match is None:
            raise PatternConfigError(ErrorTemplate.unknown_pattern(spec))
        return cls(version=int(match.group(1)), function=match.group(2))

    def __str__(self) -> str:
        return f"TT{self.version}-{self.function}"


@dataclass(frozen=True, slots=True)
class CallSite:
    """One translation call found in template text.

    Attributes:
        file: File identifier
        line: Line of the first msgid character (1-indexed)
        shape: Syntactic form of the call
        raw_msgid: Singular msgid
        raw_plural: Plural msgid, None when the msgid has no '|'
    """

    file: str
    line: int
    shape: CallShape
    raw_msgid: str
    raw_plural: str | None = None


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of scanning one file.

    Attributes:
        call_sites: Call sites in source order
        lines: Line cursor after the last fragment
        warnings: Recoverable problems found (HTML escapes in msgids)
    """

    call_sites: tuple[CallSite, ...]
    lines: int
    warnings: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True, slots=True)
class _Rules:
    block: re.Pattern[str]
    inline: re.Pattern[str]
    call: re.Pattern[str]


@functools.lru_cache(maxsize=32)
def _rules(function: str) -> _Rules:
    fn = re.escape(function)
    return _Rules(
        block=re.compile(rf"^\s*(?:\|\s*|FILTER\s+){fn}\b"),
        inline=re.compile(rf"^\s*([\"'])([^\r\n]+?)\1\s*\|\s*{fn}\b"),
        call=re.compile(rf"(\b{fn}\s*\(\s*)([\"'])([^\r\n]+?)\2", re.DOTALL),
    )


def scan_template(
    text: str, pattern: ScanPattern | str, filename: str = "<string>"
) -> ScanResult:
    """Find the translation call sites in template text.

    Args:
        text: Template text, already decoded
        pattern: ScanPattern or its specification ("TT2-loc")
        filename: File identifier used in call sites and diagnostics

    Returns:
        ScanResult

    Raises:
        PatternConfigError: If the pattern is not understood (before scanning)
        ScanSyntaxError: If a block filter is not closed by END

    Example:
        >>> result = scan_template('<p>[% loc("Hi {name}") %]</p>', "TT2-loc", "x.tt")
        >>> [(s.line, s.raw_msgid) for s in result.call_sites]
        [(1, 'Hi {name}')]
    """
    if not isinstance(pattern, ScanPattern):
        pattern = ScanPattern.parse(pattern)
    rules = _rules(pattern.function)

    # Alternates between plain text and tag content: text, tag, text, ...
    fragments = _TAG_SPLITTERS[pattern.version].split(text)

    sites: list[CallSite] = []
    warnings: list[Diagnostic] = []

    def found(shape: CallShape, raw: str, line: int) -> None:
        msgid, plural = split_plural(raw)
        if _HTML_ENTITY.search(msgid) or (plural is not None and _HTML_ENTITY.search(plural)):
            diagnostic = ErrorTemplate.html_escape_in_msgid(raw, filename, line)
            logger.warning("%s", diagnostic.message)
            warnings.append(diagnostic)
        sites.append(CallSite(filename, line, shape, msgid, plural))

    line = 1
    for index in range(1, len(fragments), 2):
        line += fragments[index - 1].count("\n")
        tag = fragments[index]

        if rules.block.match(tag):
            if index + 2 >= len(fragments) or not _END_TAG.match(fragments[index + 2]):
                raise ScanSyntaxError(
                    ErrorTemplate.missing_end(filename, line), filename=filename, line=line
                )
            found(CallShape.BLOCK_FILTER, fragments[index + 1], line + tag.count("\n"))
        elif inline := rules.inline.match(tag):
            at = line + tag.count("\n", 0, inline.start(2))
            found(CallShape.INLINE_FILTER, inline.group(2), at)
        else:
            for call in rules.call.finditer(tag):
                found(CallShape.FUNCTION, call.group(3), line + tag.count("\n", 0, call.start(3)))

        line += tag.count("\n")

    line += fragments[-1].count("\n")
    logger.debug("Found %d msgids for %s in %s", len(sites), pattern, filename)
    return ScanResult(call_sites=tuple(sites), lines=line, warnings=tuple(warnings))
