"""Date and time values for the YEAR, DATE, TIME and DT modifiers.

Template variables hold timestamps in whatever shape the application
produced them: database strings, epoch seconds, datetime objects.
to_datetime() accepts the common encodings; format_datetime_keyword()
renders one of the named DT formats.

Timezone Handling:
    Epoch seconds are interpreted in UTC, so output does not depend on the
    timezone of the server process. ISO strings keep their UTC offset when
    they carry one and stay naive otherwise.

Thread-safe. Uses Python 3.13 stdlib + Babel CLDR patterns.

Python 3.13+.
"""

import email.utils
import logging
import re
from datetime import UTC, date, datetime
from decimal import Decimal

from babel.core import UnknownLocaleError
from babel.dates import format_datetime as babel_format_datetime

from temploc.locale_utils import get_babel_locale

__all__ = ["format_datetime_keyword", "to_datetime"]

logger = logging.getLogger(__name__)

_EPOCH = re.compile(r"[+-]?\d+(?:\.\d+)?")

# CLDR styles rendered through Babel in the requested language.
_BABEL_STYLES: frozenset[str] = frozenset({"short", "medium", "long", "full"})

_FALLBACK_LOCALE = "en_US"


def to_datetime(value: object) -> datetime | None:
    """Interpret a template value as a point in time.

    Accepted encodings:
    - datetime / date objects
    - epoch seconds as int, float, Decimal or digit string (UTC)
    - ISO 8601 date "2017-06-26"
    - ISO 8601 date-time "2017-06-26 00:24:15", "2017-06-26T00:24:15+02:00"

    Args:
        value: Value found for a placeholder

    Returns:
        datetime, or None when the value has none of the accepted encodings

    Examples:
        >>> to_datetime("2017-06-26 00:24:15")
        datetime.datetime(2017, 6, 26, 0, 24, 15)
        >>> to_datetime(0)
        datetime.datetime(1970, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
        >>> to_datetime("tomorrow") is None
        True
    """
    match value:
        case datetime():
            return value
        case date():
            return datetime(value.year, value.month, value.day)
        case bool():
            return None
        case int() | float() | Decimal():
            return _from_epoch(value)
        case str():
            text = value.strip()
            if _EPOCH.fullmatch(text):
                return _from_epoch(Decimal(text))
            try:
                return datetime.fromisoformat(text)
            except ValueError:
                return None
        case _:
            return None


def _from_epoch(seconds: int | float | Decimal) -> datetime | None:
    try:
        return datetime.fromtimestamp(float(seconds), tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


def format_datetime_keyword(moment: datetime, keyword: str, lang: str | None = None) -> str:
    """Render a datetime in one of the DT() formats.

    Keywords:
        FT      "2017-06-26 00:24:15" (default)
        ISO     ISO 8601, with UTC offset when known
        ASC     asctime style "Mon Jun 26 00:24:15 UTC 2017"
        RFC2822 "Mon, 26 Jun 2017 00:24:15 +0000"
        RFC822  "Mon, 26 Jun 17 00:24:15 +0000"
        short, medium, long, full
                CLDR styles through Babel, in the language of the call
        any text containing "%"
                strftime pattern

    Args:
        moment: The datetime to render
        keyword: Format keyword (case-insensitive for the named ones)
        lang: Target language, used by the CLDR styles

    Returns:
        Formatted string

    Raises:
        ValueError: If the keyword is not known
    """
    if keyword.lower() in _BABEL_STYLES:
        return _format_babel(moment, keyword.lower(), lang)

    match keyword.upper():
        case "FT":
            return moment.strftime("%Y-%m-%d %H:%M:%S")
        case "ISO":
            return moment.isoformat()
        case "ASC":
            zone = moment.tzname()
            stamp = moment.strftime("%a %b %d %H:%M:%S")
            return f"{stamp} {zone} {moment:%Y}" if zone else f"{stamp} {moment:%Y}"
        case "RFC2822":
            return email.utils.format_datetime(moment)
        case "RFC822":
            offset = moment.strftime("%z") or "-0000"
            return moment.strftime("%a, %d %b %y %H:%M:%S ") + offset

    if "%" in keyword:
        return moment.strftime(keyword)

    msg = f"unknown DT format '{keyword}'"
    raise ValueError(msg)


def _format_babel(moment: datetime, style: str, lang: str | None) -> str:
    try:
        locale = get_babel_locale(lang or _FALLBACK_LOCALE)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning("Unknown locale '%s': %s. Falling back to %s", lang, e, _FALLBACK_LOCALE)
        locale = get_babel_locale(_FALLBACK_LOCALE)
    return babel_format_datetime(moment, format=style, locale=locale)
