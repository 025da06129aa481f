"""HTTP date parsing and formatting for the ``Expires`` attribute.

Three historical grammars are accepted (RFC 2616 section 3.3.1)::

    Sun, 06 Nov 1994 08:49:37 GMT     RFC 1123
    Sunday, 06-Nov-94 08:49:37 GMT    RFC 850 (a 4-digit year is also accepted)
    Sun Nov  6 08:49:37 1994          asctime

The weekday name is consumed but never checked against the date.
Field ranges are validated by ``datetime`` itself, so ``31-Feb`` or
``25:00:00`` is a parse failure rather than a clamped value.

The compiled patterns are module globals: built once at import and
only read afterwards, so the parsers are safe to call from any thread.
"""

import logging
import re
from collections.abc import Callable
from datetime import UTC, datetime

from biscuit.errors import InvalidDateError

logger = logging.getLogger("biscuit.dates")

MONTHS: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)  # fmt: skip
WEEKDAYS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_LONG_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_MONTH_NUMBERS = {name: number for number, name in enumerate(MONTHS, start=1)}

_WKDAY = "|".join(WEEKDAYS)
_WEEKDAY = "|".join(_LONG_WEEKDAYS + WEEKDAYS)  # long names first so "Sunday" is not cut to "Sun"
_MONTH = "|".join(MONTHS)
_TIME = r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"

_RFC1123_RE = re.compile(
    rf"(?:{_WKDAY}), (?P<day>\d{{2}}) (?P<month>{_MONTH}) (?P<year>\d{{4}}) {_TIME} GMT",
    re.ASCII,
)
_RFC850_RE = re.compile(
    rf"(?:{_WEEKDAY}), (?P<day>\d{{2}})-(?P<month>{_MONTH})-(?P<year>\d{{4}}|\d{{2}}) {_TIME} GMT",
    re.ASCII,
)
_ASCTIME_RE = re.compile(
    rf"(?:{_WKDAY}) (?P<month>{_MONTH}) {{1,2}}(?P<day>\d{{1,2}}) {_TIME} (?P<year>\d{{4}})",
    re.ASCII,
)


def utc_now() -> datetime:
    """Return the current instant as an aware UTC ``datetime``."""
    return datetime.now(UTC)


def fix_two_digit_year(year: int) -> int:
    """Apply the classic HTTP pivot at 70: ``69`` is 2069, ``70`` is 1970."""
    if year < 70:
        return year + 2000
    if year < 100:
        return year + 1900
    return year


def _to_datetime(match: re.Match[str], text: str, year: int) -> datetime:
    try:
        return datetime(
            year,
            _MONTH_NUMBERS[match["month"]],
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"]),
            tzinfo=UTC,
        )
    except ValueError as exc:
        msg = f"Invalid date: {text}"
        raise InvalidDateError(msg, text) from exc


def _no_match(text: str) -> InvalidDateError:
    return InvalidDateError(f"Invalid date: {text}", text)


def parse_rfc1123_date(text: str) -> datetime:
    """Parse ``Sun, 06 Nov 1994 08:49:37 GMT``.

    Raises ``InvalidDateError`` when *text* does not match or names an
    impossible date or time.
    """
    match = _RFC1123_RE.fullmatch(text)
    if match is None:
        raise _no_match(text)
    return _to_datetime(match, text, int(match["year"]))


def parse_rfc850_date(text: str) -> datetime:
    """Parse ``Sunday, 06-Nov-94 08:49:37 GMT``.

    The weekday may be full or abbreviated and the year may have two or
    four digits; years are corrected with :func:`fix_two_digit_year`.
    """
    match = _RFC850_RE.fullmatch(text)
    if match is None:
        raise _no_match(text)
    return _to_datetime(match, text, fix_two_digit_year(int(match["year"])))


def parse_asctime_date(text: str) -> datetime:
    """Parse ``Sun Nov  6 08:49:37 1994`` (day with one or two digits)."""
    match = _ASCTIME_RE.fullmatch(text)
    if match is None:
        raise _no_match(text)
    return _to_datetime(match, text, int(match["year"]))


DATE_PARSERS: tuple[tuple[str, Callable[[str], datetime]], ...] = (
    ("rfc1123", parse_rfc1123_date),
    ("rfc850", parse_rfc850_date),
    ("asctime", parse_asctime_date),
)


def parse_http_date(text: str) -> datetime:
    """Parse an HTTP date in any of the three accepted grammars.

    Grammars are tried in order (RFC 1123, RFC 850, asctime) and the
    first match wins. The result is an aware UTC ``datetime``.

    Raises ``InvalidDateError`` only when every grammar fails.
    """
    for name, parser in DATE_PARSERS:
        try:
            value = parser(text)
        except InvalidDateError:
            continue
        logger.debug("Parsed %r as %s date", text, name)
        return value
    raise _no_match(text)


def format_cookie_date(value: datetime) -> str:
    """Format *value* as ``Wed, 26-Jan-2022 07:28:00 GMT``.

    Naive datetimes are taken to be UTC. Day and month names come from
    fixed tables, never from the C locale.
    """
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return (
        f"{WEEKDAYS[value.weekday()]}, {value.day:02d}-{MONTHS[value.month - 1]}-{value.year:04d} "
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d} GMT"
    )
