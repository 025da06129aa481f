"""Classification of one ``Set-Cookie`` attribute.

A ``Set-Cookie`` value is ``name=value`` followed by ``;``-separated
directives. :func:`classify_directive` turns one directive segment into
exactly one of the variants of ``Directive``::

    >>> classify_directive(" Max-Age=3600")
    MaxAge(seconds=3600)
    >>> classify_directive("Secure")
    Secure()

Attribute names are case-insensitive. Unknown attributes become an
``Extension`` so they survive a round trip.
"""

from dataclasses import dataclass
from datetime import datetime

from biscuit.cookies import SameSite
from biscuit.dates import parse_http_date
from biscuit.errors import (
    DirectiveMissingValueError,
    EmptyValueError,
    InvalidMaxAgeError,
    InvalidSameSiteError,
)

EXPIRES = "expires"
MAX_AGE = "max-age"
DOMAIN = "domain"
PATH = "path"
SAME_SITE = "samesite"
SECURE = "secure"
HTTP_ONLY = "httponly"

VALUE_ATTRIBUTES = frozenset({EXPIRES, MAX_AGE, DOMAIN, PATH, SAME_SITE})
FLAG_ATTRIBUTES = frozenset({SECURE, HTTP_ONLY})
KNOWN_ATTRIBUTES = VALUE_ATTRIBUTES | FLAG_ATTRIBUTES


@dataclass(frozen=True, slots=True)
class Expires:
    when: datetime


@dataclass(frozen=True, slots=True)
class MaxAge:
    seconds: int


@dataclass(frozen=True, slots=True)
class Domain:
    value: str


@dataclass(frozen=True, slots=True)
class Path:
    value: str


@dataclass(frozen=True, slots=True)
class SameSitePolicy:
    policy: SameSite


@dataclass(frozen=True, slots=True)
class Secure:
    pass


@dataclass(frozen=True, slots=True)
class HttpOnly:
    pass


@dataclass(frozen=True, slots=True)
class Extension:
    """An attribute biscuit does not interpret. ``value`` is ``None`` for a bare flag."""

    key: str
    value: str | None = None


Directive = Expires | MaxAge | Domain | Path | SameSitePolicy | Secure | HttpOnly | Extension


def parse_max_age(value: str) -> int:
    """Parse a ``Max-Age`` value as an unsigned count of seconds."""
    if not value.isascii() or not value.isdigit():
        msg = f"Cannot parse Max-Age: {value}"
        raise InvalidMaxAgeError(msg)
    return int(value)


def parse_same_site(value: str) -> SameSite:
    """Parse a ``SameSite`` value, ignoring case."""
    try:
        return SameSite(value.lower())
    except ValueError:
        msg = f"Invalid SameSite cookie directive value: {value}"
        raise InvalidSameSiteError(msg) from None


def classify_directive(segment: str) -> Directive:
    """Classify one ``;``-delimited directive segment.

    Raises a ``CookieParseError`` subclass when a known attribute has an
    empty, missing or unparseable value.
    """
    key, sep, value = segment.partition("=")
    key = key.strip().lower()

    if not sep:
        if key == SECURE:
            return Secure()
        if key == HTTP_ONLY:
            return HttpOnly()
        if key in VALUE_ATTRIBUTES:
            msg = f"Directive {key} needs a value"
            raise DirectiveMissingValueError(msg, key)
        return Extension(key)

    value = value.strip()
    if not value:
        msg = f"Directive {key} value must not be empty"
        raise EmptyValueError(msg, key)

    match key:
        case "expires":
            return Expires(parse_http_date(value))
        case "max-age":
            return MaxAge(parse_max_age(value))
        case "domain":
            return Domain(value)
        case "path":
            return Path(value)
        case "samesite":
            return SameSitePolicy(parse_same_site(value))
        case _:
            return Extension(key, value)
