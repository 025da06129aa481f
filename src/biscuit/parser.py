"""Set-Cookie parsing and Cookie header handling.

Consolidates the response side (parse_set_cookie, building a
ResponseCookie from a ``Set-Cookie`` value) and the request side
(parse_cookie_header / format_cookie_header for ``Cookie``) in one module.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from biscuit.config import DEFAULT_CONFIG, ParserConfig
from biscuit.cookies import RequestCookie, ResponseCookie
from biscuit.directives import (
    KNOWN_ATTRIBUTES,
    Directive,
    Domain,
    Expires,
    Extension,
    HttpOnly,
    MaxAge,
    Path,
    SameSitePolicy,
    Secure,
    classify_directive,
)
from biscuit.errors import (
    CookieParseError,
    EmptyValueError,
    MalformedPairError,
    NoNameValuePairError,
)

logger = logging.getLogger("biscuit.parser")


def parse_cookie_pair(segment: str) -> tuple[str, str]:
    """Split the leading ``name=value`` segment of a cookie.

    Both parts are trimmed. Only the first ``=`` separates, so values may
    contain ``=`` (e.g. base64).
    """
    name, sep, value = segment.partition("=")
    name = name.strip()
    if not sep or not name:
        msg = f"Malformed HTTP cookie: {segment}"
        raise MalformedPairError(msg)
    value = value.strip()
    if not value:
        msg = "Cookie value must not be empty"
        raise EmptyValueError(msg)
    return name, value


def _is_bare_attribute(segment: str) -> bool:
    key = segment.partition("=")[0].strip().lower()
    return key in KNOWN_ATTRIBUTES


def build_cookie(
    name: str,
    value: str,
    directives: Sequence[Directive],
    config: ParserConfig = DEFAULT_CONFIG,
) -> ResponseCookie:
    """Fold classified directives into a single ResponseCookie.

    Later directives override earlier ones; a leading ``.`` on
    ``Domain`` is dropped.
    """
    attrs: dict[str, Any] = {"same_site": config.default_same_site}
    extensions: dict[str, str | None] = {}
    for directive in directives:
        match directive:
            case Expires(when=when):
                attrs["expires"] = when
            case MaxAge(seconds=seconds):
                attrs["max_age"] = seconds
            case Domain(value=domain):
                attrs["domain"] = domain.removeprefix(".")
            case Path(value=path):
                attrs["path"] = path
            case SameSitePolicy(policy=policy):
                attrs["same_site"] = policy
            case Secure():
                attrs["secure"] = True
            case HttpOnly():
                attrs["http_only"] = True
            case Extension(key=key, value=ext_value):
                logger.debug("Preserving unknown cookie attribute %r on %r", key, name)
                extensions[key] = ext_value
    return ResponseCookie(name, value, extensions=extensions, created=config.clock(), **attrs)


def parse_set_cookie(header: str, config: ParserConfig | None = None) -> ResponseCookie:
    """Parse a ``Set-Cookie`` header value into a ResponseCookie.

    The first ``;``-separated segment must be ``name=value``; the rest
    are directives. Blank segments (e.g. from a trailing ``;``) are
    skipped. A header made of a single known attribute such as
    ``Secure`` or ``Max-Age=10`` is rejected with NoNameValuePairError.

    Raises a ``CookieParseError`` subclass on the first problem found.
    """
    cfg = config or DEFAULT_CONFIG
    first, *rest = header.split(";")
    try:
        if not rest and _is_bare_attribute(first):
            msg = f"Cookie has no name/value pair: {header}"
            raise NoNameValuePairError(msg)
        name, value = parse_cookie_pair(first)
        directives = [classify_directive(segment) for segment in rest if segment.strip()]
    except CookieParseError as exc:
        logger.debug("Rejected Set-Cookie header %r: %s", header, exc)
        raise
    return build_cookie(name, value, directives, cfg)


def parse_cookie_header(header: str) -> list[RequestCookie]:
    """Parse a ``Cookie`` request header into request cookies.

    Returns an empty list for an empty header. Segments without ``=`` or
    with an empty name are skipped; empty values are kept.
    """
    if not header:
        return []
    cookies: list[RequestCookie] = []
    for pair in header.split(";"):
        name, sep, value = pair.partition("=")
        name = name.strip()
        if sep and name:
            cookies.append(RequestCookie(name, value.strip()))
    return cookies


def format_cookie_header(cookies: Iterable[RequestCookie]) -> str:
    """Join request cookies into a ``Cookie`` header value."""
    return "; ".join(str(cookie) for cookie in cookies)
