"""Deciding whether a response cookie goes out with a request.

Path matching follows RFC 6265 section 5.1.4, domain matching section
5.1.3. Every function here is a pure predicate over an already-parsed
cookie and never raises.

Precondition: :func:`applies` and :func:`domain_matches` never match a
cookie whose ``domain`` is unset. A client must assign the originating
host to ``cookie.domain`` after parsing a header that had no ``Domain``
attribute::

    cookie = parse_set_cookie("id=42")
    cookie.domain = "example.com"
    applies(cookie, "example.com", "/", secure=True)  # True
"""

from collections.abc import Iterable
from datetime import datetime

from biscuit.cookies import RequestCookie, ResponseCookie, SameSite
from biscuit.dates import utc_now


def path_matches(cookie_path: str, request_path: str) -> bool:
    """Return whether *request_path* is covered by *cookie_path*.

    ``/foo`` matches ``/foo`` and ``/foo/bar`` but not ``/foobar``.
    """
    if not request_path.startswith(cookie_path):
        return False
    return (
        len(request_path) == len(cookie_path)
        or cookie_path.endswith("/")
        or request_path[len(cookie_path)] == "/"
    )


def domain_matches(cookie_domain: str | None, request_domain: str) -> bool:
    """Return whether *request_domain* is *cookie_domain* or one of its subdomains.

    ``b.a`` matches ``b.a`` and ``c.b.a`` but not ``xb.a``. Comparison
    ignores ASCII case. Always ``False`` when *cookie_domain* is ``None``.
    """
    if cookie_domain is None:
        return False
    cookie_domain = cookie_domain.lower()
    request_domain = request_domain.lower()
    if request_domain == cookie_domain:
        return True
    return request_domain.endswith("." + cookie_domain)


def applies(cookie: ResponseCookie, request_domain: str, request_path: str, secure: bool) -> bool:
    """Return whether *cookie* may be attached to a request.

    All of these must hold:

    1. the cookie has a domain
    2. a ``Secure`` cookie is only sent over a secure request
    3. ``Strict`` requires the request host to equal the cookie domain,
       ``Lax`` requires a domain match, ``None`` requires a secure request
    4. the request path matches the cookie path (``/`` when unset)

    Expiry is not checked here; see :func:`select_cookies`.
    """
    if cookie.domain is None:
        return False
    if cookie.secure and not secure:
        return False
    match cookie.same_site:
        case SameSite.STRICT:
            if cookie.domain.lower() != request_domain.lower():
                return False
        case SameSite.LAX:
            if not domain_matches(cookie.domain, request_domain):
                return False
        case SameSite.NONE:
            if not secure:
                return False
    return path_matches(cookie.path_or_default(), request_path)


def select_cookies(
    cookies: Iterable[ResponseCookie],
    request_domain: str,
    request_path: str,
    secure: bool,
    now: datetime | None = None,
) -> list[RequestCookie]:
    """Return the request cookies to send, in input order.

    Keeps every cookie that has not expired at *now* and for which
    :func:`applies` holds.
    """
    if now is None:
        now = utc_now()
    return [
        cookie.to_request_cookie()
        for cookie in cookies
        if not cookie.expired(now) and applies(cookie, request_domain, request_path, secure)
    ]
