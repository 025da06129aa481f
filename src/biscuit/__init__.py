"""Biscuit — HTTP cookies without a cookie jar.

Parses ``Set-Cookie`` header values, decides whether a cookie goes out
with a request (domain, path, ``Secure`` and ``SameSite`` rules of
RFC 6265), and serializes cookies back to header text.

Basic usage::

    from biscuit import applies, parse_set_cookie

    cookie = parse_set_cookie("id=a3fWa; Expires=Wed, 26 Jan 2022 07:28:00 GMT; Secure")
    cookie.domain = "example.com"  # the request host, when Domain is absent

    if applies(cookie, "www.example.com", "/", secure=True):
        header = str(cookie.to_request_cookie())  # "id=a3fWa"
"""

import importlib

__version__ = "0.1.0-dev"
__all__ = [
    "BiscuitError",
    "CookieParseError",
    "DirectiveMissingValueError",
    "EmptyValueError",
    "InvalidDateError",
    "InvalidMaxAgeError",
    "InvalidSameSiteError",
    "MalformedPairError",
    "NoNameValuePairError",
    "ParserConfig",
    "RequestCookie",
    "ResponseCookie",
    "SameSite",
    "applies",
    "domain_matches",
    "format_cookie_header",
    "parse_cookie_header",
    "parse_http_date",
    "parse_set_cookie",
    "path_matches",
    "select_cookies",
]

# public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "BiscuitError": "biscuit.errors",
    "CookieParseError": "biscuit.errors",
    "DirectiveMissingValueError": "biscuit.errors",
    "EmptyValueError": "biscuit.errors",
    "InvalidDateError": "biscuit.errors",
    "InvalidMaxAgeError": "biscuit.errors",
    "InvalidSameSiteError": "biscuit.errors",
    "MalformedPairError": "biscuit.errors",
    "NoNameValuePairError": "biscuit.errors",
    "ParserConfig": "biscuit.config",
    "RequestCookie": "biscuit.cookies",
    "ResponseCookie": "biscuit.cookies",
    "SameSite": "biscuit.cookies",
    "applies": "biscuit.matching",
    "domain_matches": "biscuit.matching",
    "format_cookie_header": "biscuit.parser",
    "parse_cookie_header": "biscuit.parser",
    "parse_http_date": "biscuit.dates",
    "parse_set_cookie": "biscuit.parser",
    "path_matches": "biscuit.matching",
    "select_cookies": "biscuit.matching",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import biscuit`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(importlib.import_module(module_name), name)
