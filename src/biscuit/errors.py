"""Biscuit exception hierarchy.

Shared by the date parser, the directive classifier and the cookie
builder so every module raises and catches the same types.
"""


class BiscuitError(Exception):
    """Base for all biscuit-specific errors."""


class CookieParseError(BiscuitError, ValueError):
    """Raised when header text cannot be turned into a cookie.

    Every parse failure aborts the whole parse; no partial cookie is
    returned.
    """


class MalformedPairError(CookieParseError):
    """The name/value segment has no ``=`` or an empty name."""


class EmptyValueError(CookieParseError):
    """A cookie value or a directive value is empty after trimming.

    ``key`` is the directive name, or ``None`` for the main pair.
    """

    def __init__(self, msg: str, key: str | None = None) -> None:
        super().__init__(msg)
        self.key = key


class DirectiveMissingValueError(CookieParseError):
    """A directive that requires a value was given as a bare flag."""

    def __init__(self, msg: str, key: str) -> None:
        super().__init__(msg)
        self.key = key


class InvalidDateError(CookieParseError):
    """No HTTP date grammar matched, or the date is out of range."""

    def __init__(self, msg: str, text: str) -> None:
        super().__init__(msg)
        self.text = text


class InvalidSameSiteError(CookieParseError):
    """``SameSite`` value is not ``Strict``, ``Lax`` or ``None``."""


class InvalidMaxAgeError(CookieParseError):
    """``Max-Age`` is not an unsigned integer."""


class NoNameValuePairError(CookieParseError):
    """The header is a bare attribute with no leading ``name=value``."""
