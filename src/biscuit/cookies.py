"""Cookie model and serialization.

``ResponseCookie`` is what a server sends in ``Set-Cookie``;
``RequestCookie`` is the ``name=value`` projection a client sends back
in ``Cookie``. Parsing lives in :mod:`biscuit.parser`, request matching
in :mod:`biscuit.matching`.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum

from biscuit.dates import format_cookie_date, utc_now

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_FAR_FUTURE = datetime.max.replace(tzinfo=UTC)


class SameSite(Enum):
    """``SameSite`` policy of a response cookie."""

    STRICT = "strict"
    LAX = "lax"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class RequestCookie:
    """A cookie as sent in a ``Cookie`` request header.

    Equal when name and value are equal; hashed by name only.
    """

    name: str
    value: str

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return f"{self.name}={self.value}"


@dataclass(slots=True, eq=False)
class ResponseCookie:
    """A cookie received from (or about to be sent in) ``Set-Cookie``.

    Build one by parsing header text with
    :func:`biscuit.parser.parse_set_cookie`, or directly::

        cookie = ResponseCookie("id", "a3fWa", max_age=3600)
        cookie.domain = "example.com"

    Fields stay mutable so a client can fill in ``domain`` with the
    request host when the header omitted it; :func:`biscuit.matching.applies`
    never matches a cookie without a domain.

    ``max_age`` is a count of seconds measured from ``created``. When both
    ``max_age`` and ``expires`` are set, ``max_age`` wins.
    """

    name: str
    value: str
    domain: str | None = None
    path: str | None = None
    expires: datetime | None = None
    max_age: int | None = None
    same_site: SameSite = SameSite.LAX
    secure: bool = False
    http_only: bool = False
    extensions: dict[str, str | None] = field(default_factory=dict)
    created: datetime = field(default_factory=utc_now)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResponseCookie):
            return NotImplemented
        return (
            self.name == other.name
            and self.value == other.value
            and self.domain == other.domain
            and self.path == other.path
        )

    def __hash__(self) -> int:
        return hash((self.name, self.domain))

    def path_or_default(self) -> str:
        """Return the cookie path, or ``/`` when unset."""
        return self.path if self.path is not None else "/"

    def to_request_cookie(self) -> RequestCookie:
        """Project to the ``name=value`` pair sent in a ``Cookie`` header."""
        return RequestCookie(self.name, self.value)

    def expire_time(self) -> datetime | None:
        """Return the instant the cookie expires, or ``None`` if it never does.

        ``Max-Age`` is resolved against the creation instant and takes
        precedence over ``Expires``. An ``Expires`` before the Unix epoch
        means "already expired" and resolves to the creation instant.
        A ``Max-Age`` reaching past ``datetime.max`` resolves to
        ``datetime.max`` (UTC), which never passes.
        """
        if self.max_age is not None:
            try:
                return self.created + timedelta(seconds=self.max_age)
            except OverflowError:
                return _FAR_FUTURE
        if self.expires is not None:
            expires = self.expires if self.expires.tzinfo is not None else self.expires.replace(tzinfo=UTC)
            if expires < _EPOCH:
                return self.created
            return expires
        return None

    def expired(self, now: datetime | None = None) -> bool:
        """Return whether the cookie has expired at *now* (default: current time)."""
        expire_time = self.expire_time()
        if expire_time is None:
            return False
        if now is None:
            now = utc_now()
        return expire_time < now

    def _attributes(self) -> list[str]:
        parts = [f"{self.name}={self.value}"]
        if self.domain is not None:
            parts.append(f"Domain={self.domain}")
        if self.path is not None:
            parts.append(f"Path={self.path}")
        if self.max_age is not None:
            parts.append(f"Max-Age={self.max_age}")
        elif self.expires is not None:
            parts.append(f"Expires={format_cookie_date(self.expires)}")
        # Lax is the default and is left implicit
        if self.same_site is SameSite.NONE:
            parts.append("SameSite=None")
        elif self.same_site is SameSite.STRICT:
            parts.append("SameSite=Strict")
        if self.secure:
            parts.append("Secure")
        if self.http_only:
            parts.append("HttpOnly")
        for key, value in self.extensions.items():
            parts.append(key if value is None else f"{key}={value}")
        return parts

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value (``; `` separated).

        The result parses back to an equal cookie, except that a cookie
        named after an attribute (``path=abc``) with no other attributes
        is rejected by the parser with ``NoNameValuePairError``.
        """
        return "; ".join(self._attributes())

    def __str__(self) -> str:
        return ", ".join(self._attributes())
