"""Tests for biscuit.cookies — cookie model, expiry and serialization."""

from datetime import UTC, datetime, timedelta

import pytest

from biscuit.config import ParserConfig
from biscuit.cookies import RequestCookie, ResponseCookie, SameSite
from biscuit.errors import NoNameValuePairError
from biscuit.parser import parse_set_cookie

T0 = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


class TestRequestCookie:
    def test_str(self) -> None:
        assert str(RequestCookie("session", "abc")) == "session=abc"

    def test_frozen(self) -> None:
        c = RequestCookie("a", "b")

        with pytest.raises(AttributeError):
            c.name = "c"  # type: ignore[misc]

    def test_equality(self) -> None:
        assert RequestCookie("a", "1") == RequestCookie("a", "1")
        assert RequestCookie("a", "1") != RequestCookie("a", "2")

    def test_hash_by_name(self) -> None:
        assert hash(RequestCookie("a", "1")) == hash(RequestCookie("a", "2"))
        assert len({RequestCookie("a", "1"), RequestCookie("a", "1")}) == 1


class TestResponseCookieModel:
    def test_defaults(self) -> None:
        c = ResponseCookie("id", "42")

        assert c.domain is None
        assert c.path is None
        assert c.expires is None
        assert c.max_age is None
        assert c.same_site is SameSite.LAX
        assert c.secure is False
        assert c.http_only is False
        assert c.extensions == {}
        assert c.created.tzinfo is not None

    def test_extensions_not_shared(self) -> None:
        a = ResponseCookie("a", "1")
        b = ResponseCookie("b", "2")
        a.extensions["x"] = None
        assert b.extensions == {}

    def test_domain_assignable(self) -> None:
        c = parse_set_cookie("cookie1=122343")
        c.domain = "b.a"
        assert c.domain == "b.a"

    def test_path_or_default(self) -> None:
        assert ResponseCookie("a", "b").path_or_default() == "/"
        assert ResponseCookie("a", "b", path="/docs").path_or_default() == "/docs"

    def test_equality_ignores_attributes(self) -> None:
        a = ResponseCookie("a", "1", domain="b.a", path="/", secure=True, max_age=5)
        b = ResponseCookie("a", "1", domain="b.a", path="/", same_site=SameSite.STRICT)
        assert a == b

    @pytest.mark.parametrize(
        "other",
        [
            ResponseCookie("x", "1", domain="b.a", path="/"),
            ResponseCookie("a", "2", domain="b.a", path="/"),
            ResponseCookie("a", "1", domain="c.a", path="/"),
            ResponseCookie("a", "1", domain="b.a", path="/x"),
        ],
    )
    def test_inequality(self, other: ResponseCookie) -> None:
        assert ResponseCookie("a", "1", domain="b.a", path="/") != other

    def test_not_equal_to_request_cookie(self) -> None:
        assert ResponseCookie("a", "1") != RequestCookie("a", "1")

    def test_hash_by_name_and_domain(self) -> None:
        a = ResponseCookie("a", "1", domain="b.a", path="/one")
        b = ResponseCookie("a", "2", domain="b.a", path="/two")
        assert hash(a) == hash(b)

    def test_to_request_cookie(self) -> None:
        set_cookie = parse_set_cookie("cookie1=122343; Max-Age=12000; Domain=b.a")
        cookie = set_cookie.to_request_cookie()

        assert cookie.name == "cookie1"
        assert cookie.value == "122343"
        assert str(cookie) == "cookie1=122343"


class TestExpiry:
    def test_never_expires(self) -> None:
        c = ResponseCookie("a", "b", created=T0)
        assert c.expire_time() is None
        assert c.expired(T0 + timedelta(days=10_000)) is False

    def test_max_age(self) -> None:
        c = ResponseCookie("a", "b", max_age=3600, created=T0)
        assert c.expire_time() == T0 + timedelta(hours=1)

    def test_max_age_beats_expires(self) -> None:
        c = ResponseCookie("a", "b", max_age=60, expires=T0 + timedelta(days=1), created=T0)
        assert c.expire_time() == T0 + timedelta(seconds=60)

    def test_expires(self) -> None:
        when = datetime(2030, 1, 1, tzinfo=UTC)
        assert ResponseCookie("a", "b", expires=when, created=T0).expire_time() == when

    def test_naive_expires_is_utc(self) -> None:
        c = ResponseCookie("a", "b", expires=datetime(2030, 1, 1), created=T0)
        assert c.expire_time() == datetime(2030, 1, 1, tzinfo=UTC)

    def test_pre_epoch_expires_is_creation_time(self) -> None:
        c = ResponseCookie("a", "b", expires=datetime(1960, 1, 1, tzinfo=UTC), created=T0)
        assert c.expire_time() == T0
        assert c.expired(T0 + timedelta(seconds=1)) is True

    def test_expired_with_explicit_now(self) -> None:
        c = ResponseCookie("a", "b", max_age=60, created=T0)
        assert c.expired(T0 + timedelta(seconds=59)) is False
        assert c.expired(T0 + timedelta(seconds=60)) is False
        assert c.expired(T0 + timedelta(seconds=61)) is True

    def test_max_age_zero(self) -> None:
        c = ResponseCookie("a", "b", max_age=0, created=T0)
        assert c.expired(T0 + timedelta(microseconds=1)) is True

    @pytest.mark.parametrize("max_age", [400_000_000_000, 99999999999999999999])
    def test_huge_max_age_never_passes(self, max_age: int) -> None:
        c = parse_set_cookie(f"a=b; Max-Age={max_age}", ParserConfig(clock=lambda: T0))

        assert c.expire_time() == datetime.max.replace(tzinfo=UTC)
        assert c.expired(T0 + timedelta(days=365 * 1000)) is False
        assert c.expired() is False

    def test_expired_defaults_to_current_time(self) -> None:
        assert parse_set_cookie("a=b; Expires=Wed, 26 Jan 2022 07:28:00 GMT").expired() is True
        assert parse_set_cookie("a=b; Max-Age=3600").expired() is False

    def test_parsed_max_age_uses_config_clock(self) -> None:
        c = parse_set_cookie("a=b; Max-Age=10", ParserConfig(clock=lambda: T0))
        assert c.expire_time() == T0 + timedelta(seconds=10)


class TestSerialization:
    def test_minimal(self) -> None:
        assert str(ResponseCookie("session", "abc")) == "session=abc"

    def test_field_order(self) -> None:
        c = ResponseCookie(
            "id",
            "a3fWa",
            domain="example.com",
            path="/",
            expires=datetime(2022, 1, 26, 7, 28, tzinfo=UTC),
            secure=True,
            http_only=True,
        )
        assert str(c) == (
            "id=a3fWa, Domain=example.com, Path=/, Expires=Wed, 26-Jan-2022 07:28:00 GMT, Secure, HttpOnly"
        )

    def test_max_age_suppresses_expires(self) -> None:
        c = ResponseCookie("a", "b", max_age=3600, expires=datetime(2022, 1, 26, tzinfo=UTC))
        text = str(c)

        assert "Max-Age=3600" in text
        assert "Expires" not in text

    def test_max_age_zero(self) -> None:
        """Max-Age=0 signals cookie deletion."""
        assert "Max-Age=0" in str(ResponseCookie("session", "x", max_age=0))

    @pytest.mark.parametrize(
        ("same_site", "expected"),
        [(SameSite.LAX, "a=b"), (SameSite.STRICT, "a=b, SameSite=Strict"), (SameSite.NONE, "a=b, SameSite=None")],
    )
    def test_same_site(self, same_site: SameSite, expected: str) -> None:
        assert str(ResponseCookie("a", "b", same_site=same_site)) == expected

    def test_extensions(self) -> None:
        c = ResponseCookie("a", "b", secure=True, extensions={"priority": "High", "partitioned": None})
        assert str(c) == "a=b, Secure, priority=High, partitioned"

    def test_header_value_uses_semicolons(self) -> None:
        c = ResponseCookie("a", "b", domain="b.a", path="/x", max_age=10, secure=True)
        assert c.to_header_value() == "a=b; Domain=b.a; Path=/x; Max-Age=10; Secure"

    def test_header_value_parses_back(self) -> None:
        c = ResponseCookie(
            "id",
            "a3fWa",
            domain="example.com",
            path="/docs",
            expires=datetime(2031, 7, 4, 23, 5, 9, tzinfo=UTC),
            same_site=SameSite.STRICT,
            secure=True,
            http_only=True,
            extensions={"priority": "high", "partitioned": None},
        )
        parsed = parse_set_cookie(c.to_header_value())

        assert parsed == c
        assert parsed.expires == c.expires
        assert parsed.same_site is SameSite.STRICT
        assert parsed.secure is True
        assert parsed.http_only is True
        assert parsed.extensions == c.extensions

    def test_attribute_named_cookie_rejected_on_reparse(self) -> None:
        header = ResponseCookie("path", "abc").to_header_value()

        assert header == "path=abc"
        with pytest.raises(NoNameValuePairError):
            parse_set_cookie(header)

    def test_example_cookie(self) -> None:
        cookie = parse_set_cookie("id=a3fWa; Expires=Wed, 26 Jan 2022 07:28:00 GMT; Secure")
        cookie.domain = "example.com"

        assert str(cookie) == "id=a3fWa, Domain=example.com, Expires=Wed, 26-Jan-2022 07:28:00 GMT, Secure"
        assert str(cookie.to_request_cookie()) == "id=a3fWa"
