"""Tests for CookieMiddleware — request/response cookie sets over ASGI."""

import httpx
import pytest

from crumb.config import CookieConfig
from crumb.errors import ConfigurationError, ReadOnlyError
from crumb.http.cookies import Cookie
from crumb.http.signing import CookieSigner
from crumb.middleware.cookies import (
    CookieMiddleware,
    get_request_cookies,
    get_response_cookies,
)


async def _respond(send, body: bytes) -> None:
    await send(
        {
            "type": "http.response.start",
            "status": 200,
            "headers": [(b"content-type", b"text/plain")],
        }
    )
    await send({"type": "http.response.body", "body": body})


async def echo_theme(scope, receive, send) -> None:
    theme = get_request_cookies().get_value("theme", "light")
    await _respond(send, f"theme={theme}".encode())


async def set_theme(scope, receive, send) -> None:
    get_response_cookies().add(Cookie("theme", "dark", path="/"))
    await _respond(send, b"set")


async def logout(scope, receive, send) -> None:
    get_response_cookies().mark_for_deletion(Cookie("sid", path="/"))
    await _respond(send, b"bye")


def _client(app, config: CookieConfig | None = None) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=CookieMiddleware(app, config))
    return httpx.AsyncClient(transport=transport, base_url="http://testserver")


class TestAccessors:
    def test_request_cookies_outside_request(self) -> None:
        with pytest.raises(LookupError, match="No active request cookies"):
            get_request_cookies()

    def test_response_cookies_outside_request(self) -> None:
        with pytest.raises(LookupError, match="No active response cookies"):
            get_response_cookies()


class TestCookieMiddlewareInit:
    def test_validation_without_key_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="validation_key must not be empty"):
            CookieMiddleware(echo_theme, CookieConfig(enable_validation=True))

    def test_validation_with_key(self) -> None:
        mw = CookieMiddleware(echo_theme, CookieConfig(enable_validation=True, validation_key="k"))
        assert mw._signer is not None


class TestRequestCookies:
    async def test_reads_cookie_header(self) -> None:
        async with _client(echo_theme) as client:
            response = await client.get("/", headers={"Cookie": "theme=blue"})
            assert response.text == "theme=blue"

    async def test_default_without_cookie(self) -> None:
        async with _client(echo_theme) as client:
            response = await client.get("/")
            assert response.text == "theme=light"
            assert response.headers.get_list("set-cookie") == []

    async def test_request_cookies_read_only(self) -> None:
        errors: list[Exception] = []

        async def app(scope, receive, send) -> None:
            try:
                get_request_cookies().add(Cookie("x", "1"))
            except ReadOnlyError as exc:
                errors.append(exc)
            await _respond(send, b"ok")

        async with _client(app) as client:
            await client.get("/")
        assert len(errors) == 1

    async def test_context_reset_after_request(self) -> None:
        async with _client(echo_theme) as client:
            await client.get("/")
        with pytest.raises(LookupError):
            get_request_cookies()


class TestResponseCookies:
    async def test_staged_cookie_emitted(self) -> None:
        async with _client(set_theme) as client:
            response = await client.get("/")

            [header] = response.headers.get_list("set-cookie")
            assert header.startswith("theme=dark;")
            assert response.headers["content-type"] == "text/plain"

    async def test_tombstone_emitted(self) -> None:
        async with _client(logout) as client:
            response = await client.get("/", headers={"Cookie": "sid=abc"})

            [header] = response.headers.get_list("set-cookie")
            assert header.startswith("sid=;")
            assert "Max-Age=0" in header

    async def test_policy_filters(self) -> None:
        config = CookieConfig(policy=lambda c: c.name != "theme")
        async with _client(set_theme, config) as client:
            response = await client.get("/")
            assert response.headers.get_list("set-cookie") == []


class TestSignedCookies:
    async def test_round_trip(self) -> None:
        config = CookieConfig(enable_validation=True, validation_key="test-secret")
        async with _client(set_theme, config) as client:
            set_response = await client.get("/")
            pair = set_response.headers["set-cookie"].split(";")[0]
            assert pair != "theme=dark"

        async with _client(echo_theme, config) as client:
            response = await client.get("/", headers={"Cookie": pair})
            assert response.text == "theme=dark"

    async def test_unsigned_cookie_ignored(self) -> None:
        config = CookieConfig(enable_validation=True, validation_key="test-secret")
        async with _client(echo_theme, config) as client:
            response = await client.get("/", headers={"Cookie": "theme=dark"})
            assert response.text == "theme=light"

    async def test_cookie_signed_for_other_name_ignored(self) -> None:
        config = CookieConfig(enable_validation=True, validation_key="test-secret")
        moved = CookieSigner("test-secret").sign("sid", "dark")
        async with _client(echo_theme, config) as client:
            response = await client.get("/", headers={"Cookie": f"theme={moved}"})
            assert response.text == "theme=light"


class TestPassThrough:
    async def test_non_http_scope_untouched(self) -> None:
        seen: list[str] = []

        async def app(scope, receive, send) -> None:
            seen.append(scope["type"])
            with pytest.raises(LookupError):
                get_request_cookies()

        async def receive():
            return {"type": "lifespan.startup"}

        async def send(message) -> None:
            pass

        await CookieMiddleware(app)({"type": "lifespan"}, receive, send)
        assert seen == ["lifespan"]


class TestEncodedValues:
    async def test_non_latin1_value_emitted_and_read_back(self) -> None:
        async def set_name(scope, receive, send) -> None:
            get_response_cookies().add(Cookie("name", "Zoë→; hi"))
            await _respond(send, b"set")

        async def echo_name(scope, receive, send) -> None:
            name = get_request_cookies().get_value("name", "")
            await _respond(send, name.encode("utf-8"))

        async with _client(set_name) as client:
            response = await client.get("/")
            pair = response.headers["set-cookie"].split("; ")[0]
            assert pair == "name=Zo%C3%AB%E2%86%92%3B%20hi"

        async with _client(echo_name) as client:
            response = await client.get("/", headers={"Cookie": pair})
            assert response.content.decode("utf-8") == "Zoë→; hi"
