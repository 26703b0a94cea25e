"""Cookie middleware — request and response CookieSets around an ASGI app.

The request set (read-only, from the ``Cookie`` header) and the response
set (mutable, empty) are stored in ContextVars, accessible via
``get_request_cookies()`` and ``get_response_cookies()`` from any handler.
When the app starts its response, the response set is rendered into
``Set-Cookie`` headers.
"""

import logging
from contextvars import ContextVar

from crumb._internal.asgi import ASGIApp, Message, Receive, Scope, Send
from crumb.config import CookieConfig
from crumb.http.cookie_set import CookieSet
from crumb.http.request import read_cookies_from_scope
from crumb.http.response import raw_set_cookie_headers
from crumb.http.signing import CookieSigner

logger = logging.getLogger("crumb.middleware")

# -- Cookie ContextVars --

_request_cookies_var: ContextVar[CookieSet | None] = ContextVar(
    "crumb_request_cookies", default=None
)
_response_cookies_var: ContextVar[CookieSet | None] = ContextVar(
    "crumb_response_cookies", default=None
)


def get_request_cookies() -> CookieSet:
    """Return the read-only cookies sent with the current request.

    Raises ``LookupError`` if called outside a request with
    ``CookieMiddleware`` active.
    """
    cookies = _request_cookies_var.get()
    if cookies is None:
        msg = (
            "No active request cookies. Ensure CookieMiddleware wraps "
            "the app before accessing cookies."
        )
        raise LookupError(msg)
    return cookies


def get_response_cookies() -> CookieSet:
    """Return the cookies staged for the current response.

    Raises ``LookupError`` if called outside a request with
    ``CookieMiddleware`` active.
    """
    cookies = _response_cookies_var.get()
    if cookies is None:
        msg = (
            "No active response cookies. Ensure CookieMiddleware wraps "
            "the app before staging cookies."
        )
        raise LookupError(msg)
    return cookies


# -- Middleware --


class CookieMiddleware:
    """ASGI middleware managing request and response cookies.

    Raises ``ConfigurationError`` at construction if validation is
    enabled without a ``validation_key``.

    Usage::

        from crumb import Cookie, CookieConfig, CookieMiddleware
        from crumb.middleware.cookies import get_request_cookies, get_response_cookies

        app = CookieMiddleware(inner_app, CookieConfig(
            enable_validation=True,
            validation_key="my-secret-key",
        ))

        # In a handler:
        theme = get_request_cookies().get_value("theme", "light")
        get_response_cookies().add(Cookie("theme", "dark"))
    """

    __slots__ = ("_app", "_config", "_signer")

    def __init__(self, app: ASGIApp, config: CookieConfig | None = None) -> None:
        config = config or CookieConfig()
        self._app = app
        self._config = config
        self._signer = CookieSigner(config.validation_key) if config.enable_validation else None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Attach cookie sets, dispatch, then emit staged cookies."""
        if scope["type"] != "http":
            await self._app(scope, receive, send)
            return

        request_cookies = read_cookies_from_scope(scope, self._config, signer=self._signer)
        response_cookies = CookieSet()

        async def send_with_cookies(message: Message) -> None:
            if message["type"] == "http.response.start":
                cookie_headers = raw_set_cookie_headers(
                    response_cookies, self._config, signer=self._signer
                )
                if cookie_headers:
                    logger.debug(
                        "Emitting %d Set-Cookie header(s) for %s",
                        len(cookie_headers),
                        scope.get("path", ""),
                    )
                    headers = list(message.get("headers", ()))
                    headers.extend(cookie_headers)
                    message["headers"] = headers
            await send(message)

        request_token = _request_cookies_var.set(request_cookies)
        response_token = _response_cookies_var.set(response_cookies)
        try:
            await self._app(scope, receive, send_with_cookies)
        finally:
            _response_cookies_var.reset(response_token)
            _request_cookies_var.reset(request_token)
