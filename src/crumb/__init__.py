"""Crumb — HTTP cookies for ASGI applications.

Reads the ``Cookie`` header into a read-only set, lets handlers stage
outgoing cookies on a mutable set, and writes that set back as
``Set-Cookie`` headers.

Basic usage::

    from crumb import Cookie, CookieSet

    cookies = CookieSet()
    cookies.add(Cookie("sid", "abc"))
    cookies.has("sid")  # True

With an ASGI app::

    from crumb import CookieMiddleware
    from crumb.middleware import get_response_cookies

    app = CookieMiddleware(app)
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "Cookie",
    "CookieConfig",
    "CookieMiddleware",
    "CookieSet",
    "CookieSigner",
    "CrumbError",
    "ReadOnlyError",
    "parse_cookies",
    "read_cookies",
    "set_cookie_headers",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import crumb`` fast while providing a clean top-level API.
    """
    if name == "CookieSet":
        from crumb.http.cookie_set import CookieSet

        return CookieSet

    if name in ("Cookie", "parse_cookies"):
        from crumb.http import cookies as _cookies

        return getattr(_cookies, name)

    if name == "CookieConfig":
        from crumb.config import CookieConfig

        return CookieConfig

    if name == "CookieMiddleware":
        from crumb.middleware.cookies import CookieMiddleware

        return CookieMiddleware

    if name == "CookieSigner":
        from crumb.http.signing import CookieSigner

        return CookieSigner

    if name == "read_cookies":
        from crumb.http.request import read_cookies

        return read_cookies

    if name == "set_cookie_headers":
        from crumb.http.response import set_cookie_headers

        return set_cookie_headers

    if name in ("ConfigurationError", "CrumbError", "ReadOnlyError"):
        from crumb import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
