"""Crumb exception hierarchy.

Shared across the cookie set, the request reader, the response writer,
and the middleware so every module raises and catches the same types.
"""


class CrumbError(Exception):
    """Base for all crumb-specific errors."""


class ConfigurationError(CrumbError):
    """Raised when cookie configuration is invalid.

    Typically raised while constructing ``CookieMiddleware`` or
    ``CookieSigner`` at startup.
    """


class ReadOnlyError(CrumbError):
    """Raised when mutating a ``CookieSet`` constructed with ``read_only=True``.

    A programming error: request cookies are read-only, stage outgoing
    cookies on the response set instead.
    """

    def __init__(self, detail: str = "The cookie collection is read only.") -> None:
        super().__init__(detail)
