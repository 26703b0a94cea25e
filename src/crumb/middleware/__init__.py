"""Middleware — plain ASGI callables wrapping an application.

Built-in middleware:
    CookieMiddleware -- Request/response cookie sets (signing requires itsdangerous)
"""

from crumb.middleware.cookies import (
    CookieMiddleware,
    get_request_cookies,
    get_response_cookies,
)

__all__ = [
    "CookieMiddleware",
    "get_request_cookies",
    "get_response_cookies",
]
