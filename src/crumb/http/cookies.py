"""Cookie parsing, the Cookie record, and Set-Cookie serialization.

Consolidates the read side (parse_cookies, used by the request reader)
and the write side (Cookie.to_header_value, used by the response writer)
in one module.
"""

from dataclasses import dataclass
from email.utils import formatdate
from math import ceil
from time import time
from urllib.parse import quote, unquote

TOMBSTONE_EXPIRE = 1.0
"""Expiry stamped on deletion tombstones: one second past the epoch."""

# RFC 6265 cookie-octets left as-is when encoding; "%" is always escaped
_COOKIE_SAFE = "!#$&'()*+/:<=>?@[]^`{|}"


def encode_cookie_value(value: str) -> str:
    """Percent-encode *value* so it fits the ``Set-Cookie`` value syntax."""
    return quote(value, safe=_COOKIE_SAFE)


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Values are percent-decoded. Returns an empty dict for empty or
    missing headers.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        pair = pair.strip()
        if "=" in pair:
            key, _, value = pair.partition("=")
            key = key.strip()
            if not key:
                continue
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] == '"':
                value = value[1:-1]
            cookies[key] = unquote(value)
    return cookies


@dataclass(frozen=True, slots=True)
class Cookie:
    """A single HTTP cookie.

    ``expire`` is a unix timestamp; ``None`` makes a session cookie.
    A cookie with an empty value and a past expiry is a tombstone: sent
    to the browser, it deletes the cookie of the same name.
    """

    name: str
    value: str = ""
    expire: float | None = None
    domain: str | None = None
    path: str = "/"
    secure: bool = False
    httponly: bool = True
    samesite: str | None = "lax"

    def is_expired(self, now: float | None = None) -> bool:
        """True if ``expire`` is set and lies before *now*."""
        if self.expire is None:
            return False
        return self.expire < (time() if now is None else now)

    def is_tombstone(self, now: float | None = None) -> bool:
        """True if this cookie instructs the browser to delete it."""
        return self.value == "" and self.is_expired(now)

    def is_alive(self, now: float | None = None) -> bool:
        """True if the cookie carries a value and has not expired."""
        return self.value != "" and not self.is_expired(now)

    def max_age(self, now: float | None = None) -> int | None:
        """Seconds until expiry, rounded up; 0 once expired. ``None`` for session cookies."""
        if self.expire is None:
            return None
        remaining = self.expire - (time() if now is None else now)
        return ceil(remaining) if remaining > 0 else 0

    def to_header_value(self, now: float | None = None) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        parts = [f"{self.name}={encode_cookie_value(self.value)}"]
        if self.expire is not None:
            parts.append(f"Expires={formatdate(self.expire, usegmt=True)}")
            parts.append(f"Max-Age={self.max_age(now)}")
        if self.path:
            parts.append(f"Path={self.path}")
        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.secure:
            parts.append("Secure")
        if self.httponly:
            parts.append("HttpOnly")
        if self.samesite:
            parts.append(f"SameSite={self.samesite}")
        return "; ".join(parts)
