"""Request reader — the ``Cookie`` header as a read-only CookieSet.

Cookies arriving from the client are received data: the set handed to
application code is read-only. Stage outgoing cookies on the response set.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from crumb.config import CookieConfig
from crumb.http.cookie_set import CookieSet
from crumb.http.cookies import Cookie, parse_cookies
from crumb.http.signing import CookieSigner

logger = logging.getLogger("crumb.http")


def _cookie_header(raw: Iterable[tuple[bytes, bytes]]) -> str:
    """Join every ``Cookie`` header in ASGI byte pairs.

    Browsers send one, but HTTP/2 proxies may split it into several.
    """
    return "; ".join(
        value.decode("latin-1") for name, value in raw if name.lower() == b"cookie"
    )


def _verify(values: dict[str, str], signer: CookieSigner) -> dict[str, str]:
    """Keep only the values whose signature checks out, unsigned."""
    verified: dict[str, str] = {}
    for name, signed in values.items():
        value = signer.unsign(name, signed)
        if value is None:
            logger.debug("Dropping cookie %r: invalid signature", name)
            continue
        verified[name] = value
    return verified


def _build(header: str, config: CookieConfig | None, signer: CookieSigner | None) -> CookieSet:
    config = config or CookieConfig()
    values = parse_cookies(header)
    if config.enable_validation:
        values = _verify(values, signer or CookieSigner(config.validation_key))

    cookies = CookieSet(read_only=True)
    cookies.replace_all({name: Cookie(name=name, value=value) for name, value in values.items()})
    return cookies


def read_cookies(
    headers: Mapping[str, str],
    config: CookieConfig | None = None,
    *,
    signer: CookieSigner | None = None,
) -> CookieSet:
    """Build the read-only request CookieSet from request headers.

    *headers* is any string mapping; the ``Cookie`` key is matched
    case-insensitively. With ``config.enable_validation`` set, values are
    verified against ``config.validation_key`` and cookies with a missing
    or bad signature are left out. Pass *signer* to reuse one across
    requests.
    """
    header = "; ".join(value for name, value in headers.items() if name.lower() == "cookie")
    return _build(header, config, signer)


def read_cookies_from_scope(
    scope: Mapping[str, Any],
    config: CookieConfig | None = None,
    *,
    signer: CookieSigner | None = None,
) -> CookieSet:
    """Build the read-only request CookieSet from an ASGI HTTP scope."""
    return _build(_cookie_header(scope.get("headers", ())), config, signer)
