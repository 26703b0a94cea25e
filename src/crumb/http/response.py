"""Response writer — a CookieSet as ``Set-Cookie`` headers.

Consumes the response set once, when the response starts. Every entry
the policy lets through becomes one ``Set-Cookie`` header; tombstones
are emitted too so the browser purges them.
"""

from collections.abc import Callable
from dataclasses import replace

from crumb.config import CookieConfig
from crumb.http.cookie_set import CookieSet
from crumb.http.cookies import Cookie
from crumb.http.signing import CookieSigner


def set_cookie_headers(
    cookies: CookieSet,
    config: CookieConfig | None = None,
    *,
    policy: Callable[[Cookie], bool] | None = None,
    signer: CookieSigner | None = None,
    now: float | None = None,
) -> list[tuple[str, str]]:
    """Render *cookies* as ``("set-cookie", value)`` header pairs.

    *policy* overrides ``config.policy``; cookies it rejects are skipped.
    With ``config.enable_validation`` set, values are signed. Tombstones
    stay unsigned.
    """
    config = config or CookieConfig()
    policy = policy or config.policy
    if not config.enable_validation:
        signer = None
    elif signer is None:
        signer = CookieSigner(config.validation_key)

    headers: list[tuple[str, str]] = []
    for _, cookie in cookies:
        if policy is not None and not policy(cookie):
            continue
        if signer is not None and not cookie.is_tombstone(now):
            cookie = replace(cookie, value=signer.sign(cookie.name, cookie.value))
        headers.append(("set-cookie", cookie.to_header_value(now)))
    return headers


def raw_set_cookie_headers(
    cookies: CookieSet,
    config: CookieConfig | None = None,
    *,
    policy: Callable[[Cookie], bool] | None = None,
    signer: CookieSigner | None = None,
    now: float | None = None,
) -> list[tuple[bytes, bytes]]:
    """Same as ``set_cookie_headers``, latin-1 encoded for ASGI."""
    return [
        (name.encode("latin-1"), value.encode("latin-1"))
        for name, value in set_cookie_headers(
            cookies, config, policy=policy, signer=signer, now=now
        )
    ]
