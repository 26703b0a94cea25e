"""CookieSet: the cookies of one request/response cycle.

A name-keyed collection of ``Cookie`` records. The request reader fills a
read-only set from the ``Cookie`` header; handlers stage outgoing cookies
on a mutable set that the response writer renders into ``Set-Cookie``
headers when the response starts.

Not thread-safe. Each request owns its own instances.
"""

from collections.abc import Iterator, Mapping
from dataclasses import replace

from crumb.errors import ReadOnlyError
from crumb.http.cookies import TOMBSTONE_EXPIRE, Cookie


class CookieSet:
    """Ordered, name-keyed cookie collection.

    At most one cookie per name; iteration follows insertion order.
    ``read_only`` is fixed at construction. Every mutating method on a
    read-only set raises ``ReadOnlyError`` and leaves the set unchanged.

    Usage::

        cookies = CookieSet()
        cookies.add(Cookie("sid", "abc"))
        cookies.has("sid")            # True
        cookies.mark_for_deletion("sid")
        cookies.has("sid")            # False, tombstone until the response
        cookies.get("sid").value      # ""

    Item access mirrors the named methods: ``cookies["sid"]`` is ``get``,
    ``cookies["sid"] = c`` is ``add``, ``del cookies["sid"]`` is ``remove``
    and ``"sid" in cookies`` is ``has``.
    """

    __slots__ = ("_cookies", "_read_only")

    def __init__(
        self,
        cookies: Mapping[str, Cookie] | None = None,
        *,
        read_only: bool = False,
    ) -> None:
        self._cookies: dict[str, Cookie] = dict(cookies) if cookies else {}
        self._read_only = read_only

    @property
    def read_only(self) -> bool:
        """Whether this set rejects mutation."""
        return self._read_only

    def _check_writable(self) -> None:
        if self._read_only:
            raise ReadOnlyError

    # -- Lookup --

    def size(self) -> int:
        """Number of entries, tombstones included."""
        return len(self._cookies)

    def get(self, name: str) -> Cookie | None:
        """Return the cookie named *name*, or ``None``."""
        return self._cookies.get(name)

    def get_value(self, name: str, default: str | None = None) -> str | None:
        """Return the value of the cookie named *name*, or *default*."""
        cookie = self._cookies.get(name)
        return cookie.value if cookie is not None else default

    def has(self, name: str, *, now: float | None = None) -> bool:
        """True if *name* is present and neither empty nor expired.

        Cookies marked for deletion keep their record until the response
        is written, but are not reported here.
        """
        cookie = self._cookies.get(name)
        return cookie is not None and cookie.is_alive(now)

    # -- Mutation --

    def add(self, cookie: Cookie) -> None:
        """Add *cookie*, replacing any cookie with the same name."""
        self._check_writable()
        self._cookies[cookie.name] = cookie

    def mark_for_deletion(self, cookie: Cookie | str) -> Cookie:
        """Replace the entry with a tombstone so the browser deletes it.

        Domain, path and flags are taken from *cookie* when a ``Cookie``
        is given, otherwise from the entry already held under that name.
        Returns the tombstone.
        """
        self._check_writable()
        if isinstance(cookie, str):
            base = self._cookies.get(cookie) or Cookie(name=cookie)
        else:
            base = cookie
        tombstone = replace(base, value="", expire=TOMBSTONE_EXPIRE)
        self._cookies[tombstone.name] = tombstone
        return tombstone

    def discard(self, cookie: Cookie | str) -> None:
        """Drop the entry without telling the browser. Missing names are ignored."""
        self._check_writable()
        name = cookie if isinstance(cookie, str) else cookie.name
        self._cookies.pop(name, None)

    def remove(self, cookie: Cookie | str, remove_from_browser: bool = True) -> None:
        """Remove a cookie.

        With *remove_from_browser* (the default) this is
        ``mark_for_deletion``; otherwise it is ``discard``.
        """
        if remove_from_browser:
            self.mark_for_deletion(cookie)
        else:
            self.discard(cookie)

    def remove_all(self) -> None:
        """Drop every entry. No tombstones are produced."""
        self._check_writable()
        self._cookies.clear()

    # -- Bulk --

    def to_dict(self) -> dict[str, Cookie]:
        """Snapshot of the entries, keyed by name."""
        return dict(self._cookies)

    def replace_all(self, cookies: Mapping[str, Cookie]) -> None:
        """Replace every entry with *cookies*.

        Bypasses the read-only check: the request reader populates
        read-only sets through here before handing them out.
        """
        self._cookies = dict(cookies)

    def names(self) -> list[str]:
        """Cookie names in insertion order."""
        return list(self._cookies)

    def values(self) -> list[Cookie]:
        """Cookies in insertion order."""
        return list(self._cookies.values())

    def items(self) -> Iterator[tuple[str, Cookie]]:
        """Iterate ``(name, cookie)`` pairs. Same as ``iter(self)``."""
        return iter(self)

    # -- Protocols --

    def __iter__(self) -> Iterator[tuple[str, Cookie]]:
        # Snapshot so handlers can mutate the set while walking it
        yield from tuple(self._cookies.items())

    def __len__(self) -> int:
        return len(self._cookies)

    def __bool__(self) -> bool:
        return bool(self._cookies)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __getitem__(self, name: str) -> Cookie | None:
        return self.get(name)

    def __setitem__(self, name: str, cookie: Cookie) -> None:
        self.add(cookie)

    def __delitem__(self, name: str) -> None:
        self.remove(name)

    def __repr__(self) -> str:
        flag = ", read_only=True" if self._read_only else ""
        return f"CookieSet({self._cookies!r}{flag})"
