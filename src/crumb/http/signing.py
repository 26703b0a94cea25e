"""Cookie value validation — signed values with ``itsdangerous``.

A signed value is ``<value>.<signature>``. The signer is salted with the
cookie name, so a value signed for one cookie does not verify under
another name.
"""

from itsdangerous import BadSignature, Signer

from crumb.errors import ConfigurationError

_SALT_PREFIX = "crumb.cookie."


class CookieSigner:
    """Signs and verifies cookie values with a shared secret.

    Usage::

        signer = CookieSigner("my-secret-key")
        signed = signer.sign("sid", "abc")
        signer.unsign("sid", signed)      # "abc"
        signer.unsign("other", signed)    # None
    """

    __slots__ = ("_secret_key",)

    def __init__(self, secret_key: str) -> None:
        if not secret_key:
            msg = "CookieConfig.validation_key must not be empty when validation is enabled."
            raise ConfigurationError(msg)
        self._secret_key = secret_key

    def _signer(self, name: str) -> Signer:
        # Not cached: names are client input
        return Signer(self._secret_key, salt=_SALT_PREFIX + name)

    def sign(self, name: str, value: str) -> str:
        """Return *value* with a signature bound to *name* appended."""
        return self._signer(name).sign(value).decode("utf-8")

    def unsign(self, name: str, signed: str) -> str | None:
        """Return the original value, or ``None`` if the signature is bad."""
        try:
            return self._signer(name).unsign(signed).decode("utf-8")
        except BadSignature:
            return None
