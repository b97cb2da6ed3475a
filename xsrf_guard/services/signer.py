"""Cookie value signing.

Signed cookie values are stored as ``s:<value>.<signature>``; the ``s:``
marker lets the reading side tell them apart from plain values.
"""

from __future__ import annotations

import hashlib

from itsdangerous import BadSignature, Signer

SIGNED_PREFIX = "s:"


class CookieSigner:
    """HMAC-SHA256 signer for cookie values, keyed by a process secret."""

    def __init__(self, salt: str = "xsrf_guard.cookie"):
        self.salt = salt

    def _signer(self, secret: str) -> Signer:
        return Signer(secret, salt=self.salt, digest_method=hashlib.sha256)

    def sign(self, value: str, secret: str) -> str:
        """Return *value* with its signature appended."""
        return self._signer(secret).sign(value).decode("utf-8")

    def unsign(self, signed: str, secret: str) -> str | None:
        """Return the original value, or None if the signature does not match."""
        try:
            return self._signer(secret).unsign(signed).decode("utf-8")
        except BadSignature:
            return None

    def sign_cookie(self, value: str, secret: str) -> str:
        """Return the stored form of a signed cookie value (``s:`` prefixed)."""
        return SIGNED_PREFIX + self.sign(value, secret)

    def unsign_cookie(self, raw: str, secret: str) -> str | None:
        """Inverse of :meth:`sign_cookie`; None when unprefixed or tampered with."""
        if not raw.startswith(SIGNED_PREFIX):
            return None
        return self.unsign(raw[len(SIGNED_PREFIX) :], secret)
