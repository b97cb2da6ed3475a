"""Token service for CSRF secrets and tokens.

Secrets are URL-safe random strings stored client-side in a cookie.
Tokens are ``<salt>-<hash>`` where the hash is the URL-safe base64 SHA-1 of
``<salt>-<secret>``, so any number of distinct tokens verify against the
same secret.
"""

from __future__ import annotations

import base64
import hashlib
import secrets
import string

from xsrf_guard.config import TokenOptions

_SALT_ALPHABET = string.ascii_letters + string.digits


def _hash(value: str) -> str:
    """Return the URL-safe, unpadded base64 SHA-1 digest of *value*."""
    digest = hashlib.sha1(value.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def _tokenize(secret: str, salt: str) -> str:
    return f"{salt}-{_hash(f'{salt}-{secret}')}"


class Tokens:
    """Create and verify tokens against a visitor secret.

    Holds only immutable options; safe to share across concurrent requests.
    """

    def __init__(self, options: TokenOptions | None = None):
        self.options = options or TokenOptions()

    def secret_sync(self) -> str:
        """Mint a new secret of ``secret_length`` random bytes."""
        return secrets.token_urlsafe(self.options.secret_length)

    async def secret(self) -> str:
        """Async variant of :meth:`secret_sync`."""
        return self.secret_sync()

    def create(self, secret: str) -> str:
        """Create a new token for *secret*.

        Raises:
            TypeError: If *secret* is missing or not a string.
        """
        if not secret or not isinstance(secret, str):
            raise TypeError("argument secret is required")

        salt = "".join(secrets.choice(_SALT_ALPHABET) for _ in range(self.options.salt_length))
        return _tokenize(secret, salt)

    def verify(self, secret: str | None, token: str | None) -> bool:
        """Return True if *token* was created from *secret*.

        Never raises; anything missing or malformed simply fails to verify.
        """
        if not secret or not isinstance(secret, str):
            return False
        if not token or not isinstance(token, str):
            return False

        index = token.find("-")
        if index == -1:
            return False

        expected = _tokenize(secret, token[:index])
        # Constant-time comparison
        return secrets.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))
