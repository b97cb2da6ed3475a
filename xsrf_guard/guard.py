"""Double submit cookie guard, independent of any web framework.

A request goes through the guard in two steps:

1. :meth:`CsrfGuard.prepare` validates the cookie configuration against the
   request, resolves the visitor secret (minting one when absent) and binds
   the lazy token accessor to the request context.
2. :meth:`CsrfGuard.check` lets safe methods through and verifies the token
   header on everything else.

The middleware in ``xsrf_guard.middleware.csrf`` runs both steps and turns
the outcome into an HTTP response.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from starlette.datastructures import Headers
from starlette.requests import Request

from xsrf_guard import accessor
from xsrf_guard.config import CsrfOptions, resolve_options
from xsrf_guard.errors import InvalidTokenError, MisconfiguredError
from xsrf_guard.services.signer import CookieSigner
from xsrf_guard.services.tokens import Tokens

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    """Per-request guard state.

    ``secret`` is a mutable slot: the token accessor reads it when first
    called, so a token produced after a secret is issued matches the cookie
    sent back with the response.
    """

    method: str
    headers: Mapping[str, str]
    cookies: Mapping[str, str] | None
    signed_cookies: Mapping[str, str] | None = None
    process_secret: str | None = None
    secret: str | None = None
    issued_cookie: str | None = None
    _tokens: Tokens | None = field(default=None, repr=False)
    _token: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.headers, Headers):
            self.headers = Headers(headers=dict(self.headers))

    @classmethod
    def from_request(cls, request: Request) -> RequestContext:
        """Build a context from a Starlette request.

        The signed store and process secret are published on ``request.state``
        by ``CookieParserMiddleware``; they stay None when it is not installed.
        """
        return cls(
            method=request.method,
            headers=request.headers,
            cookies=request.cookies,
            signed_cookies=getattr(request.state, "signed_cookies", None),
            process_secret=getattr(request.state, "secret", None),
        )

    def bind(self, tokens: Tokens) -> None:
        self._tokens = tokens
        self._token = None

    def csrf_token(self) -> str:
        """Return the token for the current secret, created once per request."""
        if self._tokens is None:
            raise MisconfiguredError()
        if self._token is None:
            self._token = self._tokens.create(self.secret)
        return self._token


class CsrfGuard:
    """Resolve secrets and verify tokens according to one ``CsrfOptions``."""

    def __init__(
        self,
        options: CsrfOptions | Mapping[str, Any] | None = None,
        tokens: Tokens | None = None,
        signer: CookieSigner | None = None,
    ):
        self.options = resolve_options(options)
        self.tokens = tokens or Tokens(self.options.token_options)
        self.signer = signer or CookieSigner()

    def prepare(self, ctx: RequestContext) -> RequestContext:
        """Validate, resolve the secret and attach the token accessor.

        Raises:
            MisconfiguredError: If the required cookie store or signing
                secret is missing.
        """
        accessor.validate(ctx, self.options)

        ctx.secret = accessor.locate(ctx, self.options)
        ctx.bind(self.tokens)

        if ctx.secret is None:
            ctx.secret = self.tokens.secret_sync()
            ctx.issued_cookie = self._cookie_value(ctx.secret, ctx.process_secret)
            logger.debug("Issued new csrf secret cookie %s", self.options.cookie_options.name)

        return ctx

    def check(self, ctx: RequestContext) -> None:
        """Verify the token header unless the method is exempt.

        Raises:
            InvalidTokenError: If the token is missing or does not verify.
        """
        if ctx.method.upper() in self.options.ignore_methods:
            return

        candidate = ctx.headers.get(self.options.header_name)
        if not self.tokens.verify(ctx.secret, candidate):
            raise InvalidTokenError()

    def protect(self, ctx: RequestContext) -> RequestContext:
        """Run :meth:`prepare` then :meth:`check`."""
        self.prepare(ctx)
        self.check(ctx)
        return ctx

    def _cookie_value(self, secret: str, process_secret: str | None) -> str:
        if self.options.cookie_options.signed:
            return self.signer.sign_cookie(secret, process_secret)
        return secret
