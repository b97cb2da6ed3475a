"""
Cookie parsing middleware.

Publishes the process signing secret and the signed cookie store on
request.state for downstream middleware:
- request.state.secret: the configured secret, or None.
- request.state.signed_cookies: cookies stored as s:<value>.<signature>
  whose signature verifies, mapped to <value>. Only set when a secret is
  configured; tampered cookies are left out.

Plain cookies stay on request.cookies as parsed by Starlette.
"""

from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from xsrf_guard.services.signer import SIGNED_PREFIX, CookieSigner

logger = logging.getLogger(__name__)


def parse_signed_cookies(
    cookies: dict[str, str], secret: str, signer: CookieSigner
) -> dict[str, str]:
    """Return the verified, unsigned values of all signed cookies."""
    signed: dict[str, str] = {}
    for name, raw in cookies.items():
        if not raw.startswith(SIGNED_PREFIX):
            continue
        value = signer.unsign_cookie(raw, secret)
        if value is None:
            logger.debug("Dropping signed cookie %s with a bad signature", name)
            continue
        signed[name] = value
    return signed


class CookieParserMiddleware(BaseHTTPMiddleware):
    """Expose the signing secret and signed cookies to the rest of the pipeline."""

    def __init__(self, app: ASGIApp, secret: str | None = None, signer: CookieSigner | None = None):
        super().__init__(app)
        self.secret = secret or None
        self.signer = signer or CookieSigner()

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.secret = self.secret

        if self.secret:
            request.state.signed_cookies = parse_signed_cookies(
                request.cookies, self.secret, self.signer
            )

        return await call_next(request)
