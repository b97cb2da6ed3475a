"""
CSRF protection middleware.

Implements the double-submit cookie pattern:
- Every request gets a visitor secret, read from the secret cookie or minted
  and set on the response when absent.
- Handlers can call request.state.csrf_token() to get a token derived from
  that secret, to embed in forms or hand to JavaScript.
- Requests whose method is not exempt must carry a valid token in the
  configured header (X-XSRF-TOKEN by default). Returns 403 otherwise.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from xsrf_guard.config import CsrfOptions
from xsrf_guard.errors import CsrfError, CsrfErrorKind, InvalidTokenError, MisconfiguredError
from xsrf_guard.guard import CsrfGuard, RequestContext
from xsrf_guard.services.signer import CookieSigner
from xsrf_guard.services.tokens import Tokens

logger = logging.getLogger(__name__)

_STATUS_MAP: dict[CsrfErrorKind, int] = {
    CsrfErrorKind.MISCONFIGURED: 500,
    CsrfErrorKind.INVALID_TOKEN: 403,
}

_DETAIL_MAP: dict[CsrfErrorKind, str] = {
    CsrfErrorKind.MISCONFIGURED: "Internal server error",
    CsrfErrorKind.INVALID_TOKEN: "CSRF validation failed",
}


def error_response(exc: CsrfError) -> JSONResponse:
    """Render a guard error without revealing why it was raised."""
    return JSONResponse(
        status_code=_STATUS_MAP[exc.kind],
        content={"detail": _DETAIL_MAP[exc.kind]},
    )


class CSRFMiddleware(BaseHTTPMiddleware):
    """Double submit cookie CSRF protection for every route."""

    def __init__(
        self,
        app: ASGIApp,
        options: CsrfOptions | Mapping[str, Any] | None = None,
        tokens: Tokens | None = None,
        signer: CookieSigner | None = None,
    ):
        super().__init__(app)
        self.guard = CsrfGuard(options, tokens=tokens, signer=signer)

    @property
    def options(self) -> CsrfOptions:
        return self.guard.options

    async def dispatch(self, request: Request, call_next) -> Response:
        ctx = RequestContext.from_request(request)

        try:
            self.guard.prepare(ctx)
        except MisconfiguredError as exc:
            logger.error(
                "CSRF guard misconfigured: cookie store or signing secret missing "
                "(signed=%s)",
                self.options.cookie_options.signed,
            )
            return error_response(exc)

        # Make the lazy token accessor available to handlers
        request.state.csrf_token = ctx.csrf_token

        try:
            self.guard.check(ctx)
        except InvalidTokenError as exc:
            logger.warning("CSRF validation failed: %s %s", request.method, request.url.path)
            response = error_response(exc)
        else:
            response = await call_next(request)

        if ctx.issued_cookie is not None:
            cookie_options = self.options.cookie_options
            response.set_cookie(
                key=cookie_options.name,
                value=ctx.issued_cookie,
                **cookie_options.set_cookie_kwargs(),
            )

        return response
