"""Double submit cookie CSRF protection for Starlette and FastAPI."""

from xsrf_guard.config import CookieOptions, CsrfOptions, TokenOptions, resolve_options
from xsrf_guard.dependencies import get_csrf_token
from xsrf_guard.errors import CsrfError, CsrfErrorKind, InvalidTokenError, MisconfiguredError
from xsrf_guard.guard import CsrfGuard, RequestContext
from xsrf_guard.middleware.cookies import CookieParserMiddleware
from xsrf_guard.middleware.csrf import CSRFMiddleware
from xsrf_guard.services.signer import CookieSigner
from xsrf_guard.services.tokens import Tokens

__all__ = [
    "CSRFMiddleware",
    "CookieParserMiddleware",
    "CsrfGuard",
    "RequestContext",
    "Tokens",
    "CookieSigner",
    "CsrfOptions",
    "CookieOptions",
    "TokenOptions",
    "resolve_options",
    "get_csrf_token",
    "CsrfError",
    "CsrfErrorKind",
    "MisconfiguredError",
    "InvalidTokenError",
]
