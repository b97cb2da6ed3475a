"""Demo FastAPI application.

Creates the app, configures the cookie parser and CSRF middleware from
settings, and wires up routers.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from xsrf_guard.api.csrf import router as csrf_router
from xsrf_guard.api.health import router as health_router
from xsrf_guard.config import settings
from xsrf_guard.middleware.cookies import CookieParserMiddleware
from xsrf_guard.middleware.csrf import CSRFMiddleware

logger = logging.getLogger(__name__)


def _validate_cookie_secret() -> None:
    """Warn at startup when signed cookies are configured without a secret.

    Every request would then be rejected as misconfigured.
    """
    if settings.CSRF_COOKIE_SIGNED and not settings.cookie_secret:
        logger.warning(
            "CSRF_COOKIE_SIGNED is enabled but COOKIE_SECRET is empty; "
            "all requests will fail with a misconfiguration error"
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown lifecycle."""
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    _validate_cookie_secret()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Middleware (order matters: outermost middleware runs first, so the cookie
# parser is added last)
# ---------------------------------------------------------------------------
app.add_middleware(CSRFMiddleware, options=settings.csrf_options)
app.add_middleware(CookieParserMiddleware, secret=settings.cookie_secret)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(health_router)
app.include_router(csrf_router, prefix="/api", tags=["csrf"])
