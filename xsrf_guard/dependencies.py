from __future__ import annotations

from fastapi import Request

from xsrf_guard.errors import MisconfiguredError


def get_csrf_token(request: Request) -> str:
    """FastAPI dependency: return the CSRF token for the current request.

    Raises:
        MisconfiguredError: If CSRFMiddleware is not installed.
    """
    accessor = getattr(request.state, "csrf_token", None)
    if accessor is None:
        raise MisconfiguredError()
    return accessor()
