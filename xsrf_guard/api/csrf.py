"""Demo routes: hand out a CSRF token and accept a guarded write."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from xsrf_guard.dependencies import get_csrf_token

router = APIRouter()


@router.get("/csrf-token")
async def csrf_token(token: str = Depends(get_csrf_token)):
    """Return a token for the visitor's secret.

    Clients echo it back in the X-XSRF-TOKEN header on state-changing requests.
    """
    return {"token": token}


@router.post("/echo")
async def echo(payload: dict[str, Any] | None = Body(None)):
    """Echo the JSON body. Only reachable with a valid CSRF token."""
    return {"received": payload or {}}
