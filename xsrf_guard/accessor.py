"""Locate the visitor secret in the request's cookie stores."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from xsrf_guard.config import CsrfOptions
from xsrf_guard.errors import MisconfiguredError

if TYPE_CHECKING:
    from xsrf_guard.guard import RequestContext


def select_store(ctx: RequestContext, options: CsrfOptions) -> Mapping[str, str] | None:
    """Return the signed cookie store when signing is configured, else the plain one."""
    if options.cookie_options.signed:
        return ctx.signed_cookies
    return ctx.cookies


def validate(ctx: RequestContext, options: CsrfOptions) -> None:
    """Check that the cookie infrastructure the options require is present.

    Raises:
        MisconfiguredError: If the selected store is unavailable, or signed
            cookies are configured without a process signing secret.
    """
    if select_store(ctx, options) is None:
        raise MisconfiguredError()
    if options.cookie_options.signed and not ctx.process_secret:
        raise MisconfiguredError()


def locate(ctx: RequestContext, options: CsrfOptions) -> str | None:
    """Return the visitor secret, or None on a first visit."""
    store = select_store(ctx, options)
    if store is None:
        return None
    return store.get(options.cookie_options.name) or None
