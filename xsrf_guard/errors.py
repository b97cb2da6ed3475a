"""Typed exception hierarchy for CSRF guard failures."""

from __future__ import annotations

from enum import Enum


class CsrfErrorKind(str, Enum):
    """What went wrong while guarding a request."""

    MISCONFIGURED = "misconfigured"
    INVALID_TOKEN = "invalid_token"


class CsrfError(Exception):
    """Base exception for all CSRF guard errors."""

    kind: CsrfErrorKind
    default_message = "CSRF check failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class MisconfiguredError(CsrfError):
    """The cookie infrastructure the configuration requires is missing.

    Raised when the selected cookie store is not available on the request, or
    when signed cookies are configured but no process signing secret is.
    """

    kind = CsrfErrorKind.MISCONFIGURED
    default_message = "Misconfigured csrf"


class InvalidTokenError(CsrfError):
    """The presented token is missing or does not verify against the secret."""

    kind = CsrfErrorKind.INVALID_TOKEN
    default_message = "Invalid csrf token"
