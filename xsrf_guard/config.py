"""Configuration: guard options and demo application settings.

``CsrfOptions`` is the immutable configuration a guard middleware instance
is built with.  ``Settings`` is loaded from environment variables and only
drives the bundled demo application in ``xsrf_guard.main``.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings

DEFAULT_HEADER_NAME = "X-XSRF-TOKEN"
DEFAULT_COOKIE_NAME = "XSRF-TOKEN"
DEFAULT_IGNORE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})

_OPTION_CONFIG = ConfigDict(
    frozen=True,
    extra="forbid",
    alias_generator=to_camel,
    populate_by_name=True,
)


class CookieOptions(BaseModel):
    """Name of the secret cookie and the attributes it is written with.

    Everything except ``name`` and ``signed`` is handed to
    ``Response.set_cookie`` unchanged.

    ``max_age`` (alias ``maxAge``) is in seconds, not the milliseconds
    Express uses for its ``maxAge`` cookie option.
    """

    model_config = _OPTION_CONFIG

    name: str = Field(DEFAULT_COOKIE_NAME, min_length=1)
    signed: bool = False
    path: str = "/"
    domain: str | None = None
    max_age: int | None = None
    expires: datetime | int | None = None
    secure: bool = False
    httponly: bool = Field(False, validation_alias=AliasChoices("httponly", "httpOnly"))
    samesite: Literal["lax", "strict", "none"] | None = Field(
        "lax", validation_alias=AliasChoices("samesite", "sameSite")
    )

    def set_cookie_kwargs(self) -> dict[str, Any]:
        """Transport attributes in the shape ``Response.set_cookie`` expects."""
        return self.model_dump(exclude={"name", "signed"})


class TokenOptions(BaseModel):
    """Parameters forwarded to the token service."""

    model_config = _OPTION_CONFIG

    salt_length: int = Field(8, ge=1)
    secret_length: int = Field(18, ge=1)


class CsrfOptions(BaseModel):
    """Effective guard configuration.

    Keys may be given in snake_case or camelCase.  Nested groups are
    validated against their own defaults, so a partial ``cookieOptions``
    keeps every attribute it does not mention.
    """

    model_config = _OPTION_CONFIG

    header_name: str = Field(DEFAULT_HEADER_NAME, min_length=1)
    ignore_methods: frozenset[str] = DEFAULT_IGNORE_METHODS
    cookie_options: CookieOptions = Field(default_factory=CookieOptions)
    token_options: TokenOptions = Field(
        default_factory=TokenOptions,
        validation_alias=AliasChoices("token_options", "tokenOptions", "csrfOptions"),
    )

    @field_validator("ignore_methods", mode="before")
    @classmethod
    def _normalize_methods(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple, set, frozenset)):
            return frozenset(str(method).upper() for method in value)
        return value


_NESTED_GROUPS = ("cookie_options", "token_options")


def _explicit_fields(value: CsrfOptions | Mapping[str, Any] | None) -> dict[str, Any]:
    """Return only the explicitly set options, keyed by field name."""
    if not isinstance(value, CsrfOptions):
        value = CsrfOptions.model_validate(dict(value or {}))
    return value.model_dump(exclude_unset=True)


def resolve_options(
    overrides: CsrfOptions | Mapping[str, Any] | None = None, **kwargs: Any
) -> CsrfOptions:
    """Build a fresh ``CsrfOptions`` from caller overrides over the defaults.

    Raises:
        pydantic.ValidationError: On unknown keys or badly typed values.
    """
    if isinstance(overrides, CsrfOptions) and not kwargs:
        return overrides

    data = _explicit_fields(overrides)
    for key, value in _explicit_fields(kwargs).items():
        if key in _NESTED_GROUPS and key in data:
            data[key] = {**data[key], **value}
        else:
            data[key] = value
    return CsrfOptions.model_validate(data)


class Settings(BaseSettings):
    """Demo application configuration.

    All values can be overridden via environment variables or a .env file.
    """

    APP_NAME: str = "XSRF Guard Demo"
    DEBUG: bool = False

    # Process-level secret used to sign cookies; empty disables signed cookies
    COOKIE_SECRET: str = ""

    # CSRF guard
    CSRF_HEADER_NAME: str = DEFAULT_HEADER_NAME
    CSRF_COOKIE_NAME: str = DEFAULT_COOKIE_NAME
    CSRF_COOKIE_SIGNED: bool = False
    CSRF_COOKIE_SECURE: bool = False
    CSRF_IGNORE_METHODS: str = "GET,HEAD,OPTIONS"

    @property
    def cookie_secret(self) -> str | None:
        return self.COOKIE_SECRET or None

    @property
    def ignore_methods_list(self) -> list[str]:
        """Parse CSRF_IGNORE_METHODS comma-separated string into a list."""
        return [m.strip() for m in self.CSRF_IGNORE_METHODS.split(",") if m.strip()]

    @property
    def csrf_options(self) -> CsrfOptions:
        return resolve_options(
            header_name=self.CSRF_HEADER_NAME,
            ignore_methods=self.ignore_methods_list,
            cookie_options={
                "name": self.CSRF_COOKIE_NAME,
                "signed": self.CSRF_COOKIE_SIGNED,
                "secure": self.CSRF_COOKIE_SECURE,
            },
        )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


settings = Settings()
