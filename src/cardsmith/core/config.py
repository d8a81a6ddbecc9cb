"""Configuration models used by the export pipeline.

RenderServiceConfig

`base_url` (`str | None`)
: Base address of the external rendering service. Documents are submitted
  to `<base_url>/render`. Exports fail before any network activity when the
  value is missing.

`timeout` (`float`)
: Seconds to wait for the rendering service to accept the request and for
  each chunk of the response body.

`math_stylesheet` (`str | None`)
: Stylesheet linked in every exported document for the math typesetting
  engine. Set to an empty string to omit the link. Read from
  `CARDSMITH_MATH_STYLESHEET`; unset keeps the default CDN stylesheet.
"""

from __future__ import annotations

from collections.abc import Mapping
import os

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError


RENDER_URL_ENV = "CARDSMITH_RENDER_URL"
RENDER_TIMEOUT_ENV = "CARDSMITH_RENDER_TIMEOUT"
MATH_STYLESHEET_ENV = "CARDSMITH_MATH_STYLESHEET"
DEFAULT_TIMEOUT = 60.0


class RenderServiceConfig(BaseModel):
    """Settings for the external document rendering service."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str | None = None
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    math_stylesheet: str | None = None

    @field_validator("base_url", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RenderServiceConfig:
        """Build a configuration from the ``CARDSMITH_*`` environment variables."""
        env = os.environ if environ is None else environ
        data: dict[str, object] = {"base_url": env.get(RENDER_URL_ENV)}
        timeout = env.get(RENDER_TIMEOUT_ENV)
        if timeout:
            data["timeout"] = timeout
        stylesheet = env.get(MATH_STYLESHEET_ENV)
        if stylesheet is not None:
            data["math_stylesheet"] = stylesheet.strip()
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid rendering service settings in the environment: {exc}"
            ) from exc

    def require_base_url(self) -> str:
        """Return the service base address or raise when it is not configured."""
        if not self.base_url:
            raise ConfigurationError(
                f"Rendering service address is not configured; set {RENDER_URL_ENV} "
                "or pass --render-url."
            )
        return self.base_url.rstrip("/")

    def render_endpoint(self) -> str:
        return f"{self.require_base_url()}/render"


__all__ = [
    "DEFAULT_TIMEOUT",
    "MATH_STYLESHEET_ENV",
    "RENDER_TIMEOUT_ENV",
    "RENDER_URL_ENV",
    "RenderServiceConfig",
]
