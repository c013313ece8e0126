"""Pydantic models for auth configuration.

## Security-relevant configuration fields

- Provider **issuer**: every endpoint the client talks to is discovered from it.
- Provider **args**: forwarded verbatim to the authorization request (except the
  claim-mapping keys), so they affect what the user is asked to consent to.
- Server **base_url**: determines the ``redirect_uri`` registered with the IdP.

Treat changes to these fields as security-sensitive.
"""

from typing import Any, Literal

from pydantic import ConfigDict, Field, field_validator

from oidcrp.models import OidcrpBaseModel


class HttpTransportConfigModel(OidcrpBaseModel):
    """Public address of this application, used to build absolute links."""

    # Override frozen=True since this is a config object that may need updates
    model_config = ConfigDict(extra="forbid", frozen=False)

    base_url: str | None = None
    scheme: Literal["http", "https"] | None = None
    host: str | None = None
    port: int | None = None


class OIDCProviderConfigModel(OidcrpBaseModel):
    """Generic OpenID Connect provider configuration.

    ``issuer``, ``client_id`` and ``client_secret`` are optional: a provider
    without all three is treated as not configured rather than invalid.

    ``args`` holds provider-specific overrides. ``scope`` and any other key are
    sent with the authorization request; ``claim_id``, ``claim_email`` and
    ``claim_name`` select which userinfo claims carry the user's identity.
    """

    issuer: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    args: dict[str, str] = Field(default_factory=dict)

    @field_validator("args", mode="before")
    @classmethod
    def _stringify_scalars(cls, value: Any) -> Any:
        # YAML turns `max_age: 300` into an int; query strings only carry text.
        if not isinstance(value, dict):
            return value
        coerced: dict[Any, Any] = {}
        for key, item in value.items():
            if isinstance(item, bool):
                coerced[key] = "true" if item else "false"
            elif isinstance(item, (int, float)):
                coerced[key] = str(item)
            else:
                coerced[key] = item
        return coerced

    @property
    def is_configured(self) -> bool:
        return bool(self.issuer and self.client_id and self.client_secret)
