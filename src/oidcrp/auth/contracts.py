"""Contracts and shared types for the oidcrp authentication stack."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from oidcrp.models import OidcrpBaseModel


class OAuthError(Exception):
    """Standardized auth error with HTTP-style status information."""

    def __init__(
        self,
        error: str,
        description: str | None = None,
        status_code: int = 400,
        detail: Any = None,
    ):
        super().__init__(description or error)
        self.error = error
        self.description = description
        self.status_code = status_code
        self.detail = detail


class ConfigurationError(OAuthError):
    """Provider configuration is unusable (bad issuer, missing credentials)."""

    def __init__(self, description: str, detail: Any = None):
        super().__init__("invalid_configuration", description, status_code=500, detail=detail)


class NotReadyError(OAuthError):
    """A provider operation was invoked before discovery completed."""

    def __init__(self, provider: str):
        super().__init__(
            "provider_not_ready",
            f"{provider} client has not been loaded yet",
            status_code=503,
        )
        self.provider = provider


class ProviderError(OAuthError):
    """Failure while talking to the identity provider."""


class ClientRequestError(ProviderError):
    """The provider rejected our request (4xx)."""


class ProviderIntegrationError(ProviderError):
    """The provider misbehaved (non-4xx error status or unreachable)."""


class ContractViolationError(ProviderError):
    """The provider answered 2xx with a body that does not match its schema."""


class Tokens(OidcrpBaseModel):
    """Tokens obtained from an authorization-code exchange.

    Persistence is the caller's responsibility.
    """

    access_token: str
    refresh_token: str
    expires_at: datetime
    scope: str


class OAuthAccount(OidcrpBaseModel):
    """Normalized identity of the user behind an access token.

    Either field is ``None`` when the configured claim was absent from the
    provider payload.
    """

    id: str | None = None
    email: str | None = None


@runtime_checkable
class OAuthProvider(Protocol):
    """Capability interface every registered OAuth provider implements."""

    provider_name: str

    def get_auth_url(self, state: str) -> str:
        """Build the provider authorization URL carrying ``state``."""

    async def get_token(self, code: str) -> Tokens:
        """Exchange an authorization code for provider tokens."""

    async def get_user(self, token: str) -> OAuthAccount:
        """Fetch the identity associated with a provider access token."""


__all__ = [
    "ClientRequestError",
    "ConfigurationError",
    "ContractViolationError",
    "NotReadyError",
    "OAuthAccount",
    "OAuthError",
    "OAuthProvider",
    "ProviderError",
    "ProviderIntegrationError",
    "Tokens",
]
