"""OAuth provider implementations."""

from .oidc import OIDCClient, OIDCProvider

__all__ = [
    "OIDCClient",
    "OIDCProvider",
]
