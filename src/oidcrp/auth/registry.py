"""Registry of OAuth providers that finished initializing.

Registering a provider is its readiness signal: callback routing and login
flows only ever see providers present here.
"""

from __future__ import annotations

import logging

from .contracts import OAuthProvider

logger = logging.getLogger(__name__)


class OAuthProviderRegistry:
    """Name-indexed collection of ready OAuth providers."""

    def __init__(self) -> None:
        self._providers: dict[str, OAuthProvider] = {}

    def register(self, provider: OAuthProvider) -> None:
        name = provider.provider_name
        if name in self._providers and self._providers[name] is not provider:
            logger.warning("Replacing registered OAuth provider %s", name)
        self._providers[name] = provider
        logger.info("OAuth provider %s registered", name)

    def get(self, name: str) -> OAuthProvider | None:
        return self._providers.get(name)

    @property
    def providers(self) -> list[str]:
        return list(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers
