"""Startup wiring for the OAuth providers.

Builds the URL helper, the provider registry and one adapter per configured
provider, then runs every adapter's startup hook.
"""

from __future__ import annotations

import logging

from .models import HttpTransportConfigModel, OIDCProviderConfigModel
from .providers.oidc import OIDCProvider
from .registry import OAuthProviderRegistry
from .url_utils import URLHelper

logger = logging.getLogger(__name__)


class OAuthModule:
    """Owns the OAuth providers for the lifetime of the application."""

    def __init__(
        self,
        oidc_config: OIDCProviderConfigModel | None = None,
        transport_config: HttpTransportConfigModel | None = None,
        *,
        url: URLHelper | None = None,
        registry: OAuthProviderRegistry | None = None,
    ):
        self.url = url or URLHelper(transport_config)
        self.registry = registry if registry is not None else OAuthProviderRegistry()
        self.oidc = OIDCProvider(oidc_config, self.url, self.registry)

    async def init(self) -> None:
        """Initialize every provider. Must complete before serving logins."""
        await self.oidc.on_module_init()
        logger.info("OAuth module ready with providers: %s", self.registry.providers or "none")
