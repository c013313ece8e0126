"""Generic OpenID Connect provider.

:class:`OIDCClient` owns one identity provider's discovered endpoints and the
application's credentials, and performs the three relying-party operations.
:class:`OIDCProvider` is the registered provider wrapping it: the client only
exists once discovery succeeded during :meth:`OIDCProvider.on_module_init`,
and every operation fails fast with ``NotReadyError`` until then.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Union

from ..contracts import (
    ConfigurationError,
    ContractViolationError,
    NotReadyError,
    OAuthAccount,
    Tokens,
)
from ..http import request_json
from ..models import OIDCProviderConfigModel
from ..registry import OAuthProviderRegistry
from ..url_utils import URLHelper
from .oidc_schemas import (
    CLAIM_OVERRIDE_KEYS,
    DEFAULT_SCOPE,
    ClaimsMap,
    ModelT,
    OIDCDiscoveryDocument,
    OIDCTokenResponse,
    OIDCUserInfo,
    map_claims,
    parse_payload,
)

logger = logging.getLogger(__name__)

CALLBACK_PATH = "/oauth/callback"
DISCOVERY_PATH = "/.well-known/openid-configuration"


class OIDCClient:
    """Relying-party client bound to a single discovered identity provider.

    Instances are immutable and hold no per-login state, so concurrent logins
    can share one client.
    """

    provider_name = "oidc"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        args: Mapping[str, str],
        config: OIDCDiscoveryDocument,
        url: URLHelper,
    ):
        self.client_id = client_id
        self._client_secret = client_secret
        self.args = dict(args)
        self.config = config
        self.url = url

    @classmethod
    async def create(cls, config: OIDCProviderConfigModel, url: URLHelper) -> OIDCClient:
        """Run discovery against ``config.issuer`` and return a bound client."""
        if not url.verify(config.issuer):
            raise ConfigurationError("OIDC issuer is invalid", detail=config.issuer)
        if not config.client_id or not config.client_secret:
            raise ConfigurationError("OIDC client_id and client_secret are required")

        assert config.issuer is not None
        discovery_url = f"{config.issuer.rstrip('/')}{DISCOVERY_PATH}"
        payload = await request_json(
            "GET", discovery_url, endpoint="discovery", provider=cls.provider_name
        )
        discovery = cls._validate(OIDCDiscoveryDocument, payload, endpoint="discovery")

        logger.info("OIDC discovery completed for issuer %s", config.issuer)
        return cls(config.client_id, config.client_secret, config.args, discovery, url)

    @classmethod
    def _validate(cls, model: type[ModelT], payload: Any, *, endpoint: str) -> ModelT:
        try:
            return parse_payload(model, payload, endpoint=endpoint)
        except ContractViolationError as exc:
            logger.warning(
                "OIDC %s endpoint returned an unexpected payload",
                endpoint,
                extra={
                    "provider": cls.provider_name,
                    "endpoint": endpoint,
                    "error_type": exc.__class__.__name__,
                },
            )
            raise

    @property
    def redirect_uri(self) -> str:
        return self.url.link(CALLBACK_PATH)

    def authorize(self, state: str) -> str:
        """Build the authorization request URL. No I/O."""
        params: dict[str, str] = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
        }
        params.update(
            {key: value for key, value in self.args.items() if key not in CLAIM_OVERRIDE_KEYS}
        )
        params["scope"] = self.args.get("scope") or DEFAULT_SCOPE
        params["state"] = state

        endpoint = self.config.authorization_endpoint
        separator = "&" if "?" in endpoint else "?"
        return f"{endpoint}{separator}{self.url.stringify(params)}"

    async def token(self, code: str) -> Tokens:
        """Exchange an authorization code at the token endpoint."""
        payload = await request_json(
            "POST",
            self.config.token_endpoint,
            endpoint="token",
            provider=self.provider_name,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            data={
                "code": code,
                "client_id": self.client_id,
                "client_secret": self._client_secret,
                "redirect_uri": self.redirect_uri,
                "grant_type": "authorization_code",
            },
        )
        token = self._validate(OIDCTokenResponse, payload, endpoint="token")

        return Tokens(
            access_token=token.access_token,
            refresh_token=token.refresh_token,
            expires_at=datetime.now(timezone.utc) + timedelta(seconds=token.expires_in),
            scope=token.scope,
        )

    @property
    def claims_map(self) -> ClaimsMap:
        return ClaimsMap.from_args(self.args)

    async def userinfo(self, token: str) -> OAuthAccount:
        """Fetch the userinfo claims for ``token`` and normalize them."""
        payload = await request_json(
            "GET",
            self.config.userinfo_endpoint,
            endpoint="userinfo",
            provider=self.provider_name,
            headers={"Authorization": f"Bearer {token}"},
        )
        if isinstance(payload, dict):
            payload = map_claims(payload, self.claims_map)
        user = self._validate(OIDCUserInfo, payload, endpoint="userinfo")

        return OAuthAccount(id=user.id, email=user.email)


@dataclass(frozen=True)
class Uninitialized:
    """No client: discovery has not run, failed, or the provider is unconfigured."""


@dataclass(frozen=True)
class Ready:
    """Discovery succeeded; ``client`` is set for the adapter's lifetime."""

    client: OIDCClient


ClientState = Union[Uninitialized, Ready]


class OIDCProvider:
    """Registered OAuth provider backed by a lazily discovered :class:`OIDCClient`."""

    provider_name = "oidc"

    def __init__(
        self,
        config: OIDCProviderConfigModel | None,
        url: URLHelper,
        registry: OAuthProviderRegistry | None = None,
    ):
        self.optional_config = config
        self.url = url
        self.registry = registry
        self._state: ClientState = Uninitialized()
        self._init_lock = asyncio.Lock()

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def ready(self) -> bool:
        return isinstance(self._state, Ready)

    async def on_module_init(self) -> None:
        """Discover the provider and register it.

        Without issuer, client_id and client_secret the provider stays
        uninitialized and unregistered. Discovery errors propagate.
        """
        config = self.optional_config
        if config is None or not config.is_configured:
            if config is not None and (config.issuer or config.client_id or config.client_secret):
                logger.warning(
                    "OIDC provider is partially configured; issuer, client_id and "
                    "client_secret are all required"
                )
            else:
                logger.debug("OIDC provider not configured")
            return

        async with self._init_lock:
            if isinstance(self._state, Ready):
                return
            client = await OIDCClient.create(config, self.url)
            self._state = Ready(client)

        if self.registry is not None:
            self.registry.register(self)

    def _client(self) -> OIDCClient:
        state = self._state
        if isinstance(state, Ready):
            return state.client
        raise NotReadyError("OIDC")

    def get_auth_url(self, state: str) -> str:
        return self._client().authorize(state)

    async def get_token(self, code: str) -> Tokens:
        return await self._client().token(code)

    async def get_user(self, token: str) -> OAuthAccount:
        return await self._client().userinfo(token)
