"""oidcrp authentication: OpenID Connect relying-party support.

## Key Components

- `OIDCClient`: discovery, authorization URLs, code exchange and userinfo
- `OIDCProvider`: registered provider guarding the client until discovery
  has completed
- `OAuthProviderRegistry`: providers that finished initializing
- `URLHelper`: absolute links and query-string encoding

## Quick Example

```python
from oidcrp.auth import OAuthModule, OIDCProviderConfigModel

module = OAuthModule(
    OIDCProviderConfigModel(
        issuer="https://idp.example.com",
        client_id="your-client-id",
        client_secret="your-secret",
        args={"claim_id": "sub"},
    )
)
await module.init()
url = module.oidc.get_auth_url(state)
```
"""

from .contracts import (
    ClientRequestError,
    ConfigurationError,
    ContractViolationError,
    NotReadyError,
    OAuthAccount,
    OAuthError,
    OAuthProvider,
    ProviderError,
    ProviderIntegrationError,
    Tokens,
)
from .models import HttpTransportConfigModel, OIDCProviderConfigModel
from .module import OAuthModule
from .providers import OIDCClient, OIDCProvider
from .registry import OAuthProviderRegistry
from .url_utils import URLHelper

__all__ = [
    "ClientRequestError",
    "ConfigurationError",
    "ContractViolationError",
    "HttpTransportConfigModel",
    "NotReadyError",
    "OAuthAccount",
    "OAuthError",
    "OAuthModule",
    "OAuthProvider",
    "OAuthProviderRegistry",
    "OIDCClient",
    "OIDCProvider",
    "OIDCProviderConfigModel",
    "ProviderError",
    "ProviderIntegrationError",
    "Tokens",
    "URLHelper",
]
