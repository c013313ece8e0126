"""Application configuration models."""

from typing import Literal

from pydantic import Field

from oidcrp.auth.models import HttpTransportConfigModel, OIDCProviderConfigModel
from oidcrp.models import OidcrpBaseModel


class LoggingConfigModel(OidcrpBaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    path: str | None = None
    max_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    backup_count: int = Field(default=5, ge=0)


class OAuthProvidersConfigModel(OidcrpBaseModel):
    oidc: OIDCProviderConfigModel | None = None


class OAuthConfigModel(OidcrpBaseModel):
    providers: OAuthProvidersConfigModel = Field(default_factory=OAuthProvidersConfigModel)


class AppConfigModel(OidcrpBaseModel):
    """Top-level configuration file."""

    server: HttpTransportConfigModel = Field(default_factory=HttpTransportConfigModel)
    logging: LoggingConfigModel = Field(default_factory=LoggingConfigModel)
    oauth: OAuthConfigModel = Field(default_factory=OAuthConfigModel)
