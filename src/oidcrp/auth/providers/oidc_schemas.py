"""Schemas for OpenID Connect provider responses.

Validation is kept apart from transport so that every response shape can be
checked without a network round trip: :func:`parse_payload` turns a decoded
JSON payload into a typed model or raises ``ContractViolationError``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, TypeVar
from urllib.parse import urlparse

from email_validator import SPECIAL_USE_DOMAIN_NAMES, validate_email
from pydantic import AfterValidator, ConfigDict, StrictInt, ValidationError, field_validator

from oidcrp.models import OidcrpBaseModel

from ..contracts import ContractViolationError

ModelT = TypeVar("ModelT", bound=OidcrpBaseModel)

DEFAULT_SCOPE = "openid profile email"

# Keys of provider ``args`` that configure claim mapping rather than the
# authorization request.
CLAIM_OVERRIDE_KEYS = ("claim_id", "claim_email", "claim_name")


def _require_absolute_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("must be an absolute http(s) URL")
    return value


def _is_special_use(domain: str) -> bool:
    domain = domain.lower()
    return any(domain == name or domain.endswith(f".{name}") for name in SPECIAL_USE_DOMAIN_NAMES)


def _check_email(value: str) -> str:
    # Syntax check only. The claim is kept exactly as the provider sent it, and
    # internal domains such as corp.local or localhost are accepted, so a
    # special-use domain is checked as a subdomain of a neutral name.
    address = value
    if _is_special_use(value.rpartition("@")[2]):
        address = f"{value}.example"
    validate_email(address, check_deliverability=False, globally_deliverable=False)
    return value


EmailClaim = Annotated[str, AfterValidator(_check_email)]


class OIDCDiscoveryDocument(OidcrpBaseModel):
    """Endpoints published at ``{issuer}/.well-known/openid-configuration``.

    Only the fields the client needs are extracted; unknown fields are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    authorization_endpoint: str
    token_endpoint: str
    userinfo_endpoint: str
    end_session_endpoint: str

    @field_validator(
        "authorization_endpoint",
        "token_endpoint",
        "userinfo_endpoint",
        "end_session_endpoint",
    )
    @classmethod
    def _absolute(cls, value: str) -> str:
        return _require_absolute_url(value)


class OIDCTokenResponse(OidcrpBaseModel):
    """Successful token endpoint response."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    access_token: str
    expires_in: StrictInt
    refresh_token: str
    scope: str
    token_type: str


class OIDCUserInfo(OidcrpBaseModel):
    """Identity claims after renaming provider claims to logical keys.

    ``id`` may be missing: a claim absent from the payload stays absent.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str | None = None
    email: EmailClaim
    name: str
    groups: list[str] | None = None


class ClaimsMap(OidcrpBaseModel):
    """Provider claim names carrying each logical identity field."""

    id: str = "preferred_username"
    email: str = "email"
    name: str = "name"

    @classmethod
    def from_args(cls, args: Mapping[str, str] | None) -> ClaimsMap:
        args = args or {}
        return cls(
            id=args.get("claim_id") or "preferred_username",
            email=args.get("claim_email") or "email",
            name=args.get("claim_name") or "name",
        )


def map_claims(payload: Mapping[str, Any], claims_map: ClaimsMap) -> dict[str, Any]:
    """Copy configured claims from ``payload`` onto the logical keys.

    Keys whose claim is absent from the payload are left out entirely.
    ``groups`` is carried through unchanged when present.
    """
    mapped: dict[str, Any] = {}
    if claims_map.id in payload:
        mapped["id"] = payload[claims_map.id]
    if claims_map.email in payload:
        mapped["email"] = payload[claims_map.email]
    if claims_map.name in payload:
        mapped["name"] = payload[claims_map.name]
    if "groups" in payload:
        mapped["groups"] = payload["groups"]
    return mapped


def parse_payload(model: type[ModelT], payload: Any, *, endpoint: str) -> ModelT:
    """Validate a decoded JSON ``payload`` against ``model``.

    Raises:
        ContractViolationError: payload is not an object or fails validation.
    """
    if not isinstance(payload, dict):
        raise ContractViolationError(
            "invalid_response",
            f"OIDC {endpoint} response was not a JSON object",
            status_code=502,
        )
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ContractViolationError(
            "invalid_response",
            f"OIDC {endpoint} response did not match the expected schema",
            status_code=502,
            detail=exc.errors(include_url=False),
        ) from exc
