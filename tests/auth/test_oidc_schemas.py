"""Tests for OIDC payload schemas and claim mapping (no network)."""

import pytest

from oidcrp.auth.contracts import ContractViolationError
from oidcrp.auth.providers.oidc_schemas import (
    ClaimsMap,
    OIDCDiscoveryDocument,
    OIDCTokenResponse,
    OIDCUserInfo,
    map_claims,
    parse_payload,
)
from tests.auth.provider_testkit import DISCOVERY_PAYLOAD, TOKEN_PAYLOAD

# ── Discovery document ─────────────────────────────────────────────────


def test_discovery_document_parses_and_ignores_extra_fields() -> None:
    doc = parse_payload(OIDCDiscoveryDocument, DISCOVERY_PAYLOAD, endpoint="discovery")
    assert doc.authorization_endpoint == "https://idp.example.com/authorize"
    assert doc.token_endpoint == "https://idp.example.com/token"
    assert doc.userinfo_endpoint == "https://idp.example.com/userinfo"
    assert doc.end_session_endpoint == "https://idp.example.com/logout"


@pytest.mark.parametrize(
    "field",
    ["authorization_endpoint", "token_endpoint", "userinfo_endpoint", "end_session_endpoint"],
)
def test_discovery_document_requires_each_endpoint(field: str) -> None:
    data = dict(DISCOVERY_PAYLOAD)
    del data[field]
    with pytest.raises(ContractViolationError) as exc_info:
        parse_payload(OIDCDiscoveryDocument, data, endpoint="discovery")
    assert any(error["loc"] == (field,) for error in exc_info.value.detail)


@pytest.mark.parametrize("value", ["/authorize", "idp.example.com/authorize", "ftp://idp/x"])
def test_discovery_document_rejects_relative_urls(value: str) -> None:
    data = dict(DISCOVERY_PAYLOAD, authorization_endpoint=value)
    with pytest.raises(ContractViolationError):
        parse_payload(OIDCDiscoveryDocument, data, endpoint="discovery")


def test_non_object_payload_is_contract_violation() -> None:
    with pytest.raises(ContractViolationError, match="not a JSON object"):
        parse_payload(OIDCDiscoveryDocument, ["not", "a", "dict"], endpoint="discovery")


# ── Token response ─────────────────────────────────────────────────────


def test_token_response_requires_every_field() -> None:
    for field in TOKEN_PAYLOAD:
        data = dict(TOKEN_PAYLOAD)
        del data[field]
        with pytest.raises(ContractViolationError):
            parse_payload(OIDCTokenResponse, data, endpoint="token")


def test_token_response_rejects_non_integer_expiry() -> None:
    data = dict(TOKEN_PAYLOAD, expires_in="soon")
    with pytest.raises(ContractViolationError):
        parse_payload(OIDCTokenResponse, data, endpoint="token")


# ── Claims map ─────────────────────────────────────────────────────────


def test_claims_map_defaults() -> None:
    claims_map = ClaimsMap.from_args({})
    assert claims_map.id == "preferred_username"
    assert claims_map.email == "email"
    assert claims_map.name == "name"


def test_claims_map_overrides_from_args() -> None:
    claims_map = ClaimsMap.from_args(
        {"claim_id": "sub", "claim_email": "mail", "claim_name": "display_name", "scope": "x"}
    )
    assert claims_map == ClaimsMap(id="sub", email="mail", name="display_name")


def test_map_claims_renames_configured_claims() -> None:
    claims_map = ClaimsMap(id="sub", email="email", name="name")
    mapped = map_claims({"sub": "u1", "email": "a@b.com", "name": "A", "other": 1}, claims_map)
    assert mapped == {"id": "u1", "email": "a@b.com", "name": "A"}


def test_map_claims_leaves_missing_claims_absent() -> None:
    claims_map = ClaimsMap(id="sub", email="email", name="name")
    mapped = map_claims({"email": "a@b.com", "name": "A"}, claims_map)
    assert "id" not in mapped


def test_map_claims_keeps_groups() -> None:
    mapped = map_claims(
        {"preferred_username": "u1", "email": "a@b.com", "name": "A", "groups": ["admins"]},
        ClaimsMap(),
    )
    assert mapped["groups"] == ["admins"]


# ── Userinfo ───────────────────────────────────────────────────────────


def test_userinfo_requires_valid_email() -> None:
    with pytest.raises(ContractViolationError):
        parse_payload(OIDCUserInfo, {"id": "u1", "email": "nope", "name": "A"}, endpoint="userinfo")


@pytest.mark.parametrize("email", ["alice@", "@corp.local", "a b@corp.local", "alice@@localhost"])
def test_userinfo_rejects_malformed_internal_email(email: str) -> None:
    with pytest.raises(ContractViolationError):
        parse_payload(OIDCUserInfo, {"id": "u1", "email": email, "name": "A"}, endpoint="userinfo")


def test_userinfo_requires_name() -> None:
    with pytest.raises(ContractViolationError):
        parse_payload(OIDCUserInfo, {"id": "u1", "email": "a@b.com"}, endpoint="userinfo")


def test_userinfo_groups_must_be_strings() -> None:
    with pytest.raises(ContractViolationError):
        parse_payload(
            OIDCUserInfo,
            {"id": "u1", "email": "a@b.com", "name": "A", "groups": [1, {"x": 2}]},
            endpoint="userinfo",
        )


def test_userinfo_id_is_optional() -> None:
    user = parse_payload(OIDCUserInfo, {"email": "a@b.com", "name": "A"}, endpoint="userinfo")
    assert user.id is None


@pytest.mark.parametrize("value", [True, "3600", 3600.0])
def test_token_response_requires_json_integer_expiry(value: object) -> None:
    data = dict(TOKEN_PAYLOAD, expires_in=value)
    with pytest.raises(ContractViolationError):
        parse_payload(OIDCTokenResponse, data, endpoint="token")
