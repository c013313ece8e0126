"""Tests for configuration loading and environment interpolation."""

from pathlib import Path

import pytest

from oidcrp.config import AppConfigModel, load_config
from oidcrp.config.references import interpolate_all, resolve_env_var

CONFIG_YAML = """
server:
  base_url: https://app.example.com
logging:
  level: INFO
oauth:
  providers:
    oidc:
      issuer: https://${IDP_HOST}
      client_id: cid
      client_secret: ${OIDC_SECRET}
      args:
        scope: openid groups
        claim_id: sub
        max_age: 300
        prompt_login: true
"""


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "config.yml"
    path.write_text(content)
    return path


def test_load_config_interpolates_and_validates(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("IDP_HOST", "idp.example.com")
    monkeypatch.setenv("OIDC_SECRET", "s3cret")

    config = load_config(_write(tmp_path, CONFIG_YAML))

    oidc = config.oauth.providers.oidc
    assert oidc is not None
    assert oidc.issuer == "https://idp.example.com"
    assert oidc.client_secret == "s3cret"
    assert oidc.args == {
        "scope": "openid groups",
        "claim_id": "sub",
        "max_age": "300",
        "prompt_login": "true",
    }
    assert oidc.is_configured
    assert config.server.base_url == "https://app.example.com"
    assert config.logging.level == "INFO"


def test_load_config_uses_env_path(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("IDP_HOST", "idp.example.com")
    monkeypatch.setenv("OIDC_SECRET", "s3cret")
    monkeypatch.setenv("OIDCRP_CONFIG", str(_write(tmp_path, CONFIG_YAML)))

    assert load_config().oauth.providers.oidc is not None


def test_missing_default_config_yields_defaults() -> None:
    config = load_config()
    assert config == AppConfigModel()
    assert config.oauth.providers.oidc is None


def test_missing_explicit_config_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yml")


def test_missing_env_var_raises(tmp_path) -> None:
    with pytest.raises(ValueError, match="Environment variable IDP_HOST is not set"):
        load_config(_write(tmp_path, CONFIG_YAML))


def test_non_mapping_config_rejected(tmp_path) -> None:
    with pytest.raises(ValueError, match="must be a mapping"):
        load_config(_write(tmp_path, "- a\n- b\n"))


def test_unknown_keys_rejected(tmp_path) -> None:
    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(_write(tmp_path, "oauth:\n  providers:\n    github: {}\n"))


def test_resolve_env_var_handles_multiple_references(monkeypatch) -> None:
    monkeypatch.setenv("A", "1")
    monkeypatch.setenv("B", "2")
    assert resolve_env_var("x-${A}-${B}") == "x-1-2"


def test_interpolate_all_walks_nested_structures(monkeypatch) -> None:
    monkeypatch.setenv("A", "1")
    assert interpolate_all({"a": ["${A}", 2], "b": {"c": "${A}"}}) == {
        "a": ["1", 2],
        "b": {"c": "1"},
    }
