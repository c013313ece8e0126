from pathlib import Path
from typing import Any

import click

from oidcrp.auth.module import OAuthModule
from oidcrp.auth.providers.oidc import OIDCProvider, Ready
from oidcrp.cli.utils import (
    configure_logging_from_config,
    output_error,
    output_result,
    run_async_cli,
)
from oidcrp.config.loader import load_config

config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Path to the configuration file (default: $OIDCRP_CONFIG or ~/.oidcrp/config.yml)",
)
json_output_option = click.option("--json-output", is_flag=True, help="Output in JSON format")
debug_option = click.option("--debug", is_flag=True, help="Show detailed debug information")


async def _ready_provider(config_path: Path | None, debug: bool) -> OIDCProvider:
    config = load_config(config_path)
    configure_logging_from_config(config, debug=debug)

    module = OAuthModule(config.oauth.providers.oidc, config.server)
    await module.init()
    if not module.oidc.ready:
        raise click.ClickException(
            "OIDC provider is not configured (issuer, client_id and client_secret are required)"
        )
    return module.oidc


async def _discover(config_path: Path | None, debug: bool) -> dict[str, Any]:
    provider = await _ready_provider(config_path, debug)
    state = provider.state
    assert isinstance(state, Ready)
    return {
        **state.client.config.model_dump(),
        "redirect_uri": state.client.redirect_uri,
    }


async def _authorize_url(config_path: Path | None, debug: bool, state: str) -> str:
    provider = await _ready_provider(config_path, debug)
    return provider.get_auth_url(state)


async def _token(config_path: Path | None, debug: bool, code: str) -> dict[str, Any]:
    provider = await _ready_provider(config_path, debug)
    tokens = await provider.get_token(code)
    return tokens.model_dump(mode="json")


async def _userinfo(config_path: Path | None, debug: bool, access_token: str) -> dict[str, Any]:
    provider = await _ready_provider(config_path, debug)
    account = await provider.get_user(access_token)
    return account.model_dump(mode="json")


@click.command(name="discover")
@config_option
@json_output_option
@debug_option
def discover(config_path: Path | None, json_output: bool, debug: bool) -> None:
    """Run OIDC discovery and show the provider endpoints.

    \b
    Examples:
        oidcrp discover
        oidcrp discover --config ./oidcrp.yml --json-output
    """
    try:
        output_result(run_async_cli(_discover(config_path, debug)), json_output, debug)
    except click.ClickException:
        raise
    except Exception as e:
        output_error(e, json_output, debug)


@click.command(name="authorize-url")
@click.option("--state", required=True, help="Opaque CSRF state echoed back to the callback")
@config_option
@json_output_option
@debug_option
def authorize_url(state: str, config_path: Path | None, json_output: bool, debug: bool) -> None:
    """Print the authorization URL to send the user to."""
    try:
        output_result(run_async_cli(_authorize_url(config_path, debug, state)), json_output, debug)
    except click.ClickException:
        raise
    except Exception as e:
        output_error(e, json_output, debug)


@click.command(name="token")
@click.option("--code", required=True, help="Authorization code received on the callback")
@config_option
@json_output_option
@debug_option
def token(code: str, config_path: Path | None, json_output: bool, debug: bool) -> None:
    """Exchange an authorization code for tokens."""
    try:
        output_result(run_async_cli(_token(config_path, debug, code)), json_output, debug)
    except click.ClickException:
        raise
    except Exception as e:
        output_error(e, json_output, debug)


@click.command(name="userinfo")
@click.option("--access-token", required=True, help="Provider access token")
@config_option
@json_output_option
@debug_option
def userinfo(access_token: str, config_path: Path | None, json_output: bool, debug: bool) -> None:
    """Fetch the user identity behind an access token."""
    try:
        output_result(
            run_async_cli(_userinfo(config_path, debug, access_token)), json_output, debug
        )
    except click.ClickException:
        raise
    except Exception as e:
        output_error(e, json_output, debug)
