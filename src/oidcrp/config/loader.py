from os import environ
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import AppConfigModel
from .references import interpolate_all

# No logging in this module as it's used to load the logging config

__all__ = ["default_config_path", "load_config"]

CONFIG_ENV_VAR = "OIDCRP_CONFIG"


def default_config_path() -> Path:
    return Path(environ.get(CONFIG_ENV_VAR, Path.home() / ".oidcrp" / "config.yml"))


def load_config(path: Path | None = None, resolve_refs: bool = True) -> AppConfigModel:
    """Load configuration from ``path``, $OIDCRP_CONFIG or ~/.oidcrp/config.yml.

    A missing default file yields the default configuration; a missing file
    that was asked for explicitly is an error.
    """
    explicit = path is not None or CONFIG_ENV_VAR in environ
    config_path = path or default_config_path()

    if not config_path.exists():
        if not explicit:
            return AppConfigModel()
        raise FileNotFoundError(f"oidcrp config not found at {config_path}")

    with open(config_path) as f:
        config_data = yaml.safe_load(f) or {}

    if not isinstance(config_data, dict):
        raise ValueError("oidcrp config must be a mapping")

    if resolve_refs:
        config_data = interpolate_all(config_data)

    try:
        return AppConfigModel.model_validate(config_data)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc
