"""Environment variable references in configuration values.

Any string value may embed ``${ENV_VAR}`` references, e.g.::

    client_secret: ${OIDC_CLIENT_SECRET}
    issuer: https://${IDP_HOST}/realms/main
"""

import os
import re
from typing import Any

ENV_VAR_PATTERN = re.compile(r"\${([A-Za-z0-9_]+)}")


def is_env_reference(value: Any) -> bool:
    """Check if a value contains an environment variable reference."""
    return isinstance(value, str) and ENV_VAR_PATTERN.search(value) is not None


def resolve_env_var(value: str) -> str:
    """Resolve environment variable references in a string.

    Raises:
        ValueError: If an environment variable is not set
    """
    matches = ENV_VAR_PATTERN.findall(value)
    if not matches:
        return value

    result = value
    for env_var in matches:
        if env_var not in os.environ:
            raise ValueError(f"Environment variable {env_var} is not set")
        result = result.replace(f"${{{env_var}}}", os.environ[env_var])

    return result


def interpolate_all(config: Any) -> Any:
    """Recursively resolve environment variable references in a configuration."""
    if is_env_reference(config):
        return resolve_env_var(config)
    elif isinstance(config, dict):
        return {k: interpolate_all(v) for k, v in config.items()}
    elif isinstance(config, list):
        return [interpolate_all(item) for item in config]
    else:
        return config
