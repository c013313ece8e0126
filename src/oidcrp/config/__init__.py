"""Configuration loading for oidcrp."""

from .loader import default_config_path, load_config
from .models import AppConfigModel, LoggingConfigModel

__all__ = ["AppConfigModel", "LoggingConfigModel", "default_config_path", "load_config"]
