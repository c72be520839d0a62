"""
Configuration module for Pulumi infrastructure.

Provides type-safe configuration loading from Pulumi stack config files.
"""

from hello_infra.configs.base import EnvironmentConfig, default_config
from hello_infra.configs.constants import (
    AUTHORIZATION_TYPES,
    DEFAULT_TAGS,
    HTTP_METHODS,
    LAMBDA_RUNTIMES,
)
from hello_infra.configs.settings import ToolSettings, get_settings

__all__ = [
    "EnvironmentConfig",
    "default_config",
    "ToolSettings",
    "get_settings",
    "AUTHORIZATION_TYPES",
    "DEFAULT_TAGS",
    "HTTP_METHODS",
    "LAMBDA_RUNTIMES",
]
