"""
Environment configuration loader.

Loads and validates configuration from Pulumi stack config files.
"""

import pulumi

from hello_infra.configs.base import EnvironmentConfig
from hello_infra.configs.constants import DEFAULT_REGION, LAMBDA_DEFAULTS, LAMBDA_SOURCE_DIR


def get_config() -> EnvironmentConfig:
    """
    Load environment configuration from Pulumi stack config.

    Returns:
        EnvironmentConfig: Validated configuration object

    Raises:
        pulumi.ConfigMissingError: If required config values are missing
        ConfigurationError: If a value is outside the provider's accepted domain
    """
    config = pulumi.Config()
    aws_config = pulumi.Config("aws")

    return EnvironmentConfig(
        environment=config.require("environment"),
        region=aws_config.get("region") or DEFAULT_REGION,
        secret_name=config.get("secret_name") or "my_secret",
        secret_string=config.require("secret_string"),
        function_name=config.get("function_name") or "my_lambda_function",
        api_name=config.get("api_name") or "my_api",
        handler=config.get("handler") or "index.handler",
        runtime=config.get("runtime") or "python3.12",
        code_path=config.get("code_path") or LAMBDA_SOURCE_DIR,
        path_part=config.get("path_part") or "hello",
        http_method=config.get("http_method") or "GET",
        authorization=config.get("authorization") or "AWS_IAM",
        integration_type=config.get("integration_type") or "AWS_PROXY",
        lambda_memory=config.get_int("lambda_memory") or LAMBDA_DEFAULTS["memory_mb"],
        lambda_timeout=config.get_int("lambda_timeout") or LAMBDA_DEFAULTS["timeout_seconds"],
        log_retention_days=(
            config.get_int("log_retention_days") or LAMBDA_DEFAULTS["log_retention_days"]
        ),
    ).validate()
