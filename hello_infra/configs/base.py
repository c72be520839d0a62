"""
Base configuration dataclass for environment settings.

Provides type-safe configuration structure loaded from Pulumi stack configs.
"""

from dataclasses import dataclass

from hello_infra.configs.constants import (
    AUTHORIZATION_TYPES,
    DEFAULT_REGION,
    HTTP_METHODS,
    INTEGRATION_TYPES,
    LAMBDA_DEFAULTS,
    LAMBDA_RUNTIMES,
    LAMBDA_SOURCE_DIR,
)
from hello_infra.exceptions import ConfigurationError


@dataclass(frozen=True)
class EnvironmentConfig:
    """
    Environment-specific configuration for infrastructure deployment.

    Attributes:
        environment: Deployment environment, also used as the API stage name
        region: AWS region the stack is deployed in
        secret_name: Secrets Manager secret name
        secret_string: Payload stored in the secret's current version
        function_name: Lambda function name
        handler: Lambda handler entry point (module.function)
        runtime: Lambda runtime identifier
        code_path: Path to the function's code directory
        api_name: REST API name
        path_part: Path segment of the single API resource
        http_method: HTTP verb of the API method
        authorization: Authorization mode of the API method
        integration_type: Integration contract between method and function
        lambda_memory: Lambda memory in MB
        lambda_timeout: Lambda timeout in seconds
        log_retention_days: CloudWatch retention for function logs
    """
    environment: str
    secret_name: str
    secret_string: str
    function_name: str
    api_name: str
    region: str = DEFAULT_REGION
    handler: str = "index.handler"
    runtime: str = "python3.12"
    code_path: str = LAMBDA_SOURCE_DIR
    path_part: str = "hello"
    http_method: str = "GET"
    authorization: str = "AWS_IAM"
    integration_type: str = "AWS_PROXY"
    lambda_memory: int = LAMBDA_DEFAULTS["memory_mb"]
    lambda_timeout: int = LAMBDA_DEFAULTS["timeout_seconds"]
    log_retention_days: int = LAMBDA_DEFAULTS["log_retention_days"]

    @property
    def stage_name(self) -> str:
        """Get the API stage name."""
        return self.environment

    @property
    def resource_path(self) -> str:
        """Get the full API resource path."""
        return f"/{self.path_part}"

    def validate(self) -> "EnvironmentConfig":
        """
        Check every enumerated value against the provider's accepted domain.

        Returns:
            EnvironmentConfig: self, for chaining

        Raises:
            ConfigurationError: If a value would be rejected by AWS
        """
        domains = {
            "authorization": AUTHORIZATION_TYPES,
            "http_method": HTTP_METHODS,
            "integration_type": INTEGRATION_TYPES,
            "runtime": LAMBDA_RUNTIMES,
        }
        for field, accepted in domains.items():
            value = getattr(self, field)
            if value not in accepted:
                raise ConfigurationError(
                    f"Unsupported {field}: {value!r}",
                    field=field,
                    details={"accepted": sorted(accepted)},
                )

        for field in ("environment", "secret_name", "function_name", "api_name", "path_part"):
            if not getattr(self, field).strip():
                raise ConfigurationError(f"{field} cannot be empty", field=field)

        if "/" in self.path_part:
            raise ConfigurationError(
                "path_part must be a single path segment",
                field="path_part",
            )

        if "." not in self.handler:
            raise ConfigurationError(
                f"handler must be module.function, got {self.handler!r}",
                field="handler",
            )

        return self


def default_config() -> EnvironmentConfig:
    """
    Canonical dev configuration.

    Used by local tooling and tests that run without a Pulumi stack.
    """
    return EnvironmentConfig(
        environment="dev",
        secret_name="my_secret",
        secret_string="password123!",
        function_name="my_lambda_function",
        api_name="my_api",
    )
