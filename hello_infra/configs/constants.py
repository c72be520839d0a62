"""
Infrastructure constants for hello-infra.

Contains provider-accepted value domains, principals, managed policies
and default configurations.
"""

from typing import Final

# Region the stack is declared in
DEFAULT_REGION: Final[str] = "us-east-1"

# Service principals
LAMBDA_SERVICE_PRINCIPAL: Final[str] = "lambda.amazonaws.com"
APIGATEWAY_SERVICE_PRINCIPAL: Final[str] = "apigateway.amazonaws.com"

# AWS managed policy for CloudWatch Logs access from Lambda
LAMBDA_BASIC_EXECUTION_POLICY_ARN: Final[str] = (
    "arn:aws:iam::aws:policy/service-role/AWSLambdaBasicExecutionRole"
)

# IAM policy language version
POLICY_VERSION: Final[str] = "2012-10-17"

# Action granted to the execution role on the secret
SECRET_READ_ACTION: Final[str] = "secretsmanager:GetSecretValue"

# API Gateway method authorization modes (aws:apigateway/method:Method)
AUTHORIZATION_TYPES: Final[frozenset[str]] = frozenset({
    "NONE",
    "AWS_IAM",
    "CUSTOM",
    "COGNITO_USER_POOLS",
})

# HTTP verbs accepted by API Gateway methods
HTTP_METHODS: Final[frozenset[str]] = frozenset({
    "ANY",
    "DELETE",
    "GET",
    "HEAD",
    "OPTIONS",
    "PATCH",
    "POST",
    "PUT",
})

# API Gateway integration types
INTEGRATION_TYPES: Final[frozenset[str]] = frozenset({
    "AWS",
    "AWS_PROXY",
    "HTTP",
    "HTTP_PROXY",
    "MOCK",
})

# Lambda invocations through API Gateway are always POST
LAMBDA_INTEGRATION_HTTP_METHOD: Final[str] = "POST"

# Lambda runtime identifiers accepted for zip deployments
LAMBDA_RUNTIMES: Final[frozenset[str]] = frozenset({
    "nodejs18.x",
    "nodejs20.x",
    "nodejs22.x",
    "python3.9",
    "python3.10",
    "python3.11",
    "python3.12",
    "python3.13",
})

# Invoke URL pattern for REST API stages
INVOKE_URL_TEMPLATE: Final[str] = "https://{api_id}.execute-api.{region}.amazonaws.com/{stage}{path}"

# Lambda configuration
LAMBDA_DEFAULTS: Final[dict[str, int]] = {
    "memory_mb": 128,
    "timeout_seconds": 10,
    "log_retention_days": 14,
}

# Default tags applied to all resources
DEFAULT_TAGS: Final[dict[str, str]] = {
    "Project": "hello-infra",
    "ManagedBy": "pulumi",
}

# Code artifact location relative to the project root
LAMBDA_SOURCE_DIR: Final[str] = "lambda"
