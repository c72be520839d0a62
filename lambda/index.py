"""
Lambda handler behind GET /hello.

Reads the secret named by SECRET_ARN to prove the execution role can reach
it, then returns a greeting. The secret value is never returned or logged.

Environment variables:
- SECRET_ARN: ARN of the Secrets Manager secret
- LOG_LEVEL: Logging level

Dependencies: boto3 (provided by the Lambda runtime)
System role: API Gateway AWS_PROXY integration target
"""

import json
import logging
import os
from typing import Any, Dict

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv("LOG_LEVEL", "INFO"))

_client = None


def _secrets_client():
    """Create the Secrets Manager client once per container."""
    global _client
    if _client is None:
        _client = boto3.client("secretsmanager")
    return _client


def _response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    """Build an AWS_PROXY response."""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Handle an API Gateway proxy request.

    Args:
        event: API Gateway proxy event
        context: Lambda context

    Returns:
        Proxy response: 200 with a greeting, 500 if the secret is unreadable
    """
    secret_arn = os.environ.get("SECRET_ARN")
    if not secret_arn:
        logger.error("SECRET_ARN is not configured")
        return _response(500, {"message": "secret not configured"})

    try:
        secret = _secrets_client().get_secret_value(SecretId=secret_arn)
    except ClientError as e:
        code = e.response.get("Error", {}).get("Code", "Unknown")
        logger.error("Failed to read secret: %s", code)
        return _response(500, {"message": "secret unavailable", "error": code})

    caller = ((event.get("requestContext") or {}).get("identity") or {}).get("userArn")
    logger.info("Secret read for caller %s", caller)

    return _response(200, {
        "message": "Hello, world!",
        "path": event.get("path"),
        "secret_version": secret.get("VersionId"),
    })
