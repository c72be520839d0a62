"""
Security components for IAM and secrets management.

Components:
- LambdaRoleComponent: execution role, managed policy and secret-read policy
- SecretComponent: secret container and its current version
"""

from hello_infra.components.security.iam_roles import IamRoleOutputs, LambdaRoleComponent
from hello_infra.components.security.secrets_manager import SecretComponent, SecretOutputs

__all__ = [
    "LambdaRoleComponent",
    "IamRoleOutputs",
    "SecretComponent",
    "SecretOutputs",
]
