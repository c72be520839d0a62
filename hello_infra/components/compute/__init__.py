"""
Compute components.

Components:
- LambdaFunctionComponent: Lambda function serving the API
"""

from hello_infra.components.compute.lambda_function import LambdaFunctionComponent, LambdaOutputs

__all__ = [
    "LambdaFunctionComponent",
    "LambdaOutputs",
]
