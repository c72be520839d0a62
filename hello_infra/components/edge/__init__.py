"""
Edge components.

Components:
- RestApiComponent: REST API, IAM-authorized method, Lambda integration and stage
"""

from hello_infra.components.edge.rest_api import RestApiComponent, RestApiOutputs

__all__ = [
    "RestApiComponent",
    "RestApiOutputs",
]
