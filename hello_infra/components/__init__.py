"""
Pulumi component resources for the hello stack.

Each submodule provides ComponentResource classes built from the declared graph:
- security: secret, execution role and policies
- compute: Lambda function and its log group
- edge: REST API, method, integration, deployment and stage
"""
