"""
Secrets Manager component for the secret the function reads.

Creates:
- Secret container (the logical identity)
- Secret version carrying the payload
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from hello_infra.graph.declaration import SECRET, SECRET_VERSION
from hello_infra.graph.graph import ResourceGraph


@dataclass
class SecretOutputs:
    """Output values from the secret component."""
    secret_arn: pulumi.Output[str]
    secret_name: pulumi.Output[str]
    version_id: pulumi.Output[str]


class SecretComponent(pulumi.ComponentResource):
    """
    Secret container plus its single current version.

    The payload is wrapped as a Pulumi secret so it is encrypted in state
    and masked in previews.
    """

    def __init__(
        self,
        name: str,
        graph: ResourceGraph,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:security:Secret", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)
        declared = graph.get(SECRET)
        declared_version = graph.get(SECRET_VERSION)

        self.secret = aws.secretsmanager.Secret(
            f"{name}-secret",
            name=declared.secret_name,
            description=declared.description,
            recovery_window_in_days=declared.recovery_window_in_days,  # Immediate deletion
            tags=declared.tags,
            opts=child_opts,
        )

        self.version = aws.secretsmanager.SecretVersion(
            f"{name}-secret-version",
            secret_id=self.secret.id,
            secret_string=pulumi.Output.secret(declared_version.secret_string),
            opts=child_opts,
        )

        self.register_outputs({
            "secret_arn": self.secret.arn,
            "secret_name": self.secret.name,
        })

    def get_outputs(self) -> SecretOutputs:
        """Get secret output values."""
        return SecretOutputs(
            secret_arn=self.secret.arn,
            secret_name=self.secret.name,
            version_id=self.version.version_id,
        )
