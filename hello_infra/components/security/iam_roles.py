"""
IAM role component for the Lambda function.

Creates:
- Execution role trusted only by the Lambda service
- AWSLambdaBasicExecutionRole attachment for CloudWatch Logs
- Inline policy reading exactly one secret
"""

import json
from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from hello_infra.components.bindings import render
from hello_infra.graph.declaration import (
    BASIC_EXECUTION,
    LAMBDA_ROLE,
    SECRET,
    SECRET_READ_POLICY,
)
from hello_infra.graph.graph import ResourceGraph
from hello_infra.graph.references import Ref


@dataclass
class IamRoleOutputs:
    """Output values from IAM role component."""
    lambda_role_arn: pulumi.Output[str]
    lambda_role_name: pulumi.Output[str]


class LambdaRoleComponent(pulumi.ComponentResource):
    """
    Execution identity for the function.

    Follows least-privilege principle: the inline policy names the secret
    ARN, never a wildcard.
    """

    def __init__(
        self,
        name: str,
        graph: ResourceGraph,
        secret_arn: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:security:LambdaRole", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)
        declared_role = graph.get(LAMBDA_ROLE)
        declared_attachment = graph.get(BASIC_EXECUTION)
        declared_policy = graph.get(SECRET_READ_POLICY)

        self.role = aws.iam.Role(
            f"{name}-role",
            name=declared_role.role_name,
            assume_role_policy=json.dumps(declared_role.assume_role_policy),
            tags=declared_role.tags,
            opts=child_opts,
        )

        self.basic_execution = aws.iam.RolePolicyAttachment(
            f"{name}-basic-execution",
            role=self.role.name,
            policy_arn=declared_attachment.policy_arn,
            opts=child_opts,
        )

        policy_document = render(
            declared_policy.policy,
            {Ref(SECRET, "arn"): secret_arn},
            context=SECRET_READ_POLICY,
        )
        self.secret_read_policy = aws.iam.RolePolicy(
            f"{name}-secret-read",
            name=declared_policy.policy_name,
            role=self.role.id,
            policy=pulumi.Output.from_input(policy_document).apply(json.dumps),
            opts=child_opts,
        )

        self.register_outputs({
            "lambda_role_arn": self.role.arn,
        })

    def get_outputs(self) -> IamRoleOutputs:
        """Get IAM role output values."""
        return IamRoleOutputs(
            lambda_role_arn=self.role.arn,
            lambda_role_name=self.role.name,
        )
