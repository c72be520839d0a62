"""
Lambda function component for the hello handler.

Creates:
- CloudWatch log group for function logs
- Lambda function from a zip of the code directory, bound to the execution role
"""

from dataclasses import dataclass
from pathlib import Path

import pulumi
import pulumi_aws as aws

from hello_infra.components.bindings import render
from hello_infra.graph.declaration import FUNCTION, LOG_GROUP, SECRET
from hello_infra.graph.graph import ResourceGraph
from hello_infra.graph.references import Ref


@dataclass
class LambdaOutputs:
    """Output values from Lambda component."""
    function_arn: pulumi.Output[str]
    function_name: pulumi.Output[str]
    invoke_arn: pulumi.Output[str]


class LambdaFunctionComponent(pulumi.ComponentResource):
    """
    Lambda function serving the API method.

    ``source_code_hash`` is the content hash of the code directory, so the
    function is redeployed whenever the code changes.
    """

    def __init__(
        self,
        name: str,
        graph: ResourceGraph,
        role_arn: pulumi.Input[str],
        secret_arn: pulumi.Input[str],
        code_root: Path,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:compute:LambdaFunction", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)
        declared_logs = graph.get(LOG_GROUP)
        declared = graph.get(FUNCTION)

        self.log_group = aws.cloudwatch.LogGroup(
            f"{name}-logs",
            name=declared_logs.log_group_name,
            retention_in_days=declared_logs.retention_in_days,
            tags=declared_logs.tags,
            opts=child_opts,
        )

        variables = render(
            declared.environment,
            {Ref(SECRET, "arn"): secret_arn},
            context=FUNCTION,
        )

        self.function = aws.lambda_.Function(
            f"{name}-function",
            name=declared.function_name,
            role=role_arn,
            runtime=declared.runtime,
            handler=declared.handler,
            code=pulumi.FileArchive(str(code_root / declared.code_path)),
            source_code_hash=declared.source_code_hash,
            memory_size=declared.memory_size,
            timeout=declared.timeout,
            environment=aws.lambda_.FunctionEnvironmentArgs(
                variables=variables,
            ),
            tags=declared.tags,
            opts=pulumi.ResourceOptions(
                parent=self,
                depends_on=[self.log_group],
            ),
        )

        self.register_outputs({
            "function_arn": self.function.arn,
            "function_name": self.function.name,
        })

    def get_outputs(self) -> LambdaOutputs:
        """Get Lambda output values."""
        return LambdaOutputs(
            function_arn=self.function.arn,
            function_name=self.function.name,
            invoke_arn=self.function.invoke_arn,
        )
