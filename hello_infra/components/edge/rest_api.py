"""
REST API component exposing the function at GET /{path} on one stage.

The resource chain, in dependency order:
1. RestApi: root of the resource tree.
2. Resource: the single path segment under the root.
3. Method: verb plus authorization mode (AWS_IAM requires SigV4-signed callers).
4. Integration: AWS_PROXY binding from the method to the function's invoke ARN.
5. Permission: lets API Gateway invoke the function, scoped to
   {execution_arn}/{stage}/{method}{path} only.
6. Deployment: immutable snapshot. Depends on the method and integration and
   carries a trigger digest of both plus the function invoke ARN, so any
   change produces a new snapshot.
7. Stage: named pointer, repointed at each new deployment.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from hello_infra.components.bindings import render
from hello_infra.graph.declaration import (
    API_METHOD,
    API_RESOURCE,
    DEPLOYMENT,
    FUNCTION,
    INTEGRATION,
    INVOKE_PERMISSION,
    INVOKE_URL_OUTPUT,
    REST_API,
    STAGE,
)
from hello_infra.graph.graph import ResourceGraph
from hello_infra.graph.references import Ref


@dataclass
class RestApiOutputs:
    """Output values from REST API component."""
    api_id: pulumi.Output[str]
    execution_arn: pulumi.Output[str]
    stage_name: pulumi.Output[str]
    invoke_url: pulumi.Output[str]


class RestApiComponent(pulumi.ComponentResource):
    """
    REST API with one IAM-authorized method proxied to Lambda.
    """

    def __init__(
        self,
        name: str,
        graph: ResourceGraph,
        function_name: pulumi.Input[str],
        invoke_arn: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:edge:RestApi", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)
        declared_api = graph.get(REST_API)
        declared_resource = graph.get(API_RESOURCE)
        declared_method = graph.get(API_METHOD)
        declared_integration = graph.get(INTEGRATION)
        declared_permission = graph.get(INVOKE_PERMISSION)
        declared_deployment = graph.get(DEPLOYMENT)
        declared_stage = graph.get(STAGE)

        self.api = aws.apigateway.RestApi(
            f"{name}-api",
            name=declared_api.api_name,
            description=declared_api.description,
            tags=declared_api.tags,
            opts=child_opts,
        )

        self.resource = aws.apigateway.Resource(
            f"{name}-resource",
            rest_api=self.api.id,
            parent_id=self.api.root_resource_id,
            path_part=declared_resource.path_part,
            opts=child_opts,
        )

        self.method = aws.apigateway.Method(
            f"{name}-method",
            rest_api=self.api.id,
            resource_id=self.resource.id,
            http_method=declared_method.http_method,
            authorization=declared_method.authorization,
            opts=child_opts,
        )

        self.integration = aws.apigateway.Integration(
            f"{name}-integration",
            rest_api=self.api.id,
            resource_id=self.resource.id,
            http_method=self.method.http_method,
            integration_http_method=declared_integration.integration_http_method,
            type=declared_integration.type,
            uri=invoke_arn,
            opts=child_opts,
        )

        self.permission = aws.lambda_.Permission(
            f"{name}-invoke-permission",
            statement_id=declared_permission.statement_id,
            action=declared_permission.action,
            function=function_name,
            principal=declared_permission.principal,
            source_arn=render(
                declared_permission.source_arn,
                {Ref(REST_API, "execution_arn"): self.api.execution_arn},
                context=INVOKE_PERMISSION,
            ),
            opts=child_opts,
        )

        # Explicit edges: a deployment taken before the integration exists
        # serves a stale snapshot. The function ARN in the triggers redeploys
        # when the integration target changes.
        self.deployment = aws.apigateway.Deployment(
            f"{name}-deployment",
            rest_api=self.api.id,
            description=declared_deployment.description,
            triggers=render(
                declared_deployment.triggers,
                {Ref(FUNCTION, "invoke_arn"): invoke_arn},
                context=DEPLOYMENT,
            ),
            opts=pulumi.ResourceOptions(
                parent=self,
                depends_on=[self.method, self.integration],
            ),
        )

        self.stage = aws.apigateway.Stage(
            f"{name}-stage",
            rest_api=self.api.id,
            deployment=self.deployment.id,
            stage_name=declared_stage.stage_name,
            tags=declared_stage.tags,
            opts=child_opts,
        )

        self.invoke_url = render(
            graph.outputs[INVOKE_URL_OUTPUT],
            {
                Ref(REST_API, "id"): self.api.id,
                Ref(STAGE, "stage_name"): self.stage.stage_name,
            },
            context=INVOKE_URL_OUTPUT,
        )

        self.register_outputs({
            "api_id": self.api.id,
            "invoke_url": self.invoke_url,
        })

    def get_outputs(self) -> RestApiOutputs:
        """Get REST API output values."""
        return RestApiOutputs(
            api_id=self.api.id,
            execution_arn=self.api.execution_arn,
            stage_name=self.stage.stage_name,
            invoke_url=pulumi.Output.from_input(self.invoke_url),
        )
