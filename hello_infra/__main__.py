"""
Pulumi program entry point for the hello endpoint.

Builds and validates the declared graph, then instantiates components in
dependency order:
1. Configuration and graph validation
2. Secret
3. IAM role and policies (inline policy needs the secret ARN)
4. Lambda function (needs the role)
5. REST API, permission, deployment and stage (needs the function)
"""

from pathlib import Path

import pulumi

from hello_infra.components.compute.lambda_function import LambdaFunctionComponent
from hello_infra.components.edge.rest_api import RestApiComponent
from hello_infra.components.security.iam_roles import LambdaRoleComponent
from hello_infra.components.security.secrets_manager import SecretComponent
from hello_infra.configs.environment import get_config
from hello_infra.configs.settings import get_settings
from hello_infra.graph.declaration import PROJECT, build_graph
from hello_infra.observability.logger import configure_logging
from hello_infra.utils.naming import ResourceNamer
from hello_infra.utils.outputs import write_outputs_to_env

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def main() -> None:
    """Deploy the hello endpoint."""
    settings = get_settings()
    configure_logging(settings.log_level)

    # Load configuration and refuse to continue on a broken graph
    config = get_config()
    graph = build_graph(config, project_root=PROJECT_ROOT)
    pulumi.log.info(f"Graph valid: {len(graph)} resources, apply order {graph.topological_order()}")

    namer = ResourceNamer(project=PROJECT, environment=config.environment)

    # --- Layer 1: Secret ---
    secret = SecretComponent(name=namer.name("secret"), graph=graph)
    secret_outputs = secret.get_outputs()

    # --- Layer 2: Execution identity ---
    lambda_role = LambdaRoleComponent(
        name=namer.name("lambda"),
        graph=graph,
        secret_arn=secret_outputs.secret_arn,
    )
    role_outputs = lambda_role.get_outputs()

    # --- Layer 3: Compute ---
    function = LambdaFunctionComponent(
        name=namer.name("function"),
        graph=graph,
        role_arn=role_outputs.lambda_role_arn,
        secret_arn=secret_outputs.secret_arn,
        code_root=PROJECT_ROOT,
        opts=pulumi.ResourceOptions(depends_on=[lambda_role]),
    )
    function_outputs = function.get_outputs()

    # --- Layer 4: API surface ---
    rest_api = RestApiComponent(
        name=namer.name("api"),
        graph=graph,
        function_name=function_outputs.function_name,
        invoke_arn=function_outputs.invoke_arn,
    )
    api_outputs = rest_api.get_outputs()

    # --- Exports ---
    outputs = {
        "invoke_url": api_outputs.invoke_url,
        "api_id": api_outputs.api_id,
        "stage_name": api_outputs.stage_name,
        "function_name": function_outputs.function_name,
        "secret_arn": secret_outputs.secret_arn,
    }

    # Write outputs to .env file for local development
    write_outputs_to_env(outputs, settings.outputs_file)

    # Export to Pulumi stack
    for key, value in outputs.items():
        pulumi.export(key, value)


# Execute
main()
