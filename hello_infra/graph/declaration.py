"""
Declared graph for the hello endpoint.

Leaves first:
1. Secret, 2. SecretVersion
3. Role, 4. managed policy attachment, 5. inline secret-read policy
6. LogGroup, 7. Function
8. RestApi, 9. ApiResource, 10. ApiMethod, 11. Integration
12. Permission, 13. Deployment, 14. Stage
Output: invoke_url
"""

from pathlib import Path

from hello_infra.configs.base import EnvironmentConfig
from hello_infra.configs.constants import (
    APIGATEWAY_SERVICE_PRINCIPAL,
    LAMBDA_BASIC_EXECUTION_POLICY_ARN,
    LAMBDA_INTEGRATION_HTTP_METHOD,
    LAMBDA_SERVICE_PRINCIPAL,
)
from hello_infra.graph.graph import ResourceGraph
from hello_infra.graph.outputs import invoke_url, permission_source_arn
from hello_infra.graph.policies import secret_read_policy, trust_policy
from hello_infra.graph.references import Ref
from hello_infra.graph.resources import (
    ApiMethod,
    ApiResource,
    Deployment,
    Function,
    Integration,
    LogGroup,
    Permission,
    RestApi,
    Role,
    RolePolicy,
    RolePolicyAttachment,
    Secret,
    SecretVersion,
    Stage,
    fingerprint,
)
from hello_infra.utils.hashing import source_code_hash
from hello_infra.utils.naming import ResourceNamer
from hello_infra.utils.tags import create_tags

PROJECT = "hello-infra"

# Logical names of the declared nodes
SECRET = "secret"
SECRET_VERSION = "secret_version"
LAMBDA_ROLE = "lambda_role"
BASIC_EXECUTION = "lambda_basic_execution"
SECRET_READ_POLICY = "secret_read_policy"
LOG_GROUP = "log_group"
FUNCTION = "function"
REST_API = "rest_api"
API_RESOURCE = "api_resource"
API_METHOD = "api_method"
INTEGRATION = "integration"
INVOKE_PERMISSION = "invoke_permission"
DEPLOYMENT = "deployment"
STAGE = "stage"

INVOKE_URL_OUTPUT = "invoke_url"


def build_graph(
    config: EnvironmentConfig,
    code_hash: str | None = None,
    project_root: str | Path | None = None,
) -> ResourceGraph:
    """
    Declare every node and edge of the stack.

    Args:
        config: Validated environment configuration
        code_hash: Precomputed artifact hash; computed from ``config.code_path``
            when omitted
        project_root: Directory ``config.code_path`` is relative to

    Returns:
        ResourceGraph: The declared graph, already validated

    Raises:
        DanglingReferenceError, CycleError: If the declaration is broken
        FileNotFoundError: If the code artifact is missing and no hash was given
    """
    namer = ResourceNamer(project=PROJECT, environment=config.environment)
    env = config.environment

    if code_hash is None:
        code_path = Path(project_root or ".") / config.code_path
        code_hash = source_code_hash(code_path)

    graph = ResourceGraph()

    # --- Secret ---
    secret = graph.add(Secret(
        name=SECRET,
        secret_name=config.secret_name,
        description="Secret read by the hello function",
        tags=create_tags(env, config.secret_name),
    ))
    graph.add(SecretVersion(
        name=SECRET_VERSION,
        secret_id=Ref(secret.name, "id"),
        secret_string=config.secret_string,
    ))

    # --- Execution identity ---
    role_name = namer.name("lambda-role")
    role = graph.add(Role(
        name=LAMBDA_ROLE,
        role_name=role_name,
        assume_role_policy=trust_policy(LAMBDA_SERVICE_PRINCIPAL),
        tags=create_tags(env, role_name),
    ))
    graph.add(RolePolicyAttachment(
        name=BASIC_EXECUTION,
        role=Ref(role.name, "role_name"),
        policy_arn=LAMBDA_BASIC_EXECUTION_POLICY_ARN,
    ))
    graph.add(RolePolicy(
        name=SECRET_READ_POLICY,
        role=Ref(role.name, "id"),
        policy_name=namer.policy_name("secret-read"),
        policy=secret_read_policy(Ref(secret.name, "arn")),
    ))

    # --- Compute ---
    log_group = graph.add(LogGroup(
        name=LOG_GROUP,
        log_group_name=namer.log_group_name(config.function_name),
        retention_in_days=config.log_retention_days,
        tags=create_tags(env, config.function_name),
    ))
    function = graph.add(Function(
        name=FUNCTION,
        function_name=config.function_name,
        role=Ref(role.name, "arn"),
        handler=config.handler,
        runtime=config.runtime,
        code_path=config.code_path,
        source_code_hash=code_hash,
        memory_size=config.lambda_memory,
        timeout=config.lambda_timeout,
        environment={"SECRET_ARN": Ref(secret.name, "arn")},
        tags=create_tags(env, config.function_name),
        depends_on=(log_group.name, BASIC_EXECUTION),
    ))

    # --- API surface ---
    api = graph.add(RestApi(
        name=REST_API,
        api_name=config.api_name,
        description=f"{config.api_name} ({env})",
        tags=create_tags(env, config.api_name),
    ))
    resource = graph.add(ApiResource(
        name=API_RESOURCE,
        rest_api=Ref(api.name, "id"),
        parent_id=Ref(api.name, "root_resource_id"),
        path_part=config.path_part,
    ))
    method = graph.add(ApiMethod(
        name=API_METHOD,
        rest_api=Ref(api.name, "id"),
        resource_id=Ref(resource.name, "id"),
        http_method=config.http_method,
        authorization=config.authorization,
    ))
    integration = graph.add(Integration(
        name=INTEGRATION,
        rest_api=Ref(api.name, "id"),
        resource_id=Ref(resource.name, "id"),
        http_method=Ref(method.name, "http_method"),
        integration_http_method=LAMBDA_INTEGRATION_HTTP_METHOD,
        type=config.integration_type,
        uri=Ref(function.name, "invoke_arn"),
    ))
    graph.add(Permission(
        name=INVOKE_PERMISSION,
        statement_id="AllowAPIGatewayInvoke",
        action="lambda:InvokeFunction",
        function=Ref(function.name, "function_name"),
        principal=APIGATEWAY_SERVICE_PRINCIPAL,
        source_arn=permission_source_arn(
            Ref(api.name, "execution_arn"),
            config.stage_name,
            config.http_method,
            config.resource_path,
        ),
    ))

    # A new snapshot whenever the method or integration changes, declared or live
    deployment = graph.add(Deployment(
        name=DEPLOYMENT,
        rest_api=Ref(api.name, "id"),
        triggers={
            "redeployment": fingerprint(resource, method, integration),
            "integration_uri": Ref(function.name, "invoke_arn"),
        },
        description=f"Snapshot for {config.stage_name}",
        depends_on=(method.name, integration.name),
    ))
    stage = graph.add(Stage(
        name=STAGE,
        rest_api=Ref(api.name, "id"),
        deployment=Ref(deployment.name, "id"),
        stage_name=config.stage_name,
        tags=create_tags(env, f"{config.api_name}-{config.stage_name}"),
    ))

    graph.export(
        INVOKE_URL_OUTPUT,
        invoke_url(
            Ref(api.name, "id"),
            config.region,
            Ref(stage.name, "stage_name"),
            config.resource_path,
        ),
    )

    graph.validate()
    return graph
