"""
Component tests against the Pulumi mock runtime.

Validates:
1. The inline policy document names exactly the created secret's ARN
2. The invoke permission is scoped to the created API's execution ARN
3. The exported invoke URL points at the created API and stage
4. Declared values from the graph reach the Pulumi resources unchanged
5. Stack outputs are written to the env file only once they resolve
"""

import json
from pathlib import Path

import pulumi

from hello_infra.graph.resources import Function, RestApi, Role, Secret

REGION = "us-east-1"
ACCOUNT = "123456789012"
PROJECT_ROOT = Path(__file__).parent.parent.parent


class HelloMocks(pulumi.runtime.Mocks):
    """Echo inputs back and fill in the computed attributes AWS would assign."""

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        outputs = dict(args.inputs)
        resource_id = f"{args.name}-id"

        if args.typ == Secret.kind:
            outputs["arn"] = f"arn:aws:secretsmanager:{REGION}:{ACCOUNT}:secret:{args.inputs['name']}"
        elif args.typ == Role.kind:
            resource_id = args.inputs["name"]
            outputs["arn"] = f"arn:aws:iam::{ACCOUNT}:role/{args.inputs['name']}"
        elif args.typ == Function.kind:
            arn = f"arn:aws:lambda:{REGION}:{ACCOUNT}:function:{args.inputs['name']}"
            outputs["arn"] = arn
            outputs["invokeArn"] = (
                f"arn:aws:apigateway:{REGION}:lambda:path/2015-03-31/functions/{arn}/invocations"
            )
        elif args.typ == RestApi.kind:
            resource_id = "a1b2c3d4e5"
            outputs["rootResourceId"] = "root123456"
            outputs["executionArn"] = f"arn:aws:execute-api:{REGION}:{ACCOUNT}:{resource_id}"

        return [resource_id, outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        return {}


pulumi.runtime.set_mocks(HelloMocks(), preview=False)

# Imported after the mocks are installed
from hello_infra.components.compute.lambda_function import LambdaFunctionComponent  # noqa: E402
from hello_infra.components.edge.rest_api import RestApiComponent  # noqa: E402
from hello_infra.components.security.iam_roles import LambdaRoleComponent  # noqa: E402
from hello_infra.components.security.secrets_manager import SecretComponent  # noqa: E402
from hello_infra.configs.base import default_config  # noqa: E402
from hello_infra.graph.declaration import DEPLOYMENT, build_graph  # noqa: E402
from hello_infra.utils.outputs import write_outputs_to_env  # noqa: E402

INVOKE_ARN = (
    f"arn:aws:apigateway:{REGION}:lambda:path/2015-03-31/functions/"
    f"arn:aws:lambda:{REGION}:{ACCOUNT}:function:my_lambda_function/invocations"
)


def _graph():
    return build_graph(default_config(), code_hash="test-hash")


@pulumi.runtime.test
def test_secret_named_from_graph():
    secret = SecretComponent("secret-naming", _graph())

    def check(name):
        assert name == "my_secret"

    return secret.get_outputs().secret_name.apply(check)


@pulumi.runtime.test
def test_inline_policy_names_secret_arn():
    graph = _graph()
    secret = SecretComponent("policy-secret", graph)
    role = LambdaRoleComponent(
        "policy-lambda",
        graph=graph,
        secret_arn=secret.get_outputs().secret_arn,
    )

    def check(args):
        secret_arn, policy = args
        document = json.loads(policy)
        assert document["Statement"][0]["Resource"] == [secret_arn]
        assert document["Statement"][0]["Action"] == ["secretsmanager:GetSecretValue"]

    return pulumi.Output.all(secret.secret.arn, role.secret_read_policy.policy).apply(check)


@pulumi.runtime.test
def test_role_trusts_lambda():
    role = LambdaRoleComponent("trust-lambda", graph=_graph(), secret_arn="arn:secret")

    def check(args):
        name, trust = args
        assert name == "hello-infra-dev-lambda-role"
        statement = json.loads(trust)["Statement"][0]
        assert statement["Principal"] == {"Service": "lambda.amazonaws.com"}

    return pulumi.Output.all(role.role.name, role.role.assume_role_policy).apply(check)


@pulumi.runtime.test
def test_function_bound_to_role():
    role_arn = f"arn:aws:iam::{ACCOUNT}:role/hello-infra-dev-lambda-role"
    function = LambdaFunctionComponent(
        "function-binding",
        graph=_graph(),
        role_arn=role_arn,
        secret_arn="arn:secret",
        code_root=PROJECT_ROOT,
    )

    def check(args):
        name, handler, role, log_group = args
        assert name == "my_lambda_function"
        assert handler == "index.handler"
        assert role == role_arn
        assert log_group == "/aws/lambda/my_lambda_function"

    return pulumi.Output.all(
        function.function.name,
        function.function.handler,
        function.function.role,
        function.log_group.name,
    ).apply(check)


@pulumi.runtime.test
def test_invoke_url_points_at_stage():
    api = RestApiComponent(
        "url-api",
        graph=_graph(),
        function_name="my_lambda_function",
        invoke_arn=INVOKE_ARN,
    )
    outputs = api.get_outputs()

    def check(args):
        api_id, url = args
        assert url == f"https://{api_id}.execute-api.us-east-1.amazonaws.com/dev/hello"

    return pulumi.Output.all(outputs.api_id, outputs.invoke_url).apply(check)


@pulumi.runtime.test
def test_permission_scoped_to_route():
    api = RestApiComponent(
        "scope-api",
        graph=_graph(),
        function_name="my_lambda_function",
        invoke_arn=INVOKE_ARN,
    )

    def check(args):
        execution_arn, source_arn, principal = args
        assert source_arn == f"{execution_arn}/dev/GET/hello"
        assert principal == "apigateway.amazonaws.com"

    return pulumi.Output.all(
        api.api.execution_arn,
        api.permission.source_arn,
        api.permission.principal,
    ).apply(check)


@pulumi.runtime.test
def test_deployment_triggers_resolve_function_arn():
    graph = _graph()
    api = RestApiComponent(
        "trigger-api",
        graph=graph,
        function_name="my_lambda_function",
        invoke_arn=INVOKE_ARN,
    )

    def check(triggers):
        assert triggers == {
            "redeployment": graph.get(DEPLOYMENT).triggers["redeployment"],
            "integration_uri": INVOKE_ARN,
        }

    return api.deployment.triggers.apply(check)


@pulumi.runtime.test
def test_outputs_written_to_env_file(tmp_path):
    target = tmp_path / "infrastructure.env"
    outputs = {
        "api_id": pulumi.Output.from_input("a1b2c3d4e5"),
        "invoke_url": pulumi.Output.from_input(
            "https://a1b2c3d4e5.execute-api.us-east-1.amazonaws.com/dev/hello"
        ),
        "stage_name": "dev",
    }

    def check(written):
        assert written == str(target)
        assert target.read_text() == (
            "API_ID=a1b2c3d4e5\n"
            "INVOKE_URL=https://a1b2c3d4e5.execute-api.us-east-1.amazonaws.com/dev/hello\n"
            "STAGE_NAME=dev\n"
        )

    return write_outputs_to_env(outputs, str(target)).apply(check)


@pulumi.runtime.test
def test_outputs_not_written_during_preview(tmp_path, monkeypatch):
    monkeypatch.setattr(pulumi.runtime, "is_dry_run", lambda: True)
    target = tmp_path / "infrastructure.env"

    def check(written):
        assert written is None
        assert not target.exists()

    return write_outputs_to_env(
        {"api_id": pulumi.Output.from_input("a1b2c3d4e5")},
        str(target),
    ).apply(check)
