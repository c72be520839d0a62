"""
End-to-end trust chain evaluation over live state.

A request to the API succeeds only if every link holds, checked in order:
1. authentication: the method's authorization mode accepts the caller
2. invoke_permission: a Permission lets API Gateway invoke the function
   from exactly this API, stage, method and path
3. secret_access: the function's role trusts Lambda and an inline policy
   lets it read the secret the function is configured with

The decision names the first link that fails, so a broken grant fails at
its own boundary and not earlier or later.
"""

from dataclasses import dataclass
from fnmatch import fnmatchcase

from hello_infra.configs.constants import (
    APIGATEWAY_SERVICE_PRINCIPAL,
    LAMBDA_SERVICE_PRINCIPAL,
    SECRET_READ_ACTION,
)
from hello_infra.graph.plan import LiveResource, LiveState
from hello_infra.graph.policies import allows, trusted_principals
from hello_infra.graph.resources import (
    ApiMethod,
    ApiResource,
    Function,
    Integration,
    Permission,
    RestApi,
    Role,
    RolePolicy,
    Stage,
)

AUTHENTICATION = "authentication"
INVOKE_PERMISSION = "invoke_permission"
SECRET_ACCESS = "secret_access"


@dataclass(frozen=True)
class InvocationRequest:
    """
    A caller's request to the API.

    Attributes:
        http_method: Request verb
        path: Resource path, e.g. /hello
        stage: Stage name in the URL
        signed: Whether the request carries SigV4 caller credentials
    """
    http_method: str
    path: str
    stage: str
    signed: bool = False


@dataclass(frozen=True)
class TrustDecision:
    """Result of walking the trust chain."""

    allowed: bool
    failed_link: str | None = None
    reason: str = ""


def _deny(link: str, reason: str) -> TrustDecision:
    return TrustDecision(allowed=False, failed_link=link, reason=reason)


def _single(state: LiveState, kind: str) -> tuple[str, LiveResource] | None:
    found = state.of_kind(kind)
    return found[0] if found else None


def evaluate_trust_chain(state: LiveState, request: InvocationRequest) -> TrustDecision:
    """
    Decide whether ``request`` would reach the secret.

    Args:
        state: Live state after apply
        request: Caller's request

    Returns:
        TrustDecision: allowed, or the first failing link with a reason
    """
    # --- Link 1: edge authentication ---
    api = _single(state, RestApi.kind)
    stage = next(
        (r for _, r in state.of_kind(Stage.kind) if r.get("stage_name") == request.stage),
        None,
    )
    if api is None or stage is None:
        return _deny(AUTHENTICATION, f"no stage {request.stage!r} is deployed")

    resources = {r.get("id"): r for _, r in state.of_kind(ApiResource.kind)}
    method = None
    for _, candidate in state.of_kind(ApiMethod.kind):
        resource = resources.get(candidate.get("resource_id"))
        if resource is None or resource.get("path") != request.path:
            continue
        if candidate.get("http_method") in (request.http_method, "ANY"):
            method = candidate
            break
    if method is None:
        return _deny(AUTHENTICATION, f"no method {request.http_method} {request.path}")

    authorization = method.get("authorization")
    if authorization == "AWS_IAM" and not request.signed:
        return _deny(AUTHENTICATION, "method requires signed caller credentials")
    if authorization not in ("NONE", "AWS_IAM"):
        return _deny(AUTHENTICATION, f"authorizer {authorization} is not evaluated locally")

    # --- Link 2: permission to invoke the function ---
    integration = next(
        (
            r for _, r in state.of_kind(Integration.kind)
            if r.get("resource_id") == method.get("resource_id")
            and r.get("http_method") == method.get("http_method")
        ),
        None,
    )
    if integration is None:
        return _deny(INVOKE_PERMISSION, "method has no integration")

    function = next(
        (r for _, r in state.of_kind(Function.kind) if r.get("invoke_arn") == integration.get("uri")),
        None,
    )
    if function is None:
        return _deny(INVOKE_PERMISSION, "integration targets an unknown function")

    source_arn = (
        f"{api[1].get('execution_arn')}/{request.stage}/{request.http_method}{request.path}"
    )
    granted = any(
        r.get("principal") == APIGATEWAY_SERVICE_PRINCIPAL
        and r.get("action") == "lambda:InvokeFunction"
        and r.get("function") in (function.get("function_name"), function.get("arn"))
        and fnmatchcase(source_arn, str(r.get("source_arn")))
        for _, r in state.of_kind(Permission.kind)
    )
    if not granted:
        return _deny(INVOKE_PERMISSION, f"no permission for source {source_arn}")

    # --- Link 3: execution role may read the secret ---
    role = next(
        (r for _, r in state.of_kind(Role.kind) if r.get("arn") == function.get("role")),
        None,
    )
    if role is None:
        return _deny(SECRET_ACCESS, "function role does not exist")
    if LAMBDA_SERVICE_PRINCIPAL not in trusted_principals(role.get("assume_role_policy")):
        return _deny(SECRET_ACCESS, "role does not trust the Lambda service")

    secret_arn = (function.get("environment") or {}).get("SECRET_ARN")
    if not secret_arn:
        return _deny(SECRET_ACCESS, "function is not configured with a secret")

    readable = any(
        r.get("role") == role.get("id")
        and allows(r.get("policy"), SECRET_READ_ACTION, secret_arn)
        for _, r in state.of_kind(RolePolicy.kind)
    )
    if not readable:
        return _deny(SECRET_ACCESS, f"role may not read {secret_arn}")

    return TrustDecision(allowed=True)
