"""
Typed resource records for the declared graph.

Each record is one node of desired state. Records hold plain attribute
values and Refs to other nodes; they never own their dependencies.

Class attributes per record type:
- kind: provider resource type token
- computed: attributes the provider assigns on create (ids, ARNs)
- replace_on: attributes that cannot change in place
- sensitive: attributes masked in apply logs
- replace_with_hints: replace whenever a node named in depends_on changes
"""

import hashlib
import json
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

from hello_infra.graph.references import Join, Ref, iter_refs, symbolic


@dataclass(frozen=True, kw_only=True)
class Resource:
    """Base record: a logical name plus explicit ordering hints."""

    kind: ClassVar[str] = ""
    computed: ClassVar[frozenset[str]] = frozenset({"id"})
    replace_on: ClassVar[frozenset[str]] = frozenset()
    sensitive: ClassVar[frozenset[str]] = frozenset()
    replace_with_hints: ClassVar[bool] = False

    name: str
    depends_on: tuple[str, ...] = ()

    def attributes(self) -> dict[str, Any]:
        """Declared attributes, without the logical name and ordering hints."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in ("name", "depends_on")
        }

    def references(self) -> list[Ref]:
        """Every Ref used by this node's attributes."""
        return list(iter_refs(self.attributes()))

    def dependencies(self) -> list[str]:
        """Names of nodes this node depends on, references first then hints."""
        names: list[str] = []
        for target in [ref.target for ref in self.references()] + list(self.depends_on):
            if target not in names:
                names.append(target)
        return names

    def exposes(self, attribute: str) -> bool:
        """Check whether other nodes may reference ``attribute`` of this node."""
        return attribute in self.computed or attribute in {
            f.name for f in fields(self) if f.name not in ("name", "depends_on")
        }


def fingerprint(*resources: Resource) -> str:
    """
    Stable digest of the declared attributes of ``resources``.

    References are hashed symbolically, so the digest changes only when a
    declaration changes.
    """
    payload = [
        {"name": r.name, "kind": r.kind, "attributes": symbolic(r.attributes())}
        for r in resources
    ]
    encoded = json.dumps(payload, sort_keys=True, default=str).encode()
    return hashlib.sha1(encoded).hexdigest()


# --- Secrets ---

@dataclass(frozen=True, kw_only=True)
class Secret(Resource):
    """Secrets Manager secret: the logical secret identity."""

    kind: ClassVar[str] = "aws:secretsmanager/secret:Secret"
    computed: ClassVar[frozenset[str]] = frozenset({"id", "arn"})
    replace_on: ClassVar[frozenset[str]] = frozenset({"secret_name"})

    secret_name: str
    description: str = ""
    recovery_window_in_days: int = 0
    tags: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class SecretVersion(Resource):
    """Payload attached to a secret. Versions are replaced, never edited."""

    kind: ClassVar[str] = "aws:secretsmanager/secretVersion:SecretVersion"
    computed: ClassVar[frozenset[str]] = frozenset({"id", "arn", "version_id"})
    replace_on: ClassVar[frozenset[str]] = frozenset({"secret_id", "secret_string"})
    sensitive: ClassVar[frozenset[str]] = frozenset({"secret_string"})

    secret_id: Ref
    secret_string: str


# --- IAM ---

@dataclass(frozen=True, kw_only=True)
class Role(Resource):
    """Execution identity with its trust policy."""

    kind: ClassVar[str] = "aws:iam/role:Role"
    computed: ClassVar[frozenset[str]] = frozenset({"id", "arn"})
    replace_on: ClassVar[frozenset[str]] = frozenset({"role_name"})

    role_name: str
    assume_role_policy: dict[str, Any]
    tags: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class RolePolicyAttachment(Resource):
    """Managed policy attached to a role."""

    kind: ClassVar[str] = "aws:iam/rolePolicyAttachment:RolePolicyAttachment"
    replace_on: ClassVar[frozenset[str]] = frozenset({"role", "policy_arn"})

    role: Ref
    policy_arn: str


@dataclass(frozen=True, kw_only=True)
class RolePolicy(Resource):
    """Inline permissions document on a role."""

    kind: ClassVar[str] = "aws:iam/rolePolicy:RolePolicy"
    replace_on: ClassVar[frozenset[str]] = frozenset({"role", "policy_name"})

    role: Ref
    policy_name: str
    policy: dict[str, Any]


# --- Compute ---

@dataclass(frozen=True, kw_only=True)
class LogGroup(Resource):
    """CloudWatch log group the function writes to."""

    kind: ClassVar[str] = "aws:cloudwatch/logGroup:LogGroup"
    computed: ClassVar[frozenset[str]] = frozenset({"id", "arn"})
    replace_on: ClassVar[frozenset[str]] = frozenset({"log_group_name"})

    log_group_name: str
    retention_in_days: int
    tags: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class Function(Resource):
    """Lambda function bound to an execution role."""

    kind: ClassVar[str] = "aws:lambda/function:Function"
    computed: ClassVar[frozenset[str]] = frozenset({"id", "arn", "invoke_arn"})
    replace_on: ClassVar[frozenset[str]] = frozenset({"function_name"})

    function_name: str
    role: Ref
    handler: str
    runtime: str
    code_path: str
    source_code_hash: str
    memory_size: int
    timeout: int
    environment: dict[str, Any] = field(default_factory=dict)
    tags: dict[str, str] = field(default_factory=dict)


# --- API Gateway ---

@dataclass(frozen=True, kw_only=True)
class RestApi(Resource):
    """Root of the API resource tree."""

    kind: ClassVar[str] = "aws:apigateway/restApi:RestApi"
    computed: ClassVar[frozenset[str]] = frozenset(
        {"id", "arn", "root_resource_id", "execution_arn"}
    )

    api_name: str
    description: str = ""
    tags: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class ApiResource(Resource):
    """One path segment under a parent resource."""

    kind: ClassVar[str] = "aws:apigateway/resource:Resource"
    computed: ClassVar[frozenset[str]] = frozenset({"id", "path"})
    replace_on: ClassVar[frozenset[str]] = frozenset({"rest_api", "parent_id", "path_part"})

    rest_api: Ref
    parent_id: Ref
    path_part: str


@dataclass(frozen=True, kw_only=True)
class ApiMethod(Resource):
    """HTTP verb on a resource, gated by an authorization mode."""

    kind: ClassVar[str] = "aws:apigateway/method:Method"
    replace_on: ClassVar[frozenset[str]] = frozenset({"rest_api", "resource_id", "http_method"})

    rest_api: Ref
    resource_id: Ref
    http_method: str
    authorization: str


@dataclass(frozen=True, kw_only=True)
class Integration(Resource):
    """Binds a method to the function that serves it."""

    kind: ClassVar[str] = "aws:apigateway/integration:Integration"
    replace_on: ClassVar[frozenset[str]] = frozenset({"rest_api", "resource_id", "http_method"})

    rest_api: Ref
    resource_id: Ref
    http_method: Ref
    integration_http_method: str
    type: str
    uri: Ref


@dataclass(frozen=True, kw_only=True)
class Permission(Resource):
    """Grant allowing a principal to invoke a function from a scoped source."""

    kind: ClassVar[str] = "aws:lambda/permission:Permission"
    replace_on: ClassVar[frozenset[str]] = frozenset(
        {"statement_id", "action", "function", "principal", "source_arn"}
    )

    statement_id: str
    action: str
    function: Ref
    principal: str
    source_arn: Join


@dataclass(frozen=True, kw_only=True)
class Deployment(Resource):
    """
    Immutable snapshot of the API.

    Replaced whenever ``triggers`` change or a node named in ``depends_on``
    is updated or replaced.
    """

    kind: ClassVar[str] = "aws:apigateway/deployment:Deployment"
    computed: ClassVar[frozenset[str]] = frozenset({"id", "created_date"})
    replace_on: ClassVar[frozenset[str]] = frozenset({"rest_api", "triggers"})
    replace_with_hints: ClassVar[bool] = True

    rest_api: Ref
    triggers: dict[str, Any]
    description: str = ""


@dataclass(frozen=True, kw_only=True)
class Stage(Resource):
    """Named pointer to a deployment. Repointed in place."""

    kind: ClassVar[str] = "aws:apigateway/stage:Stage"
    computed: ClassVar[frozenset[str]] = frozenset({"id", "arn", "invoke_url"})
    replace_on: ClassVar[frozenset[str]] = frozenset({"rest_api", "stage_name"})

    rest_api: Ref
    deployment: Ref
    stage_name: str
    tags: dict[str, str] = field(default_factory=dict)
