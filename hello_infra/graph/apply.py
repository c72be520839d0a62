"""
Apply a plan through a provider, in dependency order.

Each node's references are resolved against nodes applied earlier in the
same run. The first provider failure stops the run and is reported as an
ApplyError naming the node; nodes already applied stay applied.
"""

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from hello_infra.exceptions import ApplyError
from hello_infra.graph.graph import ResourceGraph
from hello_infra.graph.plan import ChangeAction, LiveResource, LiveState, Plan, plan
from hello_infra.graph.references import contains_unknown, resolve
from hello_infra.observability.log_utils import log_with_context, redact

logger = logging.getLogger(__name__)


class Provider(Protocol):
    """Cloud control plane the apply step talks to."""

    def create(self, kind: str, name: str, inputs: dict[str, Any]) -> dict[str, Any]:
        """Create a resource and return its computed outputs."""

    def update(self, kind: str, name: str, inputs: dict[str, Any], current: LiveResource) -> dict[str, Any]:
        """Update a resource in place and return its computed outputs."""

    def delete(self, kind: str, name: str, current: LiveResource) -> None:
        """Delete a resource."""


@dataclass
class ApplyResult:
    """Outcome of a successful apply."""

    plan: Plan
    state: LiveState
    outputs: dict[str, Any] = field(default_factory=dict)


def apply(graph: ResourceGraph, provider: Provider, state: LiveState | None = None) -> ApplyResult:
    """
    Converge live state to ``graph``.

    Args:
        graph: Declared graph
        provider: Control plane implementation
        state: Live state to update in place; a new empty state when omitted

    Returns:
        ApplyResult: The executed plan, the updated state and resolved outputs

    Raises:
        DanglingReferenceError, CycleError: Before any change is made
        ApplyError: When the provider rejects a change
    """
    state = state if state is not None else LiveState()
    planned = plan(graph, state)

    for change in planned.actionable:
        log_with_context(
            logger, logging.INFO, f"Applying {change}",
            resource=change.name,
            action=change.action.value,
            changed=", ".join(change.changed_attributes),
        )
        try:
            if change.action is ChangeAction.DELETE:
                current = state.get(change.name)
                provider.delete(current.kind, change.name, current)
                state.remove(change.name)
                continue

            resource = graph.get(change.name)
            inputs = resolve(resource.attributes(), state.lookup)
            if contains_unknown(inputs):
                # Only reachable when a dependency failed silently
                raise RuntimeError("unresolved reference after dependencies were applied")
            logger.debug("Inputs for %s: %s", change.name, redact(inputs, resource.sensitive))

            if change.action is ChangeAction.CREATE:
                outputs = provider.create(resource.kind, change.name, inputs)
            elif change.action is ChangeAction.REPLACE:
                current = state.get(change.name)
                provider.delete(current.kind, change.name, current)
                state.remove(change.name)
                outputs = provider.create(resource.kind, change.name, inputs)
            else:
                outputs = provider.update(resource.kind, change.name, inputs, state.get(change.name))
        except Exception as exc:
            raise ApplyError(change.name, change.action.value, exc) from exc

        state.set(change.name, LiveResource(
            kind=resource.kind,
            inputs=inputs,
            outputs=outputs,
            dependencies=resource.dependencies(),
        ))

    outputs = {name: resolve(value, state.lookup) for name, value in graph.outputs.items()}
    return ApplyResult(plan=planned, state=state, outputs=outputs)


def _short_id(seed: str, length: int) -> str:
    return hashlib.sha1(seed.encode()).hexdigest()[:length]


class InMemoryProvider:
    """
    Simulated control plane for local planning and tests.

    Assigns ids and ARNs in the formats AWS uses. ``failures`` maps a
    logical name to the exception its next create or update should raise.
    """

    def __init__(
        self,
        region: str = "us-east-1",
        account_id: str = "123456789012",
        failures: dict[str, Exception] | None = None,
    ) -> None:
        self.region = region
        self.account_id = account_id
        self.failures = dict(failures or {})
        self.calls: list[tuple[str, str]] = []
        self._serial = 0

    def create(self, kind: str, name: str, inputs: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("create", name))
        self._raise_if_failing(name)
        self._serial += 1
        return self._outputs(kind, name, inputs, f"{name}:{self._serial}")

    def update(self, kind: str, name: str, inputs: dict[str, Any], current: LiveResource) -> dict[str, Any]:
        self.calls.append(("update", name))
        self._raise_if_failing(name)
        return dict(current.outputs)

    def delete(self, kind: str, name: str, current: LiveResource) -> None:
        self.calls.append(("delete", name))

    def _raise_if_failing(self, name: str) -> None:
        error = self.failures.pop(name, None)
        if error is not None:
            raise error

    def _outputs(self, kind: str, name: str, inputs: dict[str, Any], seed: str) -> dict[str, Any]:
        region, account = self.region, self.account_id
        short = _short_id(seed, 10)

        if kind == "aws:secretsmanager/secret:Secret":
            arn = f"arn:aws:secretsmanager:{region}:{account}:secret:{inputs['secret_name']}-{short[:6]}"
            return {"id": arn, "arn": arn}
        if kind == "aws:secretsmanager/secretVersion:SecretVersion":
            version_id = _short_id(seed, 32)
            return {
                "id": f"{inputs['secret_id']}|{version_id}",
                "arn": inputs["secret_id"],
                "version_id": version_id,
            }
        if kind == "aws:iam/role:Role":
            return {
                "id": inputs["role_name"],
                "arn": f"arn:aws:iam::{account}:role/{inputs['role_name']}",
            }
        if kind == "aws:iam/rolePolicyAttachment:RolePolicyAttachment":
            return {"id": f"{inputs['role']}-{short}"}
        if kind == "aws:iam/rolePolicy:RolePolicy":
            return {"id": f"{inputs['role']}:{inputs['policy_name']}"}
        if kind == "aws:cloudwatch/logGroup:LogGroup":
            return {
                "id": inputs["log_group_name"],
                "arn": f"arn:aws:logs:{region}:{account}:log-group:{inputs['log_group_name']}",
            }
        if kind == "aws:lambda/function:Function":
            arn = f"arn:aws:lambda:{region}:{account}:function:{inputs['function_name']}"
            return {
                "id": inputs["function_name"],
                "arn": arn,
                "invoke_arn": (
                    f"arn:aws:apigateway:{region}:lambda:path/2015-03-31/functions/{arn}/invocations"
                ),
            }
        if kind == "aws:apigateway/restApi:RestApi":
            return {
                "id": short,
                "arn": f"arn:aws:apigateway:{region}::/restapis/{short}",
                "root_resource_id": _short_id(seed + ":root", 10),
                "execution_arn": f"arn:aws:execute-api:{region}:{account}:{short}",
            }
        if kind == "aws:apigateway/resource:Resource":
            return {"id": short[:6], "path": f"/{inputs['path_part']}"}
        if kind == "aws:apigateway/method:Method":
            return {"id": f"agm-{inputs['rest_api']}-{inputs['resource_id']}-{inputs['http_method']}"}
        if kind == "aws:apigateway/integration:Integration":
            return {"id": f"agi-{inputs['rest_api']}-{inputs['resource_id']}-{inputs['http_method']}"}
        if kind == "aws:lambda/permission:Permission":
            return {"id": inputs["statement_id"]}
        if kind == "aws:apigateway/deployment:Deployment":
            return {"id": short[:6], "created_date": f"serial-{self._serial}"}
        if kind == "aws:apigateway/stage:Stage":
            return {
                "id": f"ags-{inputs['rest_api']}-{inputs['stage_name']}",
                "arn": (
                    f"arn:aws:apigateway:{region}::/restapis/{inputs['rest_api']}"
                    f"/stages/{inputs['stage_name']}"
                ),
                "invoke_url": (
                    f"https://{inputs['rest_api']}.execute-api.{region}.amazonaws.com"
                    f"/{inputs['stage_name']}"
                ),
            }
        return {"id": short}
