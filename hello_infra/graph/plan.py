"""
Diff a declared graph against live state.

Declared attributes are resolved against live outputs of their dependencies.
A dependency that will be created or replaced makes every reference into it
unknown, which counts as a change. Records flagged ``replace_with_hints``
(deployments) are also replaced when any node in their ``depends_on`` is
created, updated or replaced. The resulting plan is ordered so that
creates and updates follow the graph's topological order and deletes of
undeclared nodes run last, dependents before dependencies.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

from hello_infra.graph.graph import ResourceGraph
from hello_infra.graph.references import UNKNOWN, Ref, contains_unknown, resolve

logger = logging.getLogger(__name__)


@dataclass
class LiveResource:
    """
    A node as it exists in the cloud after an apply.

    Attributes:
        kind: Provider resource type token
        inputs: Resolved attributes the node was created or updated with
        outputs: Provider-assigned attributes (ids, ARNs)
        dependencies: Logical names the node depended on when applied
    """
    kind: str
    inputs: dict[str, Any]
    outputs: dict[str, Any] = field(default_factory=dict)
    dependencies: list[str] = field(default_factory=list)

    def get(self, attribute: str) -> Any:
        """Read an attribute, computed outputs taking precedence over inputs."""
        if attribute in self.outputs:
            return self.outputs[attribute]
        return self.inputs.get(attribute, UNKNOWN)


class LiveState:
    """Live resources keyed by logical name."""

    def __init__(self, resources: dict[str, LiveResource] | None = None) -> None:
        self._resources: dict[str, LiveResource] = dict(resources or {})

    def get(self, name: str) -> LiveResource | None:
        return self._resources.get(name)

    def set(self, name: str, resource: LiveResource) -> None:
        self._resources[name] = resource

    def remove(self, name: str) -> None:
        self._resources.pop(name, None)

    def names(self) -> list[str]:
        return list(self._resources)

    def of_kind(self, kind: str) -> list[tuple[str, LiveResource]]:
        return [(name, r) for name, r in self._resources.items() if r.kind == kind]

    def lookup(self, ref: Ref) -> Any:
        """Resolve a Ref against live state, UNKNOWN when absent."""
        resource = self._resources.get(ref.target)
        if resource is None:
            return UNKNOWN
        return resource.get(ref.attribute)

    def __contains__(self, name: object) -> bool:
        return name in self._resources

    def __len__(self) -> int:
        return len(self._resources)


class ChangeAction(str, Enum):
    """What the provider must do to a node."""

    CREATE = "create"
    UPDATE = "update"
    REPLACE = "replace"
    DELETE = "delete"
    NOOP = "no-op"


@dataclass(frozen=True)
class Change:
    """One planned action on one node."""

    name: str
    kind: str
    action: ChangeAction
    changed_attributes: tuple[str, ...] = ()

    def __str__(self) -> str:
        if self.changed_attributes:
            return f"{self.action.value} {self.name} ({', '.join(self.changed_attributes)})"
        return f"{self.action.value} {self.name}"


@dataclass
class Plan:
    """Ordered changes converging live state to the declared graph."""

    changes: list[Change] = field(default_factory=list)

    def __iter__(self) -> Iterator[Change]:
        return iter(self.changes)

    def __len__(self) -> int:
        return len(self.changes)

    @property
    def actionable(self) -> list[Change]:
        """Changes other than no-ops."""
        return [c for c in self.changes if c.action is not ChangeAction.NOOP]

    @property
    def is_empty(self) -> bool:
        """True when live state already matches the declaration."""
        return not self.actionable

    def for_resource(self, name: str) -> Change:
        for change in self.changes:
            if change.name == name:
                return change
        raise KeyError(name)

    def summary(self) -> dict[str, int]:
        """Count of changes per action."""
        counts = {action.value: 0 for action in ChangeAction}
        for change in self.changes:
            counts[change.action.value] += 1
        return counts


def _changed_attributes(declared: dict[str, Any], live: dict[str, Any]) -> list[str]:
    changed = []
    for key, value in declared.items():
        if contains_unknown(value) or live.get(key, UNKNOWN) != value:
            changed.append(key)
    return changed


def _delete_order(state: LiveState, names: list[str]) -> list[str]:
    """Order undeclared nodes so dependents are deleted before their dependencies."""
    remaining = set(names)
    ordered: list[str] = []
    while remaining:
        # Nodes nothing else in ``remaining`` depends on
        blocked = {
            dep
            for name in remaining
            for dep in state.get(name).dependencies
        }
        ready = sorted(name for name in remaining if name not in blocked) or sorted(remaining)
        ordered.extend(ready)
        remaining.difference_update(ready)
    return ordered


def plan(graph: ResourceGraph, state: LiveState) -> Plan:
    """
    Compute the changes needed to converge ``state`` to ``graph``.

    Args:
        graph: Declared graph
        state: Live state snapshot

    Returns:
        Plan: Changes in apply order

    Raises:
        DanglingReferenceError, CycleError: If the graph cannot be applied
    """
    order = graph.topological_order()
    pending: set[str] = set()
    # Nodes planned for create, update or replace
    touched: set[str] = set()
    changes: list[Change] = []

    def lookup(ref: Ref) -> Any:
        if ref.target in pending:
            return UNKNOWN
        return state.lookup(ref)

    for name in order:
        resource = graph.get(name)
        live = state.get(name)

        if live is None:
            changes.append(Change(name, resource.kind, ChangeAction.CREATE))
            pending.add(name)
            touched.add(name)
            continue

        if live.kind != resource.kind:
            changes.append(Change(name, resource.kind, ChangeAction.REPLACE, ("kind",)))
            pending.add(name)
            touched.add(name)
            continue

        declared = resolve(resource.attributes(), lookup)
        changed = _changed_attributes(declared, live.inputs)
        hinted = resource.replace_with_hints and any(
            dep in touched for dep in resource.depends_on
        )
        if hinted:
            changed.append("depends_on")

        if not changed:
            changes.append(Change(name, resource.kind, ChangeAction.NOOP))
        elif hinted or set(changed) & resource.replace_on:
            changes.append(Change(name, resource.kind, ChangeAction.REPLACE, tuple(changed)))
            pending.add(name)
            touched.add(name)
        else:
            changes.append(Change(name, resource.kind, ChangeAction.UPDATE, tuple(changed)))
            touched.add(name)

    undeclared = [name for name in state.names() if name not in graph]
    for name in _delete_order(state, undeclared):
        changes.append(Change(name, state.get(name).kind, ChangeAction.DELETE))

    result = Plan(changes)
    logger.info("Plan: %s", result.summary())
    return result
