"""
Resource graph: an arena of typed records plus an explicit edge list.

Edges come from two places: Refs inside a node's attributes, and the
node's ``depends_on`` hints for ordering that references cannot express.
Validation refuses dangling references and cycles; ordering is a
deterministic topological sort.
"""

import logging
from collections import deque
from typing import Any, Iterator

from hello_infra.exceptions import (
    CycleError,
    DanglingReferenceError,
    DuplicateResourceError,
    UnknownResourceError,
)
from hello_infra.graph.references import Ref, iter_refs
from hello_infra.graph.resources import Resource

logger = logging.getLogger(__name__)


class ResourceGraph:
    """Declared resources keyed by logical name, in declaration order."""

    def __init__(self) -> None:
        self._resources: dict[str, Resource] = {}
        self._outputs: dict[str, Any] = {}

    def add(self, resource: Resource) -> Resource:
        """
        Declare a resource.

        Args:
            resource: Record to add

        Returns:
            The same record, so declarations can be chained into Refs

        Raises:
            DuplicateResourceError: If the logical name is already taken
        """
        if resource.name in self._resources:
            raise DuplicateResourceError(resource.name)
        self._resources[resource.name] = resource
        return resource

    def export(self, name: str, value: Any) -> None:
        """Publish a derived value (a Ref or Join) for downstream consumers."""
        self._outputs[name] = value

    @property
    def outputs(self) -> dict[str, Any]:
        return dict(self._outputs)

    def get(self, name: str) -> Resource:
        try:
            return self._resources[name]
        except KeyError:
            raise UnknownResourceError(name) from None

    def of_type(self, resource_type: type) -> list[Resource]:
        """All resources that are instances of ``resource_type``."""
        return [r for r in self._resources.values() if isinstance(r, resource_type)]

    def __contains__(self, name: object) -> bool:
        return name in self._resources

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._resources.values())

    def __len__(self) -> int:
        return len(self._resources)

    # --- Edges ---

    def edges(self) -> list[tuple[str, str]]:
        """Every (dependent, dependency) pair in the graph."""
        return [
            (resource.name, dependency)
            for resource in self._resources.values()
            for dependency in resource.dependencies()
        ]

    def dependencies(self, name: str) -> list[str]:
        """Direct dependencies of ``name``."""
        return self.get(name).dependencies()

    def dependents(self, name: str) -> list[str]:
        """Nodes that depend directly on ``name``."""
        self.get(name)
        return [source for source, target in self.edges() if target == name]

    def upstream(self, name: str) -> set[str]:
        """Transitive dependencies of ``name``."""
        seen: set[str] = set()
        stack = list(self.dependencies(name))
        while stack:
            current = stack.pop()
            if current in seen or current not in self._resources:
                continue
            seen.add(current)
            stack.extend(self._resources[current].dependencies())
        return seen

    # --- Validation ---

    def validate(self) -> None:
        """
        Check the graph can be applied.

        Raises:
            DanglingReferenceError: If any reference or hint names an undeclared
                node, or a Ref asks for an attribute its target does not expose
            CycleError: If the dependency graph is not acyclic
        """
        dangling: list[tuple[str, str]] = []

        for resource in self._resources.values():
            for ref in resource.references():
                dangling.extend(self._check_ref(resource.name, ref))
            for hint in resource.depends_on:
                if hint not in self._resources:
                    dangling.append((resource.name, hint))

        for output_name, value in self._outputs.items():
            for ref in iter_refs(value):
                dangling.extend(self._check_ref(f"output:{output_name}", ref))

        if dangling:
            raise DanglingReferenceError(dangling)

        cycle = self._find_cycle()
        if cycle:
            raise CycleError(cycle)

        logger.debug("Graph valid: %d resources, %d edges", len(self), len(self.edges()))

    def _check_ref(self, source: str, ref: Ref) -> list[tuple[str, str]]:
        target = self._resources.get(ref.target)
        if target is None:
            return [(source, ref.target)]
        if not target.exposes(ref.attribute):
            return [(source, f"{ref.target}.{ref.attribute}")]
        return []

    def _find_cycle(self) -> list[str]:
        """Return the nodes of one cycle, or an empty list."""
        white, grey, black = 0, 1, 2
        colour = {name: white for name in self._resources}
        path: list[str] = []

        def visit(name: str) -> list[str]:
            colour[name] = grey
            path.append(name)
            for dependency in self._resources[name].dependencies():
                if colour[dependency] == grey:
                    return path[path.index(dependency):] + [dependency]
                if colour[dependency] == white:
                    found = visit(dependency)
                    if found:
                        return found
            path.pop()
            colour[name] = black
            return []

        for name in self._resources:
            if colour[name] == white:
                found = visit(name)
                if found:
                    return found
        return []

    # --- Ordering ---

    def topological_order(self) -> list[str]:
        """
        Names in apply order, dependencies first.

        Ties are broken by declaration order so the result is stable.

        Raises:
            DanglingReferenceError, CycleError: See validate()
        """
        return [name for level in self.levels() for name in level]

    def levels(self) -> list[list[str]]:
        """
        Group nodes into waves whose members do not depend on each other.

        Each wave only depends on earlier waves, so its members may be
        applied in parallel.
        """
        self.validate()

        position = {name: index for index, name in enumerate(self._resources)}
        remaining = {
            name: set(resource.dependencies())
            for name, resource in self._resources.items()
        }
        ready = deque(sorted(
            (name for name, deps in remaining.items() if not deps),
            key=position.__getitem__,
        ))

        levels: list[list[str]] = []
        while ready:
            level = list(ready)
            ready.clear()
            levels.append(level)
            for name in level:
                del remaining[name]
            newly_ready = []
            for name, deps in remaining.items():
                deps.difference_update(level)
                if not deps:
                    newly_ready.append(name)
            ready.extend(sorted(newly_ready, key=position.__getitem__))

        return levels
