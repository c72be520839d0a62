"""
Exception hierarchy for hello-infra.

Provides layered exception structure for configuration, graph and apply errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the graph and Pulumi program
"""

from typing import Any


class InfraError(Exception):
    """Base exception for all hello-infra errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(InfraError):
    """Raised when a configuration value is outside the provider's accepted domain."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error message
            field: Config field that failed validation
            details: Additional context
        """
        details = dict(details or {})
        if field:
            details["field"] = field
        super().__init__(message, details)


class GraphError(InfraError):
    """Base exception for resource graph errors."""


class DuplicateResourceError(GraphError):
    """Raised when two resources are declared with the same logical name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Resource declared twice: {name}", {"resource": name})
        self.name = name


class UnknownResourceError(GraphError):
    """Raised when a lookup names a resource that is not in the graph."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Resource not found: {name}", {"resource": name})
        self.name = name


class DanglingReferenceError(GraphError):
    """Raised when one or more references point at undeclared resources."""

    def __init__(self, dangling: list[tuple[str, str]]) -> None:
        """
        Initialize dangling reference error.

        Args:
            dangling: (source resource, missing target) pairs
        """
        self.dangling = dangling
        summary = ", ".join(f"{source} -> {target}" for source, target in dangling)
        super().__init__(
            f"Unresolved references: {summary}",
            {"count": len(dangling)},
        )


class CycleError(GraphError):
    """Raised when the dependency graph is not acyclic."""

    def __init__(self, cycle: list[str]) -> None:
        """
        Initialize cycle error.

        Args:
            cycle: Resource names on the cycle, first name repeated at the end
        """
        self.cycle = cycle
        super().__init__(
            f"Dependency cycle: {' -> '.join(cycle)}",
            {"length": len(cycle) - 1},
        )


class ApplyError(InfraError):
    """Raised when the provider rejects a change. No rollback is attempted."""

    def __init__(
        self,
        resource: str,
        action: str,
        provider_error: Exception,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize apply error.

        Args:
            resource: Logical name of the node that failed
            action: Change action being applied (create, update, ...)
            provider_error: The raw error returned by the provider
            details: Additional context
        """
        details = dict(details or {})
        details.update({"resource": resource, "action": action})
        self.resource = resource
        self.action = action
        self.provider_error = provider_error
        super().__init__(
            f"Failed to {action} {resource}: {provider_error}",
            details,
        )
