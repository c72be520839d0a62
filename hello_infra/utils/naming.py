"""
Resource naming conventions for the hello stack.

Physical names follow {project}-{environment}-{resource}. Inline policy names
only need to be unique within their role, and log group names are fixed by
Lambda. Every generated name is checked against the length AWS accepts for
that resource type.
"""

from dataclasses import dataclass

from hello_infra.exceptions import ConfigurationError

# Maximum name lengths accepted by AWS
ROLE_NAME_LIMIT = 64
POLICY_NAME_LIMIT = 128
LOG_GROUP_NAME_LIMIT = 512


def _within_limit(name: str, limit: int, resource_type: str) -> str:
    if len(name) > limit:
        raise ConfigurationError(
            f"{resource_type} name exceeds {limit} characters: {name}",
            field="name",
            details={"length": len(name)},
        )
    return name


@dataclass
class ResourceNamer:
    """
    Generates physical names for declared resources.

    Attributes:
        project: Project identifier
        environment: Deployment environment, also the stage name
    """
    project: str
    environment: str

    def name(self, resource: str) -> str:
        """
        Name an environment-scoped resource, e.g. the execution role.

        Args:
            resource: Resource identifier (e.g., 'lambda-role')

        Returns:
            Formatted resource name

        Raises:
            ConfigurationError: If the name is longer than an IAM role name may be
        """
        return _within_limit(
            f"{self.project}-{self.environment}-{resource}",
            ROLE_NAME_LIMIT,
            "Resource",
        )

    def policy_name(self, purpose: str) -> str:
        """Inline policy name, unique within its role."""
        return _within_limit(f"{self.project}-{purpose}", POLICY_NAME_LIMIT, "Policy")

    def log_group_name(self, function_name: str) -> str:
        """
        CloudWatch log group Lambda writes to for ``function_name``.

        Lambda picks the group by name, so this must not carry a prefix.
        """
        return _within_limit(f"/aws/lambda/{function_name}", LOG_GROUP_NAME_LIMIT, "Log group")
