"""
Tag factory for AWS resources.

Every declared resource carries the project defaults plus its environment and
name. Tags are checked against the limits AWS enforces on create, so a bad tag
fails at declaration time instead of mid-apply.
"""

from hello_infra.configs.constants import DEFAULT_TAGS
from hello_infra.exceptions import ConfigurationError

MAX_TAGS = 50
MAX_KEY_LENGTH = 128
MAX_VALUE_LENGTH = 256
RESERVED_PREFIX = "aws:"


def validate_tags(tags: dict[str, str]) -> dict[str, str]:
    """
    Check a tag set against the AWS tagging limits.

    Returns:
        The same tags

    Raises:
        ConfigurationError: If a tag would be rejected by AWS
    """
    if len(tags) > MAX_TAGS:
        raise ConfigurationError(
            f"Too many tags: {len(tags)} (limit {MAX_TAGS})",
            field="tags",
        )
    for key, value in tags.items():
        if not key or len(key) > MAX_KEY_LENGTH:
            raise ConfigurationError(f"Invalid tag key: {key!r}", field="tags")
        if key.lower().startswith(RESERVED_PREFIX):
            raise ConfigurationError(f"Tag key uses reserved prefix: {key}", field="tags")
        if len(value) > MAX_VALUE_LENGTH:
            raise ConfigurationError(f"Tag value too long for {key}", field="tags")
    return tags


def create_tags(
    environment: str,
    resource_name: str,
    **extra_tags: str,
) -> dict[str, str]:
    """
    Create a standard tag set for an AWS resource.

    Args:
        environment: Deployment environment
        resource_name: Name of the resource
        **extra_tags: Additional tags to include, overriding the defaults

    Returns:
        Validated dictionary of tags

    Raises:
        ConfigurationError: If the result breaks an AWS tagging limit
    """
    tags = {
        **DEFAULT_TAGS,
        "Environment": environment,
        "Name": resource_name,
    }
    tags.update(extra_tags)
    return validate_tags(tags)
