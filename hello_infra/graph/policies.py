"""
IAM policy document builders and inspection helpers.

Documents are plain dicts in IAM JSON shape. Builders accept Refs where a
resource ARN is only known after apply.
"""

from fnmatch import fnmatchcase
from typing import Any

from hello_infra.configs.constants import POLICY_VERSION, SECRET_READ_ACTION


def trust_policy(service_principal: str) -> dict[str, Any]:
    """Trust policy letting exactly one service principal assume a role."""
    return {
        "Version": POLICY_VERSION,
        "Statement": [{
            "Effect": "Allow",
            "Principal": {"Service": service_principal},
            "Action": "sts:AssumeRole",
        }],
    }


def secret_read_policy(secret_arn: Any) -> dict[str, Any]:
    """Least-privilege read access to one secret, no wildcards."""
    return {
        "Version": POLICY_VERSION,
        "Statement": [{
            "Effect": "Allow",
            "Action": [SECRET_READ_ACTION],
            "Resource": [secret_arn],
        }],
    }


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _statements(document: dict[str, Any]) -> list[dict[str, Any]]:
    return _as_list(document.get("Statement"))


def trusted_principals(document: dict[str, Any]) -> set[str]:
    """Service principals allowed to assume the role."""
    principals: set[str] = set()
    for statement in _statements(document):
        if statement.get("Effect") != "Allow":
            continue
        if "sts:AssumeRole" not in _as_list(statement.get("Action")):
            continue
        principal = statement.get("Principal", {})
        if principal == "*":
            principals.add("*")
            continue
        principals.update(_as_list(principal.get("Service")))
        principals.update(_as_list(principal.get("AWS")))
    return principals


def policy_resources(document: dict[str, Any], action: str) -> list[Any]:
    """Resources an Allow statement grants ``action`` on."""
    resources: list[Any] = []
    for statement in _statements(document):
        if statement.get("Effect") != "Allow":
            continue
        actions = _as_list(statement.get("Action"))
        if any(fnmatchcase(action, pattern) for pattern in actions):
            resources.extend(_as_list(statement.get("Resource")))
    return resources


def is_wildcard(resource: Any) -> bool:
    """Check whether a resource pattern matches more than one exact ARN."""
    return isinstance(resource, str) and ("*" in resource or "?" in resource)


def allows(document: dict[str, Any], action: str, resource: str) -> bool:
    """
    Evaluate a permissions document for one action on one resource.

    An explicit Deny wins over any Allow.
    """
    allowed = False
    for statement in _statements(document):
        actions = _as_list(statement.get("Action"))
        resources = _as_list(statement.get("Resource"))
        if not any(fnmatchcase(action, pattern) for pattern in actions):
            continue
        if not any(fnmatchcase(resource, str(pattern)) for pattern in resources):
            continue
        if statement.get("Effect") == "Deny":
            return False
        if statement.get("Effect") == "Allow":
            allowed = True
    return allowed
