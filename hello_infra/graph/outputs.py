"""
Derived strings published by the stack: invoke URL and permission source ARN.

Each helper accepts literal strings or Refs, so the same function builds the
declared (symbolic) value and the concrete one.
"""

from typing import Any

from hello_infra.configs.constants import INVOKE_URL_TEMPLATE
from hello_infra.graph.references import Join


def invoke_url(api_id: Any, region: str, stage: Any, path: str) -> Any:
    """
    URL of ``path`` on a REST API stage.

    Returns a plain string when every part is a string, otherwise a Join.
    """
    if isinstance(api_id, str) and isinstance(stage, str):
        return INVOKE_URL_TEMPLATE.format(api_id=api_id, region=region, stage=stage, path=path)
    return Join(
        "https://", api_id, f".execute-api.{region}.amazonaws.com/", stage, path,
    )


def permission_source_arn(execution_arn: Any, stage: str, http_method: str, path: str) -> Any:
    """
    Source ARN scoping an invoke permission to one stage, method and path.

    Format: {execution-arn}/{stage}/{method}{path}
    """
    suffix = f"/{stage}/{http_method}{path}"
    if isinstance(execution_arn, str):
        return f"{execution_arn}{suffix}"
    return Join(execution_arn, suffix)
