"""
Render declared values into Pulumi inputs.

Graph records hold Refs; Pulumi resources need Outputs. A binding maps each
Ref to the Pulumi input that carries its value, and ``render`` resolves a
declared value once every bound input is known.
"""

from typing import Any, Mapping

import pulumi

from hello_infra.exceptions import DanglingReferenceError
from hello_infra.graph.references import Ref, iter_refs, resolve


def render(
    value: Any,
    bindings: Mapping[Ref, pulumi.Input[Any]],
    context: str = "component",
) -> pulumi.Input[Any]:
    """
    Resolve ``value`` against Pulumi inputs.

    Args:
        value: Declared value (literal, Ref, Join, or a container of them)
        bindings: Pulumi input for each Ref used in ``value``
        context: Name reported when a Ref has no binding

    Returns:
        ``value`` unchanged if it holds no Refs, otherwise a pulumi.Output

    Raises:
        DanglingReferenceError: If a Ref in ``value`` is not bound
    """
    refs = list(dict.fromkeys(iter_refs(value)))
    if not refs:
        return value

    missing = [(context, str(ref)) for ref in refs if ref not in bindings]
    if missing:
        raise DanglingReferenceError(missing)

    def _resolve(values: list[Any]) -> Any:
        lookup = dict(zip(refs, values))
        return resolve(value, lookup.__getitem__)

    return pulumi.Output.all(*(bindings[ref] for ref in refs)).apply(_resolve)
