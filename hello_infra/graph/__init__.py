"""
Typed resource graph for the hello stack.

Declares nodes and edges, validates references and acyclicity, orders
nodes topologically, plans against live state and applies through a provider.
"""

from hello_infra.graph.apply import ApplyResult, InMemoryProvider, Provider, apply
from hello_infra.graph.graph import ResourceGraph
from hello_infra.graph.plan import Change, ChangeAction, LiveResource, LiveState, Plan, plan
from hello_infra.graph.references import Join, Ref
from hello_infra.graph.trust import InvocationRequest, TrustDecision, evaluate_trust_chain

__all__ = [
    "ResourceGraph",
    "Ref",
    "Join",
    "plan",
    "Plan",
    "Change",
    "ChangeAction",
    "LiveResource",
    "LiveState",
    "apply",
    "ApplyResult",
    "Provider",
    "InMemoryProvider",
    "InvocationRequest",
    "TrustDecision",
    "evaluate_trust_chain",
]
