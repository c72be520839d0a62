"""
Tests for the end-to-end trust chain.

Each link fails at its own boundary: an unsigned caller at authentication,
a missing grant at invoke_permission, a missing policy at secret_access.
"""

from dataclasses import replace

import pytest

from hello_infra.graph import declaration as d
from hello_infra.graph.apply import apply
from hello_infra.graph.trust import (
    AUTHENTICATION,
    INVOKE_PERMISSION,
    SECRET_ACCESS,
    InvocationRequest,
    evaluate_trust_chain,
)


@pytest.fixture
def state(applied):
    return applied.state


@pytest.fixture
def signed_request():
    return InvocationRequest(http_method="GET", path="/hello", stage="dev", signed=True)


def _patch_inputs(state, name, **inputs):
    live = state.get(name)
    state.set(name, replace(live, inputs={**live.inputs, **inputs}))


class TestAllowed:
    """A fully applied stack lets signed callers through."""

    def test_signed_request_allowed(self, state, signed_request):
        decision = evaluate_trust_chain(state, signed_request)

        assert decision.allowed
        assert decision.failed_link is None

    def test_open_method_allows_unsigned(self, config, provider):
        graph = d.build_graph(replace(config, authorization="NONE"), code_hash="test-hash")
        state = apply(graph, provider).state

        request = InvocationRequest(http_method="GET", path="/hello", stage="dev")
        assert evaluate_trust_chain(state, request).allowed


class TestAuthentication:
    """First link: the method's authorization mode."""

    def test_unsigned_request_denied(self, state):
        request = InvocationRequest(http_method="GET", path="/hello", stage="dev")

        decision = evaluate_trust_chain(state, request)

        assert not decision.allowed
        assert decision.failed_link == AUTHENTICATION
        assert "signed" in decision.reason

    def test_unknown_stage(self, state, signed_request):
        decision = evaluate_trust_chain(state, replace(signed_request, stage="prod"))

        assert decision.failed_link == AUTHENTICATION

    def test_undeclared_method(self, state, signed_request):
        decision = evaluate_trust_chain(state, replace(signed_request, http_method="POST"))

        assert decision.failed_link == AUTHENTICATION

    def test_undeclared_path(self, state, signed_request):
        decision = evaluate_trust_chain(state, replace(signed_request, path="/other"))

        assert decision.failed_link == AUTHENTICATION


class TestInvokePermission:
    """Second link: API Gateway may invoke the function."""

    def test_missing_permission(self, state, signed_request):
        state.remove(d.INVOKE_PERMISSION)

        decision = evaluate_trust_chain(state, signed_request)

        assert decision.failed_link == INVOKE_PERMISSION

    def test_permission_for_other_path(self, state, signed_request):
        source_arn = state.get(d.INVOKE_PERMISSION).inputs["source_arn"]
        _patch_inputs(state, d.INVOKE_PERMISSION, source_arn=source_arn.replace("/hello", "/other"))

        decision = evaluate_trust_chain(state, signed_request)

        assert decision.failed_link == INVOKE_PERMISSION

    def test_permission_for_other_stage(self, state, signed_request):
        source_arn = state.get(d.INVOKE_PERMISSION).inputs["source_arn"]
        _patch_inputs(state, d.INVOKE_PERMISSION, source_arn=source_arn.replace("/dev/", "/prod/"))

        decision = evaluate_trust_chain(state, signed_request)

        assert decision.failed_link == INVOKE_PERMISSION

    def test_missing_integration(self, state, signed_request):
        state.remove(d.INTEGRATION)

        decision = evaluate_trust_chain(state, signed_request)

        assert decision.failed_link == INVOKE_PERMISSION


class TestSecretAccess:
    """Third link: the execution role may read the secret."""

    def test_missing_inline_policy(self, state, signed_request):
        state.remove(d.SECRET_READ_POLICY)

        decision = evaluate_trust_chain(state, signed_request)

        assert decision.failed_link == SECRET_ACCESS

    def test_policy_for_other_secret(self, state, signed_request):
        policy = state.get(d.SECRET_READ_POLICY).inputs["policy"]
        other = {
            **policy,
            "Statement": [{
                **policy["Statement"][0],
                "Resource": ["arn:aws:secretsmanager:us-east-1:123456789012:secret:other-abc123"],
            }],
        }
        _patch_inputs(state, d.SECRET_READ_POLICY, policy=other)

        decision = evaluate_trust_chain(state, signed_request)

        assert decision.failed_link == SECRET_ACCESS

    def test_role_not_trusting_lambda(self, state, signed_request):
        trust = state.get(d.LAMBDA_ROLE).inputs["assume_role_policy"]
        other = {
            **trust,
            "Statement": [{**trust["Statement"][0], "Principal": {"Service": "ec2.amazonaws.com"}}],
        }
        _patch_inputs(state, d.LAMBDA_ROLE, assume_role_policy=other)

        decision = evaluate_trust_chain(state, signed_request)

        assert decision.failed_link == SECRET_ACCESS

    def test_function_without_secret(self, state, signed_request):
        _patch_inputs(state, d.FUNCTION, environment={})

        decision = evaluate_trust_chain(state, signed_request)

        assert decision.failed_link == SECRET_ACCESS
