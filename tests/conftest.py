"""
Shared test fixtures for the whole test suite.

Provides: canonical config, the declared graph, an applied in-memory stack
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

from pathlib import Path

import pytest

from hello_infra.configs.base import EnvironmentConfig, default_config
from hello_infra.graph.apply import ApplyResult, InMemoryProvider, apply
from hello_infra.graph.declaration import build_graph
from hello_infra.graph.graph import ResourceGraph

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def project_root() -> Path:
    """Repository root, where the lambda/ code directory lives."""
    return PROJECT_ROOT


@pytest.fixture
def config() -> EnvironmentConfig:
    """Canonical dev configuration."""
    return default_config()


@pytest.fixture
def graph(config) -> ResourceGraph:
    """Declared graph with a fixed code hash, independent of the filesystem."""
    return build_graph(config, code_hash="test-hash")


@pytest.fixture
def provider() -> InMemoryProvider:
    """Fresh simulated control plane."""
    return InMemoryProvider()


@pytest.fixture
def applied(graph, provider) -> ApplyResult:
    """Stack applied once from empty state."""
    return apply(graph, provider)
