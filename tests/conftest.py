"""Shared pytest fixtures for graphwire tests."""

import pytest

from graphwire.container import Container
from graphwire.context import ResolutionContext
from graphwire.registry import ProviderRegistry
from tests.services import Service1, Service3, Service4, new_service2


@pytest.fixture()
def service_graph() -> list[object]:
    """Providers for Service1 through Service4."""
    return [Service1, new_service2, Service3, Service4]


@pytest.fixture()
def container(service_graph: list[object]) -> Container:
    """Container in default shared mode."""
    return Container(*service_graph)


@pytest.fixture()
def container_non_shared(service_graph: list[object]) -> Container:
    """Container with shared mode disabled by default."""
    return Container(*service_graph, shared_mode=False)


@pytest.fixture()
def resolution_context(service_graph: list[object]) -> ResolutionContext:
    """Shared-mode context with a private cache."""
    return ResolutionContext(shared_mode=True, registry=ProviderRegistry(*service_graph))
