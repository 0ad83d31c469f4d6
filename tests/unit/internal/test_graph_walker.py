import pytest

from graphwire.context import ResolutionContext
from graphwire.exceptions import CircularDependencyError, NotFoundError
from graphwire.graph import DependencyGraph, GraphWalker
from graphwire.registry import ProviderRegistry
from tests.services import (
    Service1,
    Service2,
    Service3,
    Service4,
    new_service2,
    new_service2_needing_service1,
)


class Pair:
    def __init__(self, left: Service2, right: Service3) -> None:
        self.left = left
        self.right = right


class Shared:
    def __init__(self, service2: Service2, service1: Service1) -> None:
        self.service2 = service2
        self.service1 = service1


def _context(*sources: object) -> ResolutionContext:
    return ResolutionContext(shared_mode=True, registry=ProviderRegistry(*sources))


def test_resolve_builds_tree_in_declaration_order() -> None:
    graph = GraphWalker().resolve(_context(Pair, new_service2, Service3, Service4), Pair)

    assert graph == DependencyGraph(
        key=Pair,
        dependencies=(
            DependencyGraph(key=Service2, dependencies=(DependencyGraph(key=Service4),)),
            DependencyGraph(key=Service3),
        ),
    )


def test_resolve_preserves_duplicate_children() -> None:
    context = _context(Shared, Service1, new_service2, Service3, Service4)

    graph = GraphWalker().resolve(context, Shared)

    assert list(graph.keys()) == [
        Shared,
        Service2,
        Service4,
        Service1,
        Service2,
        Service4,
        Service3,
    ]
    assert graph.depth == 4


def test_resolve_does_not_touch_cache() -> None:
    context = _context(Service1, new_service2, Service3, Service4)

    GraphWalker().resolve(context, Service1)

    assert context.cache == {}
    assert context.resolving == set()


def test_resolve_detects_cycles() -> None:
    context = _context(Service1, new_service2_needing_service1, Service3)

    with pytest.raises(CircularDependencyError) as exc_info:
        GraphWalker().resolve(context, Service1)

    assert exc_info.value.key is Service1
    assert context.resolving == set()


def test_resolve_fails_for_missing_provider() -> None:
    context = _context(Service1, Service3)

    with pytest.raises(NotFoundError) as exc_info:
        GraphWalker().resolve(context, Service1)

    assert exc_info.value.key is Service2
    assert context.resolving == set()


def test_leaf_graph_has_depth_one() -> None:
    graph = DependencyGraph(key=Service4)

    assert graph.depth == 1
    assert list(graph.keys()) == [Service4]
