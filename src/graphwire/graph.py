from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from graphwire.context import ResolutionContext


@dataclass(frozen=True, slots=True)
class DependencyGraph:
    """Dependency tree of a key, one child per declared dependent type.

    Children keep the declaration order of the provider's parameters and
    duplicates are preserved: a key required by two providers appears twice.
    """

    key: Any
    dependencies: tuple[DependencyGraph, ...] = ()

    def keys(self) -> Iterator[Any]:
        """Iterate over every key of the tree, depth-first, parents first."""
        yield self.key
        for dependency in self.dependencies:
            yield from dependency.keys()

    @property
    def depth(self) -> int:
        """Number of levels in the tree; a leaf has depth 1."""
        return 1 + max((dependency.depth for dependency in self.dependencies), default=0)


class GraphWalker:
    """Walk provider metadata to build a ``DependencyGraph`` without building objects.

    Only providers have to exist; values that are supplied at build time (such as
    a missing runtime value) are not needed to walk the graph.
    """

    def resolve(self, context: ResolutionContext, key: Any) -> DependencyGraph:
        """Return the dependency tree of ``key``.

        Raises:
            NotFoundError: If a key on the way has no provider.
            CircularDependencyError: If a key depends on itself, even transitively.

        """
        with context.guard(key):
            provider = context.registry.lookup_for(key)
            return DependencyGraph(
                key=key,
                dependencies=tuple(
                    self.resolve(context, dependent_type)
                    for dependent_type in provider.dependent_types
                ),
            )


__all__ = ["DependencyGraph", "GraphWalker"]
