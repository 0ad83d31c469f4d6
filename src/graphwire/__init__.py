from graphwire.container import Container
from graphwire.context import ResolutionContext
from graphwire.exceptions import (
    CircularDependencyError,
    GraphwireError,
    NotFoundError,
    ProviderDuplicatedError,
    ProviderInvalidError,
    TypeCastError,
)
from graphwire.graph import DependencyGraph, GraphWalker
from graphwire.providers import (
    CallableProvider,
    CompositeFieldProvider,
    LiteralProvider,
    Provider,
)
from graphwire.registry import ProviderRegistry

__all__ = [
    "CallableProvider",
    "CircularDependencyError",
    "CompositeFieldProvider",
    "Container",
    "DependencyGraph",
    "GraphWalker",
    "GraphwireError",
    "LiteralProvider",
    "NotFoundError",
    "Provider",
    "ProviderDuplicatedError",
    "ProviderInvalidError",
    "ProviderRegistry",
    "ResolutionContext",
    "TypeCastError",
]
