from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar, overload

from graphwire._internal.type_checks import describe_key, supports_instance_check
from graphwire.context import ResolutionContext
from graphwire.defaults import DEFAULT_SHARED_MODE
from graphwire.exceptions import NotFoundError, TypeCastError
from graphwire.graph import DependencyGraph, GraphWalker
from graphwire.registry import ProviderRegistry

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Container:
    """Build objects from a registry of providers and keep the shared ones.

    Dependency keys are usually classes, but any hashable typing key works
    (``list[int]``, ``Annotated[str, "dsn"]``, ``NewType`` aliases, ...).

    In shared mode (the default) every object built by a callable provider is
    cached by key for the lifetime of the container, intermediate dependencies
    included. ServiceA and ServiceB both requiring ServiceX therefore receive the
    same ServiceX. Nothing is ever evicted.

    Each ``build``/``resolve`` call gets its own cycle guard and its own
    overwrite layer. The shared cache is not synchronized: concurrent shared
    builds on one container need external locking.

    Args:
        *sources: Provider sources, see ``ProviderRegistry``.
        shared_mode: Default caching policy for ``build`` calls.

    Raises:
        ProviderInvalidError: If no source is given or a source is malformed.
        ProviderDuplicatedError: If two sources provide the same key.

    """

    def __init__(self, *sources: Any, shared_mode: bool = DEFAULT_SHARED_MODE) -> None:
        self._registry = ProviderRegistry(*sources)
        self._shared_mode = shared_mode
        self._cache: dict[Any, Any] = {}

    @property
    def shared_mode(self) -> bool:
        """Default caching policy applied to ``build`` calls."""
        return self._shared_mode

    @property
    def registry(self) -> ProviderRegistry:
        """The registry every call starts from."""
        return self._registry

    @overload
    def build(
        self,
        key: type[T],
        *,
        shared: bool | None = None,
        overwrites: Mapping[Any, Any] | None = None,
    ) -> T: ...

    @overload
    def build(
        self,
        key: Any,
        *,
        shared: bool | None = None,
        overwrites: Mapping[Any, Any] | None = None,
    ) -> Any: ...

    def build(
        self,
        key: Any,
        *,
        shared: bool | None = None,
        overwrites: Mapping[Any, Any] | None = None,
    ) -> Any:
        """Build an object for ``key`` together with everything it depends on.

        Args:
            key: Dependency key to build.
            shared: Override the container caching policy for this call only.
                ``False`` neither reads nor fills the container cache.
            overwrites: Values to provide under the given keys for this call and
                every nested build it triggers.

        Returns:
            The built object.

        Raises:
            NotFoundError: If ``key`` or one of its dependencies has no provider.
            CircularDependencyError: If ``key`` depends on itself, even transitively.
            TypeCastError: If ``key`` is a class and the object is not an instance of it.

        Exceptions raised by factories propagate unchanged and nothing is cached
        for the failed key.

        """
        shared_mode = self._shared_mode if shared is None else shared
        context = ResolutionContext(
            shared_mode=shared_mode,
            registry=self._registry.isolate(),
            cache=self._cache if shared_mode else {},
        )
        if overwrites:
            context.apply_overwrites(overwrites)

        logger.debug("Building %s (shared=%s)", describe_key(key), shared_mode)
        return _checked_cast(key, context.resolve(key))

    @overload
    def build_with_context(
        self,
        ambient: Any,
        key: type[T],
        *,
        provides: Any = None,
        shared: bool | None = None,
        overwrites: Mapping[Any, Any] | None = None,
    ) -> T: ...

    @overload
    def build_with_context(
        self,
        ambient: Any,
        key: Any,
        *,
        provides: Any = None,
        shared: bool | None = None,
        overwrites: Mapping[Any, Any] | None = None,
    ) -> Any: ...

    def build_with_context(
        self,
        ambient: Any,
        key: Any,
        *,
        provides: Any = None,
        shared: bool | None = None,
        overwrites: Mapping[Any, Any] | None = None,
    ) -> Any:
        """Build ``key`` while providing an ambient value to every provider needing it.

        The ambient value (a cancellation token, the current request, ...) is an
        ordinary call-scoped overwrite: any provider declaring a parameter of its
        type receives it.

        Args:
            ambient: Value to inject.
            key: Dependency key to build.
            provides: Key to inject ``ambient`` under; defaults to ``type(ambient)``.
            shared: Override the container caching policy for this call only.
            overwrites: Additional call-scoped values.

        """
        ambient_key = type(ambient) if provides is None else provides
        return self.build(
            key,
            shared=shared,
            overwrites={**(overwrites or {}), ambient_key: ambient},
        )

    @overload
    def get(self, key: type[T]) -> T: ...

    @overload
    def get(self, key: Any) -> Any: ...

    def get(self, key: Any) -> Any:
        """Return the cached object for ``key`` without building anything.

        Raises:
            NotFoundError: If no object was cached for ``key``, which is always the
                case for keys only ever built in non-shared mode.

        """
        try:
            value = self._cache[key]
        except KeyError:
            msg = f"Object not found for type {describe_key(key)}."
            raise NotFoundError(msg, key=key) from None
        return _checked_cast(key, value)

    def resolve(self, key: Any) -> DependencyGraph:
        """Return the dependency tree of ``key`` without building anything.

        Raises:
            NotFoundError: If a key on the way has no provider.
            CircularDependencyError: If ``key`` depends on itself, even transitively.

        """
        logger.debug("Resolving dependency graph of %s", describe_key(key))
        context = ResolutionContext(shared_mode=self._shared_mode, registry=self._registry)
        return GraphWalker().resolve(context, key)


def _checked_cast(key: Any, value: Any) -> Any:
    if supports_instance_check(key) and not isinstance(value, key):
        msg = (
            f"Unable to cast result as type {describe_key(key)}, "
            f"got {describe_key(type(value))}."
        )
        raise TypeCastError(msg, key=key)
    return value


__all__ = ["Container"]
