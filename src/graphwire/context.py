from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from graphwire._internal.type_checks import describe_key
from graphwire.exceptions import CircularDependencyError
from graphwire.providers import LiteralProvider
from graphwire.registry import ProviderRegistry

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ResolutionContext:
    """Mutable state shared by every provider taking part in one top-level call.

    Nested builds reuse the same context, so the cache and the in-progress set
    are shared across the whole call tree. The context lives for exactly one
    ``Container.build``/``Container.resolve`` call.
    """

    shared_mode: bool
    """Whether objects are read from and written to ``cache``."""
    registry: ProviderRegistry
    """Call-private registry view; overwrites applied here never leak."""
    cache: dict[Any, Any] = field(default_factory=dict)
    """Built objects by key; the container's own cache in shared mode."""
    resolving: set[Any] = field(default_factory=set)
    """Keys currently being resolved on the call stack."""

    def resolve(self, key: Any) -> Any:
        """Build ``key`` through the provider registered for it."""
        provider = self.registry.lookup_for(key)
        return provider.build(self, key)

    @contextmanager
    def guard(self, key: Any) -> Iterator[None]:
        """Mark ``key`` as in progress for the duration of the block.

        Raises:
            CircularDependencyError: If ``key`` is already in progress.

        """
        if key in self.resolving:
            msg = f"Circular dependency detected at type {describe_key(key)}."
            raise CircularDependencyError(msg, key=key)
        self.resolving.add(key)
        try:
            yield
        finally:
            self.resolving.discard(key)

    def apply_overwrites(self, overwrites: Mapping[Any, Any]) -> None:
        """Provide each value under its key for this call only."""
        for key, value in overwrites.items():
            logger.debug("Overwriting %s for the current call", describe_key(key))
            self.registry.overwrite(LiteralProvider(value, provides=key))


__all__ = ["ResolutionContext"]
