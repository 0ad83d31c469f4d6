from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from typing_extensions import Self

from graphwire._internal.type_checks import describe_key
from graphwire.exceptions import NotFoundError, ProviderDuplicatedError, ProviderInvalidError
from graphwire.providers import Provider, make_provider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Map every provided key to exactly one provider.

    The base mapping is fixed at construction. An optional overwrite layer sits
    on top of it and always wins on lookup; ``isolate`` clones the registry with
    a private copy of that layer so per-call overwrites stay per call.

    Sources can be:
        - functions, classes or callable objects (see ``CallableProvider``),
        - dataclass, attrs, pydantic or NamedTuple instances
          (see ``CompositeFieldProvider``),
        - ``Provider`` objects,
        - other ``ProviderRegistry`` objects, whose effective entries are merged.

    Raises:
        ProviderInvalidError: If no source is given or a source is malformed.
        ProviderDuplicatedError: If two sources provide the same key.

    """

    def __init__(self, *sources: Any) -> None:
        providers: dict[Any, Provider] = {}
        for source in sources:
            if isinstance(source, ProviderRegistry):
                for key, provider in source._effective_providers().items():
                    _add_entry(key, provider, providers)
                continue
            _add_provider(make_provider(source), providers)

        if not providers:
            msg = "No provider provided."
            raise ProviderInvalidError(msg)

        self._providers = providers
        self._overwrites: dict[Any, Provider] | None = None
        logger.debug(
            "Registered %d provider source(s) covering %d type(s)",
            len(sources),
            len(providers),
        )

    def lookup_for(self, key: Any) -> Provider:
        """Return the provider for ``key``, preferring the overwrite layer.

        Raises:
            NotFoundError: If neither layer provides ``key``.

        """
        if self._overwrites and key in self._overwrites:
            return self._overwrites[key]
        try:
            return self._providers[key]
        except KeyError:
            msg = f"Provider not found for type {describe_key(key)}."
            raise NotFoundError(msg, key=key) from None

    def all(self) -> list[Provider]:
        """Return the effective providers, overwrites replacing what they shadow.

        A provider serving several keys is listed once.
        """
        effective = self._effective_providers()
        return list({id(provider): provider for provider in effective.values()}.values())

    def _effective_providers(self) -> dict[Any, Provider]:
        effective = dict(self._providers)
        if self._overwrites:
            effective.update(self._overwrites)
        return effective

    def overwrite(self, provider: Provider) -> None:
        """Provide ``provider.target_types[0]`` through ``provider`` from now on."""
        if self._overwrites is None:
            self._overwrites = {}
        self._overwrites[provider.target_types[0]] = provider

    def isolate(self) -> Self:
        """Return a clone sharing the base mapping with a private overwrite layer."""
        clone = self.__class__.__new__(self.__class__)
        clone._providers = self._providers
        clone._overwrites = dict(self._overwrites) if self._overwrites else None
        return clone

    def __contains__(self, key: object) -> bool:
        return bool(self._overwrites and key in self._overwrites) or key in self._providers

    def __iter__(self) -> Iterator[Any]:
        yield from self._providers
        if self._overwrites:
            yield from (key for key in self._overwrites if key not in self._providers)

    def __len__(self) -> int:
        return sum(1 for _ in self)


def _add_provider(provider: Provider, providers: dict[Any, Provider]) -> None:
    for key in provider.target_types:
        _add_entry(key, provider, providers)


def _add_entry(key: Any, provider: Provider, providers: dict[Any, Provider]) -> None:
    if key in providers:
        msg = f"Duplicated provider for type {describe_key(key)}."
        raise ProviderDuplicatedError(msg, key=key)
    providers[key] = provider


__all__ = ["ProviderRegistry"]
