from __future__ import annotations

from typing import Any


class GraphwireError(Exception):
    """Represent a base class for all graphwire-specific failures.

    Catch this type when you want to handle any graphwire error path without
    matching each concrete exception class individually. Exceptions raised by
    user factories are never wrapped into this hierarchy.

    Attributes:
        key: The dependency key the failure is about, or ``None`` when the
            failure concerns a whole registry (for example an empty one).

    """

    def __init__(self, msg: str, key: Any = None) -> None:
        super().__init__(msg)
        self.key = key


class TypeCastError(GraphwireError):
    """Signal that a built object does not match the requested class.

    Raised at the public boundary of ``Container.build``/``Container.get`` when
    the requested key is a runtime class and the produced object is not an
    instance of it. This only happens when a literal overwrite or a factory
    annotation lies about the type it provides.
    """


class NotFoundError(GraphwireError):
    """Signal that no provider, literal or cached object exists for a key.

    Raised by ``build``/``resolve`` when a required dependency has no provider
    and by ``get`` when nothing was cached for the key. Missing values are never
    synthesized or defaulted.
    """


class ProviderInvalidError(GraphwireError):
    """Signal a malformed provider source at registration time.

    Common triggers are ``None`` sources, unsupported objects, variadic or
    unannotated parameters, missing return annotations and callables declaring
    two parameters of the same type.
    """


class ProviderDuplicatedError(GraphwireError):
    """Signal that two providers, or two record fields, claim the same type."""


class CircularDependencyError(GraphwireError):
    """Signal that a key was requested while it is already being resolved.

    Raised for direct self dependencies as well as for longer cycles; ``key`` is
    the first key found twice on the current resolution path.
    """


__all__ = [
    "CircularDependencyError",
    "GraphwireError",
    "NotFoundError",
    "ProviderDuplicatedError",
    "ProviderInvalidError",
    "TypeCastError",
]
