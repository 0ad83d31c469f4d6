from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from inspect import Parameter
from typing import TYPE_CHECKING, Any

from graphwire._internal.records import (
    is_record_instance,
    nested_record_class,
    record_fields,
)
from graphwire._internal.signatures import CallableSignatureInspector
from graphwire._internal.type_checks import describe_key
from graphwire.exceptions import NotFoundError, ProviderDuplicatedError, ProviderInvalidError

if TYPE_CHECKING:
    from graphwire.context import ResolutionContext

logger = logging.getLogger(__name__)


class Provider(ABC):
    """Produce objects of one or more target types from dependent types.

    A provider is an object creator. Creating an object may require other
    objects first; the provider declares their keys in ``dependent_types`` and
    obtains them through the resolution context it is built with.
    """

    @property
    @abstractmethod
    def source(self) -> Any:
        """The user object this provider was created from."""

    @property
    @abstractmethod
    def target_types(self) -> tuple[Any, ...]:
        """Keys this provider can produce objects for, in registration order."""

    @property
    @abstractmethod
    def dependent_types(self) -> tuple[Any, ...]:
        """Keys that must be resolved before this provider can produce objects."""

    @abstractmethod
    def build(self, context: ResolutionContext, key: Any) -> Any:
        """Produce an object for ``key`` using ``context`` for dependencies."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.source!r})"


class CallableProvider(Provider):
    """Call a factory function or class with its resolved parameters.

    The factory provides exactly one type: the class itself for classes, the
    return annotation otherwise. Every parameter is a dependency, identified by
    its annotation. Exceptions raised by the factory propagate unchanged.
    """

    def __init__(self, source: Callable[..., Any]) -> None:
        signature = CallableSignatureInspector().inspect(source)
        self._source = source
        self._target_type = signature.target_type
        self._parameters = signature.parameters
        self._dependent_types = signature.dependent_types

    @property
    def source(self) -> Callable[..., Any]:
        return self._source

    @property
    def target_types(self) -> tuple[Any, ...]:
        return (self._target_type,)

    @property
    def dependent_types(self) -> tuple[Any, ...]:
        return self._dependent_types

    def build(self, context: ResolutionContext, key: Any) -> Any:
        if context.shared_mode and key in context.cache:
            logger.debug("Reusing cached instance for %s", describe_key(key))
            return context.cache[key]

        with context.guard(key):
            args: list[Any] = []
            kwargs: dict[str, Any] = {}
            for parameter, dependent_type in zip(
                self._parameters,
                self._dependent_types,
                strict=True,
            ):
                value = context.resolve(dependent_type)
                if parameter.kind is Parameter.POSITIONAL_ONLY:
                    args.append(value)
                else:
                    kwargs[parameter.name] = value

            instance = self._source(*args, **kwargs)
            if context.shared_mode:
                context.cache[key] = instance
            return instance


@dataclass(frozen=True, slots=True)
class FieldPath:
    """Attribute path from a root record to one of its nested fields."""

    names: tuple[str, ...]

    def __str__(self) -> str:
        return ".".join(self.names)


class CompositeFieldProvider(Provider):
    """Expose the exported fields of a record instance, one type per field.

    Nested records are flattened into the same type namespace: a field whose
    annotation is a record class (or an optional one) is provided under its own
    annotation and its fields are provided as well. Fields whose name starts
    with an underscore are skipped together with everything nested in them.

    Objects are read from the live record on every build, so mutating a field
    after registration is visible to later builds.
    """

    def __init__(self, record: Any) -> None:
        if not is_record_instance(record):
            msg = (
                "Record provider requires a dataclass, attrs, pydantic or NamedTuple "
                f"instance, got {record!r}."
            )
            raise ProviderInvalidError(msg, key=record)
        self._record = record
        self._paths: dict[Any, FieldPath] = {}
        self._collect_fields(type(record), ())

    @property
    def source(self) -> Any:
        return self._record

    @property
    def target_types(self) -> tuple[Any, ...]:
        return tuple(self._paths)

    @property
    def dependent_types(self) -> tuple[Any, ...]:
        return ()

    def field_path(self, key: Any) -> FieldPath:
        """Return the attribute path registered for ``key``."""
        try:
            return self._paths[key]
        except KeyError:
            msg = (
                f"Record {describe_key(type(self._record))} has no field of type "
                f"{describe_key(key)}."
            )
            raise NotFoundError(msg, key=key) from None

    def build(self, context: ResolutionContext, key: Any) -> Any:
        path = self.field_path(key)
        value = self._record
        for depth, name in enumerate(path.names):
            if value is None:
                traversed = ".".join(path.names[:depth])
                msg = (
                    f"Field '{traversed}' of record {describe_key(type(self._record))} is None; "
                    f"cannot provide {describe_key(key)}."
                )
                raise NotFoundError(msg, key=key)
            value = getattr(value, name)
        return value

    def _collect_fields(self, record_class: type[Any], prefix: tuple[str, ...]) -> None:
        root_name = describe_key(type(self._record))
        for field in record_fields(record_class):
            if not field.is_exported:
                continue
            path = FieldPath((*prefix, field.name))
            existing = self._paths.get(field.annotation)
            if existing is not None:
                msg = (
                    f"Duplicated provider for type {describe_key(field.annotation)}, "
                    f"error at '{root_name}[{existing}]' and '{root_name}[{path}]'."
                )
                raise ProviderDuplicatedError(msg, key=field.annotation)
            self._paths[field.annotation] = path

            nested = nested_record_class(field.annotation)
            if nested is not None:
                self._collect_fields(nested, path.names)


class LiteralProvider(Provider):
    """Provide one ready-made value.

    Used for call-scoped overwrites and for injecting ambient values such as a
    cancellation token or the current request as ordinary dependencies.

    Args:
        value: The object returned by every build.
        provides: Key to provide ``value`` under; defaults to ``type(value)``.

    """

    def __init__(self, value: Any, provides: Any = None) -> None:
        self._value = value
        self._target_type = type(value) if provides is None else provides

    @property
    def source(self) -> Any:
        return self._value

    @property
    def target_types(self) -> tuple[Any, ...]:
        return (self._target_type,)

    @property
    def dependent_types(self) -> tuple[Any, ...]:
        return ()

    def build(self, context: ResolutionContext, key: Any) -> Any:
        return self._value


def make_provider(source: Any) -> Provider:
    """Normalize a provider source into a provider.

    Args:
        source: A ``Provider``, a record instance or a callable.

    Raises:
        ProviderInvalidError: If the source is ``None`` or unsupported.

    """
    if source is None:
        msg = "Provider must not be None."
        raise ProviderInvalidError(msg)
    if isinstance(source, Provider):
        return source
    if is_record_instance(source):
        return CompositeFieldProvider(source)
    if callable(source):
        return CallableProvider(source)
    msg = f"Provider type unsupported, got {type(source).__qualname__}: {source!r}."
    raise ProviderInvalidError(msg, key=source)


__all__ = [
    "CallableProvider",
    "CompositeFieldProvider",
    "FieldPath",
    "LiteralProvider",
    "Provider",
    "make_provider",
]
