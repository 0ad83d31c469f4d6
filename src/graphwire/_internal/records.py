from __future__ import annotations

import dataclasses
import types
from dataclasses import dataclass
from typing import Any, Union, get_args, get_origin, get_type_hints

import attrs
from pydantic import BaseModel

from graphwire._internal.type_checks import describe_key, is_runtime_class
from graphwire.exceptions import ProviderInvalidError

_UNION_ORIGINS: tuple[Any, ...] = (Union, types.UnionType)


@dataclass(frozen=True, slots=True)
class RecordField:
    """A declared field of a record class."""

    name: str
    annotation: Any

    @property
    def is_exported(self) -> bool:
        return not self.name.startswith("_")


def is_record_class(candidate: object) -> bool:
    """Return whether candidate is a dataclass, attrs, pydantic or NamedTuple class."""
    if not is_runtime_class(candidate):
        return False
    return (
        dataclasses.is_dataclass(candidate)
        or attrs.has(candidate)
        or issubclass(candidate, BaseModel)
        or _is_namedtuple_class(candidate)
    )


def is_record_instance(candidate: object) -> bool:
    """Return whether candidate is an instance of a supported record class."""
    return not isinstance(candidate, type) and is_record_class(type(candidate))


def nested_record_class(annotation: Any) -> type[Any] | None:
    """Return the record class a field annotation points at, if any.

    Both ``Record`` and ``Record | None`` point at ``Record``; any other union
    or alias points nowhere.
    """
    if is_record_class(annotation):
        return annotation
    if get_origin(annotation) in _UNION_ORIGINS:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1 and is_record_class(members[0]):
            return members[0]
    return None


def record_fields(record_class: type[Any]) -> list[RecordField]:
    """List the declared fields of a record class in declaration order.

    Args:
        record_class: A class accepted by ``is_record_class``.

    Raises:
        ProviderInvalidError: If field annotations cannot be evaluated.

    """
    if issubclass(record_class, BaseModel):
        # pydantic moves Annotated metadata off the annotation; put it back
        return [
            RecordField(name=name, annotation=info.rebuild_annotation())
            for name, info in record_class.model_fields.items()
        ]

    hints = _record_type_hints(record_class)
    if dataclasses.is_dataclass(record_class):
        return [
            RecordField(name=field.name, annotation=hints.get(field.name, field.type))
            for field in dataclasses.fields(record_class)
        ]
    if attrs.has(record_class):
        return [
            RecordField(name=attribute.name, annotation=hints.get(attribute.name, attribute.type))
            for attribute in attrs.fields(record_class)
        ]
    # collections.namedtuple fields carry no annotation and cannot be addressed by type
    return [
        RecordField(name=name, annotation=hints[name])
        for name in record_class._fields
        if name in hints
    ]


def _record_type_hints(record_class: type[Any]) -> dict[str, Any]:
    try:
        return get_type_hints(record_class, include_extras=True)
    except (AttributeError, NameError, TypeError) as error:
        msg = (
            f"Unable to evaluate field annotations of record '{describe_key(record_class)}': "
            f"{error}"
        )
        raise ProviderInvalidError(msg, key=record_class) from error


def _is_namedtuple_class(candidate: type[Any]) -> bool:
    return issubclass(candidate, tuple) and isinstance(getattr(candidate, "_fields", None), tuple)


__all__ = [
    "RecordField",
    "is_record_class",
    "is_record_instance",
    "nested_record_class",
    "record_fields",
]
