from __future__ import annotations

import types
from typing import Any, TypeGuard

from typing_extensions import is_typeddict


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def supports_instance_check(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when ``isinstance(obj, candidate)`` is meaningful for any obj.

    Protocols are excluded: non runtime-checkable ones raise on ``isinstance``
    and runtime-checkable ones only compare attribute names. TypedDict classes
    build plain dicts and reject instance checks.

    Args:
        candidate: Dependency key about to be used as an ``isinstance`` target.

    """
    return (
        is_runtime_class(candidate)
        and not getattr(candidate, "_is_protocol", False)
        and not is_typeddict(candidate)
    )


def describe_key(key: Any) -> str:
    """Render a dependency key for error and log messages."""
    if is_runtime_class(key):
        module = key.__module__
        if module == "builtins":
            return key.__qualname__
        return f"{module}.{key.__qualname__}"
    return repr(key)


__all__ = ["describe_key", "is_runtime_class", "supports_instance_check"]
