from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from inspect import Parameter, Signature
from typing import Any, NoReturn, get_type_hints

from typing_extensions import Never

from graphwire._internal.type_checks import is_runtime_class
from graphwire.exceptions import ProviderInvalidError

_MISSING_ANNOTATION: Any = object()
_VARIADIC_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)
_NO_VALUE_ANNOTATIONS: tuple[Any, ...] = (None, type(None), NoReturn, Never)


@dataclass(frozen=True, slots=True)
class CallableSignature:
    """Dependency metadata extracted from a provider callable."""

    target_type: Any
    """The key the callable produces."""
    parameters: tuple[Parameter, ...]
    """Signature parameters, aligned with ``dependent_types``."""
    dependent_types: tuple[Any, ...]
    """Parameter annotations in declaration order."""


@dataclass(slots=True)
class CallableSignatureInspector:
    """Extracts target and dependent types from user-defined provider callables."""

    def inspect(self, source: Callable[..., Any]) -> CallableSignature:
        """Validate a provider callable and extract its signature metadata.

        Args:
            source: A function, class or callable object.

        Raises:
            ProviderInvalidError: If the callable cannot act as a provider.

        """
        if not callable(source):
            msg = f"Provider must be callable, got {source!r}."
            raise ProviderInvalidError(msg, key=source)

        provider_name = self._provider_name(source)
        if (
            inspect.isgeneratorfunction(source)
            or inspect.isasyncgenfunction(source)
            or inspect.iscoroutinefunction(source)
        ):
            msg = (
                f"Provider '{provider_name}' must be a plain callable returning exactly one "
                "value; generator and async providers are not supported."
            )
            raise ProviderInvalidError(msg, key=source)

        signature = self._signature(source, provider_name)
        annotations, annotation_error = self._resolved_type_hints(source)

        parameters = tuple(signature.parameters.values())
        dependent_types: list[Any] = []
        for parameter in parameters:
            if parameter.kind in _VARIADIC_KINDS:
                msg = (
                    f"Provider '{provider_name}' declares variadic parameter "
                    f"'{parameter.name}'; variadic providers are not allowed."
                )
                raise ProviderInvalidError(msg, key=source)

            dependent_type = self._resolve_parameter_annotation(
                source=source,
                parameter=parameter,
                annotations=annotations,
                annotation_error=annotation_error,
                provider_name=provider_name,
            )
            if dependent_type in dependent_types:
                msg = (
                    f"Provider '{provider_name}' declares more than one parameter of type "
                    f"{dependent_type!r}."
                )
                raise ProviderInvalidError(msg, key=dependent_type)
            dependent_types.append(dependent_type)

        return CallableSignature(
            target_type=self._target_type(
                source=source,
                signature=signature,
                annotations=annotations,
                provider_name=provider_name,
            ),
            parameters=parameters,
            dependent_types=tuple(dependent_types),
        )

    def _signature(self, source: Callable[..., Any], provider_name: str) -> Signature:
        try:
            return inspect.signature(source)
        except (TypeError, ValueError) as error:
            msg = f"Unable to inspect the signature of provider '{provider_name}': {error}"
            raise ProviderInvalidError(msg, key=source) from error

    def _target_type(
        self,
        *,
        source: Callable[..., Any],
        signature: Signature,
        annotations: dict[str, Any],
        provider_name: str,
    ) -> Any:
        if is_runtime_class(source):
            return source

        return_annotation = annotations.get("return", _MISSING_ANNOTATION)
        if return_annotation is _MISSING_ANNOTATION:
            return_annotation = signature.return_annotation
        if return_annotation is Signature.empty or isinstance(return_annotation, str):
            msg = (
                f"Unable to infer the provided type of provider '{provider_name}'. "
                "Add a return type annotation."
            )
            raise ProviderInvalidError(msg, key=source)
        if any(return_annotation is no_value for no_value in _NO_VALUE_ANNOTATIONS):
            msg = (
                f"Provider '{provider_name}' must return a value, "
                f"got return annotation {return_annotation!r}."
            )
            raise ProviderInvalidError(msg, key=source)
        return return_annotation

    def _resolve_parameter_annotation(
        self,
        *,
        source: Callable[..., Any],
        parameter: Parameter,
        annotations: dict[str, Any],
        annotation_error: Exception | None,
        provider_name: str,
    ) -> Any:
        annotation = annotations.get(parameter.name, _MISSING_ANNOTATION)
        if annotation is not _MISSING_ANNOTATION:
            return annotation

        raw_annotation = parameter.annotation
        if raw_annotation is not Parameter.empty and not isinstance(raw_annotation, str):
            return raw_annotation

        error_message = (
            f"Unable to infer dependency for parameter '{parameter.name}' "
            f"in provider '{provider_name}'. Add a type annotation."
        )
        if annotation_error is None:
            raise ProviderInvalidError(error_message, key=source)
        msg = f"{error_message} Original annotation error: {annotation_error}"
        raise ProviderInvalidError(msg, key=source) from annotation_error

    def _resolved_type_hints(
        self,
        source: Callable[..., Any],
    ) -> tuple[dict[str, Any], Exception | None]:
        if is_runtime_class(source):
            hinted: Any = source.__init__
        elif inspect.isfunction(source) or inspect.ismethod(source):
            hinted = source
        else:
            hinted = getattr(source, "__call__", source)  # noqa: B004
        try:
            return get_type_hints(hinted, include_extras=True), None
        except (AttributeError, NameError, TypeError) as error:
            return {}, error

    def _provider_name(self, source: Callable[..., Any]) -> str:
        return getattr(source, "__qualname__", repr(source))


__all__ = ["CallableSignature", "CallableSignatureInspector"]
