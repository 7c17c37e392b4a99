"""Signature descriptors and runtime shape checks.

Arity and return shapes are checked eagerly when a factory is created, while
argument values are checked lazily against ``FactorySignature`` shapes when
the factory is generated.
"""

from __future__ import annotations

import inspect
import types
from collections.abc import Callable
from dataclasses import dataclass
from inspect import Parameter
from typing import (
    Annotated,
    Any,
    ForwardRef,
    Literal,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from refwire.exceptions import RefWireConstructionError

_MISSING_ANNOTATION: Any = object()
_POSITIONAL_KINDS = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)

VALUE_SHAPES: tuple[type[Any], ...] = (bool, int, float, complex, str, bytes)
"""Plain value shapes that a factory may not produce."""


@dataclass(frozen=True, slots=True)
class FactorySignature:
    """Describes the call shape of a constructor-shaped callable."""

    name: str
    """Qualified name of the callable, used in error messages."""
    shapes: tuple[Any, ...]
    """Expected shape of every positional parameter, in order."""
    required_count: int
    """Number of positional parameters without a default value."""
    is_variadic: bool
    """Whether the callable accepts a ``*args`` tail."""
    variadic_shape: Any
    """Expected shape of each ``*args`` element (``Any`` if not variadic)."""
    return_shape: Any
    """The single object shape produced by the callable."""

    @property
    def fixed_count(self) -> int:
        return len(self.shapes)

    def accepts(self, count: int) -> bool:
        """Return whether the callable can be called with count positional arguments."""
        if self.is_variadic:
            return count >= self.required_count
        return self.required_count <= count <= self.fixed_count

    def expected_shape(self, position: int) -> Any:
        """Return the expected shape of the argument at a zero-based position."""
        if position < self.fixed_count:
            return self.shapes[position]
        return self.variadic_shape

    def describe(self) -> str:
        """Render the signature as ``name(shape, shape, *shape)``."""
        parts = [shape_name(shape) for shape in self.shapes]
        if self.is_variadic:
            parts.append(f"*{shape_name(self.variadic_shape)}")
        return f"{self.name}({', '.join(parts)})"


def factory_name(factory: Any) -> str:
    name = getattr(factory, "__qualname__", None) or getattr(factory, "__name__", None)
    if name is None:
        return type(factory).__qualname__
    return name


def shape_name(shape: Any) -> str:
    if shape is Any:
        return "Any"
    if isinstance(shape, type) and get_origin(shape) is None:
        return shape.__qualname__
    return repr(shape).replace("typing.", "")


def extract_signature(factory: Any) -> FactorySignature:
    """Inspect a callable and build its signature descriptor.

    Classes produce themselves. Any other callable needs a return annotation
    naming exactly one object shape.

    Raises:
        RefWireConstructionError: If the callable cannot serve as a factory.

    """
    if not callable(factory):
        msg = f"the given factory must be callable (given {type(factory).__qualname__})"
        raise RefWireConstructionError(msg)

    name = factory_name(factory)
    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError) as error:
        msg = f"unable to inspect the signature of {name}: {error}"
        raise RefWireConstructionError(msg) from error

    hints = _resolved_type_hints(_annotations_owner(factory))
    shapes: list[Any] = []
    required_count = 0
    is_variadic = False
    variadic_shape: Any = Any

    for parameter in signature.parameters.values():
        shape = _parameter_shape(parameter, hints)
        if parameter.kind in _POSITIONAL_KINDS:
            shapes.append(shape)
            if parameter.default is Parameter.empty:
                required_count = len(shapes)
        elif parameter.kind is Parameter.VAR_POSITIONAL:
            is_variadic = True
            variadic_shape = shape
        elif parameter.kind is Parameter.KEYWORD_ONLY and parameter.default is Parameter.empty:
            msg = (
                f"the keyword-only parameter {parameter.name!r} of {name} has no default "
                "and cannot be supplied positionally"
            )
            raise RefWireConstructionError(msg)

    if inspect.isclass(factory):
        return_shape: Any = factory
    else:
        return_shape = hints.get("return", signature.return_annotation)
        if return_shape is Parameter.empty:
            return_shape = _MISSING_ANNOTATION
    _check_return_shape(name, return_shape)

    return FactorySignature(
        name=name,
        shapes=tuple(shapes),
        required_count=required_count,
        is_variadic=is_variadic,
        variadic_shape=variadic_shape,
        return_shape=return_shape,
    )


def matches_shape(value: Any, shape: Any) -> bool:
    """Return whether value satisfies shape without any coercion."""
    if shape is Any or shape is object or isinstance(shape, (str, ForwardRef)):
        return True
    if shape is None or shape is types.NoneType:
        return value is None
    if isinstance(shape, TypeVar):
        if shape.__constraints__:
            return any(matches_shape(value, item) for item in shape.__constraints__)
        return shape.__bound__ is None or matches_shape(value, shape.__bound__)

    origin = get_origin(shape)
    if origin is Annotated:
        return matches_shape(value, get_args(shape)[0])
    if origin is Union or origin is types.UnionType:
        return any(matches_shape(value, item) for item in get_args(shape))
    if origin is Literal:
        return value in get_args(shape)
    if origin is not None:
        shape = origin

    if isinstance(shape, type):
        try:
            return isinstance(value, shape)
        except TypeError:
            # protocols without @runtime_checkable cannot be checked
            return True
    return True


def _check_return_shape(name: str, shape: Any) -> None:
    if shape is _MISSING_ANNOTATION:
        msg = f"{name} has no return annotation naming the type it produces"
        raise RefWireConstructionError(msg)
    if shape is None or shape is types.NoneType:
        msg = f"invalid number of return parameters of {name}: 0"
        raise RefWireConstructionError(msg)

    origin = get_origin(shape)
    if shape is tuple or origin is tuple:
        arguments = get_args(shape)
        described = shape_name(shape) if not arguments or Ellipsis in arguments else len(arguments)
        msg = f"invalid number of return parameters of {name}: {described}"
        raise RefWireConstructionError(msg)
    if shape in VALUE_SHAPES or (origin is not None and origin in VALUE_SHAPES):
        msg = (
            f"return parameter of {name} is no object or interface type "
            f"but a {shape_name(shape)}"
        )
        raise RefWireConstructionError(msg)


def _parameter_shape(parameter: Parameter, hints: dict[str, Any]) -> Any:
    annotation = hints.get(parameter.name, _MISSING_ANNOTATION)
    if annotation is not _MISSING_ANNOTATION:
        return annotation
    if parameter.annotation is Parameter.empty:
        return Any
    return parameter.annotation


def _annotations_owner(factory: Any) -> Callable[..., Any]:
    if inspect.isclass(factory):
        return factory.__init__
    if inspect.isfunction(factory) or inspect.ismethod(factory):
        return factory
    return getattr(type(factory), "__call__", factory)


def _resolved_type_hints(target: Callable[..., Any]) -> dict[str, Any]:
    try:
        return get_type_hints(target, include_extras=True)
    except (AttributeError, NameError, TypeError):
        return {}


__all__ = [
    "VALUE_SHAPES",
    "FactorySignature",
    "extract_signature",
    "factory_name",
    "matches_shape",
    "shape_name",
]
