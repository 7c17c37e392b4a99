"""Type factories: descriptors able to produce one instance each.

Factories are created through the ``new_*`` helpers. A helper never raises:
a malformed descriptor becomes an ``InvalidFactory`` that keeps its
construction error and raises it again on every ``generate`` call, so registration
can always complete and validation reports the problem.
"""

from __future__ import annotations

import dataclasses
import inspect
from collections.abc import Callable
from inspect import Parameter
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, get_origin, get_type_hints

from refwire.exceptions import (
    RefWireConstructionError,
    RefWireShapeMismatchError,
    RefWireTypeReferenceError,
)
from refwire.references import TypeReference
from refwire.shapes import FactorySignature, extract_signature

if TYPE_CHECKING:
    from refwire.resolver import ParameterResolver


class TypeFactory(Protocol):
    """Protocol shared by every factory variant."""

    def arguments(self) -> list[Any]:
        """Return the raw arguments in declaration order."""

    def generate(self, resolver: ParameterResolver) -> Any:
        """Produce an instance, resolving raw arguments through resolver.

        Args:
            resolver: Resolver bound to the container that owns this factory.

        """


class InvalidFactory:
    """A factory whose descriptor was rejected at construction time.

    Every ``generate`` call raises a new ``RefWireConstructionError`` chained
    from the recorded ``error``.
    """

    __slots__ = ("error",)

    def __init__(self, error: RefWireConstructionError) -> None:
        self.error = error

    def arguments(self) -> list[Any]:
        return []

    def generate(self, resolver: ParameterResolver) -> Any:
        raise RefWireConstructionError(str(self.error)) from self.error

    def __repr__(self) -> str:
        return f"InvalidFactory({str(self.error)!r})"


class FunctionFactory:
    """Wrap a constructor-shaped callable and the raw arguments to call it with.

    Positional parameters receive the raw arguments in order. For a callable
    with a ``*args`` parameter the trailing raw arguments are resolved against
    the element shape and packed, in order, into one sequence passed last.
    """

    def __init__(self, factory: Callable[..., Any], *arguments: Any) -> None:
        self.signature: FactorySignature = extract_signature(factory)
        if not self.signature.accepts(len(arguments)):
            raise RefWireConstructionError(self._arity_message(len(arguments)))
        self.factory = factory
        self._arguments = arguments

    def arguments(self) -> list[Any]:
        return list(self._arguments)

    def generate(self, resolver: ParameterResolver) -> Any:
        fixed_count = self.signature.fixed_count
        resolved = [
            self._resolve_argument(resolver, position, argument)
            for position, argument in enumerate(self._arguments)
        ]
        packed = tuple(resolved[fixed_count:])
        return self.factory(*resolved[:fixed_count], *packed)

    def _resolve_argument(self, resolver: ParameterResolver, position: int, argument: Any) -> Any:
        try:
            return resolver.resolve(argument, self.signature.expected_shape(position))
        except RefWireTypeReferenceError as error:
            if error.position is not None or error.generating_type_id is not None:
                raise
            msg = (
                f'the referenced type "@{error.type_id}" (type '
                f"{type(error.instance).__qualname__}) can not be passed as argument "
                f"{position + 1} to the function signature {self.signature.describe()}: {error}"
            )
            raise RefWireTypeReferenceError(
                msg,
                error.type_id,
                error.instance,
                position=position + 1,
            ) from error
        except RefWireShapeMismatchError as error:
            if error.location is not None or error.generating_type_id is not None:
                raise
            location = f"input argument {position + 1} of {self.signature.describe()}"
            raise RefWireShapeMismatchError(error.value, error.expected, location) from error

    def _arity_message(self, count: int) -> str:
        signature = self.signature
        if signature.is_variadic:
            return (
                f"invalid number of input parameters for variadic function "
                f"{signature.describe()}: got {count} but expected at least "
                f"{signature.required_count}"
            )
        if signature.required_count == signature.fixed_count:
            expected = str(signature.fixed_count)
        else:
            expected = f"between {signature.required_count} and {signature.fixed_count}"
        return (
            f"invalid number of input parameters for {signature.describe()}: "
            f"got {count} but expected {expected}"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.signature.name})"


class StructFactory(FunctionFactory):
    """Allocate a class and assign its declared fields positionally.

    Dataclasses are built through their generated ``__init__`` so that
    omitted trailing fields receive their defaults. Other classes are
    allocated without calling ``__init__`` and their annotated attributes are
    assigned directly.
    """

    def __init__(self, struct: type[Any], *arguments: Any) -> None:
        super().__init__(_struct_constructor(struct, len(arguments)), *arguments)
        self.struct = struct


class AliasFactory:
    """Delegate to another registered type, optionally exposing one of its members."""

    def __init__(self, type_id: str) -> None:
        self.reference = TypeReference.parse(type_id)
        if not self.reference.type_id:
            msg = f"an alias needs the id of the aliased type (given {type_id!r})"
            raise RefWireConstructionError(msg)
        if self.reference.member == "":
            msg = f"an alias needs a member name after '::' (given {type_id!r})"
            raise RefWireConstructionError(msg)

    def arguments(self) -> list[Any]:
        return [str(self.reference)]

    def generate(self, resolver: ParameterResolver) -> Any:
        return resolver.resolve(str(self.reference))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.reference)!r})"


class FuncReferenceFactory(AliasFactory):
    """Expose a callable member of another type's instance, bound to that instance."""

    def __init__(self, type_id: str, member: str) -> None:
        if not type_id or not member:
            msg = (
                "a func reference needs a type id and a member name "
                f"(given {type_id!r} and {member!r})"
            )
            raise RefWireConstructionError(msg)
        super().__init__(str(TypeReference(type_id=type_id, member=member)))


class ProxyFactory:
    """Invoke a member of another type's instance to produce a fresh instance.

    The member is wrapped in a ``FunctionFactory`` at generation time, so it
    obeys the same arity and return shape rules; those are checked once the
    referenced instance exists.
    """

    def __init__(self, type_id: str, member: str, *arguments: Any) -> None:
        if not type_id or not member:
            msg = (
                "a proxy type needs a type id and a member name "
                f"(given {type_id!r} and {member!r})"
            )
            raise RefWireConstructionError(msg)
        self.reference = TypeReference(type_id=type_id, member=member)
        self._arguments = arguments

    def arguments(self) -> list[Any]:
        return [str(self.reference), *self._arguments]

    def generate(self, resolver: ParameterResolver) -> Any:
        method = resolver.resolve(str(self.reference))
        return FunctionFactory(method, *self._arguments).generate(resolver)

    def __repr__(self) -> str:
        return f"ProxyFactory({str(self.reference)!r})"


class InstanceFactory:
    """Return an already created object."""

    def __init__(self, instance: Any) -> None:
        if instance is None:
            msg = "the given instance may not be None"
            raise RefWireConstructionError(msg)
        self.instance = instance

    def arguments(self) -> list[Any]:
        return []

    def generate(self, resolver: ParameterResolver) -> Any:
        return self.instance


class FuncFactory:
    """Register a callable as the value itself, without calling it."""

    def __init__(self, function: Callable[..., Any]) -> None:
        if not callable(function):
            msg = f"the given function must be callable (given {type(function).__qualname__})"
            raise RefWireConstructionError(msg)
        self.function = function

    def arguments(self) -> list[Any]:
        return []

    def generate(self, resolver: ParameterResolver) -> Any:
        return self.function


class ConfiguredFactory:
    """Generate an embedded factory, then pass the instance to a configurator member."""

    def __init__(self, embedded: TypeFactory, configurator_id: str, method: str) -> None:
        if isinstance(embedded, InvalidFactory):
            msg = (
                "can not use an invalid type as embedded type of a configured type: "
                f"{embedded.error}"
            )
            raise RefWireConstructionError(msg) from embedded.error
        if not configurator_id or not method:
            msg = (
                "a configured type needs a configurator type id and method name "
                f"(given {configurator_id!r} and {method!r})"
            )
            raise RefWireConstructionError(msg)
        self.embedded = embedded
        self.configurator = TypeReference(type_id=configurator_id, member=method)

    def arguments(self) -> list[Any]:
        return [*self.embedded.arguments(), str(self.configurator)]

    def generate(self, resolver: ParameterResolver) -> Any:
        instance = self.embedded.generate(resolver)
        configure = resolver.resolve(str(self.configurator))
        configure(instance)
        return instance


def new_type(factory: Callable[..., Any], *arguments: Any) -> TypeFactory:
    """Create a factory calling factory with the resolved arguments."""
    return _build(FunctionFactory, factory, *arguments)


def new_struct_type(struct: type[Any], *arguments: Any) -> TypeFactory:
    """Create a factory allocating struct and assigning its fields positionally."""
    return _build(StructFactory, struct, *arguments)


def new_alias_type(type_id: str) -> TypeFactory:
    """Create an alias for ``type_id`` or, with ``type_id::Member``, for a bound member."""
    return _build(AliasFactory, type_id)


def new_func_reference_type(type_id: str, member: str) -> TypeFactory:
    return _build(FuncReferenceFactory, type_id, member)


def new_proxy_type(type_id: str, member: str, *arguments: Any) -> TypeFactory:
    """Create a factory invoking ``@type_id::member`` with the resolved arguments."""
    return _build(ProxyFactory, type_id, member, *arguments)


def new_instance_type(instance: Any) -> TypeFactory:
    return _build(InstanceFactory, instance)


def new_func_type(function: Callable[..., Any]) -> TypeFactory:
    return _build(FuncFactory, function)


def new_configured_type(embedded: TypeFactory, configurator_id: str, method: str) -> TypeFactory:
    """Wrap embedded so that ``@configurator_id::method`` receives each new instance."""
    return _build(ConfiguredFactory, embedded, configurator_id, method)


def is_valid(factory: TypeFactory) -> bool:
    return not isinstance(factory, InvalidFactory)


def _build(factory_class: Callable[..., TypeFactory], *arguments: Any) -> TypeFactory:
    try:
        return factory_class(*arguments)
    except RefWireConstructionError as error:
        return InvalidFactory(error)


def _struct_constructor(struct: Any, count: int) -> Callable[..., Any]:
    if not inspect.isclass(struct):
        msg = f"the given struct must be a class (given {type(struct).__qualname__})"
        raise RefWireConstructionError(msg)

    fields = _struct_fields(struct)
    if count > len(fields):
        msg = (
            f"the struct {struct.__qualname__} has {len(fields)} fields "
            f"but {count} arguments were given"
        )
        raise RefWireConstructionError(msg)
    assigned = fields[:count]
    names = [name for name, _ in assigned]

    if dataclasses.is_dataclass(struct):
        missing = [
            field.name
            for field in dataclasses.fields(struct)
            if field.init
            and field.name not in names
            and field.default is dataclasses.MISSING
            and field.default_factory is dataclasses.MISSING
        ]
        if missing:
            msg = (
                f"the struct {struct.__qualname__} requires values for the fields "
                f"{', '.join(missing)}"
            )
            raise RefWireConstructionError(msg)

        def construct(*values: Any) -> Any:
            return struct(**dict(zip(names, values)))

    else:

        def construct(*values: Any) -> Any:
            instance = struct.__new__(struct)
            for name, value in zip(names, values):
                setattr(instance, name, value)
            return instance

    construct.__name__ = struct.__name__
    construct.__qualname__ = struct.__qualname__
    construct.__annotations__ = {**dict(assigned), "return": struct}
    construct.__signature__ = inspect.Signature(  # type: ignore[attr-defined]
        [Parameter(name, Parameter.POSITIONAL_ONLY, annotation=shape) for name, shape in assigned],
        return_annotation=struct,
    )
    return construct


def _struct_fields(struct: type[Any]) -> list[tuple[str, Any]]:
    try:
        hints = get_type_hints(struct)
    except (AttributeError, NameError, TypeError):
        hints = {}

    if dataclasses.is_dataclass(struct):
        return [
            (field.name, hints.get(field.name, Any))
            for field in dataclasses.fields(struct)
            if field.init
        ]
    return [
        (name, shape)
        for name, shape in hints.items()
        if shape is not ClassVar and get_origin(shape) is not ClassVar
    ]


__all__ = [
    "AliasFactory",
    "ConfiguredFactory",
    "FuncFactory",
    "FuncReferenceFactory",
    "FunctionFactory",
    "InstanceFactory",
    "InvalidFactory",
    "ProxyFactory",
    "StructFactory",
    "TypeFactory",
    "is_valid",
    "new_alias_type",
    "new_configured_type",
    "new_func_reference_type",
    "new_func_type",
    "new_instance_type",
    "new_proxy_type",
    "new_struct_type",
    "new_type",
]
