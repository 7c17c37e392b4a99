from __future__ import annotations

from typing import Any


class RefWireError(Exception):
    """Represent a base class for all refwire-specific failures.

    Catch this type when you want to handle any refwire error path without
    matching each concrete exception class individually.

    Attributes:
        generating_type_id: The type id whose generation failed, set by
            ``Container.get`` for the innermost failing type and shown as a
            message prefix.
    """

    generating_type_id: str | None = None

    def __str__(self) -> str:
        message = super().__str__()
        if self.generating_type_id is None:
            return message
        return f"error while generating type {self.generating_type_id!r}: {message}"


class RefWireConstructionError(RefWireError):
    """Signal a malformed type factory descriptor.

    Recorded when a factory is created through ``new_type``, ``new_struct_type``
    and the other factory helpers. The error is kept by an ``InvalidFactory``
    and surfaces when the container is validated or when the type is generated.

    Typical fixes include passing a callable with a return annotation naming an
    object type, and supplying as many raw arguments as the callable accepts.
    """


class RefWireUnknownTypeError(RefWireError):
    """Signal retrieval of a type id that has no registered factory.

    Raised by ``Container.get`` when the id was never registered.
    """

    def __init__(self, type_id: str) -> None:
        self.type_id = type_id
        super().__init__(f"there is no registered type {type_id!r}")


class RefWireTypeReferenceError(RefWireError):
    """Signal that a referenced type cannot be used where it is referenced.

    Raised by ``ParameterResolver.resolve`` for ``@id`` and ``@id::Member``
    arguments when the referenced type is unknown, the member does not exist,
    or the instance does not match the expected argument shape. Factories
    re-raise it with the constructor signature and argument position.

    Attributes:
        type_id: The referenced type id (without ``@``).
        instance: The instance obtained from the container, if any.
        position: The 1-based argument position, once a factory added it.
    """

    def __init__(
        self,
        message: str,
        type_id: str,
        instance: Any = None,
        position: int | None = None,
    ) -> None:
        self.type_id = type_id
        self.instance = instance
        self.position = position
        super().__init__(message)


class RefWireParameterNotFoundError(RefWireError):
    """Signal that a ``%name%`` placeholder has no configuration value."""

    def __init__(self, parameter: str) -> None:
        self.parameter = parameter
        super().__init__(f"the parameter {parameter!r} is not defined in the configuration")


class RefWireShapeMismatchError(RefWireError):
    """Signal that a literal argument does not match its expected shape.

    No implicit coercion is performed: an ``int`` does not satisfy a ``float``
    parameter and a ``str`` never satisfies an ``int`` parameter.
    """

    def __init__(self, value: Any, expected: Any, location: str | None = None) -> None:
        self.value = value
        self.expected = expected
        self.location = location
        expected_name = getattr(expected, "__qualname__", None) or repr(expected)
        message = (
            f"the value {value!r} is of type {type(value).__qualname__} "
            f"but needs to be a {expected_name}"
        )
        if location is not None:
            message = f"{location}: {message}"
        super().__init__(message)


class RefWireCircularReferenceError(RefWireError):
    """Signal a reference chain that loops back onto itself.

    Raised by ``Container.get`` when a type id reappears before its own
    construction completed, and by the resolver for looping ``%name%``
    placeholders.

    Attributes:
        chain: The ids of the loop in resolution order, ending with the
            repeated id.
    """

    def __init__(self, chain: list[str]) -> None:
        self.chain = chain
        super().__init__(f"circular reference detected: {' -> '.join(chain)}")


class RefWireValidationError(RefWireError):
    """Signal that a validation constraint rejected the container.

    Raised by ``Container.validate`` and by every built-in constraint. The
    failed validation is recorded and re-raised by each later ``Container.get``.

    Attributes:
        type_id: The offending type id, if the failure belongs to one.
    """

    def __init__(self, message: str, type_id: str | None = None) -> None:
        self.type_id = type_id
        super().__init__(message)
