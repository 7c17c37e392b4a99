from __future__ import annotations

from typing import TYPE_CHECKING, Any

from refwire.exceptions import (
    RefWireCircularReferenceError,
    RefWireParameterNotFoundError,
    RefWireShapeMismatchError,
    RefWireTypeReferenceError,
    RefWireUnknownTypeError,
)
from refwire.references import (
    TypeReference,
    is_parameter,
    is_type_reference,
    parameter_name,
)
from refwire.shapes import matches_shape, shape_name

if TYPE_CHECKING:
    from refwire.container import Container


class ParameterResolver:
    """Resolve raw factory arguments against one container.

    Resolution precedence is: type references (``@id``, ``@id::Member``),
    then configuration placeholders (``%name%``), then literals. Configuration
    values that are themselves placeholder or reference text are resolved
    recursively before they are substituted.
    """

    def __init__(self, container: Container) -> None:
        self.container = container

    def resolve(self, parameter: Any, expected_shape: Any = Any) -> Any:
        """Resolve a single raw argument.

        Args:
            parameter: The raw argument as declared at registration.
            expected_shape: The shape the resolved value must satisfy.

        Returns:
            The resolved value.

        Raises:
            RefWireTypeReferenceError: If a referenced type is unknown, lacks
                the referenced member, or does not match ``expected_shape``.
            RefWireParameterNotFoundError: If a placeholder names a missing
                configuration key.
            RefWireShapeMismatchError: If a literal does not match
                ``expected_shape``.

        """
        return self._resolve(parameter, expected_shape, ())

    def _resolve(self, parameter: Any, expected_shape: Any, seen: tuple[str, ...]) -> Any:
        if is_type_reference(parameter):
            return self._resolve_type_reference(TypeReference.parse(parameter), expected_shape)
        if is_parameter(parameter):
            return self._resolve_parameter(parameter_name(parameter), expected_shape, seen)
        if not matches_shape(parameter, expected_shape):
            raise RefWireShapeMismatchError(parameter, expected_shape)
        return parameter

    def _resolve_parameter(self, name: str, expected_shape: Any, seen: tuple[str, ...]) -> Any:
        if name in seen:
            chain = [f"%{item}%" for item in (*seen[seen.index(name) :], name)]
            raise RefWireCircularReferenceError(chain)

        config = self.container.config
        if name not in config:
            raise RefWireParameterNotFoundError(name)
        return self._resolve(config[name], expected_shape, (*seen, name))

    def _resolve_type_reference(self, reference: TypeReference, expected_shape: Any) -> Any:
        try:
            instance = self.container.get(reference.type_id)
        except RefWireUnknownTypeError as error:
            if error.type_id != reference.type_id:
                raise
            msg = f"the referenced type {reference} does not exist"
            raise RefWireTypeReferenceError(msg, reference.type_id) from error

        if reference.member is not None:
            instance = bound_member(reference, instance)

        if not matches_shape(instance, expected_shape):
            msg = (
                f"the referenced type {reference} is of type {type(instance).__qualname__} "
                f"but needs to be a {shape_name(expected_shape)}"
            )
            raise RefWireTypeReferenceError(msg, reference.type_id, instance)
        return instance


def bound_member(reference: TypeReference, instance: Any) -> Any:
    """Return the public callable member named by reference, bound to instance.

    Raises:
        RefWireTypeReferenceError: If the member is private, missing or not callable.

    """
    member = reference.member or ""
    if member.startswith("_"):
        msg = f"the member {member!r} of the referenced type {reference} is not public"
        raise RefWireTypeReferenceError(msg, reference.type_id, instance)

    method = getattr(instance, member, None)
    if method is None:
        msg = (
            f"the referenced type {reference} (type {type(instance).__qualname__}) "
            f"has no member {member!r}"
        )
        raise RefWireTypeReferenceError(msg, reference.type_id, instance)
    if not callable(method):
        msg = f"the member {member!r} of the referenced type {reference} is not callable"
        raise RefWireTypeReferenceError(msg, reference.type_id, instance)
    return method


__all__ = ["ParameterResolver", "bound_member"]
