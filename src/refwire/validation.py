"""Constraints checked once all types are registered and before any retrieval.

Every built-in constraint walks type ids in sorted order, so a registry with
several problems always reports the same one first.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

from refwire.exceptions import RefWireCircularReferenceError, RefWireValidationError
from refwire.factories import InvalidFactory
from refwire.references import TypeReference, is_parameter, is_type_reference, parameter_name

if TYPE_CHECKING:
    from refwire.container import Container

logger = logging.getLogger(__name__)


class Constraint(Protocol):
    """Protocol for a single validation rule."""

    def validate(self, container: Container) -> None:
        """Raise ``RefWireValidationError`` if container violates the rule.

        Args:
            container: The container whose registered types are checked.

        """


class NoInvalidTypesConstraint:
    """Reject containers holding a factory that failed construction."""

    def validate(self, container: Container) -> None:
        for type_id, factory in container.registry.items():
            if isinstance(factory, InvalidFactory):
                msg = f"type {type_id!r} is invalid: {factory.error}"
                raise RefWireValidationError(msg, type_id) from factory.error


class TypeParametersConstraint:
    """Reject ``%name%`` arguments whose name is missing from the configuration."""

    def validate(self, container: Container) -> None:
        for type_id, factory in container.registry.items():
            for argument in factory.arguments():
                if is_parameter(argument) and parameter_name(argument) not in container.config:
                    msg = f"type {type_id!r} references the unknown parameter {argument!r}"
                    raise RefWireValidationError(msg, type_id)


class TypeReferencesConstraint:
    """Reject references to unregistered types and circular references."""

    def validate(self, container: Container) -> None:
        graph: dict[str, list[str]] = {}
        for type_id, factory in container.registry.items():
            references = [
                TypeReference.parse(argument).type_id
                for argument in factory.arguments()
                if is_type_reference(argument)
            ]
            for reference in references:
                if reference not in container.registry:
                    msg = f"type {type_id!r} references the unknown type '@{reference}'"
                    raise RefWireValidationError(msg, type_id)
            graph[type_id] = references

        finished: set[str] = set()
        for type_id in graph:
            self._visit(type_id, graph, [], finished)

    def _visit(
        self,
        type_id: str,
        graph: dict[str, list[str]],
        path: list[str],
        finished: set[str],
    ) -> None:
        if type_id in finished:
            return
        if type_id in path:
            cycle = RefWireCircularReferenceError([*path[path.index(type_id) :], type_id])
            msg = f"type {type_id!r} has a circular reference: {' -> '.join(cycle.chain)}"
            raise RefWireValidationError(msg, type_id) from cycle

        path.append(type_id)
        for reference in graph.get(type_id, []):
            self._visit(reference, graph, path, finished)
        path.pop()
        finished.add(type_id)


def default_constraints() -> list[Constraint]:
    return [
        NoInvalidTypesConstraint(),
        TypeParametersConstraint(),
        TypeReferencesConstraint(),
    ]


class ContainerValidator:
    """Run an ordered batch of constraints, stopping at the first failure."""

    def __init__(self, constraints: Iterable[Constraint] | None = None) -> None:
        self.constraints: list[Constraint] = (
            list(constraints) if constraints is not None else default_constraints()
        )

    def add(self, constraint: Constraint) -> None:
        self.constraints.append(constraint)

    def validate(self, container: Container) -> None:
        """Run every constraint in order.

        Raises:
            RefWireValidationError: The first failure reported by a constraint.

        """
        logger.debug(
            "Validating %d registered types with %d constraints",
            len(container.registry),
            len(self.constraints),
        )
        for constraint in self.constraints:
            constraint.validate(container)


__all__ = [
    "Constraint",
    "ContainerValidator",
    "NoInvalidTypesConstraint",
    "TypeParametersConstraint",
    "TypeReferencesConstraint",
    "default_constraints",
]
