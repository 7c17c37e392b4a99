from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from refwire.factories import TypeFactory, new_instance_type, new_type

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Holds the factory registered for every type id.

    Registering an id twice overwrites the previous factory. Iteration yields
    type ids in sorted order so validation and export are deterministic.
    """

    def __init__(self, types: Mapping[str, TypeFactory] | None = None) -> None:
        self._types: dict[str, TypeFactory] = {}
        if types is not None:
            self.register_all(types)

    def register(self, type_id: str, factory: TypeFactory) -> None:
        """Register factory under type_id, replacing any previous registration."""
        if type_id in self._types:
            logger.debug("Overwriting the registered type %r", type_id)
        self._types[type_id] = factory

    def register_all(self, types: Mapping[str, TypeFactory]) -> None:
        """Register every factory of a mapping of type ids to factories."""
        for type_id, factory in types.items():
            self.register(type_id, factory)

    def register_type(self, type_id: str, factory: Callable[..., Any], *arguments: Any) -> None:
        """Shorthand for ``register(type_id, new_type(factory, *arguments))``."""
        self.register(type_id, new_type(factory, *arguments))

    def inject_instance(self, type_id: str, instance: Any) -> None:
        """Register an already created object under type_id."""
        self.register(type_id, new_instance_type(instance))

    def get(self, type_id: str) -> TypeFactory | None:
        return self._types.get(type_id)

    def items(self) -> list[tuple[str, TypeFactory]]:
        return [(type_id, self._types[type_id]) for type_id in self]

    def __getitem__(self, type_id: str) -> TypeFactory:
        return self._types[type_id]

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._types))

    def __len__(self) -> int:
        return len(self._types)


__all__ = ["TypeRegistry"]
