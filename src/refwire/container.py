from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from contextvars import ContextVar
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from refwire.exceptions import (
    RefWireCircularReferenceError,
    RefWireError,
    RefWireUnknownTypeError,
    RefWireValidationError,
)
from refwire.integrations.pydantic_settings import (
    is_pydantic_settings_instance,
    settings_parameters,
)
from refwire.lifetime import Lifetime
from refwire.lock_mode import LockMode
from refwire.registry import TypeRegistry
from refwire.resolver import ParameterResolver
from refwire.validation import ContainerValidator

if TYPE_CHECKING:
    from refwire.factories import TypeFactory

logger = logging.getLogger(__name__)

_MISSING: Any = object()

# Type ids currently under construction in this thread or task, keyed by container.
_resolution_chain: ContextVar[tuple[tuple[int, str], ...]] = ContextVar(
    "refwire_resolution_chain",
    default=(),
)


class Container:
    """Own a type registry and a configuration mapping and produce instances.

    Types are registered first (directly or through ``registry``), then the
    container is validated once, then ``get`` may be called from any number of
    threads. With the default ``Lifetime.SINGLETON`` the first successful
    generation of a type id is cached and every later ``get`` returns it
    without calling the constructor again. Failed generations are not cached.

    A cached instance stays tied to the factory that produced it, so a type
    re-registered after its first retrieval, through the container or directly
    through its registry, is generated again on the next ``get``.
    """

    def __init__(
        self,
        registry: TypeRegistry | None = None,
        config: Mapping[str, Any] | Any | None = None,
        *,
        lifetime: Lifetime = Lifetime.SINGLETON,
        lock_mode: LockMode = LockMode.THREAD,
    ) -> None:
        """Initialize a container.

        Args:
            registry: Registry holding the type factories. A new empty registry
                is created when omitted.
            config: Configuration parameters referenced as ``%name%``. Accepts
                any mapping or a Pydantic settings instance; a snapshot is taken.
            lifetime: Caching policy for generated instances.
            lock_mode: Locking used to construct cached types exactly once.

        """
        self.registry = registry if registry is not None else TypeRegistry()
        self._config = MappingProxyType(_as_parameters(config))
        self._lifetime = lifetime
        self._lock_mode = lock_mode
        self._resolver = ParameterResolver(self)
        # type id -> (factory that produced the instance, instance)
        self._instances: dict[str, tuple[TypeFactory, Any]] = {}
        self._construction_lock = threading.RLock()
        self._validation_error: RefWireValidationError | None = None

    @property
    def config(self) -> Mapping[str, Any]:
        """Read-only view of the configuration parameters."""
        return self._config

    @property
    def lifetime(self) -> Lifetime:
        return self._lifetime

    @property
    def resolver(self) -> ParameterResolver:
        """The parameter resolver bound to this container."""
        return self._resolver

    def register(self, type_id: str, factory: TypeFactory) -> None:
        """Register factory under type_id, replacing any previous registration.

        A cached instance of a replaced type is never returned again.
        """
        self.registry.register(type_id, factory)

    def register_all(self, types: Mapping[str, TypeFactory]) -> None:
        for type_id, factory in types.items():
            self.register(type_id, factory)

    def register_type(self, type_id: str, factory: Callable[..., Any], *arguments: Any) -> None:
        """Register ``new_type(factory, *arguments)`` under type_id."""
        self.registry.register_type(type_id, factory, *arguments)

    def inject_instance(self, type_id: str, instance: Any) -> None:
        self.registry.inject_instance(type_id, instance)

    def has(self, type_id: str) -> bool:
        return type_id in self.registry

    def __contains__(self, type_id: object) -> bool:
        return type_id in self.registry

    def validate(self, validator: ContainerValidator | None = None) -> None:
        """Run validation constraints over the registered types.

        A failure is recorded, and every later ``get`` raises a new
        ``RefWireValidationError`` chained from it until a subsequent
        validation succeeds.

        Args:
            validator: Constraints to run. Defaults to a ``ContainerValidator``
                with the built-in constraints.

        Raises:
            RefWireValidationError: If any constraint rejects the container.

        """
        if validator is None:
            validator = ContainerValidator()

        try:
            validator.validate(self)
        except RefWireValidationError as error:
            self._validation_error = error
            raise
        self._validation_error = None

    def get(self, type_id: str) -> Any:
        """Return the instance of a registered type.

        A ``RefWireError`` raised while generating the type is re-raised with
        ``generating_type_id`` set to the innermost type id whose generation
        failed.

        Args:
            type_id: The id the type was registered under.

        Raises:
            RefWireUnknownTypeError: If type_id is not registered.
            RefWireCircularReferenceError: If type_id is already being
                constructed further up the current resolution chain.
            RefWireValidationError: If the last validation failed.

        """
        if self._validation_error is not None:
            error = self._validation_error
            raise RefWireValidationError(str(error), error.type_id) from error

        factory = self.registry.get(type_id)
        if factory is None:
            raise RefWireUnknownTypeError(type_id)

        if self._lifetime is Lifetime.SINGLETON:
            cached = self._cached_instance(type_id, factory)
            if cached is not _MISSING:
                return cached

        chain = _resolution_chain.get()
        key = (id(self), type_id)
        if key in chain:
            cycle = [item for _, item in chain[chain.index(key) :]]
            raise RefWireCircularReferenceError([*cycle, type_id])

        token = _resolution_chain.set((*chain, key))
        try:
            if self._lifetime is Lifetime.TRANSIENT:
                return factory.generate(self._resolver)
            if self._lock_mode is LockMode.NONE:
                return self._create_singleton(type_id, factory)
            with self._construction_lock:
                # Double-check: another thread may have finished while we waited.
                cached = self._cached_instance(type_id, factory)
                if cached is not _MISSING:
                    return cached
                return self._create_singleton(type_id, factory)
        except RefWireError as error:
            if error.generating_type_id is None:
                error.generating_type_id = type_id
            raise
        finally:
            _resolution_chain.reset(token)

    def _cached_instance(self, type_id: str, factory: TypeFactory) -> Any:
        cached = self._instances.get(type_id)
        if cached is None or cached[0] is not factory:
            return _MISSING
        return cached[1]

    def _create_singleton(self, type_id: str, factory: TypeFactory) -> Any:
        instance = factory.generate(self._resolver)
        self._instances[type_id] = (factory, instance)
        logger.debug("Cached the instance of type %r", type_id)
        return instance


def _as_parameters(config: Any) -> dict[str, Any]:
    if config is None:
        return {}
    if is_pydantic_settings_instance(config):
        return settings_parameters(config)
    if isinstance(config, Mapping):
        return dict(config)
    msg = (
        "The container configuration must be a mapping or a Pydantic settings instance, "
        f"got {type(config).__qualname__}."
    )
    raise TypeError(msg)


__all__ = ["Container"]
