from refwire.container import Container
from refwire.exceptions import (
    RefWireCircularReferenceError,
    RefWireConstructionError,
    RefWireError,
    RefWireParameterNotFoundError,
    RefWireShapeMismatchError,
    RefWireTypeReferenceError,
    RefWireUnknownTypeError,
    RefWireValidationError,
)
from refwire.factories import (
    TypeFactory,
    is_valid,
    new_alias_type,
    new_configured_type,
    new_func_reference_type,
    new_func_type,
    new_instance_type,
    new_proxy_type,
    new_struct_type,
    new_type,
)
from refwire.lifetime import Lifetime
from refwire.lock_mode import LockMode
from refwire.registry import TypeRegistry
from refwire.resolver import ParameterResolver
from refwire.validation import (
    Constraint,
    ContainerValidator,
    NoInvalidTypesConstraint,
    TypeParametersConstraint,
    TypeReferencesConstraint,
)

__all__ = [
    "Constraint",
    "Container",
    "ContainerValidator",
    "Lifetime",
    "LockMode",
    "NoInvalidTypesConstraint",
    "ParameterResolver",
    "RefWireCircularReferenceError",
    "RefWireConstructionError",
    "RefWireError",
    "RefWireParameterNotFoundError",
    "RefWireShapeMismatchError",
    "RefWireTypeReferenceError",
    "RefWireUnknownTypeError",
    "RefWireValidationError",
    "TypeFactory",
    "TypeParametersConstraint",
    "TypeReferencesConstraint",
    "TypeRegistry",
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
