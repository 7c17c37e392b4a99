"""Syntax of raw factory arguments.

A raw argument is either a literal, a configuration placeholder (``%name%``),
a type reference (``@id``) or a type and member reference (``@id::Member``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

TYPE_REFERENCE_PREFIX = "@"
PARAMETER_DELIMITER = "%"
MEMBER_SEPARATOR = "::"


def is_parameter(value: Any) -> bool:
    """Return whether value is a ``%name%`` configuration placeholder."""
    return (
        isinstance(value, str)
        and len(value) > 2  # noqa: PLR2004
        and value.startswith(PARAMETER_DELIMITER)
        and value.endswith(PARAMETER_DELIMITER)
    )


def is_type_reference(value: Any) -> bool:
    """Return whether value is an ``@id`` or ``@id::Member`` reference."""
    return (
        isinstance(value, str)
        and len(value) > 1
        and value.startswith(TYPE_REFERENCE_PREFIX)
    )


def is_parameter_or_type_reference(value: Any) -> bool:
    return is_parameter(value) or is_type_reference(value)


def parameter_name(value: str) -> str:
    """Strip the delimiters of a ``%name%`` placeholder."""
    return value[1:-1]


@dataclass(frozen=True, slots=True)
class TypeReference:
    """A parsed ``@id`` or ``@id::Member`` reference."""

    type_id: str
    member: str | None = None

    @classmethod
    def parse(cls, value: str) -> TypeReference:
        """Parse a reference with or without the leading ``@``."""
        if value.startswith(TYPE_REFERENCE_PREFIX):
            value = value[1:]
        type_id, separator, member = value.partition(MEMBER_SEPARATOR)
        return cls(type_id=type_id, member=member if separator else None)

    def __str__(self) -> str:
        if self.member is None:
            return f"{TYPE_REFERENCE_PREFIX}{self.type_id}"
        return f"{TYPE_REFERENCE_PREFIX}{self.type_id}{MEMBER_SEPARATOR}{self.member}"


__all__ = [
    "MEMBER_SEPARATOR",
    "PARAMETER_DELIMITER",
    "TYPE_REFERENCE_PREFIX",
    "TypeReference",
    "is_parameter",
    "is_parameter_or_type_reference",
    "is_type_reference",
    "parameter_name",
]
