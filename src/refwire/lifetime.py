from __future__ import annotations

from enum import Enum, auto


class Lifetime(Enum):
    """Defines how long a generated instance is kept by the container.

    The lifetime also decides what aliases, func references and proxies see,
    because they always retrieve their target through ``Container.get``.
    """

    SINGLETON = auto()
    """The first successful generation is cached and shared for the container's lifetime."""

    TRANSIENT = auto()
    """A new instance is generated every time the type is requested."""
