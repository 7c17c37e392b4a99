"""Pytest fixtures providing a container per test.

Enable the plugin with ``pytest_plugins = ["refwire.integrations.pytest_plugin"]``
in a ``conftest.py`` and override ``refwire_parameters`` or
``refwire_registry`` to supply configuration and registrations.
"""

from __future__ import annotations

from typing import Any

import pytest

from refwire.container import Container
from refwire.registry import TypeRegistry


@pytest.fixture()
def refwire_parameters() -> dict[str, Any]:
    """Configuration parameters of the plugin-managed container.

    Override this fixture to provide values for ``%name%`` placeholders.
    """
    return {}


@pytest.fixture()
def refwire_registry() -> TypeRegistry:
    """Registry of the plugin-managed container, empty unless overridden."""
    return TypeRegistry()


@pytest.fixture()
def refwire_container(
    refwire_registry: TypeRegistry,
    refwire_parameters: dict[str, Any],
) -> Container:
    """Fresh container built from ``refwire_registry`` and ``refwire_parameters``."""
    return Container(refwire_registry, refwire_parameters)


@pytest.fixture()
def refwire_validated_container(refwire_container: Container) -> Container:
    """``refwire_container`` after running the built-in validation constraints."""
    refwire_container.validate()
    return refwire_container


__all__ = [
    "refwire_container",
    "refwire_parameters",
    "refwire_registry",
    "refwire_validated_container",
]
