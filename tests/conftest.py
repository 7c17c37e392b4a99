"""Shared pytest fixtures for refwire tests."""

from typing import Any

import pytest

from refwire.container import Container
from refwire.registry import TypeRegistry
from refwire.resolver import ParameterResolver

pytest_plugins = ["refwire.integrations.pytest_plugin"]


@pytest.fixture()
def config() -> dict[str, Any]:
    """Configuration parameters shared by most tests."""
    return {
        "parameter_name": "parameter value",
        "int_parameter": 42,
        "float_parameter": 1.5,
        "indirect": "%parameter_name%",
        "reference": "@foo",
    }


@pytest.fixture()
def registry() -> TypeRegistry:
    return TypeRegistry()


@pytest.fixture()
def container(registry: TypeRegistry, config: dict[str, Any]) -> Container:
    """Default container with singleton caching and thread locks."""
    return Container(registry, config)


@pytest.fixture()
def resolver(container: Container) -> ParameterResolver:
    return container.resolver
