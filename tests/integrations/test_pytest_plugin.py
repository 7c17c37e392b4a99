"""Tests for the container fixtures of the pytest plugin."""

from typing import Any

import pytest

from refwire.container import Container
from refwire.factories import new_type
from refwire.registry import TypeRegistry
from tests.fixtures import MockType, new_mock_type, new_type_with_dependency


@pytest.fixture()
def refwire_parameters() -> dict[str, Any]:
    return {"parameter_name": "from fixture"}


@pytest.fixture()
def refwire_registry() -> TypeRegistry:
    registry = TypeRegistry()
    registry.register("foo", new_type(new_mock_type, "%parameter_name%"))
    registry.register("bar", new_type(new_type_with_dependency, "@foo"))
    return registry


def test_container_uses_overridden_fixtures(refwire_container: Container) -> None:
    foo = refwire_container.get("foo")

    assert isinstance(foo, MockType)
    assert foo.string_parameter == "from fixture"
    assert refwire_container.get("bar").dependency is foo


def test_validated_container_is_ready(refwire_validated_container: Container) -> None:
    assert refwire_validated_container.get("foo").string_parameter == "from fixture"


def test_each_test_gets_a_fresh_container(
    refwire_container: Container,
    refwire_registry: TypeRegistry,
) -> None:
    assert refwire_container.registry is refwire_registry
    assert dict(refwire_container.config) == {"parameter_name": "from fixture"}
