"""Tests for the type registry."""

from refwire.factories import (
    FunctionFactory,
    InstanceFactory,
    InvalidFactory,
    new_alias_type,
    new_type,
)
from refwire.registry import TypeRegistry
from tests.fixtures import MockType, new_mock_type, return_int


def test_register_and_get() -> None:
    registry = TypeRegistry()
    factory = new_type(new_mock_type, "foo")

    registry.register("foo", factory)

    assert registry.get("foo") is factory
    assert registry["foo"] is factory
    assert "foo" in registry
    assert registry.get("missing") is None


def test_register_overwrites_previous_factory() -> None:
    registry = TypeRegistry()
    registry.register("foo", new_type(new_mock_type, "first"))
    second = new_type(new_mock_type, "second")

    registry.register("foo", second)

    assert registry.get("foo") is second
    assert len(registry) == 1


def test_register_all() -> None:
    registry = TypeRegistry()
    first = new_type(new_mock_type, "first")
    second = new_alias_type("first")

    registry.register_all({"first": first, "second": second})

    assert registry.get("first") is first
    assert registry.get("second") is second


def test_init_registers_mapping() -> None:
    registry = TypeRegistry({"foo": new_alias_type("bar")})

    assert "foo" in registry


def test_register_type_builds_function_factory() -> None:
    registry = TypeRegistry()

    registry.register_type("foo", new_mock_type, "%parameter_name%")

    factory = registry.get("foo")
    assert isinstance(factory, FunctionFactory)
    assert factory.arguments() == ["%parameter_name%"]


def test_invalid_registration_does_not_raise() -> None:
    registry = TypeRegistry()

    registry.register_type("broken", return_int)

    assert isinstance(registry.get("broken"), InvalidFactory)


def test_inject_instance() -> None:
    registry = TypeRegistry()
    instance = MockType()

    registry.inject_instance("foo", instance)

    factory = registry.get("foo")
    assert isinstance(factory, InstanceFactory)
    assert factory.instance is instance


def test_iterates_sorted_type_ids() -> None:
    registry = TypeRegistry()
    for type_id in ["c", "a", "b"]:
        registry.register(type_id, new_alias_type("x"))

    assert list(registry) == ["a", "b", "c"]
    assert [type_id for type_id, _ in registry.items()] == ["a", "b", "c"]
