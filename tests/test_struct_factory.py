"""Tests for factories assigning class fields positionally."""

import pytest

from refwire.exceptions import RefWireShapeMismatchError
from refwire.factories import InvalidFactory, StructFactory, is_valid, new_struct_type
from refwire.resolver import ParameterResolver
from tests.fixtures import MockStruct, MockStructWithDefaults, PlainStruct


class TestNewStructType:
    def test_returns_struct_factory(self) -> None:
        factory = new_struct_type(MockStruct, "foo", 1)

        assert isinstance(factory, StructFactory)
        assert factory.arguments() == ["foo", 1]

    def test_rejects_non_class(self) -> None:
        factory = new_struct_type(MockStruct("foo"))  # type: ignore[arg-type]

        assert isinstance(factory, InvalidFactory)
        assert "must be a class (given MockStruct)" in str(factory.error)

    def test_rejects_more_arguments_than_fields(self) -> None:
        factory = new_struct_type(MockStruct, "foo", 1, 2)

        assert isinstance(factory, InvalidFactory)
        assert str(factory.error) == "the struct MockStruct has 2 fields but 3 arguments were given"

    def test_rejects_uncovered_required_dataclass_fields(self) -> None:
        factory = new_struct_type(MockStruct)

        assert isinstance(factory, InvalidFactory)
        assert "requires values for the fields string_parameter" in str(factory.error)

    def test_class_variables_are_not_fields(self) -> None:
        assert is_valid(new_struct_type(PlainStruct, "foo", 2.5))
        assert not is_valid(new_struct_type(PlainStruct, "foo", 2.5, "kind"))


class TestStructFactoryGenerate:
    def test_assigns_dataclass_fields_in_declaration_order(
        self,
        resolver: ParameterResolver,
    ) -> None:
        generated = new_struct_type(MockStruct, "I was created by @foo").generate(resolver)

        assert isinstance(generated, MockStruct)
        assert generated.string_parameter == "I was created by @foo"
        assert generated.int_parameter == 0

    def test_resolves_field_values(self, resolver: ParameterResolver) -> None:
        factory = new_struct_type(MockStruct, "%parameter_name%", "%int_parameter%")

        generated = factory.generate(resolver)

        assert generated == MockStruct("parameter value", 42)

    def test_omitted_fields_keep_defaults(self, resolver: ParameterResolver) -> None:
        generated = new_struct_type(MockStructWithDefaults).generate(resolver)

        assert generated.string_parameter == "default"
        assert generated.tags == []

    def test_assigns_plain_class_attributes(self, resolver: ParameterResolver) -> None:
        generated = new_struct_type(PlainStruct, "foo", 2.5).generate(resolver)

        assert isinstance(generated, PlainStruct)
        assert generated.string_parameter == "foo"
        assert generated.float_parameter == 2.5
        assert PlainStruct.float_parameter == 1.5

    def test_plain_class_unassigned_attributes_fall_back_to_class_values(
        self,
        resolver: ParameterResolver,
    ) -> None:
        generated = new_struct_type(PlainStruct, "foo").generate(resolver)

        assert generated.float_parameter == 1.5

    def test_field_shapes_are_checked_lazily(self, resolver: ParameterResolver) -> None:
        factory = new_struct_type(MockStruct, 42)
        assert is_valid(factory)

        with pytest.raises(RefWireShapeMismatchError) as exc_info:
            factory.generate(resolver)

        assert exc_info.value.location == "input argument 1 of MockStruct(str)"
