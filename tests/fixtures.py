"""Types registered by the tests."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import ClassVar, Protocol


class MockType:
    def __init__(self, string_parameter: str = "", int_parameter: int = 0) -> None:
        self.string_parameter = string_parameter
        self.int_parameter = int_parameter

    def return_string(self, suffix: str) -> str:
        return f"{self.string_parameter} {suffix}"

    def _private(self) -> str:
        return self.string_parameter


@dataclass
class MockStruct:
    string_parameter: str
    int_parameter: int = 0

    def return_string(self, suffix: str) -> str:
        return f"{self.string_parameter} {suffix}"


@dataclass
class MockStructWithDefaults:
    string_parameter: str = "default"
    tags: list[str] = field(default_factory=list)


class PlainStruct:
    kind: ClassVar[str] = "plain"
    string_parameter: str
    float_parameter: float = 1.5


class Greeter(Protocol):
    def return_string(self, suffix: str) -> str: ...


class TypeWithDependency:
    def __init__(self, dependency: MockType) -> None:
        self.dependency = dependency


class VariadicMockType:
    def __init__(self, string_parameter: str, parameters: tuple[int, ...]) -> None:
        self.string_parameter = string_parameter
        self.parameters = parameters


class MockTypeFactory:
    """Factory object whose creation method needs further arguments."""

    def __init__(self, prefix: str = "created by factory") -> None:
        self.prefix = prefix

    def new_mock_type(self, suffix: str) -> MockType:
        return MockType(f"{self.prefix} {suffix}")

    def new_nothing(self) -> None:
        return None


class MockTypeConfigurator:
    def __init__(self, value: str) -> None:
        self.value = value

    def configure(self, mock: MockType) -> None:
        mock.string_parameter = self.value


class CountingFactory:
    """Thread-safe call counter for exactly-once construction checks."""

    def __init__(self) -> None:
        self.calls = 0
        self._lock = threading.Lock()

    def new_mock_type(self) -> MockType:
        with self._lock:
            self.calls += 1
        time.sleep(0.05)
        return MockType("counted")


def new_mock_type(string_parameter: str) -> MockType:
    return MockType(string_parameter)


def new_mock_type_with_args(string_parameter: str, int_parameter: int) -> MockType:
    return MockType(string_parameter, int_parameter)


def new_mock_type_with_default(string_parameter: str, int_parameter: int = 7) -> MockType:
    return MockType(string_parameter, int_parameter)


def new_variadic_mock_type(string_parameter: str, *parameters: int) -> VariadicMockType:
    return VariadicMockType(string_parameter, parameters)


def new_variadic_dependencies(*dependencies: MockType) -> list[MockType]:
    return list(dependencies)


def new_type_with_dependency(dependency: MockType) -> TypeWithDependency:
    return TypeWithDependency(dependency)


def new_greeter(greeter: Greeter) -> TypeWithDependency:
    return TypeWithDependency(greeter)  # type: ignore[arg-type]


def new_float_holder(value: float) -> MockType:
    return MockType(str(value))


def new_keyword_only(string_parameter: str, *, required: int) -> MockType:
    return MockType(string_parameter, required)


def return_int() -> int:
    return 42


def return_string() -> str:
    return "value"


def return_nothing() -> None:
    return None


def return_two_values() -> tuple[MockType, MockType]:
    return MockType(), MockType()


def without_return_annotation():  # noqa: ANN201
    return MockType()


class SlowType:
    """Takes long enough to construct for other threads to start retrieving."""

    def __init__(self) -> None:
        time.sleep(0.2)


class DependencyPair:
    def __init__(self, first: object, second: object) -> None:
        self.first = first
        self.second = second
