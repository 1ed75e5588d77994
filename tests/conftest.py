"""Shared fixtures for spytial tests."""

from dataclasses import dataclass, field
from enum import Enum

import pytest

from spytial.decorators import DecoratorContext, DecoratorSetBuilder


class Color(Enum):
    RED = "red"
    BLACK = "black"


@dataclass
class Person:
    name: str
    age: int

    @classmethod
    def spytial_decorators(cls):
        return DecoratorSetBuilder().atom_color("Person", "blue").build()


@dataclass
class Company:
    name: str
    employees: list[Person] = field(default_factory=list)

    @classmethod
    def spytial_decorators(cls):
        return (
            DecoratorSetBuilder()
            .orientation("employees", ["below"])
            .hide_field("name", "Company")
            .build()
        )


@dataclass
class Plain:
    """Dataclass without declared decorators."""
    value: int


@pytest.fixture
def context():
    """Isolated decorator context."""
    return DecoratorContext()


@pytest.fixture
def company():
    return Company("Acme", [Person("Alice", 30), Person("Bob", 25)])


@pytest.fixture
def colors():
    return [Color.RED, Color.RED, Color.BLACK, Color.RED, Color.BLACK]
