"""Pytest configuration and fixtures."""

import pytest
from dataclasses import dataclass


@dataclass
class User:
    """Domain object used by projection tests."""
    name: str
    age: int


@pytest.fixture
def users():
    """Sample domain objects."""
    return [
        User(name="Alice", age=30),
        User(name="Bob", age=25),
        User(name="Carol", age=41),
    ]


@pytest.fixture
def user_filler():
    """Filler writing the fields of a User."""
    def fill(obj, user):
        obj["name"] = user.name
        obj["age"] = user.age
    return fill


@pytest.fixture
def value_filler():
    """Filler storing the origin under key 'v'."""
    def fill(obj, value):
        obj["v"] = value
    return fill


@pytest.fixture
def heterogeneous_array():
    """JSON array holding every kind of JSON element."""
    return [None, True, 2, 3.5, "z", [1, 2], {"k": "v"}]
