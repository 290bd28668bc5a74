"""Engine module - fixture interpretation of test tables."""

from .base import ENGINES, FitTestEngine, FlowTestEngine, TestEngine, create_engine
from .fixtures import (
    ColumnFixture,
    DoFixture,
    Fixture,
    FixtureListener,
    FixtureLoader,
    SimpleCounter,
)
from .parse import Parse, ParseError

__all__ = [
    "ENGINES",
    "ColumnFixture",
    "DoFixture",
    "FitTestEngine",
    "Fixture",
    "FixtureListener",
    "FixtureLoader",
    "FlowTestEngine",
    "Parse",
    "ParseError",
    "SimpleCounter",
    "TestEngine",
    "create_engine",
]
