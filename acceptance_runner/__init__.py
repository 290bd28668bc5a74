"""Acceptance runner - executes wiki test suites and writes HTML reports."""

from .errors import (
    ConfigError,
    ContentFormatError,
    FixtureError,
    NotASuiteError,
    NotFoundError,
    RepositoryError,
)
from .runner import Counters, SuiteResult, TestResult, TestRunner

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ContentFormatError",
    "Counters",
    "FixtureError",
    "NotASuiteError",
    "NotFoundError",
    "RepositoryError",
    "SuiteResult",
    "TestResult",
    "TestRunner",
]
