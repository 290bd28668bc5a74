"""Runner module - test orchestration."""

from .executor import TestRunner, failure_detail
from .notifier import LoggingNotifier, Notifier, RecordingNotifier
from .results import Counters, SuiteResult, TestResult

__all__ = [
    "Counters",
    "LoggingNotifier",
    "Notifier",
    "RecordingNotifier",
    "SuiteResult",
    "TestResult",
    "TestRunner",
    "failure_detail",
]
