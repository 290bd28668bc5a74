"""pytest plugin: run acceptance suites as pytest tests.

Enable with ``-p acceptance_runner.pytest_plugin`` (or ``pytest_plugins``
in a conftest). Every ``*.acceptance.yaml`` run configuration is collected;
each document of its suite becomes one test item. The suite report is
recorded when the file's items have all run.
"""

from __future__ import annotations

import time
from typing import Optional

import pytest

from .config.parser import parse_config
from .repository.base import Document
from .runner.executor import TestRunner
from .runner.notifier import Notifier
from .runner.results import SuiteResult

CONFIG_SUFFIX = ".acceptance.yaml"


class AcceptanceTestFailure(AssertionError):
    """A document finished with wrong or exception counts."""


class PytestNotifier(Notifier):
    """Keeps the failure detail of each test for its item to raise."""

    def __init__(self):
        self.failures: dict[str, str] = {}

    def start(self, name: str) -> None:
        self.failures.pop(name, None)

    def fail(self, name: str, detail: str) -> None:
        self.failures[name] = detail


def pytest_collect_file(parent: pytest.Collector, file_path):
    if file_path.name.endswith(CONFIG_SUFFIX):
        return AcceptanceFile.from_parent(parent, path=file_path)
    return None


class AcceptanceFile(pytest.File):
    """Collects the documents of one run configuration."""

    suite_result: Optional[SuiteResult] = None
    started: Optional[float] = None

    def collect(self):
        run_config = parse_config(self.path)
        self.notifier = PytestNotifier()
        self.runner = TestRunner.from_config(run_config, notifier=self.notifier)

        if run_config.kind == "test":
            documents = [self.runner.repository.get_test(run_config.name)]
        else:
            documents = self.runner.repository.get_suite(run_config.name)
            self.suite_result = SuiteResult(run_config.name)

        for document in documents:
            yield AcceptanceItem.from_parent(self, name=document.name, document=document)

    def teardown(self) -> None:
        if self.suite_result is not None and self.suite_result.children:
            self.suite_result.duration_ms = int((time.time() - self.started) * 1000)
            error = self.runner.record_result(self.suite_result)
            if error is not None:
                raise OSError(error)


class AcceptanceItem(pytest.Item):
    """One acceptance test document."""

    def __init__(self, *, document: Document, **kwargs):
        super().__init__(**kwargs)
        self.document = document

    def runtest(self) -> None:
        parent = self.parent
        if parent.started is None:
            parent.started = time.time()
        parent.runner.run_document(self.document, parent.suite_result)
        detail = parent.notifier.failures.get(self.document.name)
        if detail is not None:
            raise AcceptanceTestFailure(detail)

    def repr_failure(self, excinfo, style=None):
        if isinstance(excinfo.value, AcceptanceTestFailure):
            return f"{self.document.name} failed\n{excinfo.value}"
        return super().repr_failure(excinfo, style=style)

    def reportinfo(self):
        return self.path, None, f"acceptance: {self.name}"
