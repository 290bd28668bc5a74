"""Result sink contract."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from ..runner.results import SuiteResult, TestResult


class ResultSink(ABC):
    """Durable destination for results and report assets."""

    @abstractmethod
    def add_file(self, source: Union[str, Path, bytes], relative_name: str) -> None:
        """Store a file (path or raw bytes) under ``relative_name``.

        Re-adding the same name overwrites it.

        Raises:
            OSError: If the file cannot be read or written.
        """

    @abstractmethod
    def record_test_result(self, result: Union[TestResult, SuiteResult]) -> None:
        """Persist a leaf or suite result.

        Raises:
            OSError: If the result cannot be written.
        """
