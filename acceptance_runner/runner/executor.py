"""Test runner - orchestrates acceptance test execution.

Coordinates the full run:
1. Seed the result sink with report assets
2. Resolve the test or suite into documents
3. Execute each document, recording its result immediately
4. Record the suite result and return the merged counts
"""

import logging
import time
from typing import TYPE_CHECKING, Optional, Union

from .notifier import LoggingNotifier, Notifier
from .results import Counters, SuiteResult, TestResult

if TYPE_CHECKING:
    from ..config.schema import RunConfig
    from ..engine.base import TestEngine
    from ..reporting.base import ResultSink
    from ..repository.base import Document, DocumentRepository

logger = logging.getLogger(__name__)


def failure_detail(result: TestResult) -> str:
    counts = result.counts
    return f"wrong: {counts.wrong} exceptions: {counts.exceptions}\n{result.content}"


class TestRunner:
    """Runs tests and suites from a repository through an engine.

    Results are written to the sink as soon as each document finishes, so
    partial progress survives a crash later in the run.
    """
    __test__ = False  # not a pytest class

    def __init__(
        self,
        repository: "DocumentRepository",
        engine: "TestEngine",
        sink: "ResultSink",
        notifier: Optional[Notifier] = None,
    ):
        """Initialize test runner and seed the sink with report assets.

        Args:
            repository: Source of test documents.
            engine: Engine executing each document.
            sink: Destination for results.
            notifier: Receives per-test outcomes (default: log them).

        Raises:
            OSError: If the report assets cannot be copied.
        """
        self.repository = repository
        self.engine = engine
        self.sink = sink
        self.notifier = notifier or LoggingNotifier()
        repository.prepare_result_repository(sink)

    @classmethod
    def from_config(cls, config: "RunConfig", notifier: Optional[Notifier] = None) -> "TestRunner":
        """Build a runner over a wiki folder and an output folder."""
        from ..engine.base import create_engine
        from ..reporting.folder_repository import FolderResultRepository
        from ..repository.wiki_repository import WikiRepository

        return cls(
            repository=WikiRepository(config.fitnesse_dir),
            engine=create_engine(config.engine, config.fixtures),
            sink=FolderResultRepository(config.output_dir.resolve()),
            notifier=notifier,
        )

    def run(self, config: "RunConfig") -> Counters:
        """Run whatever ``config`` names (a suite or a single test)."""
        if config.kind == "test":
            return self.run_test(config.name)
        return self.run_suite(config.name)

    def run_test(self, name: str) -> Counters:
        """Run a single test.

        Raises:
            NotFoundError: If the test does not exist.
        """
        document = self.repository.get_test(name)
        return self.run_document(document).counts

    def run_suite(self, name: str) -> Counters:
        """Run every document of a suite, in order.

        Raises:
            NotFoundError: If the suite does not exist.
            NotASuiteError: If the page is not a suite.
        """
        start_time = time.time()
        documents = self.repository.get_suite(name)

        suite_result = SuiteResult(name)
        for document in documents:
            self.run_document(document, suite_result)
        suite_result.duration_ms = int((time.time() - start_time) * 1000)

        error = self.record_result(suite_result)
        if error is not None:
            self.notifier.fail(name, error)

        logger.info(
            "Suite %s: %d/%d passed in %dms (%s)",
            name, suite_result.passed_count, suite_result.total_count,
            suite_result.duration_ms, suite_result.counts,
        )
        return suite_result.counts

    def run_document(
        self, document: "Document", suite_result: Optional[SuiteResult] = None
    ) -> TestResult:
        """Execute one document, record it and report its outcome.

        Args:
            document: Document to execute.
            suite_result: Aggregate to append the result to, if any.

        Returns:
            The leaf result.
        """
        self.notifier.start(document.name)
        result = self.engine.run_test(document)
        if suite_result is not None:
            suite_result.append(result)

        error = self.record_result(result)
        if error is not None:
            detail = error if result.successful else error + "\n" + failure_detail(result)
            self.notifier.fail(document.name, detail)
        elif result.successful:
            self.notifier.finish(document.name)
        else:
            self.notifier.fail(document.name, failure_detail(result))
        return result

    def record_result(self, result: Union[TestResult, SuiteResult]) -> Optional[str]:
        """Record a result, returning an error message instead of raising."""
        try:
            self.sink.record_test_result(result)
        except OSError as e:
            logger.warning("Could not record result for %s: %s", result.name, e)
            return f"Could not record result for {result.name}: {e}"
        return None
