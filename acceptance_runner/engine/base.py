"""Test engines: run one document's tables through a fixture interpreter.

Two interpreter families are available:

- ``FitTestEngine``: every table names the fixture that interprets it.
- ``FlowTestEngine``: when the first table names a DoFixture, that fixture
  stays in charge and interprets every later table as actions on itself.

Both return the same TestResult shape and never raise.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Union

from ..repository.base import Document
from ..runner.results import Counters, TestResult
from .fixtures import DoFixture, Fixture, FixtureListener, FixtureLoader, SimpleCounter
from .parse import Parse

logger = logging.getLogger(__name__)

NO_TABLES_MESSAGE = " contains no tables"


class TestEngine(ABC):
    """Executes a document and produces a leaf TestResult."""
    __test__ = False  # not a pytest class

    def __init__(self, fixtures: Optional[dict[str, Union[str, type]]] = None):
        """Initialize test engine.

        Args:
            fixtures: Fixture aliases usable in table headings
                (alias -> fixture class or dotted import path).
        """
        self.loader = FixtureLoader(fixtures)

    def run_test(self, document: Document) -> TestResult:
        if "<table" not in document.content:
            return TestResult(Counters(), document.name, NO_TABLES_MESSAGE)

        try:
            tables = Parse(document.content)
            counter = SimpleCounter()
            self.interpret(tables, counter)
            return TestResult(counter.counts, document.name, tables.print())
        except Exception as e:
            logger.warning("Test %s failed with %s: %s", document.name, type(e).__name__, e)
            return TestResult(Counters(exceptions=1), document.name, f"{type(e).__name__}: {e}")

    @abstractmethod
    def interpret(self, tables: Parse, listener: FixtureListener) -> None:
        """Run the fixtures over ``tables``, annotating them in place."""


class FitTestEngine(TestEngine):

    def interpret(self, tables: Parse, listener: FixtureListener) -> None:
        runner = Fixture()
        runner.loader = self.loader
        runner.listener = listener
        runner.do_tables(tables)


class FlowTestEngine(TestEngine):

    def interpret(self, tables: Parse, listener: FixtureListener) -> None:
        runner = FlowRunner()
        runner.loader = self.loader
        runner.listener = listener
        runner.do_tables(tables)


class FlowRunner(Fixture):
    """Document interpreter where a leading DoFixture drives later tables."""

    def do_tables(self, tables: Parse) -> None:
        total = Counters()
        flow: Optional[DoFixture] = None

        for i, table in enumerate(tables.tables):
            if flow is not None:
                flow.counts = Counters()
                flow.do_flow_table(table)
                total = total + flow.counts
            else:
                fixture = self.fixture_for(table)
                if fixture is None:
                    total = total + self.counts
                    self.counts = Counters()
                else:
                    fixture.do_table(table)
                    total = total + fixture.counts
                    if i == 0 and isinstance(fixture, DoFixture):
                        flow = fixture
            self.listener.table_finished(table)

        self.listener.tables_finished(total)


ENGINES = {
    "fit": FitTestEngine,
    "flow": FlowTestEngine,
}


def create_engine(
    kind: str, fixtures: Optional[dict[str, Union[str, type]]] = None
) -> TestEngine:
    """Create an engine by family name ('fit' or 'flow')."""
    try:
        engine_class = ENGINES[kind]
    except KeyError:
        raise ValueError(
            f"Unknown engine '{kind}'. Must be one of: {', '.join(sorted(ENGINES))}"
        ) from None
    return engine_class(fixtures)
