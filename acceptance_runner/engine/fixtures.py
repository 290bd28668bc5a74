"""Fixture interpreters for test tables.

The first cell of a table names the fixture that interprets it. Fixtures
annotate cells in place (pass/fail/ignore/error) and keep a Counters
tally that the interpreter reports to its listener.
"""

import html
import importlib
import logging
import re
import traceback
from typing import Any, Optional, Union

from ..errors import FixtureError
from ..runner.results import Counters
from .parse import Node, Parse

logger = logging.getLogger(__name__)

_WORDS = re.compile(r"[A-Za-z0-9]+")


def to_identifier(text: str) -> str:
    """'First Value' -> 'first_value'."""
    return "_".join(w.lower() for w in _WORDS.findall(text))


def convert(text: str, like: Any) -> Any:
    """Convert cell text to the type of ``like``."""
    if isinstance(like, bool):
        lowered = text.lower()
        if lowered in ("true", "yes", "y", "1"):
            return True
        if lowered in ("false", "no", "n", "0"):
            return False
        raise ValueError(f"Not a boolean: '{text}'")
    if isinstance(like, int):
        return int(text)
    if isinstance(like, float):
        return float(text)
    return text


class FixtureListener:
    """Receives table and document completion events."""

    def table_finished(self, table: Node) -> None:
        pass

    def tables_finished(self, counts: Counters) -> None:
        pass


class SimpleCounter(FixtureListener):
    """Keeps the final counts of a document."""

    def __init__(self):
        self.counts = Counters()

    def tables_finished(self, counts: Counters) -> None:
        self.counts = counts


class FixtureLoader:
    """Resolves fixture names from table cells to fixture classes.

    Args:
        registry: Alias -> fixture class or dotted import path.
            Names not in the registry are imported as dotted paths.
    """

    def __init__(self, registry: Optional[dict[str, Union[str, type]]] = None):
        self.registry = dict(registry or {})

    def load(self, name: str) -> "Fixture":
        target = self.registry.get(name, name)
        fixture_class = self._resolve(name, target)
        if not (isinstance(fixture_class, type) and issubclass(fixture_class, Fixture)):
            raise FixtureError(f"{name} is not a fixture")
        try:
            fixture = fixture_class()
        except Exception as e:
            raise FixtureError(f"Could not create fixture {name}: {e}") from e
        fixture.loader = self
        return fixture

    def _resolve(self, name: str, target: Union[str, type]) -> Any:
        if not isinstance(target, str):
            return target
        module_name, _, attr = target.rpartition(".")
        if not module_name:
            raise FixtureError(f"Could not find fixture: {name}")
        try:
            module = importlib.import_module(module_name)
            return getattr(module, attr)
        except (ImportError, AttributeError) as e:
            raise FixtureError(f"Could not find fixture: {name}") from e


class Fixture:
    """Base fixture; also the interpreter for a whole document.

    ``do_tables`` resolves each table's fixture from its first cell and
    lets it interpret the table. Subclasses override ``do_row``/``do_cell``.
    """

    def __init__(self):
        self.counts = Counters()
        self.loader = FixtureLoader()
        self.listener: FixtureListener = FixtureListener()
        self.args: list[str] = []

    # Document interpretation

    def do_tables(self, tables: Parse) -> None:
        total = Counters()
        for table in tables.tables:
            fixture = self.fixture_for(table)
            if fixture is not None:
                fixture.do_table(table)
                total = total + fixture.counts
            else:
                total = total + self.counts
                self.counts = Counters()
            self.listener.table_finished(table)
        self.listener.tables_finished(total)

    def fixture_for(self, table: Node) -> Optional["Fixture"]:
        """Load the fixture named in the table's first cell.

        A missing fixture is marked as an exception on that cell.
        """
        heading = table.parts[0].parts[0]
        try:
            fixture = self.loader.load(heading.text())
        except FixtureError as e:
            self.exception(heading, e)
            return None
        fixture.args = [c.text() for c in table.parts[0].parts[1:]]
        return fixture

    # Table interpretation

    def do_table(self, table: Node) -> None:
        self.do_rows(table.parts[1:])

    def do_rows(self, rows: list[Node]) -> None:
        for row in rows:
            self.do_row(row)

    def do_row(self, row: Node) -> None:
        self.do_cells(row.parts)

    def do_cells(self, cells: list[Node]) -> None:
        for i, cell in enumerate(cells):
            try:
                self.do_cell(cell, i)
            except Exception as e:
                self.exception(cell, e)

    def do_cell(self, cell: Node, column: int) -> None:
        self.ignore(cell)

    # Annotation

    def right(self, cell: Node) -> None:
        cell.add_to_tag(' class="pass"')
        self.counts = self.counts + Counters(right=1)

    def wrong(self, cell: Node, actual: Optional[str] = None) -> None:
        cell.add_to_tag(' class="fail"')
        if actual is not None:
            cell.add_to_body(
                _label("expected") + "<hr>" + html.escape(actual) + _label("actual")
            )
        self.counts = self.counts + Counters(wrong=1)

    def ignore(self, cell: Node) -> None:
        cell.add_to_tag(' class="ignore"')
        self.counts = self.counts + Counters(ignored=1)

    def info(self, cell: Node, message: str) -> None:
        cell.add_to_body(f' <span class="fit_grey">{html.escape(message)}</span>')

    def exception(self, cell: Node, error: BaseException) -> None:
        logger.debug("Fixture error in cell '%s': %s", cell.text(), error)
        trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        cell.add_to_tag(' class="error"')
        cell.add_to_body(
            '<hr><pre><div class="fit_stacktrace">' + html.escape(trace) + "</div></pre>"
        )
        self.counts = self.counts + Counters(exceptions=1)

    def check(self, cell: Node, actual: Any) -> None:
        """Compare cell text with an actual value."""
        expected = cell.text()
        if expected == "":
            self.info(cell, str(actual))
            self.ignore(cell)
            return
        try:
            matches = convert(expected, actual) == actual if actual is not None else False
        except ValueError:
            matches = False
        if matches:
            self.right(cell)
        else:
            self.wrong(cell, str(actual))


class ColumnFixture(Fixture):
    """Header row names input columns and ``name()`` output columns.

    Inputs are assigned to attributes (converted to the type of the class
    default); outputs call the method and check its return value.
    """

    columns: list[str] = []

    def do_rows(self, rows: list[Node]) -> None:
        if not rows:
            return
        self.columns = [c.text() for c in rows[0].parts]
        for row in rows[1:]:
            self.do_row(row)

    def do_row(self, row: Node) -> None:
        try:
            self.reset()
            super().do_row(row)
            self.execute()
        except Exception as e:
            self.exception(row.parts[0], e)

    def do_cell(self, cell: Node, column: int) -> None:
        if column >= len(self.columns):
            self.ignore(cell)
            return
        header = self.columns[column]
        if header.endswith("()"):
            method = getattr(self, to_identifier(header[:-2]), None)
            if method is None or not callable(method):
                raise FixtureError(f"Could not find method: {header}")
            self.check(cell, method())
        else:
            attr = to_identifier(header)
            if not hasattr(type(self), attr):
                raise FixtureError(f"Could not find field: {header}")
            setattr(self, attr, convert(cell.text(), getattr(type(self), attr)))

    def reset(self) -> None:
        """Called before each row."""

    def execute(self) -> None:
        """Called after each row."""


class DoFixture(Fixture):
    """Flow-style fixture: every row is an action on this object.

    Keyword cells sit at even positions and arguments at odd positions, so
    ``| add | 5 | to basket |`` calls ``add_to_basket("5")``. A row starting
    with ``check`` compares the action's result with the last cell; a row
    starting with ``note`` is skipped. An action returning a Fixture hands
    the rest of the table to it.
    """

    def do_flow_table(self, table: Node) -> None:
        """Interpret a later table of a flow document.

        Every row is an action, unless the first cell names a fixture
        rather than an action; that fixture then takes the table.
        """
        first_row = table.parts[0]
        if not self.has_action(first_row):
            try:
                fixture = self.loader.load(first_row.parts[0].text())
            except FixtureError:
                fixture = None
            if fixture is not None:
                fixture.args = [c.text() for c in first_row.parts[1:]]
                fixture.do_table(table)
                self.counts = self.counts + fixture.counts
                return
        self.do_rows(table.parts)

    def has_action(self, row: Node) -> bool:
        cells = row.parts
        if cells[0].text().lower() in ("note", "check"):
            return True
        name = to_identifier(" ".join(c.text() for c in cells[0::2]))
        return callable(getattr(self, name, None)) and not hasattr(DoFixture, name)

    def do_rows(self, rows: list[Node]) -> None:
        for i, row in enumerate(rows):
            try:
                result = self.do_action(row)
            except Exception as e:
                self.exception(row.parts[0], e)
                continue
            if isinstance(result, Fixture):
                result.loader = self.loader
                result.do_rows(rows[i + 1:])
                self.counts = self.counts + result.counts
                return

    def do_action(self, row: Node) -> Any:
        cells = row.parts
        keyword = cells[0].text().lower()
        if keyword == "note":
            return None
        if keyword == "check":
            if len(cells) < 3:
                raise FixtureError("check needs an action and an expected value")
            actual = self.call_action(cells[1:-1])
            self.check(cells[-1], actual)
            return None

        result = self.call_action(cells)
        if result is True:
            self.right(cells[0])
        elif result is False:
            self.wrong(cells[0])
        return result

    def call_action(self, cells: list[Node]) -> Any:
        keywords = [c.text() for c in cells[0::2]]
        args = [c.text() for c in cells[1::2]]
        name = to_identifier(" ".join(keywords))
        method = getattr(self, name, None)
        if method is None or not callable(method) or hasattr(DoFixture, name):
            raise FixtureError(f"Unknown action: {name}")
        return method(*args)


def _label(text: str) -> str:
    return f' <span class="fit_label">{text}</span>'
