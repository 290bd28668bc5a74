"""Document repository backed by a FitNesse-style wiki folder."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from ..errors import NotASuiteError, NotFoundError
from .base import Document, DocumentRepository
from .renderer import check_table_markup, collapsible_section, render_page
from .wiki_tree import (
    ROOT_PAGE_NAME,
    SETUP_NAME,
    SUITE_SETUP_NAME,
    SUITE_TEARDOWN_NAME,
    TEARDOWN_NAME,
    WikiTree,
    load_wiki_tree,
)

if TYPE_CHECKING:
    from ..reporting.base import ResultSink

logger = logging.getLogger(__name__)

# (path below FitNesseRoot/files, name in the report folder)
REPORT_ASSETS = [
    ("css/fitnesse_base.css", "fitnesse.css"),
    ("javascript/fitnesse.js", "fitnesse.js"),
    ("images/collapsableOpen.gif", "images/collapsableOpen.gif"),
    ("images/collapsableClosed.gif", "images/collapsableClosed.gif"),
]


def is_suite_setup_or_teardown(simple_name: str, full_name: str) -> bool:
    """Reserved suite setup/teardown pages are run even if not marked as tests.

    Matches the bare page name and the dotted suffix of the full name, so
    any SuiteSetUp/SuiteTearDown below the suite is picked up.
    """
    return (
        simple_name in (SUITE_SETUP_NAME, SUITE_TEARDOWN_NAME)
        or full_name.endswith("." + SUITE_SETUP_NAME)
        or full_name.endswith("." + SUITE_TEARDOWN_NAME)
    )


class WikiRepository(DocumentRepository):
    """Resolves tests and suites from a wiki root folder.

    Args:
        root: Folder containing ``FitNesseRoot``.
        tree: Pre-built page tree. Loaded from ``root`` when omitted.
    """

    def __init__(self, root: Union[str, Path], tree: Optional[WikiTree] = None):
        self.root = Path(root)
        self.tree = tree if tree is not None else load_wiki_tree(self.root)

    @property
    def files_dir(self) -> Path:
        return self.root / ROOT_PAGE_NAME / "files"

    def prepare_result_repository(self, sink: "ResultSink") -> None:
        for source, target in REPORT_ASSETS:
            path = self.files_dir / source
            if not path.is_file():
                raise FileNotFoundError(f"Report asset not found: {path}")
            sink.add_file(path, target)
        logger.debug("Copied %d report assets from %s", len(REPORT_ASSETS), self.files_dir)

    def get_test(self, name: str) -> Document:
        index = self._find(name)
        suite_setup = self.tree.inherited(SUITE_SETUP_NAME, index)
        suite_teardown = self.tree.inherited(SUITE_TEARDOWN_NAME, index)
        content = self._format_page(name, index, suite_setup, suite_teardown)
        return Document(name=name, content=content)

    def get_suite(self, name: str) -> list[Document]:
        suite_root = self._find(name)
        if not self.tree.page(suite_root).suite:
            raise NotASuiteError(name)

        documents = []
        for index in self.tree.walk(suite_root):
            page = self.tree.page(index)
            full_name = self.tree.full_name(index)
            if page.test or is_suite_setup_or_teardown(page.name, full_name):
                documents.append(Document(
                    name=full_name,
                    content=self._format_page(full_name, index),
                ))

        logger.info("Suite %s resolved to %d documents", name, len(documents))
        return documents

    def _find(self, name: str) -> int:
        index = self.tree.find(name)
        if index is None:
            raise NotFoundError(name)
        return index

    def _format_page(
        self,
        name: str,
        index: int,
        suite_setup: Optional[int] = None,
        suite_teardown: Optional[int] = None,
    ) -> str:
        parts = []
        if suite_setup is not None:
            parts.append(self._page_content(suite_setup))
        parts.append(self._with_setup_and_teardown(index))
        if suite_teardown is not None:
            parts.append(self._page_content(suite_teardown))
        return render_page(name, "".join(parts))

    def _page_content(self, index: int) -> str:
        return check_table_markup(self.tree.full_name(index), self.tree.page(index).content)

    def _with_setup_and_teardown(self, index: int) -> str:
        """Page content with inherited SetUp/TearDown included for test pages."""
        content = self._page_content(index)
        if not self.tree.page(index).test:
            return content

        setup = self.tree.inherited(SETUP_NAME, index)
        teardown = self.tree.inherited(TEARDOWN_NAME, index)
        if setup is not None:
            content = collapsible_section("setup", "Set Up", self._page_content(setup)) + content
        if teardown is not None:
            content = content + collapsible_section("teardown", "Tear Down", self._page_content(teardown))
        return content
