"""Arena-indexed wiki page tree.

Pages are stored in a flat list and refer to their parent and children
by index. The tree is loaded from a FitNesseRoot folder on disk or built
in memory with ``WikiTree.add_page``.

On-disk layout::

    <root>/FitNesseRoot/
        SuiteA/
            content.txt
            properties.yaml     # test: bool, suite: bool, order: [names]
            CaseB/
                content.txt
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Union

import yaml

logger = logging.getLogger(__name__)

ROOT_PAGE_NAME = "FitNesseRoot"
CONTENT_FILE = "content.txt"
PROPERTIES_FILE = "properties.yaml"

SUITE_SETUP_NAME = "SuiteSetUp"
SUITE_TEARDOWN_NAME = "SuiteTearDown"
SETUP_NAME = "SetUp"
TEARDOWN_NAME = "TearDown"

WIKI_WORD = re.compile(r"^[A-Z](?:[a-z0-9]+[A-Z][a-z0-9]*)+$")


def is_wiki_word(name: str) -> bool:
    return WIKI_WORD.match(name) is not None


@dataclass
class WikiPage:
    """A node of the page tree."""
    name: str
    content: str = ""
    test: bool = False
    suite: bool = False
    parent: Optional[int] = None
    children: list[int] = field(default_factory=list)
    order: list[str] = field(default_factory=list)


class WikiTree:
    """Page tree with parent pointers stored as indices."""

    ROOT = 0

    def __init__(self):
        self._pages: list[WikiPage] = [WikiPage(name=ROOT_PAGE_NAME)]

    def __len__(self) -> int:
        return len(self._pages)

    def page(self, index: int) -> WikiPage:
        return self._pages[index]

    def add_page(
        self,
        path: str,
        content: str = "",
        test: bool = False,
        suite: bool = False,
        order: Optional[list[str]] = None,
    ) -> int:
        """Create (or update) the page at a dotted path.

        Missing intermediate pages are created empty.

        Returns:
            Index of the page.
        """
        index = self.ROOT
        for part in split_path(path):
            child = self.child(index, part)
            if child is None:
                child = self._append(WikiPage(name=part, parent=index))
            index = child

        page = self._pages[index]
        page.content = content
        page.test = test
        page.suite = suite
        page.order = list(order or [])
        return index

    def _append(self, page: WikiPage) -> int:
        if not is_wiki_word(page.name):
            raise ValueError(f"'{page.name}' is not a valid page name")
        self._pages.append(page)
        index = len(self._pages) - 1
        if page.parent is not None:
            self._pages[page.parent].children.append(index)
        return index

    def child(self, index: int, name: str) -> Optional[int]:
        """Index of the direct child called ``name``, if any."""
        for c in self._pages[index].children:
            if self._pages[c].name == name:
                return c
        return None

    def find(self, path: str) -> Optional[int]:
        """Resolve a dotted path (``.`` or empty means the root)."""
        index = self.ROOT
        for part in split_path(path):
            found = self.child(index, part)
            if found is None:
                return None
            index = found
        return index

    def parent(self, index: int) -> Optional[int]:
        return self._pages[index].parent

    def children(self, index: int) -> list[int]:
        """Children in traversal order.

        SuiteSetUp first, then the names listed in the page's ``order``,
        then the remaining children by name, then SuiteTearDown last.
        Pages without an ``order`` therefore run in name order, as FitNesse
        does; ``add_page`` insertion order is never used.
        """
        page = self._pages[index]
        by_name = {self._pages[c].name: c for c in page.children}

        first = [by_name.pop(SUITE_SETUP_NAME)] if SUITE_SETUP_NAME in by_name else []
        last = [by_name.pop(SUITE_TEARDOWN_NAME)] if SUITE_TEARDOWN_NAME in by_name else []

        ordered = [by_name.pop(n) for n in page.order if n in by_name]
        ordered.extend(by_name[n] for n in sorted(by_name))
        return first + ordered + last

    def walk(self, index: int) -> Iterator[int]:
        """Pre-order depth-first traversal, starting with ``index`` itself."""
        stack = [index]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(self.children(current)))

    def full_name(self, index: int) -> str:
        """Dotted path of a page relative to the root."""
        parts = []
        current: Optional[int] = index
        while current is not None and current != self.ROOT:
            parts.append(self._pages[current].name)
            current = self._pages[current].parent
        return ".".join(reversed(parts))

    def inherited(self, name: str, index: int) -> Optional[int]:
        """Find the nearest page called ``name`` visible from ``index``.

        Looks at the children of ``index`` first, then walks upward through
        each ancestor's children. A page never inherits itself.
        """
        current: Optional[int] = index
        while current is not None:
            found = self.child(current, name)
            if found is not None and found != index:
                return found
            current = self._pages[current].parent
        return None


def split_path(path: str) -> list[str]:
    return [part for part in path.strip().strip(".").split(".") if part]


def load_wiki_tree(root: Union[str, Path]) -> WikiTree:
    """Read the page tree below ``<root>/FitNesseRoot``.

    Raises:
        FileNotFoundError: If the folder is not a wiki root.
    """
    root_dir = Path(root) / ROOT_PAGE_NAME
    if not root_dir.is_dir():
        raise FileNotFoundError(f"{root} is not a wiki root (no {ROOT_PAGE_NAME} folder)")

    tree = WikiTree()
    _load_page(tree, WikiTree.ROOT, root_dir)
    logger.debug("Loaded %d pages from %s", len(tree), root_dir)
    return tree


def _load_page(tree: WikiTree, index: int, folder: Path) -> None:
    page = tree.page(index)
    content_file = folder / CONTENT_FILE
    if content_file.is_file():
        with open(content_file, "r", encoding="utf-8") as f:
            page.content = f.read()

    properties_file = folder / PROPERTIES_FILE
    properties = _read_properties(properties_file)
    page.test = _flag(properties, "test", properties_file)
    page.suite = _flag(properties, "suite", properties_file)
    page.order = _order(properties, properties_file)

    for sub in sorted(folder.iterdir()):
        if sub.is_dir() and is_wiki_word(sub.name):
            child = tree._append(WikiPage(name=sub.name, parent=index))
            _load_page(tree, child, sub)


def _read_properties(path: Path) -> dict:
    if not path.is_file():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Malformed properties in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must be a YAML mapping, got {type(data).__name__}")
    return data


def _flag(properties: dict, key: str, path: Path) -> bool:
    value = properties.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"'{key}' must be true or false in {path}, got {value!r}")
    return value


def _order(properties: dict, path: Path) -> list[str]:
    value = properties.get("order")
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(n, str) for n in value):
        raise ValueError(f"'order' must be a list of page names in {path}")
    return value
