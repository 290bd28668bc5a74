"""Document repository contract."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..reporting.base import ResultSink


@dataclass(frozen=True)
class Document:
    """A named unit of test markup."""
    name: str
    content: str


class DocumentRepository(ABC):
    """Resolves page names into executable documents."""

    @abstractmethod
    def get_test(self, name: str) -> Document:
        """Resolve a single test page.

        Raises:
            NotFoundError: If no page exists at ``name``.
        """

    @abstractmethod
    def get_suite(self, name: str) -> list[Document]:
        """Resolve a suite page into its documents, in execution order.

        Raises:
            NotFoundError: If no page exists at ``name``.
            NotASuiteError: If the page is not marked as a suite.
        """

    @abstractmethod
    def prepare_result_repository(self, sink: "ResultSink") -> None:
        """Copy the static report assets the documents link to into ``sink``.

        Raises:
            OSError: If an asset is missing or cannot be written.
        """
