"""Result model for executed acceptance tests.

Counters tally cell outcomes; TestResult holds the outcome of one
document and SuiteResult aggregates a whole suite run.
"""

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Counters:
    """Right/wrong/ignored/exception tally."""
    right: int = 0
    wrong: int = 0
    ignored: int = 0
    exceptions: int = 0

    def __post_init__(self):
        for name in ("right", "wrong", "ignored", "exceptions"):
            if getattr(self, name) < 0:
                raise ValueError(f"Counter '{name}' must not be negative")

    def __add__(self, other: "Counters") -> "Counters":
        if not isinstance(other, Counters):
            return NotImplemented
        return Counters(
            right=self.right + other.right,
            wrong=self.wrong + other.wrong,
            ignored=self.ignored + other.ignored,
            exceptions=self.exceptions + other.exceptions,
        )

    def merge(self, other: "Counters") -> "Counters":
        return self + other

    @property
    def successful(self) -> bool:
        """Ignored and right counts never affect pass/fail."""
        return self.wrong == 0 and self.exceptions == 0

    def to_dict(self) -> dict[str, int]:
        return {
            "right": self.right,
            "wrong": self.wrong,
            "ignored": self.ignored,
            "exceptions": self.exceptions,
        }

    def __str__(self) -> str:
        return (
            f"{self.right} right, {self.wrong} wrong, "
            f"{self.ignored} ignored, {self.exceptions} exceptions"
        )


@dataclass
class TestResult:
    """Outcome of executing a single document."""
    __test__ = False  # not a pytest class

    counts: Counters
    name: str
    content: str

    @property
    def successful(self) -> bool:
        return self.counts.successful


@dataclass
class SuiteResult:
    """Aggregate outcome of a suite run.

    Counts are recomputed from the children on every access, so they
    always equal the merge of all leaf counts.
    ``duration_ms`` is set by the runner once the last child has run.
    """
    name: str
    children: list[Union[TestResult, "SuiteResult"]] = field(default_factory=list)
    duration_ms: int = 0

    def append(self, result: Union[TestResult, "SuiteResult"]) -> None:
        """Add a child result in execution order."""
        self.children.append(result)

    @property
    def counts(self) -> Counters:
        total = Counters()
        for child in self.children:
            total = total + child.counts
        return total

    @property
    def successful(self) -> bool:
        return self.counts.successful

    @property
    def total_count(self) -> int:
        return len(self.children)

    @property
    def passed_count(self) -> int:
        return sum(1 for c in self.children if c.successful)

    @property
    def failed_count(self) -> int:
        return sum(1 for c in self.children if not c.successful)

    def leaves(self) -> list[TestResult]:
        """All leaf results, depth first."""
        found: list[TestResult] = []
        for child in self.children:
            if isinstance(child, SuiteResult):
                found.extend(child.leaves())
            else:
                found.append(child)
        return found
