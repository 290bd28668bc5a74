"""Tests for acceptance_runner/runner/results.py."""

import pytest

from acceptance_runner.runner.results import Counters, SuiteResult, TestResult

SAMPLES = [
    Counters(),
    Counters(right=5, wrong=0, ignored=3, exceptions=0),
    Counters(right=1, wrong=2, ignored=0, exceptions=1),
    Counters(right=0, wrong=0, ignored=0, exceptions=4),
]


class TestCounters:
    def test_zero_is_identity(self):
        for c in SAMPLES:
            assert c + Counters() == c
            assert Counters() + c == c

    def test_merge_is_commutative(self):
        for a in SAMPLES:
            for b in SAMPLES:
                assert a.merge(b) == b.merge(a)

    def test_merge_is_associative(self):
        for a in SAMPLES:
            for b in SAMPLES:
                for c in SAMPLES:
                    assert a.merge(b.merge(c)) == a.merge(b).merge(c)

    def test_merge_sums_fields(self):
        total = Counters(1, 2, 3, 4) + Counters(10, 20, 30, 40)
        assert total == Counters(right=11, wrong=22, ignored=33, exceptions=44)

    def test_successful_ignores_right_and_ignored(self):
        assert Counters(right=5, wrong=0, ignored=3, exceptions=0).successful
        assert not Counters(right=5, wrong=1, ignored=0, exceptions=0).successful
        assert not Counters(exceptions=1).successful
        assert Counters().successful

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            Counters(wrong=-1)

    def test_str(self):
        assert str(Counters(1, 2, 3, 4)) == "1 right, 2 wrong, 3 ignored, 4 exceptions"


class TestSuiteResult:
    def test_empty_suite_counts_zero(self):
        suite = SuiteResult("SuiteA")
        assert suite.counts == Counters()
        assert suite.successful

    def test_counts_track_every_append(self):
        suite = SuiteResult("SuiteA")
        expected = Counters()
        for i, c in enumerate(SAMPLES):
            suite.append(TestResult(c, f"SuiteA.Test{i}", ""))
            expected = expected + c
            assert suite.counts == expected

    def test_nested_suite_counts(self):
        inner = SuiteResult("SuiteA.Inner")
        inner.append(TestResult(Counters(wrong=1), "SuiteA.Inner.TestX", ""))
        outer = SuiteResult("SuiteA")
        outer.append(TestResult(Counters(right=2), "SuiteA.TestY", ""))
        outer.append(inner)
        assert outer.counts == Counters(right=2, wrong=1)
        assert [r.name for r in outer.leaves()] == ["SuiteA.TestY", "SuiteA.Inner.TestX"]

    def test_pass_fail_counts(self):
        suite = SuiteResult("SuiteA")
        suite.append(TestResult(Counters(right=1), "A", ""))
        suite.append(TestResult(Counters(exceptions=1), "B", ""))
        assert suite.total_count == 2
        assert suite.passed_count == 1
        assert suite.failed_count == 1
        assert not suite.successful
