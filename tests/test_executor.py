"""Tests for acceptance_runner/runner/executor.py."""

from types import SimpleNamespace

import pytest

from acceptance_runner.engine.base import FitTestEngine, TestEngine
from acceptance_runner.errors import NotASuiteError, NotFoundError
from acceptance_runner.reporting.base import ResultSink
from acceptance_runner.reporting.folder_repository import FolderResultRepository
from acceptance_runner.repository.base import Document, DocumentRepository
from acceptance_runner.repository.wiki_repository import WikiRepository
from acceptance_runner.runner import executor
from acceptance_runner.runner.executor import TestRunner, failure_detail
from acceptance_runner.runner.notifier import RecordingNotifier
from acceptance_runner.runner.results import Counters, SuiteResult, TestResult

from conftest import division_table


class FakeRepository(DocumentRepository):
    def __init__(self, suite_name, documents, fail_prepare=False):
        self.suite_name = suite_name
        self.documents = documents
        self.fail_prepare = fail_prepare
        self.prepared = []

    def get_test(self, name):
        for d in self.documents:
            if d.name == name:
                return d
        raise NotFoundError(name)

    def get_suite(self, name):
        if name == self.suite_name:
            return list(self.documents)
        self.get_test(name)
        raise NotASuiteError(name)

    def prepare_result_repository(self, sink):
        if self.fail_prepare:
            raise FileNotFoundError("fitnesse.css")
        self.prepared.append(sink)


class FakeSink(ResultSink):
    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.recorded = []
        self.files = {}

    def add_file(self, source, relative_name):
        self.files[relative_name] = source

    def record_test_result(self, result):
        if result.name in self.fail_on:
            raise OSError(f"cannot write {result.name}")
        self.recorded.append(result)


class ScriptedEngine(TestEngine):
    def __init__(self, counts):
        super().__init__()
        self.counts = counts
        self.ran = []

    def run_test(self, document):
        self.ran.append(document.name)
        return TestResult(self.counts[document.name], document.name, f"report of {document.name}")

    def interpret(self, tables, listener):
        raise AssertionError("not used")


DOCUMENTS = [
    Document("SuiteA.SuiteSetUp", "setup"),
    Document("SuiteA.CaseA", "a"),
    Document("SuiteA.SubSuite.CaseB", "b"),
    Document("SuiteA.SuiteTearDown", "teardown"),
]

COUNTS = {
    "SuiteA.SuiteSetUp": Counters(),
    "SuiteA.CaseA": Counters(right=3, ignored=1),
    "SuiteA.SubSuite.CaseB": Counters(right=1, wrong=2),
    "SuiteA.SuiteTearDown": Counters(),
}


def make_runner(fail_on=(), **kwargs):
    repository = FakeRepository("SuiteA", DOCUMENTS, **kwargs)
    engine = ScriptedEngine(COUNTS)
    sink = FakeSink(fail_on)
    notifier = RecordingNotifier()
    return TestRunner(repository, engine, sink, notifier), repository, engine, sink, notifier


class TestRunSuite:
    def test_runs_in_order_and_merges_counts(self):
        runner, repository, engine, sink, _ = make_runner()
        counts = runner.run_suite("SuiteA")

        assert repository.prepared == [sink]
        assert engine.ran == [d.name for d in DOCUMENTS]
        assert counts == Counters(right=4, wrong=2, ignored=1)

    def test_records_each_leaf_then_suite(self):
        runner, _, _, sink, _ = make_runner()
        runner.run_suite("SuiteA")

        assert [r.name for r in sink.recorded] == [d.name for d in DOCUMENTS] + ["SuiteA"]
        suite = sink.recorded[-1]
        assert isinstance(suite, SuiteResult)
        assert suite.counts == Counters(right=4, wrong=2, ignored=1)
        assert len(suite.children) == 4

    def test_notifications(self):
        runner, _, _, _, notifier = make_runner()
        runner.run_suite("SuiteA")

        assert notifier.events[:2] == [("start", "SuiteA.SuiteSetUp"), ("finish", "SuiteA.SuiteSetUp")]
        assert notifier.failures() == ["SuiteA.SubSuite.CaseB"]
        fail = next(e for e in notifier.events if e[0] == "fail")
        assert fail[2] == "wrong: 2 exceptions: 0\nreport of SuiteA.SubSuite.CaseB"

    def test_leaf_storage_failure_is_isolated(self):
        runner, _, engine, sink, notifier = make_runner(fail_on={"SuiteA.CaseA"})
        counts = runner.run_suite("SuiteA")

        assert engine.ran == [d.name for d in DOCUMENTS]
        assert "SuiteA.CaseA" not in [r.name for r in sink.recorded]
        assert sink.recorded[-1].name == "SuiteA"
        assert notifier.failures() == ["SuiteA.CaseA", "SuiteA.SubSuite.CaseB"]
        assert counts == Counters(right=4, wrong=2, ignored=1)

    def test_suite_duration_recorded_before_storing(self, monkeypatch):
        clock = iter([100.0, 102.5])
        monkeypatch.setattr(executor, "time", SimpleNamespace(time=lambda: next(clock)))
        runner, _, _, sink, _ = make_runner()
        runner.run_suite("SuiteA")
        assert sink.recorded[-1].duration_ms == 2500

    def test_suite_storage_failure_reported_against_suite(self):
        runner, _, _, _, notifier = make_runner(fail_on={"SuiteA"})
        counts = runner.run_suite("SuiteA")
        assert notifier.failures()[-1] == "SuiteA"
        assert counts == Counters(right=4, wrong=2, ignored=1)

    def test_not_found_runs_nothing(self):
        runner, _, engine, sink, notifier = make_runner()
        with pytest.raises(NotFoundError):
            runner.run_suite("Missing")
        assert engine.ran == [] and sink.recorded == [] and notifier.events == []

    def test_not_a_suite_runs_nothing(self):
        runner, _, engine, sink, _ = make_runner()
        with pytest.raises(NotASuiteError):
            runner.run_suite("SuiteA.CaseA")
        assert engine.ran == [] and sink.recorded == []

    def test_seeding_failure_is_fatal(self):
        with pytest.raises(OSError):
            make_runner(fail_prepare=True)


class TestRunTest:
    def test_single_document(self):
        runner, _, engine, sink, notifier = make_runner()
        counts = runner.run_test("SuiteA.CaseA")
        assert counts == Counters(right=3, ignored=1)
        assert engine.ran == ["SuiteA.CaseA"]
        assert [r.name for r in sink.recorded] == ["SuiteA.CaseA"]
        assert notifier.events == [("start", "SuiteA.CaseA"), ("finish", "SuiteA.CaseA")]

    def test_storage_failure_still_returns_counts(self):
        runner, _, _, _, notifier = make_runner(fail_on={"SuiteA.CaseA"})
        assert runner.run_test("SuiteA.CaseA") == Counters(right=3, ignored=1)
        assert notifier.failures() == ["SuiteA.CaseA"]

    def test_not_found(self):
        runner, _, engine, _, _ = make_runner()
        with pytest.raises(NotFoundError):
            runner.run_test("SuiteA.Nope")
        assert engine.ran == []


def test_failure_isolation_with_real_engine(tmp_path):
    content_ok = division_table((4, 2, 2))
    documents = [
        Document("SuiteB.CaseOne", content_ok),
        Document("SuiteB.CaseTwo", "<table><tr><td>boom</td></tr></table>"),
        Document("SuiteB.CaseThree", content_ok),
    ]
    from sample_fixtures import Explode

    sink = FakeSink()
    runner = TestRunner(FakeRepository("SuiteB", documents), FitTestEngine({"boom": Explode}), sink, RecordingNotifier())
    counts = runner.run_suite("SuiteB")

    suite = sink.recorded[-1]
    assert [r.counts for r in suite.children] == [
        Counters(right=1), Counters(exceptions=1), Counters(right=1),
    ]
    assert counts == Counters(right=2, exceptions=1)


def test_end_to_end_with_wiki(sample_wiki, tmp_path):
    out = tmp_path / "reports"
    notifier = RecordingNotifier()
    runner = TestRunner(WikiRepository(sample_wiki), FitTestEngine(), FolderResultRepository(out), notifier)
    counts = runner.run_suite("SuiteArith")

    assert counts == Counters(right=2, wrong=1)
    assert (out / "fitnesse.css").exists()
    for name in ("SuiteArith.SuiteSetUp", "SuiteArith.TestGood", "SuiteArith.SubSuite.TestBad", "SuiteArith.SuiteTearDown"):
        assert (out / f"{name}.html").exists(), name
    assert (out / "SuiteArith.suite.html").exists()
    assert notifier.failures() == ["SuiteArith.SubSuite.TestBad"]


def test_failure_detail():
    result = TestResult(Counters(wrong=1, exceptions=2), "X", "body")
    assert failure_detail(result) == "wrong: 1 exceptions: 2\nbody"
