"""Shared pytest configuration for acceptance runner tests."""

from pathlib import Path

import pytest
import yaml

from acceptance_runner.repository.wiki_repository import REPORT_ASSETS

pytest_plugins = ["pytester"]


def division_table(*rows):
    """Division column table with (numerator, denominator, quotient) rows."""
    body = "".join(
        f"<tr><td>{n}</td><td>{d}</td><td>{q}</td></tr>" for n, d, q in rows
    )
    return (
        '<table border="1">'
        "<tr><td>sample_fixtures.Division</td></tr>"
        "<tr><td>numerator</td><td>denominator</td><td>quotient()</td></tr>"
        f"{body}</table>"
    )


def write_page(root: Path, path: str, content: str = "", test=False, suite=False, order=None) -> Path:
    """Write a wiki page folder below ``root/FitNesseRoot``."""
    folder = root / "FitNesseRoot" / Path(*path.split("."))
    folder.mkdir(parents=True, exist_ok=True)
    (folder / "content.txt").write_text(content, encoding="utf-8")
    properties = {"test": test, "suite": suite}
    if order:
        properties["order"] = list(order)
    (folder / "properties.yaml").write_text(yaml.safe_dump(properties), encoding="utf-8")
    return folder


def write_assets(root: Path) -> None:
    files = root / "FitNesseRoot" / "files"
    for source, _ in REPORT_ASSETS:
        path = files / source
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(f"asset {source}".encode("utf-8"))


@pytest.fixture
def wiki_root(tmp_path):
    """Empty wiki with all report assets in place."""
    root = tmp_path / "wiki"
    (root / "FitNesseRoot").mkdir(parents=True)
    write_assets(root)
    return root


@pytest.fixture
def sample_wiki(wiki_root):
    """Wiki with a suite of three division tests around suite setup/teardown.

    SuiteArith (suite)
        SuiteSetUp
        TestGood       all right
        SubSuite       (suite)
            TestBad    one wrong
        SuiteTearDown
    """
    write_page(wiki_root, "SuiteArith", "<p>Arithmetic</p>", suite=True)
    write_page(wiki_root, "SuiteArith.SuiteSetUp", "<p>suite setup</p>")
    write_page(wiki_root, "SuiteArith.TestGood", division_table((10, 2, 5), (9, 3, 3)), test=True)
    write_page(wiki_root, "SuiteArith.SubSuite", "", suite=True)
    write_page(wiki_root, "SuiteArith.SubSuite.TestBad", division_table((10, 2, 4)), test=True)
    write_page(wiki_root, "SuiteArith.SuiteTearDown", "<p>suite teardown</p>")
    return wiki_root
