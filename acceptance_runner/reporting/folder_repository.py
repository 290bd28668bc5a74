"""Result sink writing HTML reports into a folder.

Layout::

    <output>/
        fitnesse.css, fitnesse.js, images/...   report assets
        SuiteA.CaseB.html                        one page per test
        SuiteA.suite.html                        suite index
        SuiteA.suite.json                        suite summary
"""

import html
import logging
import shutil
from pathlib import Path
from typing import Union

from ..runner.results import SuiteResult, TestResult
from .base import ResultSink
from .file_utils import flat_name, write_atomic
from .json_reporter import JsonReporter

logger = logging.getLogger(__name__)

TEST_PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<title>{title}</title>
<link rel="stylesheet" type="text/css" href="fitnesse.css" media="screen"/>
</head>
<body>
<div class="header"><h1>{title}</h1></div>
<div class="main">
<pre class="{status}">{body}</pre>
</div>
</body>
</html>
"""

SUITE_PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<title>{title}</title>
<link rel="stylesheet" type="text/css" href="fitnesse.css" media="screen"/>
<script src="fitnesse.js" type="text/javascript"></script>
</head>
<body>
<div class="header"><h1>{title}</h1></div>
<div class="main">
<div id="test-summary" class="{status}"><strong>Test Pages:</strong> {passed} right, {failed} wrong. <strong>Assertions:</strong> {counts}</div>
<table class="suite_summary">
<tr><th>Test</th><th>Right</th><th>Wrong</th><th>Ignored</th><th>Exceptions</th></tr>
{rows}
</table>
</div>
</body>
</html>
"""

SUITE_ROW_TEMPLATE = (
    '<tr class="{status}"><td><a href="{href}">{name}</a></td>'
    "<td>{right}</td><td>{wrong}</td><td>{ignored}</td><td>{exceptions}</td></tr>"
)


class FolderResultRepository(ResultSink):
    """Writes results and report assets below an output folder."""

    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)
        self._reporter = JsonReporter()

    def add_file(self, source: Union[str, Path, bytes], relative_name: str) -> None:
        target = self.output_dir / relative_name
        if isinstance(source, bytes):
            write_atomic(target, source)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)

    def record_test_result(self, result: Union[TestResult, SuiteResult]) -> None:
        if isinstance(result, SuiteResult):
            self._record_suite(result)
        else:
            self._record_test(result)

    def test_page_path(self, name: str) -> Path:
        return self.output_dir / (flat_name(name) + ".html")

    def suite_page_path(self, name: str) -> Path:
        return self.output_dir / (flat_name(name) + ".suite.html")

    def suite_summary_path(self, name: str) -> Path:
        return self.output_dir / (flat_name(name) + ".suite.json")

    def _record_test(self, result: TestResult) -> None:
        if is_html_page(result.content):
            page = result.content
        else:
            page = TEST_PAGE_TEMPLATE.format(
                title=html.escape(result.name),
                status=_status(result.successful),
                body=html.escape(result.content),
            )
        path = write_atomic(self.test_page_path(result.name), page)
        logger.debug("Recorded %s to %s", result.name, path)

    def _record_suite(self, result: SuiteResult) -> None:
        rows = "\n".join(
            SUITE_ROW_TEMPLATE.format(
                status=_status(child.successful),
                href=html.escape(self._child_href(child)),
                name=html.escape(child.name),
                **child.counts.to_dict(),
            )
            for child in result.children
        )
        page = SUITE_PAGE_TEMPLATE.format(
            title=html.escape(result.name),
            status=_status(result.successful),
            passed=result.passed_count,
            failed=result.failed_count,
            counts=html.escape(str(result.counts)),
            rows=rows,
        )
        write_atomic(self.suite_page_path(result.name), page)
        self._reporter.save(self._reporter.generate(result), self.suite_summary_path(result.name))
        logger.info("Recorded suite %s (%s)", result.name, result.counts)

    def _child_href(self, child: Union[TestResult, SuiteResult]) -> str:
        if isinstance(child, SuiteResult):
            return self.suite_page_path(child.name).name
        return self.test_page_path(child.name).name


def is_html_page(content: str) -> bool:
    """True when ``content`` is a complete HTML document rather than a message."""
    return content.lstrip().lower().startswith(("<!doctype html", "<html"))


def _status(successful: bool) -> str:
    return "pass" if successful else "fail"
