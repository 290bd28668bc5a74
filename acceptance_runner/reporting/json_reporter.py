"""JSON report generator for acceptance test runs.

Generates machine-readable summaries of suite and test results.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

from ..runner.results import Counters, SuiteResult, TestResult
from .file_utils import flat_name, write_atomic


class JsonReporter:
    """Generates JSON reports from acceptance test results."""

    def generate(self, result: Union[TestResult, SuiteResult]) -> dict[str, Any]:
        """Generate a JSON report from a result.

        Args:
            result: Leaf or suite result. Suites carry their run duration.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        if isinstance(result, SuiteResult):
            children = result.children
            duration_ms = result.duration_ms
        else:
            children = [result]
            duration_ms = 0

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "name": result.name,
            "status": "passed" if result.successful else "failed",
            "counts": result.counts.to_dict(),
            "summary": {
                "total": len(children),
                "passed": sum(1 for c in children if c.successful),
                "failed": sum(1 for c in children if not c.successful),
                "duration_ms": duration_ms,
            },
            "tests": [
                {
                    "name": c.name,
                    "status": "pass" if c.successful else "fail",
                    "counts": c.counts.to_dict(),
                    "report": flat_name(c.name) + (".suite.html" if isinstance(c, SuiteResult) else ".html"),
                }
                for c in children
            ],
        }

    def save(self, report: dict[str, Any], path: Path) -> Path:
        """Save report to a JSON file.

        Args:
            report: Report dictionary.
            path: Output file path.

        Returns:
            Path to the saved file.
        """
        return write_atomic(path, self.to_json_string(report))

    def to_json_string(self, report: dict[str, Any], pretty: bool = True) -> str:
        """Convert report to JSON string."""
        if pretty:
            return json.dumps(report, indent=2, ensure_ascii=False)
        return json.dumps(report, ensure_ascii=False)

    def generate_cli_output(
        self,
        command: str,
        name: str,
        counts: Optional[Counters] = None,
        output_dir: Optional[str] = None,
        duration_ms: int = 0,
        error: Optional[str] = None,
    ) -> dict[str, Any]:
        """Generate the CLI's JSON output.

        Follows the output standard:
        {
            "success": bool,
            "command": str,
            "data": { ... },
            "message": str
        }
        """
        data: dict[str, Any] = {"name": name, "duration_ms": duration_ms}
        if counts is not None:
            data["counts"] = counts.to_dict()
        if output_dir:
            data["output_dir"] = output_dir

        if error is not None:
            success = False
            message = f"Run failed: {error}"
        elif counts is not None and not counts.successful:
            success = False
            message = f"{name}: {counts}"
        else:
            success = True
            message = f"All tests passed ({counts})" if counts is not None else "All tests passed"

        return {
            "success": success,
            "command": command,
            "data": data,
            "message": message,
        }
