"""CLI entry point for the acceptance runner.

    acceptance-runner run-suite SuiteAcceptance --root wiki --output reports
    acceptance-runner run-test SuiteAcceptance.TestLogin --root wiki --output reports
    acceptance-runner run acceptance.yaml

Prints one JSON object on stdout:
    {"success": bool, "command": str, "data": {...}, "message": str}
"""

import logging
import sys
import time
from typing import Optional

import click

from .config.schema import OutputDir, RunConfig
from .reporting.json_reporter import JsonReporter

logger = logging.getLogger(__name__)

ENGINE_CHOICE = click.Choice(["fit", "flow"], case_sensitive=False)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr.")
def main(verbose: bool):
    """Run acceptance test suites from a wiki folder."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@main.command("run-suite")
@click.argument("name")
@click.option("--root", "fitnesse_dir", default=".", show_default=True,
              type=click.Path(file_okay=False), help="Folder containing FitNesseRoot.")
@click.option("--output", "output_dir", required=True,
              type=click.Path(file_okay=False), help="Folder for HTML reports.")
@click.option("--engine", default="fit", show_default=True, type=ENGINE_CHOICE,
              help="Fixture interpreter family.")
def run_suite(name: str, fitnesse_dir: str, output_dir: str, engine: str):
    """Run every test of suite NAME."""
    config = RunConfig(
        name=name,
        kind="suite",
        fitnesse_dir=fitnesse_dir,
        output_dir=OutputDir(value=output_dir),
        engine=engine,
    )
    execute(config, "run-suite")


@main.command("run-test")
@click.argument("name")
@click.option("--root", "fitnesse_dir", default=".", show_default=True,
              type=click.Path(file_okay=False), help="Folder containing FitNesseRoot.")
@click.option("--output", "output_dir", required=True,
              type=click.Path(file_okay=False), help="Folder for HTML reports.")
@click.option("--engine", default="fit", show_default=True, type=ENGINE_CHOICE,
              help="Fixture interpreter family.")
def run_test(name: str, fitnesse_dir: str, output_dir: str, engine: str):
    """Run the single test NAME."""
    config = RunConfig(
        name=name,
        kind="test",
        fitnesse_dir=fitnesse_dir,
        output_dir=OutputDir(value=output_dir),
        engine=engine,
    )
    execute(config, "run-test")


@main.command("run")
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
def run_config(config_file: str):
    """Run the test or suite described by a YAML CONFIG_FILE."""
    from .config.parser import parse_config

    try:
        config = parse_config(config_file)
    except (OSError, ValueError) as e:
        output_error("run", f"Failed to parse config: {e}")
        sys.exit(1)
    execute(config, "run")


def execute(config: RunConfig, command: str) -> None:
    """Validate ``config``, run it and print the JSON outcome."""
    from .config.validator import validate_config
    from .errors import RepositoryError
    from .runner.executor import TestRunner

    validation = validate_config(config)
    for warning in validation.warnings:
        logger.warning("%s: %s", warning.path, warning.message)
    if not validation.valid:
        errors_str = "; ".join(f"{e.path}: {e.message}" for e in validation.errors)
        output_error(command, f"Invalid configuration: {errors_str}")
        sys.exit(1)

    reporter = JsonReporter()
    start_time = time.time()

    try:
        runner = TestRunner.from_config(config)
        counts = runner.run(config)

    except KeyboardInterrupt:
        duration_ms = int((time.time() - start_time) * 1000)
        output_error(command, "Run interrupted by user", {"duration_ms": duration_ms})
        sys.exit(130)

    except (RepositoryError, OSError, ValueError) as e:
        duration_ms = int((time.time() - start_time) * 1000)
        output = reporter.generate_cli_output(
            command, config.name, duration_ms=duration_ms, error=str(e),
        )
        click.echo(reporter.to_json_string(output, pretty=False))
        sys.exit(1)

    duration_ms = int((time.time() - start_time) * 1000)
    output = reporter.generate_cli_output(
        command,
        config.name,
        counts=counts,
        output_dir=str(config.output_dir.resolve()),
        duration_ms=duration_ms,
    )
    click.echo(reporter.to_json_string(output, pretty=False))

    if not output["success"]:
        sys.exit(1)


def output_error(command: str, message: str, data: Optional[dict] = None) -> None:
    """Output error in JSON format."""
    output = {
        "success": False,
        "command": command,
        "data": data,
        "message": message,
    }
    click.echo(JsonReporter().to_json_string(output, pretty=False))


if __name__ == "__main__":
    main()
