"""YAML run configuration parser.

Example::

    name: SuiteAcceptance.SuiteLogin
    kind: suite
    fitnesse_dir: ../wiki
    engine: flow
    output_dir:
      env: TMPDIR
      path_extension: acceptance-results
    fixtures:
      Login: my_project.fixtures.LoginFixture
"""

from pathlib import Path
from typing import Union

import yaml

from ..errors import ConfigError
from .schema import OutputDir, RunConfig


def parse_config(file_path: Union[str, Path]) -> RunConfig:
    """Parse a YAML configuration file into a RunConfig.

    Relative ``fitnesse_dir`` and literal output paths are taken relative
    to the file's folder.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigError: If the YAML is malformed or missing required fields.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    if file_path.suffix not in (".yaml", ".yml"):
        raise ConfigError(f"Expected .yaml or .yml file, got: {file_path.suffix}")

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed YAML in {file_path}: {e}") from e

    if data is None:
        raise ConfigError(f"Empty config file: {file_path}")

    config = parse_config_data(data, source=str(file_path))

    base = file_path.parent
    config.fitnesse_dir = str(base / config.fitnesse_dir)
    if config.output_dir.value:
        config.output_dir.value = str(base / config.output_dir.value)
    return config


def parse_config_data(data: dict, source: str = "<inline>") -> RunConfig:
    """Parse a configuration from an already loaded mapping.

    Raises:
        ConfigError: If required fields are missing or malformed.
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a YAML mapping, got {type(data).__name__}")

    _require_fields(data, ["name", "output_dir"], "config", source)

    output_data = data["output_dir"]
    if isinstance(output_data, str):
        output_dir = OutputDir(value=output_data)
    elif isinstance(output_data, dict):
        output_dir = OutputDir(**{
            k: str(v) for k, v in output_data.items()
            if k in OutputDir.__dataclass_fields__
        })
    else:
        raise ConfigError(f"'output_dir' must be a path or a mapping in {source}")

    fixtures = data.get("fixtures") or {}
    if not isinstance(fixtures, dict):
        raise ConfigError(f"'fixtures' must be a mapping in {source}")

    return RunConfig(
        name=str(data["name"]),
        output_dir=output_dir,
        kind=str(data.get("kind", "suite")),
        fitnesse_dir=str(data.get("fitnesse_dir", ".")),
        engine=str(data.get("engine", "fit")),
        fixtures={str(k): str(v) for k, v in fixtures.items()},
        description=data.get("description"),
    )


def _require_fields(
    data: dict, fields: list[str], context: str, source: str
) -> None:
    """Check that required fields exist in a dictionary."""
    for field_name in fields:
        if field_name not in data:
            raise ConfigError(
                f"Missing required field '{field_name}' in {context} ({source})"
            )
