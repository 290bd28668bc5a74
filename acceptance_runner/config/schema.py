"""Run configuration models.

Defines dataclasses for parsing and representing YAML run configurations.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class RunKind(str, Enum):
    """What a configuration runs."""
    SUITE = "suite"
    TEST = "test"


VALID_KINDS = {e.value for e in RunKind}
VALID_ENGINES = {"fit", "flow"}


@dataclass
class OutputDir:
    """Where reports are written.

    Either a literal ``value``, or an environment variable ``env`` holding
    a base directory, optionally extended with ``path_extension``.
    """
    value: str = ""
    env: str = ""
    path_extension: str = ""

    def resolve(self) -> Path:
        """Concrete output path.

        Raises:
            ValueError: If neither a value nor a set environment variable is given.
        """
        if self.value:
            return Path(self.value)
        if self.env:
            base = os.environ.get(self.env)
            if not base:
                raise ValueError(f"Environment variable '{self.env}' is not set")
            return (Path(base) / self.path_extension).absolute()
        raise ValueError("Output dir needs either 'value' or 'env'")


@dataclass
class RunConfig:
    """A complete run configuration."""
    name: str
    output_dir: OutputDir
    kind: str = RunKind.SUITE.value
    fitnesse_dir: str = "."
    engine: str = "fit"
    fixtures: dict[str, str] = field(default_factory=dict)
    description: Optional[str] = None

    def __post_init__(self):
        self.kind = self.kind.lower()
        self.engine = self.engine.lower()


@dataclass
class ValidationError:
    """A single validation error."""
    path: str
    message: str
    severity: str = "error"  # "error" or "warning"


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def __str__(self) -> str:
        if self.valid:
            msg = "Valid"
            if self.warnings:
                msg += f" ({self.warning_count} warnings)"
            return msg
        return f"Invalid: {self.error_count} errors, {self.warning_count} warnings"
