"""Config module - YAML run configuration."""

from .schema import (
    OutputDir,
    RunConfig,
    RunKind,
    ValidationError,
    ValidationResult,
)
from .parser import parse_config, parse_config_data
from .validator import validate_config

__all__ = [
    "OutputDir",
    "RunConfig",
    "RunKind",
    "ValidationError",
    "ValidationResult",
    "parse_config",
    "parse_config_data",
    "validate_config",
]
