"""Run configuration validator.

Validates parsed RunConfig objects before a run starts.
"""

from pathlib import Path

from ..repository.wiki_tree import ROOT_PAGE_NAME, split_path, is_wiki_word
from .schema import (
    RunConfig,
    ValidationError,
    ValidationResult,
    VALID_ENGINES,
    VALID_KINDS,
)


def validate_config(config: RunConfig) -> ValidationResult:
    """Validate a parsed RunConfig.

    Checks:
    - Page name is a dotted path of WikiWords
    - Kind and engine are known
    - Wiki folder exists and the output folder can be resolved

    Args:
        config: Parsed RunConfig to validate.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationError] = []

    _validate_name(config, errors)

    if config.kind not in VALID_KINDS:
        errors.append(ValidationError(
            path="kind",
            message=f"Invalid kind '{config.kind}'. Must be one of: {', '.join(sorted(VALID_KINDS))}",
        ))

    if config.engine not in VALID_ENGINES:
        errors.append(ValidationError(
            path="engine",
            message=f"Invalid engine '{config.engine}'. Must be one of: {', '.join(sorted(VALID_ENGINES))}",
        ))

    if not (Path(config.fitnesse_dir) / ROOT_PAGE_NAME).is_dir():
        errors.append(ValidationError(
            path="fitnesse_dir",
            message=f"No {ROOT_PAGE_NAME} folder in '{config.fitnesse_dir}'.",
        ))

    try:
        output = config.output_dir.resolve()
    except ValueError as e:
        errors.append(ValidationError(path="output_dir", message=str(e)))
    else:
        if output.exists() and not output.is_dir():
            errors.append(ValidationError(
                path="output_dir",
                message=f"'{output}' exists and is not a folder.",
            ))

    for alias, target in config.fixtures.items():
        if "." not in target:
            warnings.append(ValidationError(
                path=f"fixtures.{alias}",
                message=f"'{target}' is not a dotted import path.",
                severity="warning",
            ))

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_name(config: RunConfig, errors: list[ValidationError]) -> None:
    parts = split_path(config.name)
    if not parts:
        errors.append(ValidationError(
            path="name",
            message="'name' is required and must not be empty.",
        ))
        return
    for part in parts:
        if not is_wiki_word(part):
            errors.append(ValidationError(
                path="name",
                message=f"'{part}' in '{config.name}' is not a page name.",
            ))
