"""Exit codes and error reporting for depmeta commands.

A depmeta run ends in one of three ways:

- ``EXIT_PASSED`` (0): no record demands a hard failure.
- ``EXIT_FAILED`` (1): a record demands a hard failure, or the user gave
  an invalid descriptor or option.
- ``EXIT_ABORTED`` (2): the run could not complete (unreachable
  repository, malformed record, missing file, deployment problem).
"""

from __future__ import annotations

from typing import NoReturn

import click
import yaml
from pydantic import ValidationError

from depmeta_cli import output
from depmeta_core.errors import (
    ConflictingRecordError,
    DepmetaError,
    DeploymentError,
    MalformedRecordError,
    RepositoryTransportError,
)

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_ABORTED = 2

# Next step shown under the error message
_REMEDIES: tuple[tuple[type[DepmetaError], str], ...] = (
    (
        RepositoryTransportError,
        "Check the repository URL and network access, then run again.",
    ),
    (
        MalformedRecordError,
        "The record's producer must publish a valid record for that version.",
    ),
    (
        ConflictingRecordError,
        "Published records are immutable: release a new version to change the advice.",
    ),
    (
        DeploymentError,
        "Set --repository, DEPMETA_DISTRIBUTION_REPOSITORY or an alternative "
        "repository as id::default::url.",
    ),
)


class CLIError(click.ClickException):
    """A command failure shown to the user with a depmeta exit code."""

    def __init__(self, message: str, exit_code: int = EXIT_FAILED) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        output.failure(self.format_message())


def describe_validation_error(err: ValidationError) -> str:
    """List each invalid field as ``location: problem``.

    Example:
        >>> describe_validation_error(err)
        'dependencies.0.version: Field required'
    """
    return "\n".join(
        f"{'.'.join(str(part) for part in detail['loc']) or '<root>'}: {detail['msg']}"
        for detail in err.errors()
    )


def project_file_error(err: Exception, file_path: str) -> CLIError:
    """Translate a failure to load the project descriptor.

    A missing or unreadable file aborts the run; a descriptor that is not
    valid YAML or does not describe a project is a user error.
    """
    if isinstance(err, FileNotFoundError):
        return CLIError(
            f"File not found: {file_path}\nUse --file to point at the project descriptor.",
            exit_code=EXIT_ABORTED,
        )
    if isinstance(err, yaml.YAMLError):
        mark = getattr(err, "problem_mark", None)
        where = f" at line {mark.line + 1}, column {mark.column + 1}" if mark else ""
        problem = getattr(err, "problem", None) or err
        return CLIError(f"Invalid YAML in {file_path}{where}: {problem}")
    if isinstance(err, ValidationError):
        return CLIError(
            f"Invalid project descriptor {file_path}:\n{describe_validation_error(err)}"
        )
    return CLIError(f"Cannot read {file_path}: {err}", exit_code=EXIT_ABORTED)


def handle_depmeta_error(err: DepmetaError) -> NoReturn:
    """Abort the command on a run-fatal depmeta error.

    Raises:
        CLIError: With exit code EXIT_ABORTED, the error message and, for
            known failure kinds, the next step to take.
    """
    message = str(err)
    for kind, remedy in _REMEDIES:
        if isinstance(err, kind):
            message = f"{message}\n{remedy}"
            break
    raise CLIError(message, exit_code=EXIT_ABORTED) from err
