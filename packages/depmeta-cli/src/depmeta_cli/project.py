"""Loading of the project descriptor and runtime settings for commands."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from depmeta_cli.errors import CLIError, describe_validation_error, project_file_error
from depmeta_core.config import DepmetaSettings
from depmeta_core.schemas.project import ProjectSpec


def load_project(file_path: str) -> ProjectSpec:
    """Load the depmeta.yaml descriptor.

    Raises:
        CLIError: If the file is missing or invalid.
    """
    try:
        return ProjectSpec.from_yaml(Path(file_path))
    except (OSError, yaml.YAMLError, ValidationError) as e:
        raise project_file_error(e, file_path) from None


def load_settings(
    *,
    local_repository: str | None = None,
    remote_repositories: tuple[str, ...] = (),
) -> DepmetaSettings:
    """Load DEPMETA_ settings, applying command-line overrides.

    Args:
        local_repository: Overrides the local repository directory.
        remote_repositories: Overrides the remote repository URLs when non-empty.

    Raises:
        CLIError: If the environment holds invalid settings.
    """
    try:
        settings = DepmetaSettings()
    except ValidationError as e:
        raise CLIError(f"Invalid DEPMETA_ settings:\n{describe_validation_error(e)}") from None

    overrides: dict[str, object] = {}
    if local_repository is not None:
        overrides["local_repository"] = Path(local_repository)
    if remote_repositories:
        overrides["remote_repositories"] = list(remote_repositories)
    return settings.model_copy(update=overrides) if overrides else settings
