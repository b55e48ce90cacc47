"""Runtime settings for depmeta.

Settings load from environment variables with the ``DEPMETA_`` prefix
(and an optional ``.env`` file); CLI options override them.

Example:
    >>> # DEPMETA_FORMAT_VERSION=3 DEPMETA_REMOTE_REPOSITORIES='["https://repo.example.com"]'
    >>> settings = DepmetaSettings()
    >>> settings.format_version
    3
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from depmeta_core.schemas.record import DEFAULT_FORMAT_VERSION

DEFAULT_LOCAL_REPOSITORY = Path.home() / ".m2" / "repository"


class DepmetaSettings(BaseSettings):
    """Settings shared by the generate, verify and deploy actions.

    Attributes:
        format_version: Record format version written and trusted.
        local_repository: Local cache repository, consulted first.
        remote_repositories: Remote repository URLs, consulted in order.
        distribution_repository: Default deployment target URL or path.
        timeout_seconds: Timeout per remote repository round-trip.
        max_workers: Dependencies verified concurrently.
        output_dir: Build output directory for generated record files.
    """

    model_config = SettingsConfigDict(
        env_prefix="DEPMETA_",
        env_file=".env",
        extra="ignore",
    )

    format_version: int = Field(
        default=DEFAULT_FORMAT_VERSION,
        ge=1,
        description="Record format version",
    )
    local_repository: Path | None = Field(
        default=DEFAULT_LOCAL_REPOSITORY,
        description="Local repository directory",
    )
    remote_repositories: list[str] = Field(
        default_factory=list,
        description="Remote repository URLs in lookup order",
    )
    distribution_repository: str | None = Field(
        default=None,
        description="Default deployment repository URL or path",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Timeout per repository round-trip in seconds",
    )
    max_workers: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Dependencies verified concurrently",
    )
    output_dir: Path = Field(
        default=Path("target"),
        description="Build output directory for record files",
    )
