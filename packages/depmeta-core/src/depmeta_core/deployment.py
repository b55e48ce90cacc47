"""Deployment of generated metadata records.

Publishes record files from the build output directory to a target
repository. Only record artifacts are deployed, never the project's main
artifact. Alternative targets use the ``id::layout::url`` syntax; snapshot
(development) versions may be routed to a separate target.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field

from depmeta_core.errors import DeploymentError
from depmeta_core.repository import RepositoryClient
from depmeta_core.schemas.coordinate import METADATA_CLASSIFIER, METADATA_TYPE, Coordinate
from depmeta_core.schemas.record import parse_record
from depmeta_core.versions import is_snapshot, parse_version

logger = structlog.get_logger(__name__)

ALT_REPOSITORY_PATTERN = re.compile(r"(.+)::(.+)::(.+)")
SUPPORTED_LAYOUTS = ("default",)


class DeploymentTarget(BaseModel):
    """Repository records are deployed to.

    Attributes:
        id: Repository identifier (used for logging and credentials lookup).
        url: Repository URL or local path.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1, description="Repository id")
    url: str = Field(..., min_length=1, description="Repository URL or path")


def parse_deployment_target(value: str) -> DeploymentTarget:
    """Parse an ``id::layout::url`` alternative deployment target.

    Raises:
        DeploymentError: If the syntax is wrong or the layout unsupported.

    Example:
        >>> parse_deployment_target("internal::default::https://repo.example.com/releases")
        DeploymentTarget(id='internal', url='https://repo.example.com/releases')
    """
    match = ALT_REPOSITORY_PATTERN.fullmatch(value.strip())
    if match is None:
        raise DeploymentError(
            f"Invalid syntax for alternative repository '{value}'. Use \"id::layout::url\"."
        )

    repository_id, layout, url = (part.strip() for part in match.groups())
    if layout not in SUPPORTED_LAYOUTS:
        raise DeploymentError(
            f"Unsupported repository layout '{layout}'. Supported: {', '.join(SUPPORTED_LAYOUTS)}"
        )
    return DeploymentTarget(id=repository_id, url=url)


def resolve_deployment_target(
    version: str,
    *,
    default: DeploymentTarget | None = None,
    alt: str | None = None,
    alt_snapshot: str | None = None,
    alt_release: str | None = None,
) -> DeploymentTarget:
    """Choose the repository a version's records are deployed to.

    Snapshot versions prefer ``alt_snapshot``, releases ``alt_release``;
    otherwise ``alt`` is used, then ``default``.

    Raises:
        DeploymentError: If no target is configured or an alternative is invalid.
    """
    specific = alt_snapshot if is_snapshot(version) else alt_release
    chosen = specific or alt

    if chosen:
        logger.info("using_alternate_deployment_repository", repository=chosen)
        return parse_deployment_target(chosen)

    if default is None:
        raise DeploymentError(
            "Deployment failed: no repository configured. Set a distribution repository "
            "or pass an alternative deployment repository as id::layout::url."
        )
    return default


def record_filename(name: str, version: str) -> str:
    """File name of an artifact's record at a version.

    Example:
        >>> record_filename("lib", "1.2.0")
        'lib-1.2.0-metadata.json'
    """
    return f"{name}-{version}-{METADATA_CLASSIFIER}.{METADATA_TYPE}"


def parse_record_filename(name: str, filename: str) -> str | None:
    """Extract the version from a record file name of the given artifact.

    Example:
        >>> parse_record_filename("lib", "lib-1.2.0-metadata.json")
        '1.2.0'
        >>> parse_record_filename("lib", "lib-1.2.0.jar") is None
        True
    """
    pattern = re.compile(
        rf"{re.escape(name)}-(?P<version>.+)-{METADATA_CLASSIFIER}\.{METADATA_TYPE}"
    )
    match = pattern.fullmatch(filename)
    return match.group("version") if match else None


def scan_record_files(output_dir: Path | str, name: str) -> list[tuple[str, Path]]:
    """Find every record file of an artifact in the build output directory.

    Args:
        output_dir: Directory holding generated record files.
        name: Artifact name the files belong to.

    Returns:
        (version, path) pairs ordered by ascending version.

    Raises:
        InvalidVersionError: If a matching file name carries an invalid version.
    """
    directory = Path(output_dir)
    if not directory.is_dir():
        return []

    found: list[tuple[str, Path]] = []
    for path in directory.iterdir():
        if not path.is_file():
            continue
        version = parse_record_filename(name, path.name)
        if version is not None:
            found.append((version, path))

    return sorted(found, key=lambda item: parse_version(item[0], coordinate=name))


class DeploymentEngine:
    """Publishes generated record files to a repository.

    Example:
        >>> engine = DeploymentEngine(create_repository(target.url))
        >>> engine.deploy(project, scan_record_files("target", project.name))
    """

    def __init__(self, repository: RepositoryClient) -> None:
        self.repository = repository
        self._log = logger.bind(component="deployment_engine", repository=repository.identifier)

    def deploy(
        self,
        project: Coordinate,
        files: Sequence[tuple[str, Path]],
    ) -> list[Coordinate]:
        """Publish record files, one per version.

        Every file is validated as a record before anything is published.

        Args:
            project: The producing project's coordinate.
            files: (version, path) pairs to publish.

        Returns:
            Coordinates of the published records.

        Raises:
            DeploymentError: If there is nothing to deploy or a file is missing.
            MalformedRecordError: If a file is not a valid record.
            RepositoryTransportError: If publishing fails.
        """
        if not files:
            raise DeploymentError(f"No metadata record files to deploy for {project.key}")

        payloads: list[tuple[Coordinate, bytes]] = []
        for version, path in files:
            if not path.is_file():
                raise DeploymentError(f"Metadata record file not found: {path}")
            content = path.read_bytes()
            parse_record(content, source=str(path))
            payloads.append((project.metadata(version), content))

        published: list[Coordinate] = []
        for coordinate, content in payloads:
            self.repository.publish(coordinate, content)
            self._log.info("metadata_artifact_deployed", coordinate=str(coordinate))
            published.append(coordinate)
        return published
