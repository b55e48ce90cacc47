"""Filesystem repository client.

Reads and writes artifacts in a Maven-style directory layout:

    <root>/<group as path>/<name>/<version>/<name>-<version>[-<classifier>].<type>

Published versions are the version directories under ``<group>/<name>/``.
"""

from __future__ import annotations

from pathlib import Path

from depmeta_core.errors import RepositoryTransportError
from depmeta_core.repository import FetchResult, Found, NotFound, TransportFailure
from depmeta_core.schemas.coordinate import Coordinate

from depmeta_repository.observability import get_logger, repository_operation


class LocalRepository:
    """Repository client backed by a local directory.

    Attributes:
        root: Repository root directory.

    Example:
        >>> repository = LocalRepository("~/.m2/repository")
        >>> repository.list_versions(Coordinate(group="com.acme", name="lib"))
        ['1.0.0', '1.2.0']
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).expanduser()
        self._logger = get_logger()

    @property
    def identifier(self) -> str:
        return str(self.root)

    def path_for(self, coordinate: Coordinate) -> Path:
        """Absolute file path of a versioned coordinate."""
        return self.root / coordinate.repository_path()

    def resolve(self, coordinate: Coordinate) -> FetchResult:
        """Read an artifact from the repository.

        Returns:
            Found with the file content, NotFound if no file exists, or
            TransportFailure if the file exists but cannot be read.
        """
        path = self.path_for(coordinate)
        with repository_operation(
            "resolve", repository=self.identifier, coordinate=str(coordinate)
        ):
            if not path.is_file():
                return NotFound(repository=self.identifier)
            try:
                return Found(content=path.read_bytes(), repository=self.identifier)
            except OSError as e:
                return TransportFailure(cause=str(e), repository=self.identifier)

    def list_versions(self, coordinate: Coordinate) -> list[str]:
        """List the version directories of an artifact.

        Raises:
            RepositoryTransportError: If the directory cannot be read.
        """
        directory = self.root / coordinate.versions_path()
        with repository_operation(
            "list_versions", repository=self.identifier, coordinate=coordinate.key
        ):
            if not directory.is_dir():
                return []
            try:
                return sorted(child.name for child in directory.iterdir() if child.is_dir())
            except OSError as e:
                raise RepositoryTransportError(
                    "Failed listing published versions",
                    coordinate=coordinate.key,
                    repository=self.identifier,
                    cause=str(e),
                ) from e

    def publish(self, coordinate: Coordinate, content: bytes) -> None:
        """Write an artifact into the repository.

        Raises:
            RepositoryTransportError: If the file cannot be written.
        """
        path = self.path_for(coordinate)
        with repository_operation(
            "publish", repository=self.identifier, coordinate=str(coordinate)
        ):
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_bytes(content)
            except OSError as e:
                raise RepositoryTransportError(
                    "Failed publishing artifact",
                    coordinate=str(coordinate),
                    repository=self.identifier,
                    cause=str(e),
                ) from e
        self._logger.info("artifact_published", coordinate=str(coordinate), path=str(path))
