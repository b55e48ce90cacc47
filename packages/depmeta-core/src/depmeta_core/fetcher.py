"""Record fetcher.

Looks up metadata records in the local repository first and then in each
remote repository in the order supplied. Lookups are memoised for the
lifetime of the fetcher, which is one verification or generation run.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence

import structlog

from depmeta_core.repository import (
    FetchResult,
    Found,
    NotFound,
    RepositoryClient,
    TransportFailure,
)
from depmeta_core.schemas.coordinate import Coordinate

logger = structlog.get_logger(__name__)


class RecordFetcher:
    """Fetches metadata records across an ordered set of repositories.

    Attributes:
        local: Local cache repository, consulted first (optional).
        remotes: Remote repositories, consulted in order.

    Example:
        >>> fetcher = RecordFetcher(local=LocalRepository("~/.m2/repository"))
        >>> result = fetcher.fetch(Coordinate(group="com.acme", name="lib"), "1.0.0")
        >>> isinstance(result, NotFound)
        True
    """

    def __init__(
        self,
        local: RepositoryClient | None = None,
        remotes: Sequence[RepositoryClient] = (),
    ) -> None:
        """Initialize the fetcher.

        Args:
            local: Local cache repository, consulted first.
            remotes: Remote repositories, consulted in the given order.
        """
        self.local = local
        self.remotes = list(remotes)
        self._cache: dict[tuple[str, str], FetchResult] = {}
        self._lock = threading.Lock()
        self._log = logger.bind(component="record_fetcher")

    @property
    def repositories(self) -> list[RepositoryClient]:
        """All repositories in lookup order."""
        repositories: list[RepositoryClient] = []
        if self.local is not None:
            repositories.append(self.local)
        repositories.extend(self.remotes)
        return repositories

    def fetch(self, coordinate: Coordinate, version: str) -> FetchResult:
        """Fetch the metadata record of a coordinate at a version.

        Args:
            coordinate: Artifact coordinate (its own version is ignored).
            version: Version whose record to fetch.

        Returns:
            Found with the raw payload, NotFound when no repository has a
            record, or the first TransportFailure encountered.
        """
        key = (coordinate.key, version)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached

        result = self._lookup(coordinate.metadata(version))

        # Transport failures abort the run, so they are never memoised
        if not isinstance(result, TransportFailure):
            with self._lock:
                self._cache[key] = result
        return result

    def _lookup(self, metadata_coordinate: Coordinate) -> FetchResult:
        for repository in self.repositories:
            self._log.debug(
                "resolving_metadata_artifact",
                coordinate=str(metadata_coordinate),
                repository=repository.identifier,
            )
            result = repository.resolve(metadata_coordinate)
            if isinstance(result, Found):
                self._log.debug(
                    "metadata_artifact_found",
                    coordinate=str(metadata_coordinate),
                    repository=repository.identifier,
                )
                return result
            if isinstance(result, TransportFailure):
                self._log.error(
                    "metadata_artifact_resolution_failed",
                    coordinate=str(metadata_coordinate),
                    repository=repository.identifier,
                    cause=result.cause,
                )
                return result

        self._log.debug("metadata_artifact_not_found", coordinate=str(metadata_coordinate))
        return NotFound()

    def list_versions(self, coordinate: Coordinate) -> list[str]:
        """List the published versions of a coordinate across all repositories.

        Args:
            coordinate: Artifact coordinate (its own version is ignored).

        Returns:
            Union of the versions each repository reports, in first-seen order.

        Raises:
            RepositoryTransportError: If any repository cannot list versions.
        """
        seen: dict[str, None] = {}
        for repository in self.repositories:
            for version in repository.list_versions(coordinate):
                seen.setdefault(version, None)
        self._log.debug("published_versions", coordinate=coordinate.key, count=len(seen))
        return list(seen)

    def close(self) -> None:
        """Release repository connections held by clients that have any."""
        for repository in self.repositories:
            close = getattr(repository, "close", None)
            if callable(close):
                close()
