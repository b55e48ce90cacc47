"""Repository client factories.

This module provides:
- create_repository(): Pick a filesystem or HTTP client for a location
- create_fetcher(): Build a RecordFetcher from DepmetaSettings
"""

from __future__ import annotations

from pathlib import Path

from depmeta_core.config import DepmetaSettings
from depmeta_core.fetcher import RecordFetcher
from depmeta_repository.config import RemoteRepositoryConfig, RetryConfig
from depmeta_repository.local import LocalRepository
from depmeta_repository.observability import get_logger
from depmeta_repository.remote import RemoteRepository

FILE_SCHEME = "file://"


def create_repository(
    location: str | Path,
    *,
    timeout_seconds: float = 30.0,
    retry: RetryConfig | None = None,
    username: str | None = None,
    password: str | None = None,
    token: str | None = None,
) -> LocalRepository | RemoteRepository:
    """Create a repository client for a URL or directory.

    ``http://`` and ``https://`` locations get an HTTP client; ``file://``
    URLs and plain paths get a filesystem client.

    Args:
        location: Repository URL or directory path.
        timeout_seconds: Timeout per HTTP round-trip.
        retry: Retry policy for HTTP requests.
        username: Basic auth user name (HTTP only).
        password: Basic auth password (HTTP only).
        token: Bearer token (HTTP only).

    Returns:
        Configured repository client.

    Raises:
        ValueError: If the HTTP configuration is invalid.

    Example:
        >>> create_repository("https://repo.example.com/releases")
        <depmeta_repository.remote.RemoteRepository object at ...>
        >>> create_repository("file:///srv/repository").root
        PosixPath('/srv/repository')
    """
    logger = get_logger()
    value = str(location)

    if value.startswith(("http://", "https://")):
        config = RemoteRepositoryConfig(
            url=value,
            username=username,
            password=password,
            token=token,
            timeout_seconds=timeout_seconds,
            retry=retry or RetryConfig(),
        )
        logger.debug("repository_created", kind="remote", location=config.url)
        return RemoteRepository(config)

    if value.startswith(FILE_SCHEME):
        value = value[len(FILE_SCHEME) :]
    logger.debug("repository_created", kind="local", location=value)
    return LocalRepository(value)


def create_fetcher(
    settings: DepmetaSettings,
    *,
    remote_repositories: list[str] | None = None,
) -> RecordFetcher:
    """Build a record fetcher from settings.

    Args:
        settings: Runtime settings.
        remote_repositories: Overrides ``settings.remote_repositories``.

    Returns:
        Fetcher consulting the local repository first, then each remote.
    """
    local = LocalRepository(settings.local_repository) if settings.local_repository else None
    urls = settings.remote_repositories if remote_repositories is None else remote_repositories
    remotes = [
        create_repository(url, timeout_seconds=settings.timeout_seconds) for url in urls
    ]
    return RecordFetcher(local=local, remotes=remotes)
