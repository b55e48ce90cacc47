"""HTTP repository client.

Talks to a Maven-style HTTP repository:

- GET ``<url>/<repository path>`` to resolve an artifact
- GET ``<url>/<group>/<name>/maven-metadata.xml`` to list published versions
- PUT ``<url>/<repository path>`` to publish an artifact

Transient failures (connection errors, timeouts, 429 and 5xx answers) are
retried with exponential backoff. A 404 is a regular "not found" answer.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any

import httpx

from depmeta_core.errors import RepositoryTransportError
from depmeta_core.repository import FetchResult, Found, NotFound, TransportFailure
from depmeta_core.schemas.coordinate import Coordinate

from depmeta_repository.config import RemoteRepositoryConfig
from depmeta_repository.observability import get_logger, repository_operation
from depmeta_repository.retry import RetryableStatusError, create_retry_decorator

VERSIONS_INDEX = "maven-metadata.xml"

# Statuses worth another attempt
RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


class RemoteRepository:
    """Repository client for an HTTP artifact repository.

    Args:
        config: Connection configuration.
        transport: Optional httpx transport (e.g. ``httpx.MockTransport``).

    Example:
        >>> config = RemoteRepositoryConfig(url="https://repo.example.com/releases")
        >>> with RemoteRepository(config) as repository:
        ...     result = repository.resolve(coordinate)
    """

    def __init__(
        self,
        config: RemoteRepositoryConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config
        self._logger = get_logger().bind(repository=config.url)

        headers: dict[str, str] = {}
        auth: httpx.Auth | None = None
        if config.token is not None:
            headers["Authorization"] = f"Bearer {config.token.get_secret_value()}"
        elif config.username is not None:
            password = config.password.get_secret_value() if config.password else ""
            auth = httpx.BasicAuth(config.username, password)

        self._client = httpx.Client(
            base_url=config.url + "/",
            timeout=config.timeout_seconds,
            headers=headers,
            auth=auth,
            transport=transport,
        )
        self._request = create_retry_decorator(
            config.retry, operation_name="repository_request"
        )(self._send)

    @property
    def identifier(self) -> str:
        return self.config.url

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._client.close()

    def __enter__(self) -> RemoteRepository:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _send(self, method: str, path: str, content: bytes | None = None) -> httpx.Response:
        response = self._client.request(method, path, content=content)
        if response.status_code in RETRYABLE_STATUS_CODES:
            raise RetryableStatusError(response.status_code, str(response.url))
        return response

    def resolve(self, coordinate: Coordinate) -> FetchResult:
        """Download an artifact.

        Returns:
            Found on 2xx, NotFound on 404, TransportFailure for any other
            status or when the repository cannot be reached after retries.
        """
        path = coordinate.repository_path()
        with repository_operation(
            "resolve", repository=self.identifier, coordinate=str(coordinate)
        ):
            try:
                response = self._request("GET", path)
            except (RetryableStatusError, httpx.HTTPError) as e:
                self._logger.warning("artifact_resolve_failed", path=path, error=str(e))
                return TransportFailure(cause=str(e), repository=self.identifier)

            if response.status_code == 404:
                return NotFound(repository=self.identifier)
            if response.is_error:
                return TransportFailure(
                    cause=f"HTTP {response.status_code} from {response.url}",
                    repository=self.identifier,
                )
            return Found(content=response.content, repository=self.identifier)

    def list_versions(self, coordinate: Coordinate) -> list[str]:
        """List published versions from the artifact's ``maven-metadata.xml``.

        An artifact without a versions index has no published versions.

        Raises:
            RepositoryTransportError: If the index cannot be fetched or parsed.
        """
        path = f"{coordinate.versions_path()}/{VERSIONS_INDEX}"
        with repository_operation(
            "list_versions", repository=self.identifier, coordinate=coordinate.key
        ):
            try:
                response = self._request("GET", path)
            except (RetryableStatusError, httpx.HTTPError) as e:
                raise self._transport_error(
                    "Failed listing published versions", coordinate.key, str(e)
                ) from e

            if response.status_code == 404:
                return []
            if response.is_error:
                raise self._transport_error(
                    "Failed listing published versions",
                    coordinate.key,
                    f"HTTP {response.status_code} from {response.url}",
                )
            try:
                return parse_versions_index(response.content)
            except ET.ParseError as e:
                raise self._transport_error(
                    "Malformed versions index", coordinate.key, str(e)
                ) from e

    def publish(self, coordinate: Coordinate, content: bytes) -> None:
        """Upload an artifact.

        Raises:
            RepositoryTransportError: If the upload is rejected or fails.
        """
        path = coordinate.repository_path()
        with repository_operation(
            "publish", repository=self.identifier, coordinate=str(coordinate)
        ):
            try:
                response = self._request("PUT", path, content)
            except (RetryableStatusError, httpx.HTTPError) as e:
                raise self._transport_error(
                    "Failed publishing artifact", str(coordinate), str(e)
                ) from e
            if response.is_error:
                raise self._transport_error(
                    "Failed publishing artifact",
                    str(coordinate),
                    f"HTTP {response.status_code} from {response.url}",
                )
        self._logger.info("artifact_published", coordinate=str(coordinate), path=path)

    def _transport_error(
        self, message: str, coordinate: str, cause: str
    ) -> RepositoryTransportError:
        return RepositoryTransportError(
            message,
            coordinate=coordinate,
            repository=self.identifier,
            cause=cause,
        )


def parse_versions_index(content: bytes) -> list[str]:
    """Extract the version list from a ``maven-metadata.xml`` document.

    Raises:
        xml.etree.ElementTree.ParseError: If the document is not valid XML.
    """
    root = ET.fromstring(content)
    return [
        element.text.strip()
        for element in root.findall("./versioning/versions/version")
        if element.text and element.text.strip()
    ]
