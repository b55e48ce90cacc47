"""Shared pytest fixtures for depmeta-core tests.

Provides an in-memory repository client, a record factory and sample
project descriptors.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import structlog

from depmeta_core.errors import RepositoryTransportError
from depmeta_core.repository import FetchResult, Found, NotFound, TransportFailure
from depmeta_core.schemas.coordinate import Coordinate
from depmeta_core.schemas.record import Record


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),  # Resolves sys.stdout per logger
        cache_logger_on_first_use=False,  # Important for test isolation
    )


class InMemoryRepository:
    """RepositoryClient keeping artifacts in a dict, recording every call.

    Attributes:
        artifacts: Content by coordinate string.
        versions: Published versions by ``group:name``.
        failing: Coordinate strings whose resolve() returns TransportFailure.
        resolved: Coordinate strings passed to resolve(), in call order.
        published: Coordinate strings passed to publish(), in call order.
    """

    def __init__(self, identifier: str = "memory") -> None:
        self._identifier = identifier
        self.artifacts: dict[str, bytes] = {}
        self.versions: dict[str, list[str]] = {}
        self.failing: set[str] = set()
        self.list_failure: str | None = None
        self.resolved: list[str] = []
        self.published: list[str] = []
        self._lock = threading.Lock()

    @property
    def identifier(self) -> str:
        return self._identifier

    def add_versions(self, group: str, name: str, *versions: str) -> None:
        self.versions.setdefault(f"{group}:{name}", []).extend(versions)

    def add_record(self, group: str, name: str, version: str, content: bytes | Record) -> None:
        """Publish a record payload and register its version."""
        if isinstance(content, Record):
            content = content.to_json()
        coordinate = Coordinate(group=group, name=name, version=version).metadata()
        self.artifacts[str(coordinate)] = content
        key = f"{group}:{name}"
        if version not in self.versions.get(key, []):
            self.add_versions(group, name, version)

    def resolve(self, coordinate: Coordinate) -> FetchResult:
        with self._lock:
            self.resolved.append(str(coordinate))
        if str(coordinate) in self.failing:
            return TransportFailure(cause="connection reset", repository=self.identifier)
        content = self.artifacts.get(str(coordinate))
        if content is None:
            return NotFound(repository=self.identifier)
        return Found(content=content, repository=self.identifier)

    def list_versions(self, coordinate: Coordinate) -> list[str]:
        if self.list_failure is not None:
            raise RepositoryTransportError(
                coordinate=coordinate.key, repository=self.identifier, cause=self.list_failure
            )
        return list(self.versions.get(coordinate.key, []))

    def publish(self, coordinate: Coordinate, content: bytes) -> None:
        with self._lock:
            self.published.append(str(coordinate))
        self.artifacts[str(coordinate)] = content


@pytest.fixture
def repository_factory() -> Callable[..., InMemoryRepository]:
    """Factory fixture creating in-memory repositories.

    Returns:
        Function taking an optional identifier.
    """

    def _create(identifier: str = "memory") -> InMemoryRepository:
        return InMemoryRepository(identifier)

    return _create


@pytest.fixture
def repository(repository_factory: Callable[..., InMemoryRepository]) -> InMemoryRepository:
    """Return an empty in-memory repository."""
    return repository_factory()


@pytest.fixture
def make_record() -> Callable[..., Record]:
    """Factory fixture for records with sensible defaults."""

    def _create(
        message: str = "Deprecated",
        *,
        fail: bool = False,
        applies_to_previous_versions: bool = False,
        format_version: int = 2,
    ) -> Record:
        return Record(
            format_version=format_version,
            message=message,
            fail=fail,
            applies_to_previous_versions=applies_to_previous_versions,
        )

    return _create


@pytest.fixture
def sample_project_yaml() -> dict[str, Any]:
    """Return a valid depmeta.yaml structure.

    Returns:
        Dictionary with two direct and one transitive dependency.
    """
    return {
        "group": "com.acme",
        "name": "checkout-service",
        "version": "3.1.0",
        "dependencies": [
            {"group": "com.acme", "name": "payments-client", "version": "1.0.0"},
            {"group": "org.example", "name": "json-kit", "version": "2.0.0"},
        ],
        "transitive_dependencies": [
            {"group": "com.acme", "name": "http-core", "version": "2.4.1"},
        ],
    }


@pytest.fixture
def project_file(tmp_path: Path, sample_project_yaml: dict[str, Any]) -> Path:
    """Write the sample descriptor to tmp_path/depmeta.yaml."""
    import yaml

    path = tmp_path / "depmeta.yaml"
    path.write_text(yaml.safe_dump(sample_project_yaml, sort_keys=False))
    return path
