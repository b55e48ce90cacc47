"""Repository client protocol and lookup results.

Looking up a metadata record has three outcomes, all of them ordinary
values: the payload was found, nothing is published there, or the
repository could not answer. Most versions carry no record, so "not found"
is regular control flow rather than an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from depmeta_core.errors import RepositoryTransportError

if TYPE_CHECKING:
    from depmeta_core.schemas.coordinate import Coordinate


@dataclass(frozen=True)
class Found:
    """Artifact content was retrieved.

    Attributes:
        content: Raw artifact bytes.
        repository: Identifier of the repository that served it.
    """

    content: bytes
    repository: str


@dataclass(frozen=True)
class NotFound:
    """No artifact is published at the coordinate."""

    repository: str = ""


@dataclass(frozen=True)
class TransportFailure:
    """The repository could not be queried.

    Attributes:
        cause: Description of the underlying failure.
        repository: Identifier of the failing repository.
    """

    cause: str
    repository: str

    def to_error(self, coordinate: Coordinate | str | None = None) -> RepositoryTransportError:
        """Build the run-fatal exception for this failure."""
        return RepositoryTransportError(
            "Failed resolving metadata artifact",
            coordinate=str(coordinate) if coordinate is not None else None,
            repository=self.repository,
            cause=self.cause,
        )


FetchResult = Found | NotFound | TransportFailure


@runtime_checkable
class RepositoryClient(Protocol):
    """Access to one artifact repository.

    Implementations must not raise for a missing artifact; ``resolve``
    returns NotFound instead. ``list_versions`` and ``publish`` raise
    RepositoryTransportError when the repository cannot be used.
    """

    @property
    def identifier(self) -> str:
        """Human-readable repository identifier (URL or path)."""
        ...

    def resolve(self, coordinate: Coordinate) -> FetchResult:
        """Retrieve the artifact at a fully versioned coordinate."""
        ...

    def list_versions(self, coordinate: Coordinate) -> list[str]:
        """List every published version of a version-less coordinate."""
        ...

    def publish(self, coordinate: Coordinate, content: bytes) -> None:
        """Publish artifact content at a fully versioned coordinate."""
        ...
