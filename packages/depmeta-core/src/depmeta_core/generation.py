"""Generation engine.

Produces the metadata records a project publishes for its own version and,
when back-filling, for its already published lower versions. Published
records are never overwritten.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from depmeta_core.errors import ConfigurationError, ConflictingRecordError
from depmeta_core.fetcher import RecordFetcher
from depmeta_core.repository import NotFound, TransportFailure
from depmeta_core.schemas.coordinate import Coordinate
from depmeta_core.schemas.record import Record, parse_record
from depmeta_core.versions import parse_version, select_versions_to_backfill

logger = structlog.get_logger(__name__)


class GenerationEngine:
    """Decides which versions receive a newly generated record.

    Attributes:
        fetcher: Record fetcher used to look up already published records

    Example:
        >>> engine = GenerationEngine(RecordFetcher(local=repository))
        >>> record = Record(format_version=2, message="Use 2.x", fail=False)
        >>> engine.generate(project, record, backfill=True)
        [('2.0.0', Record(...)), ('1.0.0', Record(...))]
    """

    def __init__(self, fetcher: RecordFetcher) -> None:
        """Initialize the engine.

        Args:
            fetcher: Record fetcher for published-record lookups.
        """
        self.fetcher = fetcher
        self._log = logger.bind(component="generation_engine")

    def generate(
        self,
        project: Coordinate,
        record: Record,
        *,
        backfill: bool = False,
    ) -> list[tuple[str, Record]]:
        """Compute the (version, record) pairs to produce.

        The project's own version always comes first. With backfill, every
        published lower version without a record follows in ascending order.

        Args:
            project: The producing project's coordinate, with its version.
            record: Record content to publish.
            backfill: Also target published lower versions.

        Returns:
            Ordered (version, record) pairs.

        Raises:
            ConfigurationError: If the project coordinate has no version.
            ConflictingRecordError: If a different record is already
                published at the project's own version.
            RepositoryTransportError: If a repository cannot be queried.
            InvalidVersionError: If a version cannot be parsed.
        """
        if project.version is None:
            raise ConfigurationError("Project coordinate has no version", field_path="version")
        version = project.version
        parse_version(version, coordinate=project.key)

        existing = self._published_record(project, version)
        if existing is not None and existing != record:
            raise ConflictingRecordError(str(project.metadata(version)), location="repository")
        if existing is not None:
            self._log.info("metadata_record_unchanged", coordinate=str(project.metadata(version)))

        targets: list[tuple[str, Record]] = [(version, record)]

        if backfill:
            published = self.fetcher.list_versions(project)
            for lower in select_versions_to_backfill(published, version, coordinate=project.key):
                if self._is_published(project, lower):
                    self._log.info(
                        "metadata_record_exists_skipping",
                        coordinate=str(project.metadata(lower)),
                    )
                    continue
                targets.append((lower, record))

        self._log.info(
            "metadata_records_selected",
            project=str(project),
            versions=[v for v, _ in targets],
            backfill=backfill,
        )
        return targets

    def _is_published(self, project: Coordinate, version: str) -> bool:
        result = self.fetcher.fetch(project, version)
        if isinstance(result, TransportFailure):
            raise result.to_error(project.metadata(version))
        return not isinstance(result, NotFound)

    def _published_record(self, project: Coordinate, version: str) -> Record | None:
        result = self.fetcher.fetch(project, version)
        if isinstance(result, NotFound):
            return None
        if isinstance(result, TransportFailure):
            raise result.to_error(project.metadata(version))
        return parse_record(result.content, source=str(project.metadata(version)))


def write_records(
    project: Coordinate,
    records: Sequence[tuple[str, Record]],
    output_dir: Path | str,
) -> list[Path]:
    """Write generated records as ``<name>-<version>-metadata.json`` files.

    Args:
        project: The producing project's coordinate.
        records: (version, record) pairs from GenerationEngine.generate().
        output_dir: Build output directory, created if missing. It is scratch
            space: a stale file from an earlier run is replaced.

    Returns:
        Paths of the record files, in input order.
    """
    output = Path(output_dir)
    output.mkdir(parents=True, exist_ok=True)

    paths: list[Path] = []
    for version, record in records:
        metadata_coordinate = project.metadata(version)
        path = output / metadata_coordinate.filename
        content = record.to_json()

        if not path.exists():
            path.write_bytes(content)
            logger.info("metadata_file_generated", path=str(path))
        elif path.read_bytes() != content:
            path.write_bytes(content)
            logger.info("metadata_file_replaced", path=str(path))
        else:
            logger.debug("metadata_file_unchanged", path=str(path))
        paths.append(path)

    return paths
