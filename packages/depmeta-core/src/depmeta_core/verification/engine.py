"""Verification engine.

Checks the metadata records of every dependency of a project and
aggregates the applicable ones into a single verdict.
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import UTC, datetime

import structlog

from depmeta_core.errors import DependencyResolutionError
from depmeta_core.evaluator import Applicable, Severity, evaluate
from depmeta_core.fetcher import RecordFetcher
from depmeta_core.repository import NotFound, TransportFailure
from depmeta_core.schemas.coordinate import Coordinate, Dependency, DependencyScope
from depmeta_core.schemas.project import DependencySource
from depmeta_core.schemas.record import DEFAULT_FORMAT_VERSION, parse_record
from depmeta_core.verification.models import Finding, Verdict
from depmeta_core.versions import select_versions_to_check

logger = structlog.get_logger(__name__)


class VerificationEngine:
    """Verifies a project's dependencies against their metadata records.

    Every dependency is evaluated before the verdict is produced, so a
    single run reports all hard failures at once. Repository failures,
    malformed records and unparsable versions abort the run immediately.

    Attributes:
        fetcher: Record fetcher for this run
        expected_format_version: Record format version this consumer trusts
        dependency_source: Supplies direct and transitive dependencies
        max_workers: Number of dependencies evaluated concurrently

    Example:
        >>> engine = VerificationEngine(
        ...     RecordFetcher(local=repository),
        ...     expected_format_version=2,
        ...     dependency_source=ProjectDependencySource(spec),
        ... )
        >>> verdict = engine.verify(spec.coordinate, transitive=True)
        >>> verdict.passed
        True
    """

    def __init__(
        self,
        fetcher: RecordFetcher,
        expected_format_version: int = DEFAULT_FORMAT_VERSION,
        *,
        dependency_source: DependencySource | None = None,
        max_workers: int = 1,
    ) -> None:
        """Initialize the engine.

        Args:
            fetcher: Record fetcher used for every lookup of the run.
            expected_format_version: Only records with this format version count.
            dependency_source: Supplies the dependency set for verify().
            max_workers: Dependencies evaluated concurrently (1 = sequential).
        """
        if max_workers < 1:
            msg = f"max_workers must be >= 1, got {max_workers}"
            raise ValueError(msg)
        self.fetcher = fetcher
        self.expected_format_version = expected_format_version
        self.dependency_source = dependency_source
        self.max_workers = max_workers
        self._log = logger.bind(component="verification_engine")

    def verify(self, project: Coordinate, *, transitive: bool = False) -> Verdict:
        """Verify a project's dependency set.

        Args:
            project: The consuming project's coordinate.
            transitive: Also check the transitive closure.

        Returns:
            Verdict with every applicable finding.

        Raises:
            DependencyResolutionError: If no dependency source is configured.
            RepositoryTransportError: If a repository cannot be queried.
            MalformedRecordError: If a record payload is corrupt.
            InvalidVersionError: If a version cannot be compared.
        """
        if self.dependency_source is None:
            raise DependencyResolutionError("No dependency source configured")

        dependencies = set(self.dependency_source.direct_dependencies(project))
        if transitive:
            dependencies |= self.dependency_source.transitive_closure(project)

        return self.verify_dependencies(dependencies, transitive=transitive)

    def verify_dependencies(
        self,
        dependencies: Iterable[Dependency],
        *,
        transitive: bool = False,
    ) -> Verdict:
        """Verify an explicit dependency set.

        Args:
            dependencies: Resolved dependencies to check.
            transitive: Recorded on the verdict only.

        Returns:
            Verdict with every applicable finding.
        """
        start_time = time.monotonic()
        started_at = datetime.now(UTC)
        ordered = _deduplicate(dependencies)

        self._log.info(
            "verification_started",
            dependencies=len(ordered),
            transitive=transitive,
            format_version=self.expected_format_version,
            max_workers=self.max_workers,
        )

        if self.max_workers > 1 and len(ordered) > 1:
            per_dependency = self._check_concurrently(ordered)
        else:
            per_dependency = {dep.identity: self._check_dependency(dep) for dep in ordered}

        hard_failures: list[Finding] = []
        warnings: list[Finding] = []
        for dependency in ordered:
            for finding in per_dependency[dependency.identity]:
                if finding.severity == Severity.FAIL:
                    hard_failures.append(finding)
                else:
                    warnings.append(finding)

        total_duration_ms = int((time.monotonic() - start_time) * 1000)
        verdict = Verdict(
            hard_failures=hard_failures,
            warnings=warnings,
            checked_dependencies=len(ordered),
            expected_format_version=self.expected_format_version,
            transitive=transitive,
            started_at=started_at,
            finished_at=datetime.now(UTC),
            total_duration_ms=total_duration_ms,
        )

        self._log.info(
            "verification_completed",
            status=verdict.status.value,
            hard_failures=len(hard_failures),
            warnings=len(warnings),
            total_duration_ms=total_duration_ms,
        )
        return verdict

    def _check_concurrently(
        self, dependencies: list[Dependency]
    ) -> dict[tuple[str, str, str], list[Finding]]:
        results: dict[tuple[str, str, str], list[Finding]] = {}
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = {pool.submit(self._check_dependency, dep): dep for dep in dependencies}
            try:
                for future in as_completed(futures):
                    results[futures[future].identity] = future.result()
            except BaseException:
                pool.shutdown(wait=False, cancel_futures=True)
                raise
        return results

    def _check_dependency(self, dependency: Dependency) -> list[Finding]:
        """Fetch and evaluate every candidate record of one dependency."""
        coordinate = dependency.coordinate
        log = self._log.bind(dependency=str(dependency))

        published = self.fetcher.list_versions(coordinate)
        candidates = select_versions_to_check(
            published, dependency.version, coordinate=coordinate.key
        )
        log.debug("candidate_versions", versions=candidates)

        findings: list[Finding] = []
        for version in candidates:
            metadata_coordinate = coordinate.metadata(version)
            result = self.fetcher.fetch(coordinate, version)

            if isinstance(result, NotFound):
                continue
            if isinstance(result, TransportFailure):
                raise result.to_error(metadata_coordinate)

            record = parse_record(result.content, source=str(metadata_coordinate))
            evaluation = evaluate(
                record,
                origin_version=version,
                dependency_version=dependency.version,
                expected_format_version=self.expected_format_version,
            )
            if not isinstance(evaluation, Applicable):
                log.debug(
                    "metadata_record_ignored",
                    source=str(metadata_coordinate),
                    reason=evaluation.reason.value,
                )
                continue

            finding = Finding(
                dependency=dependency,
                origin_version=version,
                severity=evaluation.severity,
                message=evaluation.message,
                source=str(metadata_coordinate),
                repository=result.repository,
            )
            event = (
                "dependency_metadata_failure"
                if finding.severity == Severity.FAIL
                else "dependency_metadata_warning"
            )
            log.warning(event, source=finding.source, message=finding.message)
            findings.append(finding)

        return findings


def _deduplicate(dependencies: Iterable[Dependency]) -> list[Dependency]:
    """Collapse duplicates (direct wins over transitive) and order by identity."""
    unique: dict[tuple[str, str, str], Dependency] = {}
    for dependency in dependencies:
        existing = unique.get(dependency.identity)
        if existing is None or dependency.scope == DependencyScope.DIRECT:
            unique[dependency.identity] = dependency
    return [unique[identity] for identity in sorted(unique)]


def run_verification(
    fetcher: RecordFetcher,
    dependency_source: DependencySource,
    project: Coordinate,
    *,
    transitive: bool = False,
    expected_format_version: int = DEFAULT_FORMAT_VERSION,
    max_workers: int = 1,
) -> Verdict:
    """Verify a project's dependencies with the given collaborators.

    Convenience function that creates an engine and runs it.

    Example:
        >>> verdict = run_verification(fetcher, source, project, transitive=True)
        >>> if verdict.failed:
        ...     print(verdict.hard_failures)
    """
    engine = VerificationEngine(
        fetcher,
        expected_format_version,
        dependency_source=dependency_source,
        max_workers=max_workers,
    )
    return engine.verify(project, transitive=transitive)
