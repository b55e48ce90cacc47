"""Version selection for metadata records.

Consumers check the record of every published version at or above the
version they use: a record published later against a higher version may
still reach back to theirs. Producers back-filling records target every
published version strictly below their own.

Versions are ordered the way Maven repositories order them (Maven's
ComparableVersion rules, via ``univers``): qualifiers such as ``-jre``,
``.RELEASE`` or ``-SNAPSHOT`` are legal and ``1.0-rc1 < 1.0 < 1.0-sp1``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import structlog
from univers.versions import MavenVersion

from depmeta_core.errors import InvalidVersionError

logger = structlog.get_logger(__name__)

SNAPSHOT_QUALIFIER = "SNAPSHOT"

# Timestamped snapshot as deployed to a remote repository: 1.0-20240101.120000-3
_TIMESTAMPED_SNAPSHOT = re.compile(r"^(.*)-(\d{8}\.\d{6})-(\d+)$")

# A version is also a repository path segment
_ILLEGAL_CHARACTERS = re.compile(r"[\s/\\]")


def parse_version(version: str, *, coordinate: str | None = None) -> MavenVersion:
    """Parse a version string.

    Args:
        version: Version string (e.g., "1.2.0", "31.1-jre", "2.0.0-SNAPSHOT").
        coordinate: Coordinate the version belongs to, for error context.

    Returns:
        Comparable MavenVersion.

    Raises:
        InvalidVersionError: If the string is empty or cannot name a
            repository directory.
    """
    if not version or _ILLEGAL_CHARACTERS.search(version):
        raise InvalidVersionError(
            version,
            coordinate=coordinate,
            internal_details="empty or contains whitespace or path separators",
        )
    try:
        return MavenVersion(version)
    except ValueError as e:
        raise InvalidVersionError(version, coordinate=coordinate, internal_details=str(e)) from e


def versions_equal(left: str, right: str) -> bool:
    """Check whether two version strings denote the same version.

    Example:
        >>> versions_equal("1.0", "1.0.0")
        True
    """
    return parse_version(left) == parse_version(right)


def _parse_published(
    published: Iterable[str], coordinate: str | None
) -> list[tuple[MavenVersion, str]]:
    """Parse, sort and de-duplicate published versions, keeping the original strings.

    Entries that cannot be a repository directory are skipped: no record
    can live there.
    """
    parsed: list[tuple[MavenVersion, str]] = []
    for raw in published:
        try:
            parsed.append((parse_version(raw, coordinate=coordinate), raw))
        except InvalidVersionError:
            logger.warning("published_version_skipped", version=raw, coordinate=coordinate)

    ordered = sorted(parsed, key=lambda item: item[0])
    unique: list[tuple[MavenVersion, str]] = []
    for version, raw in ordered:
        if unique and unique[-1][0] == version:
            continue
        unique.append((version, raw))
    return unique


def select_versions_to_check(
    published: Iterable[str],
    dependency_version: str,
    *,
    coordinate: str | None = None,
) -> list[str]:
    """Select the versions whose records a consumer must check.

    Args:
        published: Every published version of the dependency's coordinate.
        dependency_version: Version the consumer resolved.
        coordinate: Coordinate for error context.

    Returns:
        Published versions greater than or equal to dependency_version,
        ascending.

    Raises:
        InvalidVersionError: If the dependency version cannot be parsed.

    Example:
        >>> select_versions_to_check(["31.1-jre", "30.0-jre", "32.0-jre"], "31.1-jre")
        ['31.1-jre', '32.0-jre']
    """
    floor = parse_version(dependency_version, coordinate=coordinate)
    return [
        raw for version, raw in _parse_published(published, coordinate) if not version < floor
    ]


def select_versions_to_backfill(
    published: Iterable[str],
    project_version: str,
    *,
    coordinate: str | None = None,
) -> list[str]:
    """Select the versions a producer back-fills records for.

    Args:
        published: Every published version of the project's coordinate.
        project_version: The project's own version.
        coordinate: Coordinate for error context.

    Returns:
        Published versions strictly lower than project_version, ascending.

    Raises:
        InvalidVersionError: If the project version cannot be parsed.

    Example:
        >>> select_versions_to_backfill(["1.0.0", "2.0.0", "1.1.0"], "2.0.0")
        ['1.0.0', '1.1.0']
    """
    ceiling = parse_version(project_version, coordinate=coordinate)
    return [raw for version, raw in _parse_published(published, coordinate) if version < ceiling]


def is_snapshot(version: str) -> bool:
    """Check whether a version is a snapshot build.

    A snapshot ends in ``SNAPSHOT`` (any case) or carries a deployment
    timestamp and build number.

    Example:
        >>> is_snapshot("1.1.0-SNAPSHOT")
        True
        >>> is_snapshot("1.1.0-20240101.120000-3")
        True
    """
    if version.upper().endswith(SNAPSHOT_QUALIFIER):
        return True
    return _TIMESTAMPED_SNAPSHOT.match(version) is not None
