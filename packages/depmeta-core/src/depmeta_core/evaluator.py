"""Record applicability rules.

A fetched record counts for a dependency only when its format version is
the one this consumer expects and it either was published against the
dependency's exact version or declares that it reaches other versions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from depmeta_core.schemas.record import Record
from depmeta_core.versions import versions_equal


class Severity(str, Enum):
    """Severity of an applicable record.

    Attributes:
        FAIL: The build must fail
        WARN: The build only reports the advisory
    """

    FAIL = "fail"
    WARN = "warn"


class IgnoreReason(str, Enum):
    """Why a record was not applied.

    Attributes:
        FORMAT_MISMATCH: Record format version differs from the expected one
        NOT_APPLICABLE: Record was published for another version and does not propagate
    """

    FORMAT_MISMATCH = "format_mismatch"
    NOT_APPLICABLE = "not_applicable"


@dataclass(frozen=True)
class Applicable:
    """The record applies to the dependency."""

    severity: Severity
    message: str


@dataclass(frozen=True)
class Ignored:
    """The record does not apply to the dependency."""

    reason: IgnoreReason


Evaluation = Applicable | Ignored


def evaluate(
    record: Record,
    origin_version: str,
    dependency_version: str,
    expected_format_version: int,
) -> Evaluation:
    """Decide whether a record applies to a dependency.

    Args:
        record: Parsed metadata record.
        origin_version: Version the record was published against.
        dependency_version: Version of the dependency in use.
        expected_format_version: Record format version this consumer trusts.

    Returns:
        Applicable with severity and message, or Ignored with the reason.

    Raises:
        InvalidVersionError: If either version cannot be parsed.

    Example:
        >>> record = Record(format_version=2, message="Upgrade", fail=True)
        >>> evaluate(record, "1.0.0", "1.0.0", expected_format_version=2)
        Applicable(severity=<Severity.FAIL: 'fail'>, message='Upgrade')
    """
    if record.format_version != expected_format_version:
        return Ignored(IgnoreReason.FORMAT_MISMATCH)

    if not (
        versions_equal(origin_version, dependency_version) or record.applies_to_previous_versions
    ):
        return Ignored(IgnoreReason.NOT_APPLICABLE)

    severity = Severity.FAIL if record.fail else Severity.WARN
    return Applicable(severity=severity, message=record.message)
