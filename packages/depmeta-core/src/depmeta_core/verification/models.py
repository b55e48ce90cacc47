"""Verification result models.

Models for the findings and the aggregated verdict of one verification run.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from depmeta_core.evaluator import Severity
from depmeta_core.schemas.coordinate import Dependency


class VerdictStatus(str, Enum):
    """Overall status of a verification run.

    Attributes:
        PASSED: No applicable record was found
        WARNING: Only warning records apply
        FAILED: At least one hard-failure record applies
    """

    PASSED = "passed"
    WARNING = "warning"
    FAILED = "failed"


class Finding(BaseModel):
    """One applicable record for one dependency.

    Attributes:
        dependency: Dependency the record applies to
        origin_version: Version the record was published against
        severity: Hard failure or warning
        message: Advisory message, unchanged from the record
        source: Metadata coordinate the record was read from
        repository: Repository that served the record

    Example:
        >>> finding = Finding(
        ...     dependency=Dependency(group="com.acme", name="lib", version="1.0.0"),
        ...     origin_version="1.2.0",
        ...     severity=Severity.WARN,
        ...     message="1.x is deprecated",
        ...     source="com.acme:lib:json:metadata:1.2.0",
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    dependency: Dependency = Field(..., description="Affected dependency")
    origin_version: str = Field(..., min_length=1, description="Record origin version")
    severity: Severity = Field(..., description="Record severity")
    message: str = Field(default="", description="Advisory message")
    source: str = Field(..., min_length=1, description="Record coordinate")
    repository: str = Field(default="", description="Serving repository")


class Verdict(BaseModel):
    """Aggregated result of one verification run.

    Attributes:
        hard_failures: Findings that fail the build, in reporting order
        warnings: Advisory findings, in reporting order
        checked_dependencies: Number of dependencies evaluated
        expected_format_version: Record format version the run trusted
        transitive: Whether the transitive closure was checked
        started_at: When verification started
        finished_at: When verification finished
        total_duration_ms: Total duration in milliseconds
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    hard_failures: list[Finding] = Field(default_factory=list, description="Hard failures")
    warnings: list[Finding] = Field(default_factory=list, description="Warnings")
    checked_dependencies: int = Field(default=0, ge=0, description="Dependencies checked")
    expected_format_version: int = Field(default=0, ge=0, description="Trusted format version")
    transitive: bool = Field(default=False, description="Transitive closure checked")
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="Start time"
    )
    finished_at: datetime | None = Field(default=None, description="End time")
    total_duration_ms: int = Field(default=0, ge=0, description="Total duration")

    @property
    def status(self) -> VerdictStatus:
        """Overall status derived from the findings."""
        if self.hard_failures:
            return VerdictStatus.FAILED
        if self.warnings:
            return VerdictStatus.WARNING
        return VerdictStatus.PASSED

    @property
    def passed(self) -> bool:
        """Check if the build may proceed (warnings do not block)."""
        return not self.hard_failures

    @property
    def failed(self) -> bool:
        """Check if any hard failure was found."""
        return bool(self.hard_failures)

    @property
    def findings(self) -> list[Finding]:
        """All findings, hard failures first."""
        return [*self.hard_failures, *self.warnings]
