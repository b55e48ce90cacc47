"""depmeta-core: Dependency metadata records and the build gate built on them.

This package provides:
- Record: the deprecation/advisory record published next to a library version
- VerificationEngine: checks a project's dependencies against their records
- GenerationEngine: decides which versions receive a new record
- DeploymentEngine: publishes generated record files
- Version selection, record fetching and applicability rules
"""

from __future__ import annotations

__version__ = "0.1.0"

from depmeta_core.config import DepmetaSettings
from depmeta_core.deployment import (
    DeploymentEngine,
    DeploymentTarget,
    parse_deployment_target,
    parse_record_filename,
    record_filename,
    resolve_deployment_target,
    scan_record_files,
)
from depmeta_core.errors import (
    ConfigurationError,
    ConflictingRecordError,
    DependencyResolutionError,
    DeploymentError,
    DepmetaError,
    InvalidVersionError,
    MalformedRecordError,
    RepositoryTransportError,
)
from depmeta_core.evaluator import (
    Applicable,
    Evaluation,
    IgnoreReason,
    Ignored,
    Severity,
    evaluate,
)
from depmeta_core.export import export_record_schema
from depmeta_core.fetcher import RecordFetcher
from depmeta_core.generation import GenerationEngine, write_records
from depmeta_core.repository import (
    FetchResult,
    Found,
    NotFound,
    RepositoryClient,
    TransportFailure,
)
from depmeta_core.schemas import (
    DEFAULT_FORMAT_VERSION,
    DEFAULT_MESSAGE,
    METADATA_CLASSIFIER,
    METADATA_TYPE,
    Coordinate,
    Dependency,
    DependencyScope,
    DependencySource,
    ProjectDependencySource,
    ProjectSpec,
    Record,
    parse_record,
)
from depmeta_core.verification import (
    Finding,
    Verdict,
    VerdictStatus,
    VerificationEngine,
    run_verification,
)
from depmeta_core.versions import (
    parse_version,
    select_versions_to_backfill,
    select_versions_to_check,
)

__all__ = [
    "__version__",
    # Configuration
    "DepmetaSettings",
    # Errors
    "DepmetaError",
    "InvalidVersionError",
    "MalformedRecordError",
    "RepositoryTransportError",
    "ConflictingRecordError",
    "DependencyResolutionError",
    "ConfigurationError",
    "DeploymentError",
    # Models
    "Coordinate",
    "Dependency",
    "DependencyScope",
    "DependencySource",
    "ProjectDependencySource",
    "ProjectSpec",
    "Record",
    "parse_record",
    "DEFAULT_FORMAT_VERSION",
    "DEFAULT_MESSAGE",
    "METADATA_CLASSIFIER",
    "METADATA_TYPE",
    # Repository access
    "RepositoryClient",
    "FetchResult",
    "Found",
    "NotFound",
    "TransportFailure",
    "RecordFetcher",
    # Versions
    "parse_version",
    "select_versions_to_check",
    "select_versions_to_backfill",
    # Evaluation
    "evaluate",
    "Evaluation",
    "Applicable",
    "Ignored",
    "IgnoreReason",
    "Severity",
    # Engines
    "VerificationEngine",
    "run_verification",
    "Finding",
    "Verdict",
    "VerdictStatus",
    "GenerationEngine",
    "write_records",
    "DeploymentEngine",
    "DeploymentTarget",
    "parse_deployment_target",
    "parse_record_filename",
    "record_filename",
    "resolve_deployment_target",
    "scan_record_files",
    # Schema export
    "export_record_schema",
]
