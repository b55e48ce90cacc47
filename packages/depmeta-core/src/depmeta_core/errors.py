"""Custom exception hierarchy for depmeta-core.

This module defines the exception classes raised when a verification,
generation, or deployment run cannot be trusted and must abort:
- DepmetaError: Base exception for all depmeta errors
- InvalidVersionError: A version string cannot be parsed or compared
- MalformedRecordError: A fetched metadata record payload is corrupt
- RepositoryTransportError: A repository could not be reached or answered badly
- ConflictingRecordError: Generation would silently overwrite a different record
- DependencyResolutionError: The dependency set could not be produced
- ConfigurationError: Configuration or descriptor files are invalid
- DeploymentError: Record files could not be deployed

Advisory outcomes (warnings, hard failures) and "record not found" are
values, never exceptions.

User-facing messages are safe to display; technical details are logged
internally via structlog.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class DepmetaError(Exception):
    """Base exception for depmeta.

    All depmeta exceptions inherit from this class. User-facing messages
    are safe to display; technical details are logged internally.

    Args:
        user_message: Message to display to the build operator.
        internal_details: Optional technical details for logging.

    Example:
        >>> raise DepmetaError(
        ...     "Verification failed",
        ...     internal_details="Unexpected repository layout at /srv/repo",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize DepmetaError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details

        if internal_details:
            logger.error(
                "depmeta_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class InvalidVersionError(DepmetaError):
    """Raised when a version string cannot be parsed or compared.

    Attributes:
        version: The offending version string.
        coordinate: Coordinate the version belongs to (if known).

    Example:
        >>> raise InvalidVersionError("1.0 final", coordinate="com.acme:lib")
        # User sees: "Invalid version '1.0 final' for com.acme:lib"
    """

    def __init__(
        self,
        version: str,
        *,
        coordinate: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize InvalidVersionError.

        Args:
            version: The version string that failed to parse.
            coordinate: Coordinate the version belongs to (optional).
            internal_details: Technical details for internal logging only.
        """
        user_message = f"Invalid version '{version}'"
        if coordinate:
            user_message = f"{user_message} for {coordinate}"

        super().__init__(user_message, internal_details=internal_details)

        self.version = version
        self.coordinate = coordinate


class MalformedRecordError(DepmetaError):
    """Raised when a metadata record payload cannot be parsed.

    A corrupt record is surfaced rather than ignored: it may hide a real
    advisory.

    Attributes:
        source: Where the payload came from (coordinate or file path).
        cause: Description of the parse failure.
    """

    def __init__(
        self,
        source: str,
        *,
        cause: str | None = None,
    ) -> None:
        """Initialize MalformedRecordError.

        Args:
            source: Coordinate or file path the payload was read from.
            cause: The underlying parse failure.
        """
        user_message = f"Malformed metadata record {source}"
        if cause:
            user_message = f"{user_message}: {cause}"

        super().__init__(user_message, internal_details=cause)

        self.source = source
        self.cause = cause


class RepositoryTransportError(DepmetaError):
    """Raised when a repository cannot be reached or returns an unusable answer.

    Cannot be told apart from "record exists but is unreachable", so it is
    always fatal to the run.

    Attributes:
        coordinate: Coordinate being looked up (if any).
        repository: Repository identifier (URL or path).
        cause: The underlying failure.

    Example:
        >>> raise RepositoryTransportError(
        ...     coordinate="com.acme:lib:json:metadata:1.0.0",
        ...     repository="https://repo.example.com/releases",
        ...     cause="HTTP 503",
        ... )
    """

    def __init__(
        self,
        message: str = "Repository request failed",
        *,
        coordinate: str | None = None,
        repository: str | None = None,
        cause: str | None = None,
    ) -> None:
        """Initialize RepositoryTransportError.

        Args:
            message: Human-readable error description.
            coordinate: Coordinate being looked up.
            repository: Repository the request went to.
            cause: The underlying failure.
        """
        context_parts: list[str] = []
        if coordinate:
            context_parts.append(f"coordinate={coordinate}")
        if repository:
            context_parts.append(f"repository={repository}")
        if cause:
            context_parts.append(f"cause={cause}")

        if context_parts:
            full_message = f"{message} ({', '.join(context_parts)})"
        else:
            full_message = message

        super().__init__(full_message)

        self.coordinate = coordinate
        self.repository = repository
        self.cause = cause


class ConflictingRecordError(DepmetaError):
    """Raised when generation would replace a different, published record.

    Attributes:
        coordinate: Coordinate of the conflicting record.
        location: Where the existing record lives (repository or file).
    """

    def __init__(self, coordinate: str, *, location: str | None = None) -> None:
        """Initialize ConflictingRecordError.

        Args:
            coordinate: Coordinate of the conflicting record.
            location: Where the existing record was found.
        """
        user_message = f"A different metadata record already exists for {coordinate}"
        if location:
            user_message = f"{user_message} in {location}"

        super().__init__(user_message)

        self.coordinate = coordinate
        self.location = location


class DependencyResolutionError(DepmetaError):
    """Raised when the project's dependency set cannot be produced."""

    pass


class ConfigurationError(DepmetaError):
    """Raised when a configuration or descriptor file is invalid.

    Attributes:
        file_path: Path to the file (if known).
        field_path: Dot-separated path to the invalid field (if known).

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid project descriptor",
        ...     file_path="depmeta.yaml",
        ...     field_path="dependencies.0.version",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ConfigurationError with context.

        Args:
            user_message: Safe message to display to the user.
            file_path: Path to the configuration file (optional).
            field_path: Dot-separated path to the field (optional).
            internal_details: Technical details for internal logging only.
        """
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = file_path
        self.field_path = field_path


class DeploymentError(DepmetaError):
    """Raised when generated record files cannot be deployed.

    Use this exception when:
    - No deployment target is configured
    - An alternative target does not follow the ``id::layout::url`` syntax
    - A record file to deploy is missing
    """

    pass
