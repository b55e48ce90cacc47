"""Pydantic configuration models for depmeta-repository.

This module provides:
- RetryConfig: Retry policy configuration with exponential backoff
- RemoteRepositoryConfig: HTTP repository connection configuration
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class RetryConfig(BaseModel):
    """Retry policy configuration for remote repository requests.

    Implements exponential backoff with jitter for transient failures.

    Attributes:
        max_attempts: Maximum attempts (1-10, default 3).
        initial_wait_seconds: Initial backoff wait (0-30s, default 0.5).
        max_wait_seconds: Maximum backoff cap (0-300s, default 10.0).
        jitter_seconds: Random jitter range (0-10s, default 0.5).

    Example:
        >>> config = RetryConfig(max_attempts=5, initial_wait_seconds=0.2)
        >>> config.max_attempts
        5
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Maximum number of attempts",
    )
    initial_wait_seconds: float = Field(
        default=0.5,
        ge=0.0,
        le=30.0,
        description="Initial backoff wait time in seconds",
    )
    max_wait_seconds: float = Field(
        default=10.0,
        ge=0.0,
        le=300.0,
        description="Maximum backoff wait time in seconds",
    )
    jitter_seconds: float = Field(
        default=0.5,
        ge=0.0,
        le=10.0,
        description="Random jitter range in seconds",
    )

    @field_validator("max_wait_seconds")
    @classmethod
    def max_wait_must_exceed_initial(cls, v: float, info: object) -> float:
        """Validate that max_wait_seconds >= initial_wait_seconds."""
        data = getattr(info, "data", {})
        initial = data.get("initial_wait_seconds", 0.5)
        if v < initial:
            msg = f"max_wait_seconds ({v}) must be >= initial_wait_seconds ({initial})"
            raise ValueError(msg)
        return v


class RemoteRepositoryConfig(BaseModel):
    """Connection configuration for an HTTP artifact repository.

    Authenticate with either username + password (basic auth) or a bearer
    token.

    Attributes:
        url: Repository base URL (required).
        username: Basic auth user name.
        password: Basic auth password.
        token: Bearer token (alternative to basic auth).
        timeout_seconds: Timeout per round-trip in seconds.
        retry: Retry policy configuration.

    Example:
        >>> config = RemoteRepositoryConfig(url="https://repo.example.com/releases/")
        >>> config.url
        'https://repo.example.com/releases'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str = Field(
        ...,
        min_length=1,
        description="Repository base URL",
    )
    username: str | None = Field(
        default=None,
        description="Basic auth user name",
    )
    password: SecretStr | None = Field(
        default=None,
        description="Basic auth password",
    )
    token: SecretStr | None = Field(
        default=None,
        description="Bearer token",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Timeout per repository round-trip in seconds",
    )
    retry: RetryConfig = Field(
        default_factory=RetryConfig,
        description="Retry policy configuration",
    )

    @field_validator("url")
    @classmethod
    def validate_url_format(cls, v: str) -> str:
        """Validate URL format (must be http:// or https://)."""
        if not v.startswith(("http://", "https://")):
            msg = f"URL must start with http:// or https://, got: {v}"
            raise ValueError(msg)
        return v.rstrip("/")
