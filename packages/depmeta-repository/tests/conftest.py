"""Shared pytest fixtures for depmeta-repository tests."""

from __future__ import annotations

import pytest
import structlog

from depmeta_core.schemas.coordinate import Coordinate
from depmeta_repository.config import RetryConfig


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),  # Resolves sys.stdout per logger
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture
def fast_retry() -> RetryConfig:
    """Retry policy without backoff waits."""
    return RetryConfig(
        max_attempts=3,
        initial_wait_seconds=0.0,
        max_wait_seconds=0.0,
        jitter_seconds=0.0,
    )


@pytest.fixture
def metadata_coordinate() -> Coordinate:
    """Metadata record coordinate com.acme:lib:json:metadata:1.0.0."""
    return Coordinate(group="com.acme", name="lib", version="1.0.0").metadata()
