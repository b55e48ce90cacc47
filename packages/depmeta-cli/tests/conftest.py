"""Shared test fixtures for depmeta-cli tests.

Provides CliRunner fixtures, an isolated DEPMETA_ environment and helpers
for populating a filesystem repository with metadata records.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from depmeta_core.deployment import record_filename
from depmeta_core.schemas.record import Record

PROJECT_FILENAME = "depmeta.yaml"

PROJECT_YAML = """\
group: com.acme
name: checkout-service
version: 3.1.0
dependencies:
  - {group: com.acme, name: payments-client, version: 1.0.0}
  - {group: org.example, name: json-kit, version: 4.0.0}
transitive_dependencies:
  - {group: com.acme, name: http-core, version: 2.4.1}
"""


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Silence structured log lines so command output stays assertable."""
    structlog.configure(
        processors=[structlog.dev.ConsoleRenderer()],
        wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def depmeta_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run every test in tmp_path with a private local repository."""
    for name in (
        "DEPMETA_FORMAT_VERSION",
        "DEPMETA_REMOTE_REPOSITORIES",
        "DEPMETA_DISTRIBUTION_REPOSITORY",
        "DEPMETA_MAX_WORKERS",
        "DEPMETA_OUTPUT_DIR",
        "DEPMETA_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DEPMETA_LOCAL_REPOSITORY", str(tmp_path / "m2"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner.

    Returns:
        CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def local_repository(tmp_path: Path) -> Path:
    """Directory the DEPMETA_LOCAL_REPOSITORY variable points at."""
    return tmp_path / "m2"


@pytest.fixture
def project_file(tmp_path: Path) -> Path:
    """Write depmeta.yaml for com.acme:checkout-service:3.1.0 into tmp_path."""
    path = tmp_path / PROJECT_FILENAME
    path.write_text(PROJECT_YAML)
    return path


@pytest.fixture
def publish_record(local_repository: Path) -> Callable[..., Path]:
    """Factory fixture placing a record file into the local repository layout.

    Returns:
        Function taking group, name, version and Record fields.
    """

    def _publish(
        group: str,
        name: str,
        version: str,
        message: str = "Deprecated",
        *,
        fail: bool = False,
        applies_to_previous_versions: bool = False,
        format_version: int = 2,
        content: bytes | None = None,
    ) -> Path:
        directory = local_repository.joinpath(*group.split("."), name, version)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / record_filename(name, version)
        if content is None:
            content = Record(
                format_version=format_version,
                message=message,
                fail=fail,
                applies_to_previous_versions=applies_to_previous_versions,
            ).to_json()
        path.write_bytes(content)
        return path

    return _publish


@pytest.fixture
def publish_version(local_repository: Path) -> Callable[[str, str, str], Path]:
    """Factory fixture creating an empty published version directory."""

    def _publish(group: str, name: str, version: str) -> Path:
        directory = local_repository.joinpath(*group.split("."), name, version)
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    return _publish
