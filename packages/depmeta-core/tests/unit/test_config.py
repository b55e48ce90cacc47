"""Unit tests for DepmetaSettings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from depmeta_core.config import DEFAULT_LOCAL_REPOSITORY, DepmetaSettings


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run without DEPMETA_ variables or a .env file from the caller."""
    monkeypatch.chdir(tmp_path)
    for name in [
        "DEPMETA_FORMAT_VERSION",
        "DEPMETA_LOCAL_REPOSITORY",
        "DEPMETA_REMOTE_REPOSITORIES",
        "DEPMETA_DISTRIBUTION_REPOSITORY",
        "DEPMETA_TIMEOUT_SECONDS",
        "DEPMETA_MAX_WORKERS",
        "DEPMETA_OUTPUT_DIR",
    ]:
        monkeypatch.delenv(name, raising=False)


class TestDepmetaSettings:
    """Tests for DepmetaSettings."""

    def test_default_values(self) -> None:
        settings = DepmetaSettings()

        assert settings.format_version == 2
        assert settings.local_repository == DEFAULT_LOCAL_REPOSITORY
        assert settings.remote_repositories == []
        assert settings.distribution_repository is None
        assert settings.timeout_seconds == 30.0
        assert settings.max_workers == 1
        assert settings.output_dir == Path("target")

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEPMETA_FORMAT_VERSION", "3")
        monkeypatch.setenv(
            "DEPMETA_REMOTE_REPOSITORIES",
            '["https://repo.example.com/releases", "https://mirror.example.com"]',
        )
        monkeypatch.setenv("DEPMETA_MAX_WORKERS", "8")

        settings = DepmetaSettings()

        assert settings.format_version == 3
        assert settings.remote_repositories == [
            "https://repo.example.com/releases",
            "https://mirror.example.com",
        ]
        assert settings.max_workers == 8

    def test_reads_dotenv_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("DEPMETA_DISTRIBUTION_REPOSITORY=/srv/repository\n")
        assert DepmetaSettings().distribution_repository == "/srv/repository"

    def test_format_version_must_be_positive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEPMETA_FORMAT_VERSION", "0")
        with pytest.raises(ValidationError) as exc_info:
            DepmetaSettings()
        assert "format_version" in str(exc_info.value)

    def test_timeout_validation_max(self) -> None:
        with pytest.raises(ValidationError):
            DepmetaSettings(timeout_seconds=301)
