"""Unit tests for depmeta_cli.errors module."""

from __future__ import annotations

import pytest
import yaml
from pydantic import BaseModel, ValidationError

from depmeta_cli.errors import (
    EXIT_ABORTED,
    EXIT_FAILED,
    CLIError,
    describe_validation_error,
    handle_depmeta_error,
    project_file_error,
)
from depmeta_core.errors import (
    ConflictingRecordError,
    DeploymentError,
    InvalidVersionError,
    MalformedRecordError,
    RepositoryTransportError,
)


class _Entry(BaseModel):
    version: str


class _Descriptor(BaseModel):
    name: str
    dependencies: list[_Entry] = []


def _validation_error(**data: object) -> ValidationError:
    with pytest.raises(ValidationError) as exc_info:
        _Descriptor.model_validate(data)
    return exc_info.value


class TestCLIError:
    """Tests for CLIError exception."""

    def test_defaults_to_failed_exit_code(self) -> None:
        error = CLIError("bad option")

        assert error.message == "bad option"
        assert error.exit_code == EXIT_FAILED

    def test_custom_exit_code(self) -> None:
        assert CLIError("gone", exit_code=EXIT_ABORTED).exit_code == EXIT_ABORTED

    def test_show_prints_message(self, capsys: pytest.CaptureFixture[str]) -> None:
        CLIError("Repository unreachable").show()

        assert "Repository unreachable" in capsys.readouterr().out


class TestDescribeValidationError:
    """Tests for describe_validation_error()."""

    def test_one_line_per_field(self) -> None:
        text = describe_validation_error(_validation_error())

        assert text == "name: Field required"

    def test_nested_location_is_dotted(self) -> None:
        text = describe_validation_error(_validation_error(name="lib", dependencies=[{}]))

        assert "dependencies.0.version: Field required" in text


class TestProjectFileError:
    """Tests for project_file_error()."""

    @pytest.mark.requirement("001-FR-072")
    def test_missing_file_aborts(self) -> None:
        error = project_file_error(FileNotFoundError("depmeta.yaml"), "depmeta.yaml")

        assert "File not found: depmeta.yaml" in error.message
        assert "--file" in error.message
        assert error.exit_code == EXIT_ABORTED

    def test_yaml_error_carries_position(self) -> None:
        with pytest.raises(yaml.YAMLError) as yaml_exc:
            yaml.safe_load("group: [com.acme\nname: lib\n")

        error = project_file_error(yaml_exc.value, "depmeta.yaml")

        assert error.message.startswith("Invalid YAML in depmeta.yaml at line")
        assert error.exit_code == EXIT_FAILED

    def test_invalid_descriptor_lists_fields(self) -> None:
        error = project_file_error(_validation_error(), "depmeta.yaml")

        assert "Invalid project descriptor depmeta.yaml" in error.message
        assert "name: Field required" in error.message
        assert error.exit_code == EXIT_FAILED

    def test_unreadable_file_aborts(self) -> None:
        error = project_file_error(PermissionError("denied"), "depmeta.yaml")

        assert "Cannot read depmeta.yaml" in error.message
        assert error.exit_code == EXIT_ABORTED


class TestHandleDepmetaError:
    """Tests for handle_depmeta_error()."""

    @pytest.mark.requirement("001-FR-072")
    @pytest.mark.parametrize(
        ("err", "remedy"),
        [
            (
                RepositoryTransportError(
                    coordinate="com.acme:lib", repository="https://repo.example.com"
                ),
                "network access",
            ),
            (
                MalformedRecordError(source="com.acme:lib:json:metadata:1.0.0", cause="bad"),
                "producer",
            ),
            (ConflictingRecordError("com.acme:lib:json:metadata:1.0.0"), "new version"),
            (DeploymentError("no repository configured"), "DEPMETA_DISTRIBUTION_REPOSITORY"),
        ],
    )
    def test_aborts_with_remedy(self, err: Exception, remedy: str) -> None:
        with pytest.raises(CLIError) as exc_info:
            handle_depmeta_error(err)  # type: ignore[arg-type]

        assert exc_info.value.exit_code == EXIT_ABORTED
        first_line, _, rest = exc_info.value.message.partition("\n")
        assert first_line == str(err)
        assert remedy in rest

    def test_other_errors_carry_message_only(self) -> None:
        err = InvalidVersionError("1.0 final", coordinate="com.acme:lib")

        with pytest.raises(CLIError) as exc_info:
            handle_depmeta_error(err)

        assert exc_info.value.message == str(err)
        assert exc_info.value.__cause__ is err
