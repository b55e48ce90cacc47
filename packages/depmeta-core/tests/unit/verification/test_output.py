"""Unit tests for verdict output formatting.

Run with:
    pytest packages/depmeta-core/tests/unit/verification/test_output.py -v
"""

from __future__ import annotations

import json
from io import StringIO

import pytest
from rich.console import Console

from depmeta_core.evaluator import Severity
from depmeta_core.schemas.coordinate import Dependency, DependencyScope
from depmeta_core.verification.models import Finding, Verdict, VerdictStatus
from depmeta_core.verification.output import (
    format_verdict_json,
    format_verdict_table,
    print_verdict,
)


@pytest.fixture
def sample_verdict() -> Verdict:
    """Create a verdict with one hard failure and one warning."""
    payments = Dependency(group="com.acme", name="payments-client", version="1.0.0")
    http_core = Dependency(
        group="com.acme", name="http-core", version="2.4.1", scope=DependencyScope.TRANSITIVE
    )
    return Verdict(
        hard_failures=[
            Finding(
                dependency=payments,
                origin_version="1.0.0",
                severity=Severity.FAIL,
                message="1.0.0 leaks card numbers",
                source="com.acme:payments-client:json:metadata:1.0.0",
                repository="https://repo.example.com/releases",
            )
        ],
        warnings=[
            Finding(
                dependency=http_core,
                origin_version="2.5.0",
                severity=Severity.WARN,
                message="2.x is deprecated",
                source="com.acme:http-core:json:metadata:2.5.0",
            )
        ],
        checked_dependencies=3,
        expected_format_version=2,
        transitive=True,
        total_duration_ms=120,
    )


def _console() -> tuple[Console, StringIO]:
    output = StringIO()
    return Console(file=output, width=200), output


class TestVerdictModel:
    """Tests for Verdict status properties."""

    def test_status_failed(self, sample_verdict: Verdict) -> None:
        assert sample_verdict.status == VerdictStatus.FAILED
        assert sample_verdict.failed
        assert not sample_verdict.passed

    def test_findings_lists_failures_first(self, sample_verdict: Verdict) -> None:
        assert [f.severity for f in sample_verdict.findings] == [Severity.FAIL, Severity.WARN]

    def test_empty_verdict_passes(self) -> None:
        verdict = Verdict()
        assert verdict.status == VerdictStatus.PASSED
        assert verdict.findings == []


class TestFormatVerdictTable:
    """Tests for format_verdict_table."""

    @pytest.mark.requirement("001-FR-070")
    def test_shows_status_and_counts(self, sample_verdict: Verdict) -> None:
        console, output = _console()

        format_verdict_table(sample_verdict, console=console)

        content = output.getvalue()
        assert "DEPENDENCY METADATA VERIFICATION" in content
        assert "FAILED" in content
        assert "3 checked" in content
        assert "1 failures, 1 warnings" in content
        assert "120ms" in content

    @pytest.mark.requirement("001-FR-070")
    def test_shows_source_and_message_of_each_finding(self, sample_verdict: Verdict) -> None:
        console, output = _console()

        format_verdict_table(sample_verdict, console=console)

        content = output.getvalue()
        assert "com.acme:payments-client:json:metadata:1.0.0" in content
        assert "1.0.0 leaks card numbers" in content
        assert "com.acme:http-core:json:metadata:2.5.0" in content
        assert "2.x is deprecated" in content

    def test_passed_verdict_has_no_table(self) -> None:
        console, output = _console()

        format_verdict_table(Verdict(checked_dependencies=2), console=console)

        content = output.getvalue()
        assert "PASSED" in content
        assert "Message" not in content


class TestFormatVerdictJson:
    """Tests for format_verdict_json."""

    @pytest.mark.requirement("001-FR-070")
    def test_returns_valid_json(self, sample_verdict: Verdict) -> None:
        parsed = json.loads(format_verdict_json(sample_verdict))

        assert parsed["status"] == "failed"
        assert parsed["passed"] is False
        assert parsed["summary"] == {"dependencies": 3, "failures": 1, "warnings": 1}
        assert parsed["transitive"] is True
        assert parsed["format_version"] == 2

    @pytest.mark.requirement("001-FR-070")
    def test_includes_findings(self, sample_verdict: Verdict) -> None:
        parsed = json.loads(format_verdict_json(sample_verdict))

        failure = parsed["hard_failures"][0]
        assert failure["dependency"] == "com.acme:payments-client:1.0.0"
        assert failure["scope"] == "direct"
        assert failure["severity"] == "fail"
        assert failure["source"] == "com.acme:payments-client:json:metadata:1.0.0"
        assert parsed["warnings"][0]["scope"] == "transitive"

    def test_compact_format(self, sample_verdict: Verdict) -> None:
        assert "\n" not in format_verdict_json(sample_verdict, pretty=False)


class TestPrintVerdict:
    """Tests for print_verdict."""

    def test_json_output_is_parseable(self, sample_verdict: Verdict) -> None:
        console, output = _console()

        print_verdict(sample_verdict, output_format="json", console=console)

        assert json.loads(output.getvalue())["status"] == "failed"

    def test_table_output(self, sample_verdict: Verdict) -> None:
        console, output = _console()

        print_verdict(sample_verdict, output_format="table", console=console)

        assert "Verification Results" in output.getvalue()
