"""Verdict output formatters.

Rich table and JSON output for verification verdicts.
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from depmeta_core.evaluator import Severity
from depmeta_core.verification.models import Finding, Verdict, VerdictStatus


def _status_icon(status: VerdictStatus) -> str:
    """Get icon for verdict status."""
    icons = {
        VerdictStatus.PASSED: "✅",
        VerdictStatus.WARNING: "⚠️",
        VerdictStatus.FAILED: "❌",
    }
    return icons.get(status, "❓")


def _status_color(status: VerdictStatus) -> str:
    """Get color for verdict status."""
    colors = {
        VerdictStatus.PASSED: "green",
        VerdictStatus.WARNING: "yellow",
        VerdictStatus.FAILED: "red",
    }
    return colors.get(status, "white")


def format_verdict_table(verdict: Verdict, console: Console | None = None) -> None:
    """Format a verdict as a Rich panel and findings table.

    Args:
        verdict: Verdict to display
        console: Optional Rich console (creates one if not provided)
    """
    if console is None:
        console = Console()

    status = verdict.status
    color = _status_color(status)
    header_text = Text()
    header_text.append("DEPENDENCY METADATA VERIFICATION\n\n", style="bold")
    header_text.append(f"Status: {_status_icon(status)} ", style=color)
    header_text.append(status.value.upper(), style=f"bold {color}")
    header_text.append(
        f"\nDependencies: {verdict.checked_dependencies} checked"
        f" ({'direct + transitive' if verdict.transitive else 'direct only'})"
    )
    header_text.append(
        f"\nFindings: {len(verdict.hard_failures)} failures, {len(verdict.warnings)} warnings"
    )
    if verdict.total_duration_ms > 0:
        header_text.append(f"\nDuration: {verdict.total_duration_ms}ms")

    console.print(Panel(header_text, title="[bold]Verification Results[/bold]"))

    if not verdict.findings:
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Severity", width=8)
    table.add_column("Dependency", min_width=20)
    table.add_column("Metadata source", min_width=20)
    table.add_column("Message", min_width=30)

    for finding in verdict.findings:
        style = "red" if finding.severity == Severity.FAIL else "yellow"
        table.add_row(
            Text(finding.severity.value.upper(), style=f"bold {style}"),
            Text(str(finding.dependency), style=style),
            finding.source,
            finding.message or "-",
        )

    console.print(table)


def format_verdict_json(verdict: Verdict, pretty: bool = True) -> str:
    """Format a verdict as JSON.

    Args:
        verdict: Verdict to format
        pretty: Whether to use indentation

    Returns:
        JSON string representation
    """
    data = _verdict_to_dict(verdict)
    if pretty:
        return json.dumps(data, indent=2, default=str)
    return json.dumps(data, default=str)


def _verdict_to_dict(verdict: Verdict) -> dict[str, Any]:
    """Convert Verdict to dictionary for JSON serialization."""
    return {
        "status": verdict.status.value,
        "passed": verdict.passed,
        "summary": {
            "dependencies": verdict.checked_dependencies,
            "failures": len(verdict.hard_failures),
            "warnings": len(verdict.warnings),
        },
        "transitive": verdict.transitive,
        "format_version": verdict.expected_format_version,
        "duration_ms": verdict.total_duration_ms,
        "started_at": verdict.started_at.isoformat() if verdict.started_at else None,
        "finished_at": verdict.finished_at.isoformat() if verdict.finished_at else None,
        "hard_failures": [_finding_to_dict(f) for f in verdict.hard_failures],
        "warnings": [_finding_to_dict(f) for f in verdict.warnings],
    }


def _finding_to_dict(finding: Finding) -> dict[str, Any]:
    """Convert Finding to dictionary for JSON serialization."""
    return {
        "dependency": str(finding.dependency),
        "scope": finding.dependency.scope.value,
        "origin_version": finding.origin_version,
        "severity": finding.severity.value,
        "message": finding.message,
        "source": finding.source,
        "repository": finding.repository,
    }


def print_verdict(
    verdict: Verdict,
    output_format: str = "table",
    console: Console | None = None,
) -> None:
    """Print a verdict in the specified format.

    Args:
        verdict: Verdict to display
        output_format: Output format ("table" or "json")
        console: Optional Rich console
    """
    if console is None:
        console = Console()

    if output_format == "json":
        # Raw JSON keeps the output parseable
        json_str = format_verdict_json(verdict, pretty=True)
        if console.file is not None:
            console.file.write(json_str + "\n")
        else:
            print(json_str)
    else:
        format_verdict_table(verdict, console)
