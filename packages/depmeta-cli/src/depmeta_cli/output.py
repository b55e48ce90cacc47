"""Terminal reporting for depmeta commands.

Commands report through these functions instead of printing, so the
``--no-color`` flag and the NO_COLOR environment variable apply to every
line the CLI writes. Log lines go through structlog and never through
this module.
"""

from __future__ import annotations

import json
import os
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.console import Console

if TYPE_CHECKING:
    from depmeta_core.deployment import DeploymentTarget
    from depmeta_core.schemas.coordinate import Coordinate
    from depmeta_core.verification.models import Verdict

PASSED_MARK = "[green]✓[/green]"
FAILED_MARK = "[red]✗[/red]"
WARNING_MARK = "[yellow]⚠[/yellow]"


def make_console(*, color: bool = True) -> Console:
    """Build the console commands write to.

    Color is off when ``color`` is False or NO_COLOR is set.
    """
    plain = not color or "NO_COLOR" in os.environ
    return Console(force_terminal=False if plain else None, no_color=plain)


console = make_console()


def disable_color() -> None:
    """Switch the shared console to plain output (``--no-color``)."""
    global console
    console = make_console(color=False)


def failure(message: str) -> None:
    """Report a run-ending problem."""
    console.print(f"{FAILED_MARK} {message}", highlight=False)


def records_generated(paths: Sequence[Path], project: Coordinate) -> None:
    """Report the record files written by ``depmeta generate``."""
    for path in paths:
        console.print(f"{PASSED_MARK} Generated {path}", highlight=False)
    console.print(f"{len(paths)} metadata record(s) for {project}", highlight=False)


def deployment_started(target: DeploymentTarget) -> None:
    console.print(f"Deploying to {target.id} ({target.url})", highlight=False)


def records_deployed(published: Sequence[Coordinate]) -> None:
    """Report each record coordinate ``depmeta deploy`` published."""
    for coordinate in published:
        console.print(f"{PASSED_MARK} Deployed {coordinate}", highlight=False)


def verdict_summary(verdict: Verdict) -> None:
    """Print the one-line outcome under the verdict table.

    Failures name how many records demand a hard failure; a passing run
    with advisories says how many warnings were raised.
    """
    if verdict.failed:
        count = len(verdict.hard_failures)
        console.print(
            f"{FAILED_MARK} Dependency metadata verification failed "
            f"({count} hard failure(s))",
            highlight=False,
        )
    elif verdict.warnings:
        count = len(verdict.warnings)
        console.print(
            f"{WARNING_MARK} Dependency metadata verification passed with {count} warnings",
            highlight=False,
        )
    else:
        console.print(f"{PASSED_MARK} Dependency metadata verification passed", highlight=False)


def show_verdict(verdict: Verdict, output_format: str) -> None:
    """Render a verdict as a table plus summary line, or as bare JSON.

    JSON output carries no summary line so it stays parseable.
    """
    from depmeta_core.verification import print_verdict

    print_verdict(verdict, output_format=output_format, console=console)
    if output_format == "table":
        verdict_summary(verdict)


def schema_document(document: dict[str, Any]) -> None:
    """Print the record JSON Schema to stdout."""
    console.print_json(json.dumps(document))


def schema_written(path: str) -> None:
    console.print(f"{PASSED_MARK} Schema exported to {path}", highlight=False)
