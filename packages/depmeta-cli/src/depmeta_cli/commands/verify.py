"""depmeta verify command - Check dependencies against their metadata records."""

from __future__ import annotations

from dataclasses import dataclass

import click

from depmeta_cli.errors import EXIT_FAILED, EXIT_PASSED, handle_depmeta_error
from depmeta_cli.output import show_verdict
from depmeta_core.errors import DepmetaError
from depmeta_core.schemas.project import DEFAULT_PROJECT_FILE


@dataclass
class VerifyOptions:
    """Grouped verify CLI options."""

    file_path: str
    transitive: bool
    format_version: int | None
    workers: int | None
    repositories: tuple[str, ...]
    local_repository: str | None
    output_format: str


def _run_verify(opts: VerifyOptions) -> None:
    """Verify the project's dependencies and display the verdict.

    Raises:
        SystemExit: With code 0 when no hard failure is found, 1 otherwise.
    """
    from depmeta_cli.project import load_project, load_settings
    from depmeta_core.schemas.project import ProjectDependencySource
    from depmeta_core.verification import run_verification
    from depmeta_repository.factory import create_fetcher

    spec = load_project(opts.file_path)
    settings = load_settings(
        local_repository=opts.local_repository,
        remote_repositories=opts.repositories,
    )

    fetcher = create_fetcher(settings)
    try:
        verdict = run_verification(
            fetcher,
            ProjectDependencySource(spec),
            spec.coordinate,
            transitive=opts.transitive,
            expected_format_version=opts.format_version or settings.format_version,
            max_workers=opts.workers or settings.max_workers,
        )
    except DepmetaError as e:
        handle_depmeta_error(e)
    finally:
        fetcher.close()

    show_verdict(verdict, opts.output_format)
    raise SystemExit(EXIT_FAILED if verdict.failed else EXIT_PASSED)


@click.command()
@click.option(
    "-f",
    "--file",
    "file_path",
    type=click.Path(exists=False),
    default=f"./{DEFAULT_PROJECT_FILE}",
    help=f"Path to {DEFAULT_PROJECT_FILE} [default: ./{DEFAULT_PROJECT_FILE}]",
)
@click.option(
    "--transitive/--no-transitive",
    default=False,
    help="Also check transitive dependencies [default: no-transitive]",
)
@click.option(
    "--format-version",
    type=click.IntRange(min=1),
    default=None,
    help="Record format version to trust [default: DEPMETA_FORMAT_VERSION or 2]",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Dependencies checked concurrently [default: DEPMETA_MAX_WORKERS or 1]",
)
@click.option(
    "-r",
    "--repository",
    "repositories",
    multiple=True,
    help="Remote repository URL, repeatable [default: DEPMETA_REMOTE_REPOSITORIES]",
)
@click.option(
    "--local-repository",
    type=click.Path(file_okay=False),
    default=None,
    help="Local repository directory [default: ~/.m2/repository]",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format [default: table]",
)
def verify(
    file_path: str,
    transitive: bool,
    format_version: int | None,
    workers: int | None,
    repositories: tuple[str, ...],
    local_repository: str | None,
    output_format: str,
) -> None:
    """Check dependencies against their metadata records.

    Reports every deprecation and advisory that applies to the resolved
    dependency versions. Exits 1 if any record demands a hard failure,
    2 if a repository or record could not be read.

    Examples:

        depmeta verify

        depmeta verify --transitive --format json

        depmeta verify -r https://repo.example.com/releases --workers 8
    """
    opts = VerifyOptions(
        file_path=file_path,
        transitive=transitive,
        format_version=format_version,
        workers=workers,
        repositories=repositories,
        local_repository=local_repository,
        output_format=output_format,
    )
    _run_verify(opts)
