"""depmeta generate command - Generate metadata record files."""

from __future__ import annotations

import click

from depmeta_cli.errors import handle_depmeta_error
from depmeta_cli.output import records_generated
from depmeta_core.errors import DepmetaError
from depmeta_core.schemas.project import DEFAULT_PROJECT_FILE
from depmeta_core.schemas.record import DEFAULT_MESSAGE


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
    "-m",
    "--message",
    default=DEFAULT_MESSAGE,
    help="Message shown to consumers of the affected versions",
)
@click.option(
    "--fail/--no-fail",
    default=False,
    help="Fail consumer builds instead of warning [default: no-fail]",
)
@click.option(
    "--backfill/--no-backfill",
    default=False,
    help="Also generate records for published lower versions [default: no-backfill]",
)
@click.option(
    "--applies-to-previous-versions/--no-applies-to-previous-versions",
    "applies_to_previous_versions",
    default=None,
    help="Record also covers lower versions [default: same as --backfill]",
)
@click.option(
    "--format-version",
    type=click.IntRange(min=1),
    default=None,
    help="Record format version [default: DEPMETA_FORMAT_VERSION or 2]",
)
@click.option(
    "-o",
    "--output",
    "output_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Scratch directory for record files, rewritten on each run "
    "[default: DEPMETA_OUTPUT_DIR or ./target]",
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
def generate(
    file_path: str,
    message: str,
    fail: bool,
    backfill: bool,
    applies_to_previous_versions: bool | None,
    format_version: int | None,
    output_dir: str | None,
    repositories: tuple[str, ...],
    local_repository: str | None,
) -> None:
    """Generate metadata record files for this project.

    Writes a record for the project's own version. With --backfill, also
    writes one for every published lower version that has no record yet.
    Records already published are never overwritten. The output directory
    is build scratch space: files left there by an earlier run are replaced.

    Examples:

        depmeta generate --message "Use 2.x, 1.x is unsupported" --fail

        depmeta generate --backfill -r https://repo.example.com/releases
    """
    from depmeta_cli.project import load_project, load_settings
    from depmeta_core.generation import GenerationEngine, write_records
    from depmeta_core.schemas.record import Record
    from depmeta_repository.factory import create_fetcher

    spec = load_project(file_path)
    settings = load_settings(local_repository=local_repository, remote_repositories=repositories)

    if applies_to_previous_versions is None:
        applies_to_previous_versions = backfill

    record = Record(
        format_version=format_version or settings.format_version,
        message=message,
        fail=fail,
        applies_to_previous_versions=applies_to_previous_versions,
    )

    fetcher = create_fetcher(settings)
    try:
        targets = GenerationEngine(fetcher).generate(spec.coordinate, record, backfill=backfill)
        paths = write_records(spec.coordinate, targets, output_dir or settings.output_dir)
    except DepmetaError as e:
        handle_depmeta_error(e)
    finally:
        fetcher.close()

    records_generated(paths, spec.coordinate)
