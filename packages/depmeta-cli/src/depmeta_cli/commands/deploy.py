"""depmeta deploy command - Publish generated metadata record files."""

from __future__ import annotations

from pathlib import Path

import click

from depmeta_cli.errors import handle_depmeta_error
from depmeta_cli.output import deployment_started, records_deployed
from depmeta_core.errors import DepmetaError
from depmeta_core.schemas.project import DEFAULT_PROJECT_FILE

DEFAULT_REPOSITORY_ID = "distribution"


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
    "-o",
    "--output",
    "output_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory holding record files [default: DEPMETA_OUTPUT_DIR or ./target]",
)
@click.option(
    "--scan",
    is_flag=True,
    default=False,
    help="Deploy every record file of this project found in the output directory",
)
@click.option(
    "--repository",
    "repository",
    default=None,
    help="Deployment repository URL or path [default: DEPMETA_DISTRIBUTION_REPOSITORY]",
)
@click.option(
    "--alt-deployment-repository",
    default=None,
    help="Alternative repository as id::layout::url",
)
@click.option(
    "--alt-snapshot-deployment-repository",
    default=None,
    help="Alternative repository for snapshot versions as id::layout::url",
)
@click.option(
    "--alt-release-deployment-repository",
    default=None,
    help="Alternative repository for release versions as id::layout::url",
)
def deploy(
    file_path: str,
    output_dir: str | None,
    scan: bool,
    repository: str | None,
    alt_deployment_repository: str | None,
    alt_snapshot_deployment_repository: str | None,
    alt_release_deployment_repository: str | None,
) -> None:
    """Publish generated metadata record files.

    Deploys the record of the project's own version, or with --scan every
    record file of the project in the output directory. Only record
    artifacts are published.

    Examples:

        depmeta deploy --repository https://repo.example.com/releases

        depmeta deploy --scan --alt-release-deployment-repository internal::default::https://repo.example.com/internal
    """
    from depmeta_cli.project import load_project, load_settings
    from depmeta_core.deployment import (
        DeploymentEngine,
        DeploymentTarget,
        record_filename,
        resolve_deployment_target,
        scan_record_files,
    )
    from depmeta_repository.factory import create_repository
    from depmeta_repository.remote import RemoteRepository

    spec = load_project(file_path)
    settings = load_settings()
    directory = Path(output_dir) if output_dir else settings.output_dir
    url = repository or settings.distribution_repository
    default = DeploymentTarget(id=DEFAULT_REPOSITORY_ID, url=url) if url else None

    try:
        if scan:
            files = scan_record_files(directory, spec.name)
        else:
            files = [(spec.version, directory / record_filename(spec.name, spec.version))]

        target = resolve_deployment_target(
            spec.version,
            default=default,
            alt=alt_deployment_repository,
            alt_snapshot=alt_snapshot_deployment_repository,
            alt_release=alt_release_deployment_repository,
        )
        deployment_started(target)

        client = create_repository(target.url, timeout_seconds=settings.timeout_seconds)
        try:
            published = DeploymentEngine(client).deploy(spec.coordinate, files)
        finally:
            if isinstance(client, RemoteRepository):
                client.close()
    except DepmetaError as e:
        handle_depmeta_error(e)

    records_deployed(published)
