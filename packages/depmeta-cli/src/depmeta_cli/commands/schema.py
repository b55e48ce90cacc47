"""depmeta schema command - Export the metadata record JSON Schema."""

from __future__ import annotations

import click

from depmeta_cli.errors import EXIT_ABORTED, CLIError
from depmeta_cli.output import schema_document, schema_written

DEFAULT_SCHEMA_PATH = "./schemas/metadata-record.schema.json"


@click.group()
def schema() -> None:
    """Manage the metadata record JSON Schema.

    **Commands:**

    - `depmeta schema export` - Export the record JSON Schema
    """
    pass


@schema.command("export")
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(),
    default=DEFAULT_SCHEMA_PATH,
    help=f"Output path, '-' for stdout [default: {DEFAULT_SCHEMA_PATH}]",
)
def export_schema(output_path: str) -> None:
    """Export the metadata record JSON Schema.

    Producers outside depmeta can validate their record payloads
    against it.

    Examples:

        depmeta schema export

        depmeta schema export --output -
    """
    from depmeta_core.export import export_record_schema

    if output_path == "-":
        schema_document(export_record_schema())
        return

    try:
        export_record_schema(output_path)
    except PermissionError:
        raise CLIError(f"Cannot write to: {output_path}", exit_code=EXIT_ABORTED) from None
    except OSError as e:
        raise CLIError(f"Schema export failed: {e}", exit_code=EXIT_ABORTED) from None

    schema_written(output_path)
