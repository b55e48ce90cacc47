"""CLI entry point for depmeta.

This module defines the main CLI group using LazyGroup pattern
for fast --help performance.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from depmeta_cli import __version__
from depmeta_cli.output import disable_color

# Configure rich-click for better help formatting
rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LazyGroup(rclick.RichGroup):
    """Click group that loads commands lazily for fast --help performance.

    Commands are only imported when actually invoked, not at import time.

    Attributes:
        lazy_subcommands: Mapping of command names to module paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize LazyGroup.

        Args:
            *args: Positional arguments for parent class.
            lazy_subcommands: Mapping of command name to module path.
                Format: {"verify": "depmeta_cli.commands.verify.verify"}
            **kwargs: Keyword arguments for parent class.
        """
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return sorted command names, lazy and directly registered."""
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, loading lazily if needed.

        Args:
            ctx: Click context.
            cmd_name: Name of the command to get.

        Returns:
            Click Command instance, or None if not found.
        """
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_path = self.lazy_subcommands[cmd_name]
        module_name, attr_name = module_path.rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "generate": "depmeta_cli.commands.generate.generate",
    "verify": "depmeta_cli.commands.verify.verify",
    "deploy": "depmeta_cli.commands.deploy.deploy",
    "schema": "depmeta_cli.commands.schema.schema",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="depmeta")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: disable_color() if value else None,
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    help="Minimum log level [default: WARNING]",
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    default="console",
    help="Log line format [default: console]",
)
def cli(log_level: str, log_format: str) -> None:
    """depmeta - Dependency Metadata Gate.

    Attach deprecation and advisory records to published library versions,
    and fail or warn builds that depend on affected versions.

    **Getting Started:**

    - `depmeta generate` - Generate a metadata record for this project
    - `depmeta deploy` - Publish generated records
    - `depmeta verify` - Check dependencies against their records
    - `depmeta schema export` - Export the record JSON Schema
    """
    from depmeta_repository.observability import configure_logging

    configure_logging(log_level=log_level, json_format=log_format == "json")


if __name__ == "__main__":
    cli()
