"""CLI entry point for edgeship.

Defines the root ``edgeship`` group. Subcommands are loaded lazily so
``edgeship --help`` stays fast.
"""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any

import click
import rich_click as rclick
from click.core import ParameterSource

from edgeship_cli import __version__
from edgeship_cli.context import CliContext
from edgeship_cli.output import set_no_color
from edgeship_core.observability import configure_logging
from edgeship_core.settings import SETTINGS_FILE_NAME

# Configure rich-click for better help formatting
rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Click group that imports subcommands only when they are used.

    Attributes:
        lazy_subcommands: Mapping of command names to ``module.attribute`` paths.
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
                Format: {"publish": "edgeship_cli.commands.publish.publish"}
            **kwargs: Keyword arguments for parent class.
        """
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return registered and lazy command names, sorted."""
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, importing it on first use.

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

        module_name, attr_name = self.lazy_subcommands[cmd_name].rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "publish": "edgeship_cli.commands.publish.publish",
    "dev": "edgeship_cli.commands.dev.dev",
    "tail": "edgeship_cli.commands.tail.tail",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="edgeship")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "--verbose",
    is_flag=True,
    default=False,
    help="Toggle verbose output (debug logging on stderr).",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=SETTINGS_FILE_NAME,
    show_default=True,
    help="Path to the settings file.",
)
@click.option(
    "-e",
    "--env",
    "environment",
    type=str,
    default=None,
    help="Environment to perform a command on [default: $EDGESHIP_ENV].",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path, environment: str | None) -> None:
    """edgeship - deploy scripts to the edge.

    Publish scripts with durable object migrations, run a local dev
    server, and tail production logs.

    **Getting Started:**

    - `edgeship publish --new-class Counter` - Publish and create a durable object class
    - `edgeship dev` - Resolve the local dev server address
    - `edgeship tail my-worker` - Build a tail session for a worker
    """
    configure_logging(log_level="DEBUG" if verbose else "WARNING")

    ctx.obj = CliContext(
        config_path=config_path,
        config_required=ctx.get_parameter_source("config_path") != ParameterSource.DEFAULT,
        environment=environment,
        verbose=verbose,
    )


if __name__ == "__main__":
    cli()
