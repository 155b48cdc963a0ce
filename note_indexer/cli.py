"""Command-line interface for note-indexer."""

from __future__ import annotations

import os
from pathlib import Path

import click

from note_indexer import __version__
from note_indexer.config import Config, load_config
from note_indexer.exceptions import ConfigError
from note_indexer.search.schema import Schema, note_schema
from note_indexer.utils.output import (
    error,
    set_color,
    set_verbosity,
    setup_logging,
    warning,
)


class Context:
    """State shared by the subcommands of one invocation."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False

    def schema(self) -> Schema:
        """Schema for compiling queries, honoring configured default fields."""
        if self.config is None:
            return note_schema()
        return self.config.schema()


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    help="Path to config file (default: ~/.config/note-indexer/config.toml)",
)
@click.option(
    "--database",
    "-D",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to the note index database (overrides paths.database)",
)
@click.option("--no-color", is_flag=True, default=False, help="Disable colored output")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log each query run")
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Log parsed and compiled queries (implies --verbose)",
)
@click.option("--quiet", "-q", is_flag=True, default=False, help="Hide configuration warnings")
@click.version_option(version=__version__, prog_name="note-indexer")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    database: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
) -> None:
    """note-indexer: Search your notes with the AQL query language.

    Configuration is loaded from ~/.config/note-indexer/config.toml by default.
    Use --config to specify an alternative configuration file.

    Examples:

        # Notes tagged work and urgent, written this year
        note-indexer query "tags:work,urgent date:>=2025-01-01"

        # Show how a query is parsed and compiled
        note-indexer explain '"release plan" OR roadmap -status:done'
    """
    app_ctx = ctx.ensure_object(Context)
    app_ctx.verbose = verbose or debug
    app_ctx.debug = debug
    app_ctx.quiet = quiet

    set_verbosity(verbose=verbose, debug=debug)
    setup_logging()

    # NO_COLOR is honored whatever its value
    color_forced_off = no_color or "NO_COLOR" in os.environ
    if color_forced_off:
        set_color(False)

    try:
        app_ctx.config, warnings = load_config(config_path, database=database)
    except ConfigError as e:
        error(str(e))
        ctx.exit(1)
        return

    if not color_forced_off and not app_ctx.config.colored_output:
        set_color(False)

    if not quiet:
        for message in warnings:
            warning(message)


@cli.command("help")
@click.argument("command", required=False)
@click.pass_context
def help_cmd(ctx: click.Context, command: str | None) -> None:
    """Show help for COMMAND, or for note-indexer itself."""
    if command is None:
        click.echo(cli.get_help(ctx.parent or ctx))
        return

    cmd = cli.get_command(ctx, command)
    if cmd is None:
        error(f"Unknown command: {command}", hint="Run 'note-indexer help' for the command list")
        ctx.exit(1)
        return
    click.echo(cmd.get_help(click.Context(cmd, info_name=command, parent=ctx.parent)))


def register_commands() -> None:
    """Attach the commands found in note_indexer.commands to the group."""
    from note_indexer.commands import discover_commands

    for command in discover_commands():
        cli.add_command(command)


register_commands()
