"""Write the example configuration file for note-indexer."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import click

from note_indexer.cli import Context, pass_context
from note_indexer.config import get_default_config_path, load_config
from note_indexer.exceptions import ConfigError
from note_indexer.utils.output import error, info, success


def _load_example_config() -> str:
    """Read config.example.toml shipped with the package."""
    return resources.files("note_indexer").joinpath("config.example.toml").read_text()


@click.command("init-config")
@click.option("--force", "-f", is_flag=True, default=False, help="Replace an existing file")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the file (default: ~/.config/note-indexer/config.toml)",
)
@pass_context
def cli(ctx: Context, force: bool, output: Path | None) -> None:
    """Write a commented configuration file with the default settings.

    \b
    Examples:
      note-indexer init-config
      note-indexer init-config --output ./notes.toml --force
    """
    target = (output or get_default_config_path()).expanduser().resolve()

    if target.exists() and not force:
        error(f"Config file already exists: {target}", hint="Use --force to overwrite")
        raise SystemExit(1)

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(_load_example_config())
    except OSError as e:
        error(f"Failed to write config file: {e}")
        raise SystemExit(1)

    success(f"Created config file: {target}")

    # Read it back so the user sees which index the defaults point at
    try:
        config, _ = load_config(target)
    except ConfigError as e:
        error(str(e))
        raise SystemExit(1)
    info(f"Index database: {config.database}")
