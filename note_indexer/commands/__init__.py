"""Subcommands of note-indexer.

Every public module in this package defines its command as ``cli``.
"""

from __future__ import annotations

import importlib
import pkgutil

import click


def discover_commands() -> list[click.Command]:
    """Import the command modules and return their commands, sorted by name."""
    commands: list[click.Command] = []
    for module_info in pkgutil.iter_modules(__path__):
        if module_info.name.startswith("_"):
            continue
        module = importlib.import_module(f"{__name__}.{module_info.name}")
        command = getattr(module, "cli", None)
        if isinstance(command, click.Command):
            commands.append(command)
    return sorted(commands, key=lambda c: c.name or "")
