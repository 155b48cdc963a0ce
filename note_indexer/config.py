"""Configuration management for note-indexer."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from note_indexer.exceptions import (
    ConfigParseError,
    ConfigValidationError,
    UnknownFieldError,
)
from note_indexer.search.schema import DEFAULT_FIELDS, Schema, note_schema

DEFAULT_RESULT_LIMIT = 20


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "note-indexer" / "config.toml"


def get_default_database_path() -> Path:
    """Get the default index database path."""
    return Path.home() / ".local" / "share" / "note-indexer" / "notes.db"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        database: Path to the SQLite note index.
        default_fields: Fields searched by terms without a field prefix.
        result_limit: Number of results returned when no limit is given.
        colored_output: Whether to use colored terminal output.
        config_path: Path where config was loaded from (None if defaults).
    """

    database: Path = field(default_factory=get_default_database_path)
    default_fields: list[str] = field(default_factory=lambda: list(DEFAULT_FIELDS))
    result_limit: int = DEFAULT_RESULT_LIMIT
    colored_output: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        warnings: list[str] = []

        # Expand user paths
        self.database = self.database.expanduser().resolve()

        # Missing index is a warning, it may be built later
        if not self.database.exists():
            warnings.append(f"Index database not found: {self.database}")

        if self.result_limit < 1:
            raise ConfigValidationError(
                "search.limit", self.result_limit, "must be a positive integer"
            )

        try:
            note_schema(self.default_fields)
        except UnknownFieldError as e:
            raise ConfigValidationError(
                "search.default_fields", self.default_fields, f"unknown field '{e.name}'"
            ) from e
        except ValueError as e:
            raise ConfigValidationError("search.default_fields", self.default_fields, str(e)) from e

        return warnings

    def schema(self) -> Schema:
        """Build the note schema with the configured default fields."""
        return note_schema(self.default_fields)


def load_config(
    config_path: Path | None = None, database: Path | None = None
) -> tuple[Config, list[str]]:
    """Load configuration from file, falling back to defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.
        database: Index database to use instead of ``paths.database``.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    config_path = (config_path or get_default_config_path()).expanduser().resolve()
    warnings: list[str] = []

    if config_path.exists():
        try:
            data = tomllib.loads(config_path.read_text())
        except tomllib.TOMLDecodeError as e:
            raise ConfigParseError(config_path, str(e)) from e
        config = _parse_config_dict(data, config_path)
    else:
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create one with: note-indexer init-config"
        )

    if database is not None:
        config.database = database

    return config, warnings + config.validate()


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [paths] section
    paths = data.get("paths", {})
    if "database" in paths:
        value = paths["database"]
        if not isinstance(value, str):
            raise ConfigValidationError("paths.database", value, "must be a string path")
        config.database = Path(value)

    # Parse [search] section
    search = data.get("search", {})
    if "default_fields" in search:
        value = search["default_fields"]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigValidationError(
                "search.default_fields", value, "must be a list of field names"
            )
        config.default_fields = list(value)

    if "limit" in search:
        value = search["limit"]
        # bool is an int subclass
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigValidationError("search.limit", value, "must be an integer")
        config.result_limit = value

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    # Ensure directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "paths": {
            "database": str(config.database),
        },
        "search": {
            "default_fields": list(config.default_fields),
            "limit": config.result_limit,
        },
        "display": {
            "colored_output": config.colored_output,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
