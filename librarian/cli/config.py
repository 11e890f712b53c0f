"""Configuration management for the CLI."""

import os
from pathlib import Path
from typing import Any

import yaml

DEFAULTS: dict[str, Any] = {
    "library": None,
    "page_size": 24,
    "sort": "date_newest",
    "tag_logic": "AND",
    "no_color": False,
}


class Config:
    """Configuration management for the CLI application."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}") from e
        except OSError as e:
            raise ValueError(f"Error reading config file: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")
        return data

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the default configuration file paths to check."""
        paths = []

        # User config
        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        paths.append(xdg_config_home / "librarian" / "config.yaml")

        # Project config
        paths.append(Path(".librarian.yaml"))
        paths.append(Path("librarian.yaml"))

        return paths

    @staticmethod
    def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
        """Merge multiple configuration dictionaries."""
        result = {}
        for config in configs:
            result = _deep_merge(result, config)
        return result


def load_config(extra: Path | None = None) -> dict[str, Any]:
    """Load configuration from defaults, files and environment variables.

    Args:
        extra: Explicit config file, merged after everything else.

    Returns:
        Merged configuration.
    """
    config = dict(DEFAULTS)

    # Load from all config paths (last one wins for conflicting keys)
    for path in Config.get_config_paths():
        if path.exists():
            config = Config.merge_configs(config, Config.from_file(path))

    # Override with environment variables
    env_overrides: dict[str, Any] = {}
    if library := os.environ.get("LIBRARIAN_LIBRARY"):
        env_overrides["library"] = library
    if page_size := os.environ.get("LIBRARIAN_PAGE_SIZE"):
        try:
            env_overrides["page_size"] = int(page_size)
        except ValueError as e:
            raise ValueError(f"LIBRARIAN_PAGE_SIZE must be an integer: {page_size}") from e
    config = Config.merge_configs(config, env_overrides)

    if extra:
        config = Config.merge_configs(config, Config.from_file(extra))

    return config


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
