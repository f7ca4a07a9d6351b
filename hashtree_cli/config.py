"""
CLI Configuration

Locates and loads the runtime configuration for the CLI.
Environment variables override file settings.
"""

from __future__ import annotations

from pathlib import Path

from hashtree.config import RuntimeConfig


def default_config_paths() -> list[Path]:
    """Locations searched when no --config is given, in order."""
    return [
        Path.cwd() / "hashtree.yaml",
        Path.cwd() / ".hashtree.yaml",
        Path.home() / ".config" / "hashtree" / "config.yaml",
    ]


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Args:
        config_path: Optional path to a YAML config file

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If config_path is given but missing
    """
    if config_path is not None:
        return RuntimeConfig.from_yaml(config_path).with_env_overrides()

    for default_path in default_config_paths():
        if default_path.exists():
            return RuntimeConfig.from_yaml(default_path).with_env_overrides()

    return RuntimeConfig.from_env()
