"""Configuration for commitctx.

Settings come from defaults, optionally overridden by a repository file at
.commitctx/config.yaml and then by explicit keyword overrides (CLI flags).

Example .commitctx/config.yaml:

    max_file_chars: 8000
    history_max_files: 5
    include_history: false

The repository file cannot set git_binary; it comes from explicit overrides
only.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from commitctx.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".commitctx"
CONFIG_FILE_NAME = "config.yaml"

# Settings that only explicit overrides may change
OVERRIDE_ONLY_KEYS = frozenset({"git_binary"})


class ContextSettings(BaseModel):
    """Limits and switches for one context generation request."""

    # Per-file excerpt cap applied by the diff parser and synthetic patches
    max_file_chars: int = Field(12000, ge=0)
    history_max_files: int = Field(10, ge=0)
    history_max_commits_per_file: int = Field(3, ge=0)
    # Per-fragment packing budget and the share reserved for wrapping text
    max_fragment_chars: int = Field(14000, ge=0)
    fragment_overhead: int = Field(600, ge=0)
    include_history: bool = True
    git_binary: str = "git"


def get_config_file(repo_root: Path) -> Path:
    """Return path to the config.yaml file.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to .commitctx/config.yaml.
    """
    return Path(repo_root) / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_config_file(repo_root: Path) -> dict:
    """Load raw settings from the repository config file.

    Returns:
        Configuration dictionary. Empty dict if the file doesn't exist.

    Raises:
        ConfigError: If the file cannot be read or is not a YAML mapping.
    """
    config_file = get_config_file(repo_root)
    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise ConfigError(f"Config file {config_file} must contain a mapping")
    return config


def load_settings(repo_root: Path = None, **overrides: Any) -> ContextSettings:
    """Build settings from defaults, the repository file and overrides.

    Overrides whose value is None are ignored so optional CLI flags can be
    passed straight through. Keys in OVERRIDE_ONLY_KEYS are dropped from the
    repository file.

    Args:
        repo_root: The root directory of the git repository (optional).
        **overrides: Field values that take precedence over the file.

    Returns:
        Validated ContextSettings.

    Raises:
        ConfigError: If the file is unreadable or a value is invalid.
    """
    values = load_config_file(repo_root) if repo_root else {}
    for key in OVERRIDE_ONLY_KEYS.intersection(values):
        logger.warning("Ignoring %s from %s", key, get_config_file(repo_root))
        del values[key]
    values.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return ContextSettings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}")
