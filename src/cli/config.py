"""Configuration loading and management."""

import os
from pathlib import Path
from typing import Optional

import yaml

from .config_models import MoodlogConfig

DB_ENV_VAR = "MOODLOG_DB"


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / "moodlog.yaml",
        Path.home() / ".moodlog" / "config.yaml",
        Path.home() / "moodlog" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def load_config_model(config_path: Optional[Path] = None) -> MoodlogConfig:
    """Load configuration as Pydantic model with validation.

    Raises:
        ValueError: on unreadable YAML or values failing validation
    """
    base_config = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    try:
        return MoodlogConfig.from_dict(base_config)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")


def get_db_path(config: MoodlogConfig) -> Path:
    """Database path, with the MOODLOG_DB env var taking precedence."""
    override = os.getenv(DB_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return config.paths.db_path
