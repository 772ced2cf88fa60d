"""Environment variable and configuration file loading."""

from pathlib import Path
from typing import Any

import yaml

CONFIG_DIR_NAME = ".authguard"


def global_config_dir() -> Path:
    return Path.home() / CONFIG_DIR_NAME


def load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from .env file."""
    env_vars = {}
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    # Remove quotes if present
                    value = value.strip().strip("\"'")
                    env_vars[key.strip()] = value
    return env_vars


def load_global_config() -> dict[str, Any]:
    """Load global configuration from ~/.authguard/config.yml."""
    config_path = global_config_dir() / "config.yml"
    if config_path.exists():
        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    return {}


def get_project_env_path(project_dir: Path | None) -> Path | None:
    """Return ``<project>/.authguard/.env`` for a project directory."""
    if project_dir is None:
        return None
    return project_dir / CONFIG_DIR_NAME / ".env"


def load_project_config(project_dir: Path | None = None) -> dict[str, str]:
    """Load project-specific configuration from .env file."""
    env_path = get_project_env_path(project_dir if project_dir is not None else Path.cwd())
    if env_path:
        return load_env_file(env_path)
    return {}
