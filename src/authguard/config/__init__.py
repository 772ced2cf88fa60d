"""
Configuration management for authguard.

Supports multiple configuration sources in order of priority:
1. Environment variables (highest priority)
2. Project .env file (.authguard/.env)
3. Global config file (~/.authguard/config.yml)
4. Default values (lowest priority)
"""

from .env_loader import (
    get_project_env_path,
    global_config_dir,
    load_env_file,
    load_global_config,
    load_project_config,
)
from .getters import (
    POLICY_ENV_KEYS,
    get_breach_api_url,
    get_breach_timeout,
    get_config,
    get_policy_settings,
    is_verbose,
    parse_bool,
    parse_int,
)
from .project_setup import create_global_config, create_project_config_template

__all__ = [
    # env_loader
    "get_project_env_path",
    "global_config_dir",
    "load_env_file",
    "load_global_config",
    "load_project_config",
    # getters
    "POLICY_ENV_KEYS",
    "get_breach_api_url",
    "get_breach_timeout",
    "get_config",
    "get_policy_settings",
    "is_verbose",
    "parse_bool",
    "parse_int",
    # project_setup
    "create_global_config",
    "create_project_config_template",
]
