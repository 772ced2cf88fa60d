"""Global and project configuration file setup."""

from pathlib import Path

from authguard.modules.policy import PolicySettings

from .env_loader import get_project_env_path, global_config_dir

PROJECT_ENV_TEMPLATE = """# authguard project configuration
# Values here override ~/.authguard/config.yml; the process environment overrides both.
# AUTHGUARD_MIN_LENGTH=12
# AUTHGUARD_MAX_LOGIN_ATTEMPTS=3
# AUTHGUARD_LOCKOUT_MINUTES=15
# AUTHGUARD_CAPTCHA_THRESHOLD=2
# AUTHGUARD_LEAKED_CHECK=true
# AUTHGUARD_BREACH_TIMEOUT=5
# AUTHGUARD_VERBOSE=false
"""


def create_global_config() -> Path:
    """Create global config directory and file if they don't exist."""
    import yaml

    config_dir = global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    config_path = config_dir / "config.yml"
    if not config_path.exists():
        default_config = {
            "policy": PolicySettings().to_dict(),
            "organizations": {},
        }
        with open(config_path, "w") as f:
            yaml.dump(default_config, f, default_flow_style=False)

    return config_path


def create_project_config_template(project_dir: Path) -> Path:
    """Write a commented ``.authguard/.env`` template unless one exists."""
    env_path = get_project_env_path(project_dir)
    env_path.parent.mkdir(parents=True, exist_ok=True)
    if not env_path.exists():
        env_path.write_text(PROJECT_ENV_TEMPLATE)
    return env_path
