"""Configuration getter functions."""

import os
from pathlib import Path
from typing import Any

from authguard.errors import InvalidConfiguration
from authguard.modules.breach import DEFAULT_API_URL, DEFAULT_TIMEOUT
from authguard.modules.policy import COLUMN_ALIASES, PolicySettings

from .env_loader import load_global_config, load_project_config

TRUE_VALUES = ("1", "true", "yes", "y", "on")
FALSE_VALUES = ("0", "false", "no", "n", "off")

# env key -> PolicySettings field
POLICY_ENV_KEYS = {
    "AUTHGUARD_MIN_LENGTH": "min_length",
    "AUTHGUARD_REQUIRE_UPPERCASE": "require_uppercase",
    "AUTHGUARD_REQUIRE_LOWERCASE": "require_lowercase",
    "AUTHGUARD_REQUIRE_NUMBERS": "require_numbers",
    "AUTHGUARD_REQUIRE_SYMBOLS": "require_symbols",
    "AUTHGUARD_MAX_LOGIN_ATTEMPTS": "max_login_attempts",
    "AUTHGUARD_LOCKOUT_MINUTES": "lockout_duration_minutes",
    "AUTHGUARD_CAPTCHA_THRESHOLD": "captcha_threshold",
    "AUTHGUARD_LEAKED_CHECK": "leaked_password_check_enabled",
    "AUTHGUARD_OTP_EXPIRY_SECONDS": "otp_expiry_seconds",
}

_BOOL_FIELDS = {
    "require_uppercase",
    "require_lowercase",
    "require_numbers",
    "require_symbols",
    "leaked_password_check_enabled",
}


def get_config(key: str, project_dir: Path | None = None, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. Project .env file
    3. Global config file
    4. Default value
    """
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    project_config = load_project_config(project_dir)
    if key in project_config:
        return project_config[key]

    global_config = load_global_config()
    if key in global_config:
        return global_config[key]

    return default


def parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise InvalidConfiguration(f"{name} must be a boolean, got {value!r}")


def parse_int(name: str, value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}") from exc


def _coerce_policy_values(data: dict[str, Any]) -> dict[str, Any]:
    coerced: dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        if key in _BOOL_FIELDS:
            coerced[key] = parse_bool(key, value)
        else:
            coerced[key] = parse_int(key, value)
    return coerced


def get_policy_settings(
    organization_id: str | None = None, project_dir: Path | None = None
) -> PolicySettings:
    """
    Resolve the policy for an organization.

    Layers, lowest priority first: built-in defaults, ``policy`` in the global
    config, ``organizations.<id>`` in the global config, then AUTHGUARD_*
    keys from the project .env file and the process environment.
    """
    global_config = load_global_config()
    values: dict[str, Any] = {}
    values.update(_known_fields(global_config.get("policy") or {}))
    if organization_id is not None:
        organizations = global_config.get("organizations") or {}
        # YAML loads numeric keys such as `42:` as ints.
        by_id = {str(key): section for key, section in organizations.items()}
        values.update(_known_fields(by_id.get(str(organization_id)) or {}))

    project_config = load_project_config(project_dir)
    for env_key, field_name in POLICY_ENV_KEYS.items():
        raw = os.environ.get(env_key) or project_config.get(env_key)
        if raw:
            values[field_name] = raw

    return PolicySettings(**_coerce_policy_values(values))


def _known_fields(section: dict[str, Any]) -> dict[str, Any]:
    known = set(POLICY_ENV_KEYS.values())
    result = {}
    for key, value in section.items():
        name = COLUMN_ALIASES.get(key, key)
        if name in known:
            result[name] = value
    return result


def get_breach_api_url(project_dir: Path | None = None) -> str:
    return str(get_config("AUTHGUARD_BREACH_API_URL", project_dir, DEFAULT_API_URL))


def get_breach_timeout(project_dir: Path | None = None) -> float:
    raw = get_config("AUTHGUARD_BREACH_TIMEOUT", project_dir, DEFAULT_TIMEOUT)
    try:
        timeout = float(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidConfiguration(
            f"AUTHGUARD_BREACH_TIMEOUT must be a number, got {raw!r}"
        ) from exc
    if timeout <= 0:
        raise InvalidConfiguration("AUTHGUARD_BREACH_TIMEOUT must be positive")
    return timeout


def is_verbose(project_dir: Path | None = None) -> bool:
    raw = get_config("AUTHGUARD_VERBOSE", project_dir, False)
    try:
        return parse_bool("AUTHGUARD_VERBOSE", raw)
    except InvalidConfiguration:
        return False
