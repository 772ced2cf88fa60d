"""Organization-scoped password and login policy settings."""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from authguard.errors import InvalidConfiguration

# Column names used by the auth_settings table, mapped to field names.
COLUMN_ALIASES = {
    "password_min_length": "min_length",
    "lockout_duration_minutes": "lockout_duration_minutes",
    "enable_captcha_after_attempts": "captcha_threshold",
    "enable_leaked_password_check": "leaked_password_check_enabled",
}

# field -> minimum allowed value
_INT_FIELDS = {
    "min_length": 1,
    "max_login_attempts": 1,
    "lockout_duration_minutes": 0,
    "captcha_threshold": 0,
    "otp_expiry_seconds": 0,
}

_BOOL_FIELDS = (
    "require_uppercase",
    "require_lowercase",
    "require_numbers",
    "require_symbols",
    "leaked_password_check_enabled",
)


@dataclass(frozen=True)
class PolicySettings:
    """Password rules and login thresholds for one organization.

    ``captcha_threshold`` and ``max_login_attempts`` are checked against the
    same failure counter. Neither is required to be lower than the other.
    """

    min_length: int = 12
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_numbers: bool = True
    require_symbols: bool = True
    max_login_attempts: int = 3
    lockout_duration_minutes: int = 15
    captcha_threshold: int = 2
    leaked_password_check_enabled: bool = True
    otp_expiry_seconds: int = 300

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise InvalidConfiguration if any value is out of its domain."""
        for name, minimum in _INT_FIELDS.items():
            value = getattr(self, name)
            # bool is an int subclass; True is not a length.
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
            if value < minimum:
                raise InvalidConfiguration(f"{name} must be >= {minimum}, got {value}")
        for name in _BOOL_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise InvalidConfiguration(f"{name} must be a boolean, got {value!r}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PolicySettings":
        """Build settings from a config mapping or an auth_settings row."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = COLUMN_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
