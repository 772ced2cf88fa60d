"""Test configuration and fixtures for authguard."""

import logging
import tempfile
from collections.abc import Generator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
import respx

from authguard.modules.policy import PolicySettings


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point Path.home() and the working directory at an empty temp dir."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.chdir(temp_dir)
    for key in (
        "AUTHGUARD_MIN_LENGTH",
        "AUTHGUARD_MAX_LOGIN_ATTEMPTS",
        "AUTHGUARD_LOCKOUT_MINUTES",
        "AUTHGUARD_CAPTCHA_THRESHOLD",
        "AUTHGUARD_LEAKED_CHECK",
        "AUTHGUARD_BREACH_API_URL",
        "AUTHGUARD_BREACH_TIMEOUT",
        "AUTHGUARD_AUDIT_DB_URL",
        "AUTHGUARD_VERBOSE",
    ):
        monkeypatch.delenv(key, raising=False)
    return home


@pytest.fixture
def strict_settings() -> PolicySettings:
    """All character classes required, 12 characters minimum."""
    return PolicySettings(
        min_length=12,
        require_uppercase=True,
        require_lowercase=True,
        require_numbers=True,
        require_symbols=True,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def reset_authguard_logger() -> Generator[None, None, None]:
    """Undo CLI logging configuration between tests."""
    yield
    logger = logging.getLogger("authguard")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def reset_global_respx_routes() -> Generator[None, None, None]:
    """Drop routes left on the global respx router by tests using a local ``respx.mock(...)``."""
    yield
    respx.mock.clear()
