"""Tests for the authguard CLI."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from authguard.cli import app

runner = CliRunner()


@pytest.fixture
def cli_env(fake_home: Path, temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated home plus a throwaway audit database."""
    monkeypatch.setenv("AUTHGUARD_AUDIT_DB_URL", f"sqlite:///{temp_dir / 'audit.db'}")
    return fake_home


class TestCheckCommand:
    """Tests for `authguard check`."""

    def test_strong_password_passes(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["check", "--password", "Str0ng!Passw0rd", "--no-breach"])
        assert result.exit_code == 0
        assert "Password meets all security requirements." in result.output
        assert "Strong" in result.output

    def test_weak_password_lists_issues(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["check", "-p", "short", "--no-breach"])
        assert result.exit_code == 1
        assert "Issues to fix:" in result.output
        assert "at least 12 characters long" in result.output

    def test_password_prompt(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["check", "--no-breach"], input="Str0ng!Passw0rd\n")
        assert result.exit_code == 0

    def test_invalid_configuration_exits_2(
        self, cli_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("AUTHGUARD_MIN_LENGTH", "lots")
        result = runner.invoke(app, ["check", "-p", "Str0ng!Passw0rd", "--no-breach"])
        assert result.exit_code == 2
        assert "Invalid configuration" in result.output


class TestConfigCommand:
    """Tests for `authguard config`."""

    def test_show_defaults(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "min_length=12" in result.output
        assert "breach_api_url=https://api.pwnedpasswords.com/range" in result.output

    def test_show_reflects_environment(
        self, cli_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("AUTHGUARD_MAX_LOGIN_ATTEMPTS", "7")
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "max_login_attempts=7" in result.output

    def test_init_global(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 0
        assert (cli_env / ".authguard" / "config.yml").exists()

    def test_init_project(self, cli_env: Path, temp_dir: Path) -> None:
        result = runner.invoke(app, ["config", "init", "--project"])
        assert result.exit_code == 0
        assert (temp_dir / ".authguard" / ".env").exists()

    def test_unknown_action(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["config", "explode"])
        assert result.exit_code == 1
        assert "Unknown action" in result.output

    @pytest.mark.parametrize("args", [["check", "-p", "Str0ng!Passw0rd"], ["config", "show"]])
    def test_invalid_breach_timeout_exits_2(
        self, cli_env: Path, monkeypatch: pytest.MonkeyPatch, args: list[str]
    ) -> None:
        monkeypatch.setenv("AUTHGUARD_BREACH_TIMEOUT", "soon")
        result = runner.invoke(app, args)
        assert result.exit_code == 2
        assert "Invalid configuration" in result.output


class TestLockoutCommand:
    """Tests for `authguard lockout`."""

    def test_reaches_lock(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["lockout", "a@x.com", "--failures", "3"])
        assert result.exit_code == 0
        assert "attempt 1: warning" in result.output
        assert "attempt 3: locked" in result.output
        assert "locked 900s" in result.output

    def test_audit_flag_writes_events(self, cli_env: Path) -> None:
        runner.invoke(app, ["lockout", "a@x.com", "-f", "3", "--audit"])
        result = runner.invoke(app, ["audit", "--type", "account_locked"])
        assert result.exit_code == 0
        assert "account_locked" in result.output


class TestAuditCommand:
    """Tests for `authguard audit`."""

    def test_empty_log(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["audit"])
        assert result.exit_code == 0
        assert "No audit events recorded." in result.output

    def test_clear(self, cli_env: Path) -> None:
        runner.invoke(app, ["lockout", "a@x.com", "--audit"])
        result = runner.invoke(app, ["audit", "--clear"])
        assert result.exit_code == 0
        assert "Audit log cleared." in result.output
        assert "No audit events recorded." in runner.invoke(app, ["audit"]).output


def test_version(cli_env: Path) -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.output.startswith("authguard ")
